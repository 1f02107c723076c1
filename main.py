"""
InfiniCanvas - Infinite Pannable/Zoomable Whiteboard
====================================================

A minimal whiteboard combining:
- A camera transform engine (world <-> screen, zoom around the cursor)
- A background grid and labeled ellipse nodes
- A dirty-flag render loop that only repaints after a change
- Pygame for the window, drawing and input

Controls:
    - Left drag on empty canvas: Pan
    - Left drag on a node: Move the node
    - Mouse wheel: Zoom around the cursor

Keyboard:
    - N: Add a node under the cursor
    - C: Clear canvas
    - R / 0: Reset camera
    - D: Toggle debug (prints interaction-mode transitions)
    - Q/ESC: Quit
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pygame
from typing import Callable, List

from canvas_core import CanvasEngine, Node, PanDragController, RenderLoop, Vector2, ZoomController
from canvas_ui import (
    EventRouter,
    create_window_surface,
    bind_pan_handlers,
    bind_resize_handler,
    bind_zoom_handlers,
)


# ==============================================================================
# Window Configuration
# ==============================================================================

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
FPS = 60

SAMPLE_NODES = [
    Node(id='root', center=Vector2(0, 0), radius=Vector2(120, 60), label='Main Node'),
    Node(id='idea', center=Vector2(320, -180), radius=Vector2(90, 45), label='Idea'),
    Node(id='todo', center=Vector2(-340, 200), radius=Vector2(100, 50), label='Todo'),
]


# ==============================================================================
# Main Application
# ==============================================================================

class InfiniCanvasApp:
    """
    Main application class wiring the engine to a pygame window.
    """

    def __init__(self):
        pygame.init()

        self.surface = create_window_surface((WINDOW_WIDTH, WINDOW_HEIGHT), "InfiniCanvas")
        self.engine = CanvasEngine(self.surface)
        self.engine.set_nodes(SAMPLE_NODES)

        # Controllers
        self.pan_drag = PanDragController(self.engine)
        self.zoom = ZoomController(self.engine)

        # Event routing
        self.router = EventRouter()
        self.loop = RenderLoop(
            self.engine,
            present=pygame.display.flip,
            fps=FPS,
            before_frame=self.router.pump
        )

        self.node_counter = 0
        self.debug_mode = False
        self._cleanups: List[Callable[[], None]] = []

    def _bind(self):
        """Subscribe all handlers; each returns its own cleanup"""
        self._cleanups = [
            bind_resize_handler(self.router, self.engine, self.surface),
            bind_pan_handlers(self.router, self.pan_drag),
            bind_zoom_handlers(self.router, self.zoom),
        ]
        self.router.subscribe(pygame.QUIT, lambda event: self.loop.cancel())
        self.router.subscribe(pygame.KEYDOWN, self._handle_key)

    def _handle_key(self, event: pygame.event.Event):
        """Handle keyboard input"""
        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            self.loop.cancel()

        elif event.key == pygame.K_n:
            self._add_node_at(Vector2.from_tuple(pygame.mouse.get_pos()))

        elif event.key == pygame.K_c:
            self.engine.set_nodes([])

        elif event.key in (pygame.K_r, pygame.K_0):
            self.engine.reset_camera()

        elif event.key == pygame.K_d:
            self.debug_mode = not self.debug_mode
            self.pan_drag.debug = self.debug_mode
            print(f"[InfiniCanvas] Debug mode: {'ON' if self.debug_mode else 'OFF'}")

    def _add_node_at(self, screen_point: Vector2) -> Node:
        """Create a new node centered under a screen point"""
        self.node_counter += 1
        node = Node(
            id=f"node_{self.node_counter}",
            center=self.engine.screen_to_world(screen_point),
            radius=Vector2(100, 50),
            label=f"Node {self.node_counter}"
        )
        self.engine.add_node(node)
        return node

    def _cleanup(self):
        """Revoke subscriptions and stop the loop (runs once)"""
        cleanups, self._cleanups = self._cleanups, []
        for cleanup in cleanups:
            try:
                cleanup()
            except Exception as e:
                print(f"[InfiniCanvas] Cleanup error: {e}")
        self.router.close()
        self.loop.cancel()
        print("[InfiniCanvas] Cleanup complete")

    def run(self):
        """
        Main entry point - start the application.
        """
        print("\n" + "=" * 60)
        print("  InfiniCanvas - Infinite Pannable/Zoomable Whiteboard")
        print("=" * 60)
        print("\nControls:")
        print("  • Drag empty canvas: Pan")
        print("  • Drag a node: Move it")
        print("  • Mouse wheel: Zoom around cursor")
        print("  • [N] New node | [C] Clear | [R] Reset | [D] Debug | [ESC] Quit")
        print("\n" + "=" * 60 + "\n")

        self._bind()
        self.loop.on_cancel(self._cleanup)

        try:
            self.loop.run()
        except KeyboardInterrupt:
            print("\n[InfiniCanvas] Interrupted by user")
        finally:
            self.loop.cancel()
            pygame.quit()


if __name__ == "__main__":
    app = InfiniCanvasApp()
    app.run()
