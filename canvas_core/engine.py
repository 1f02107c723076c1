"""
InfiniCanvas Engine Module
==========================

The engine owns the camera, the viewport size, the layer stack and a dirty
flag. Every state change marks the frame dirty; draw_frame() repaints the
whole surface only when something changed.

Draw order:
    background -> GridLayer -> NodeLayer -> any layers added later
"""

from typing import Iterable, List, Optional, Tuple

from .camera import Camera
from .config import CanvasConfig
from .geometry import Vector2, ViewportSize
from .layers import GridLayer, Layer, Node, NodeLayer
from .surface import DrawingSurface, SurfaceUnavailableError


class CanvasEngine:
    """
    Pannable, zoomable canvas with a grid and ellipse nodes.

    Queries hand out copies (camera, nodes), so callers never hold a live
    reference to engine state between calls.
    """

    def __init__(
        self,
        surface: Optional[DrawingSurface],
        viewport: Optional[ViewportSize] = None,
        config: Optional[CanvasConfig] = None
    ):
        """
        Initialize the engine.

        Args:
            surface: Drawing surface to paint on
            viewport: Initial viewport size (defaults to the surface size)
            config: Scale bounds, grid spacing and colours

        Raises:
            SurfaceUnavailableError: If no surface was provided
        """
        if surface is None:
            raise SurfaceUnavailableError("CanvasEngine needs a drawing surface")

        self._surface = surface
        self.config = config or CanvasConfig()

        if viewport is None:
            width, height = surface.get_size()
            viewport = ViewportSize(float(width), float(height))
        self._viewport = viewport

        self._camera = Camera(
            position=Vector2.zero(),
            scale=1.0,
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale
        )

        self._grid_layer = GridLayer(grid_spacing_world=self.config.grid_spacing_world)
        self._node_layer = NodeLayer()
        self._layers: List[Layer] = [self._grid_layer, self._node_layer]

        self._needs_draw = True

    # ---- State snapshots -----------------------------------------------------

    @property
    def camera(self) -> Camera:
        """Copy of the current camera"""
        return self._camera.copy()

    @property
    def viewport(self) -> ViewportSize:
        return self._viewport

    @property
    def needs_draw(self) -> bool:
        return self._needs_draw

    @property
    def layer_types(self) -> Tuple[type, ...]:
        """Layer classes in draw order (the layers themselves stay private)"""
        return tuple(type(layer) for layer in self._layers)

    def add_layer(self, layer: Layer):
        """Append a layer drawn on top of the existing ones"""
        self._layers.append(layer)
        self.request_draw()

    def screen_to_world(self, screen_point: Vector2) -> Vector2:
        return self._camera.screen_to_world(screen_point, self._viewport)

    def world_to_screen(self, world_point: Vector2) -> Vector2:
        return self._camera.world_to_screen(world_point, self._viewport)

    # ---- Viewport / camera -------------------------------------------------

    def resize(self, viewport: ViewportSize):
        self._viewport = viewport
        self.request_draw()

    def pan_by_screen_delta(self, delta: Vector2):
        self._camera.pan_by_screen_delta(delta)
        self.request_draw()

    def zoom_at_screen_point(self, screen_point: Vector2, zoom_factor: float):
        """
        Zoom around a screen point.

        Raises:
            ValueError: If zoom_factor is not positive
        """
        self._camera.zoom_at_screen_point(screen_point, zoom_factor, self._viewport)
        self.request_draw()

    def reset_camera(self):
        self._camera.reset()
        self.request_draw()

    # ---- Nodes ---------------------------------------------------------------

    def set_nodes(self, nodes: Iterable[Node]):
        self._node_layer.set_nodes(nodes)
        print(f"[CanvasEngine] Loaded {len(self._node_layer)} nodes")
        self.request_draw()

    def add_node(self, node: Node):
        self._node_layer.add_node(node)
        self.request_draw()

    def remove_node(self, node_id: str):
        if self._node_layer.remove_node(node_id):
            self.request_draw()

    def update_node(self, node_id: str, **changes):
        self._node_layer.update_node(node_id, **changes)
        self.request_draw()

    def move_node(self, node_id: str, delta_world: Vector2):
        self._node_layer.move_node(node_id, delta_world)
        self.request_draw()

    def move_node_by_screen_delta(self, node_id: str, screen_delta: Vector2):
        """Move a node by a screen displacement (converted like a pan)"""
        world_delta = screen_delta.scale(1.0 / self._camera.scale)
        self.move_node(node_id, world_delta)

    def resize_node(self, node_id: str, radius: Vector2):
        self._node_layer.resize_node(node_id, radius)
        self.request_draw()

    def set_node_label(self, node_id: str, label: str):
        self._node_layer.set_label(node_id, label)
        self.request_draw()

    def get_nodes(self) -> Tuple[Node, ...]:
        return self._node_layer.get_nodes()

    def get_selected_node(self) -> Optional[Node]:
        return self._node_layer.get_selected_node()

    def get_hovered_node(self) -> Optional[Node]:
        return self._node_layer.get_hovered_node()

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._node_layer.selected_node_id

    @property
    def hovered_node_id(self) -> Optional[str]:
        return self._node_layer.hovered_node_id

    def hit_test_node_at_screen_point(self, screen_point: Vector2) -> Optional[Node]:
        """First node under a canvas-local screen point. Does not mark dirty."""
        return self._node_layer.hit_test(screen_point, self._camera, self._viewport)

    def select_node(self, node_id: Optional[str]):
        self._node_layer.set_selected_node(node_id)
        self.request_draw()

    def hover_node(self, node_id: Optional[str]):
        self._node_layer.set_hovered_node(node_id)
        self.request_draw()

    # ---- Drawing -------------------------------------------------------------

    def request_draw(self):
        self._needs_draw = True

    def draw_frame(self) -> bool:
        """
        Repaint everything if the frame is dirty.

        Returns:
            True if a frame was drawn, False if nothing had changed
        """
        if not self._needs_draw:
            return False
        self._needs_draw = False

        viewport = self._viewport
        self._surface.clear()
        self._surface.fill_rect(
            Vector2.zero(),
            Vector2(viewport.width, viewport.height),
            self.config.background_color
        )

        for layer in self._layers:
            layer.draw(self._surface, self._camera, viewport)
        return True
