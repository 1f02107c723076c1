"""
InfiniCanvas Render Loop
========================

Calls engine.draw_frame() once per tick until cancelled. The engine's
dirty flag makes ticks without changes cheap no-ops.

Usage:
    with RenderLoop(engine, present=pygame.display.flip) as loop:
        loop.run()
"""

from typing import Callable, List, Optional

import pygame


class RenderLoop:
    """
    Per-tick draw scheduler with an explicit cancel handle.

    Args:
        engine: Anything with a draw_frame() -> bool method
        present: Called after a tick that actually drew (e.g. display.flip)
        fps: Target ticks per second
        clock: Object with tick(fps); defaults to pygame.time.Clock()
        before_frame: Called at the start of every tick (event pumping)
    """

    def __init__(
        self,
        engine,
        present: Optional[Callable[[], None]] = None,
        fps: int = 60,
        clock=None,
        before_frame: Optional[Callable[[], None]] = None
    ):
        self.engine = engine
        self.present = present
        self.fps = fps
        self.clock = clock if clock is not None else pygame.time.Clock()
        self.before_frame = before_frame

        self.frame_count = 0
        self.drawn_count = 0
        self._cancelled = False
        self._on_cancel: List[Callable[[], None]] = []

    @property
    def running(self) -> bool:
        return not self._cancelled

    def on_cancel(self, callback: Callable[[], None]):
        """Register cleanup to run once when the loop is cancelled"""
        if self._cancelled:
            callback()
            return
        self._on_cancel.append(callback)

    def cancel(self):
        """
        Stop the loop. Safe to call more than once.

        Every registered callback runs even if an earlier one raises;
        the first error is re-raised once all of them have run.
        """
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._on_cancel = self._on_cancel, []

        first_error: Optional[BaseException] = None
        for callback in reversed(callbacks):
            try:
                callback()
            except Exception as e:
                print(f"[RenderLoop] Cancel callback failed: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def step(self) -> bool:
        """
        Run a single tick.

        Returns:
            True if the engine drew a frame
        """
        if self._cancelled:
            return False

        if self.before_frame:
            self.before_frame()
        # before_frame may have cancelled (e.g. window closed)
        if self._cancelled:
            return False

        drew = self.engine.draw_frame()
        if drew:
            self.drawn_count += 1
            if self.present:
                self.present()

        self.frame_count += 1
        self.clock.tick(self.fps)
        return drew

    def run(self, max_frames: Optional[int] = None):
        """Step until cancelled or max_frames ticks have run"""
        try:
            while not self._cancelled:
                if max_frames is not None and self.frame_count >= max_frames:
                    break
                self.step()
        finally:
            if max_frames is None:
                self.cancel()

    def __enter__(self) -> "RenderLoop":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False
