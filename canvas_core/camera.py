"""
InfiniCanvas Camera Module
==========================

Mutable view state: which world point sits at the viewport center and how
much the world is magnified.

Pan works in screen deltas. Zoom keeps the world point under the cursor
fixed on screen (the zoom anchor), even when the requested factor is
clamped by the scale bounds.
"""

from dataclasses import dataclass, field

from .geometry import Vector2, ViewportSize, clamp
from .transform import screen_to_world, world_to_screen


@dataclass
class Camera:
    """
    Camera state for the canvas.

    Attributes:
        position: World point mapped to the viewport center
        scale: World-to-screen magnification, kept in [min_scale, max_scale]
            by every mutating method (direct construction is not clamped)
    """
    position: Vector2 = field(default_factory=Vector2.zero)
    scale: float = 1.0
    min_scale: float = 0.25
    max_scale: float = 4.0

    def copy(self) -> "Camera":
        return Camera(
            position=self.position.copy(),
            scale=self.scale,
            min_scale=self.min_scale,
            max_scale=self.max_scale
        )

    def reset(self):
        """Back to the origin at 1:1"""
        self.position = Vector2.zero()
        self.scale = clamp(1.0, self.min_scale, self.max_scale)

    def set_scale(self, scale: float):
        self.scale = clamp(scale, self.min_scale, self.max_scale)

    def world_to_screen(self, world: Vector2, viewport: ViewportSize) -> Vector2:
        return world_to_screen(world, viewport, self.position, self.scale)

    def screen_to_world(self, screen: Vector2, viewport: ViewportSize) -> Vector2:
        return screen_to_world(screen, viewport, self.position, self.scale)

    def pan_by_screen_delta(self, delta: Vector2):
        """
        Pan by a screen-space displacement.

        Dragging the view right moves the camera's world focus left, so the
        world delta is subtracted from the position.
        """
        world_delta = delta.scale(1.0 / self.scale)
        self.position = self.position.sub(world_delta)

    def zoom_at_screen_point(
        self,
        screen_point: Vector2,
        zoom_factor: float,
        viewport: ViewportSize
    ):
        """
        Multiply the scale by zoom_factor around a screen anchor.

        Args:
            screen_point: Anchor in screen coordinates (usually the cursor)
            zoom_factor: >1 zooms in, <1 zooms out
            viewport: Current viewport size

        Raises:
            ValueError: If zoom_factor is not positive
        """
        if zoom_factor <= 0:
            raise ValueError(f"zoom_factor must be positive, got {zoom_factor}")

        before = self.screen_to_world(screen_point, viewport)
        self.set_scale(self.scale * zoom_factor)
        # after uses the clamped scale, so the anchor holds at the bounds too
        after = self.screen_to_world(screen_point, viewport)

        self.position = self.position.add(before.sub(after))
