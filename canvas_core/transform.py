"""
InfiniCanvas Coordinate Transform Module
========================================

Pure world <-> screen mapping.

The camera position is the world point shown at the viewport center:

    screen = viewport_center + (world - camera_pos) * camera_scale
    world  = camera_pos + (screen - viewport_center) / camera_scale

camera_scale must be > 0. Callers keep it inside the camera's bounds.
"""

from .geometry import Vector2, ViewportSize


def world_to_screen(
    world: Vector2,
    viewport: ViewportSize,
    camera_pos: Vector2,
    camera_scale: float
) -> Vector2:
    """
    Map a world-space point to screen space.

    Args:
        world: Point in world coordinates
        viewport: Current viewport size
        camera_pos: World point at the viewport center
        camera_scale: World-to-screen magnification

    Returns:
        The point in screen coordinates (origin top-left)
    """
    relative = world.sub(camera_pos)
    return viewport.center.add(relative.scale(camera_scale))


def screen_to_world(
    screen: Vector2,
    viewport: ViewportSize,
    camera_pos: Vector2,
    camera_scale: float
) -> Vector2:
    """
    Map a screen-space point back to world space.

    Exact inverse of world_to_screen for the same viewport and camera.
    """
    relative = screen.sub(viewport.center)
    return camera_pos.add(relative.scale(1.0 / camera_scale))
