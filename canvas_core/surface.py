"""
Drawing surface contract consumed by the engine and its layers.

Coordinates are screen units with the origin at the top-left. The pygame
implementation lives in canvas_ui.pygame_surface.
"""

from typing import Protocol, Tuple

from .config import Color
from .geometry import Vector2


class SurfaceUnavailableError(RuntimeError):
    """Raised when the host cannot provide a drawing surface"""


class DrawingSurface(Protocol):
    def get_size(self) -> Tuple[float, float]:
        ...

    def clear(self):
        ...

    def fill_rect(self, top_left: Vector2, size: Vector2, color: Color):
        ...

    def draw_line(self, start: Vector2, end: Vector2, color: Color, width: float = 1):
        ...

    def draw_ellipse(
        self,
        center: Vector2,
        radius: Vector2,
        fill: Color,
        stroke: Color,
        line_width: float = 1
    ):
        ...

    def draw_text(self, text: str, center: Vector2, color: Color, font_size: float):
        ...
