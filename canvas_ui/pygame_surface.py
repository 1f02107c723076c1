"""
InfiniCanvas Pygame Surface
===========================

DrawingSurface implementation backed by a pygame.Surface.

Features:
    - Float coordinates rounded to pixels at the last moment
    - Ellipses culled when entirely outside the surface
    - Font objects cached per pixel size (labels scale with zoom)
"""

from typing import Dict, Tuple

import pygame

from canvas_core.config import Color
from canvas_core.geometry import Vector2
from canvas_core.surface import SurfaceUnavailableError


class PygameSurface:
    """Adapter from the engine's drawing primitives to pygame.draw"""

    def __init__(self, target: pygame.Surface, font_name=None):
        """
        Args:
            target: Surface to paint on (window or off-screen)
            font_name: Font file passed to pygame.font.Font (None = default font)
        """
        if target is None:
            raise SurfaceUnavailableError("No pygame surface to draw on")
        self.target = target
        self.font_name = font_name
        self._fonts: Dict[int, pygame.font.Font] = {}

        if not pygame.font.get_init():
            pygame.font.init()

    def get_size(self) -> Tuple[int, int]:
        return self.target.get_size()

    def clear(self):
        self.target.fill((0, 0, 0))

    def fill_rect(self, top_left: Vector2, size: Vector2, color: Color):
        rect = pygame.Rect(
            int(round(top_left.x)),
            int(round(top_left.y)),
            int(round(size.x)),
            int(round(size.y))
        )
        pygame.draw.rect(self.target, color, rect)

    def draw_line(self, start: Vector2, end: Vector2, color: Color, width: float = 1):
        pygame.draw.line(
            self.target,
            color,
            (int(round(start.x)), int(round(start.y))),
            (int(round(end.x)), int(round(end.y))),
            max(1, int(round(width)))
        )

    def draw_ellipse(
        self,
        center: Vector2,
        radius: Vector2,
        fill: Color,
        stroke: Color,
        line_width: float = 1
    ):
        width, height = self.get_size()
        left = center.x - radius.x
        top = center.y - radius.y
        right = center.x + radius.x
        bottom = center.y + radius.y

        # Entirely off-screen or degenerate
        if right < 0 or bottom < 0 or left > width or top > height:
            return
        if radius.x * 2 < 1 or radius.y * 2 < 1:
            return

        rect = pygame.Rect(
            int(round(left)),
            int(round(top)),
            int(round(right - left)),
            int(round(bottom - top))
        )
        pygame.draw.ellipse(self.target, fill, rect)
        pygame.draw.ellipse(self.target, stroke, rect, max(1, int(round(line_width))))

    def font(self, size: int) -> pygame.font.Font:
        """Get (or create) a font of the given pixel size"""
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(self.font_name, size)
            self._fonts[size] = font
        return font

    def draw_text(self, text: str, center: Vector2, color: Color, font_size: float):
        size = int(round(font_size))
        if size < 1 or not text:
            return
        label = self.font(size).render(text, True, color)
        label_rect = label.get_rect(center=(int(round(center.x)), int(round(center.y))))
        self.target.blit(label, label_rect)


def create_window_surface(
    size: Tuple[int, int],
    caption: str = "InfiniCanvas"
) -> PygameSurface:
    """
    Open a resizable pygame window and wrap its surface.

    Raises:
        SurfaceUnavailableError: If pygame cannot open a display
    """
    try:
        pygame.display.init()
        pygame.display.set_caption(caption)
        screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    except pygame.error as e:
        raise SurfaceUnavailableError(f"Cannot open display: {e}") from e
    return PygameSurface(screen)
