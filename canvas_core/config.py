"""
InfiniCanvas Configuration
==========================

Colour palette and construction-time constants for the canvas engine.
"""

from dataclasses import dataclass, field
from typing import Tuple

Color = Tuple[int, int, int]


# Colors (RGB)
COLORS = {
    'background': (229, 231, 235),
    'grid': (190, 198, 210),
    'node_fill': (255, 255, 255),
    'node_hover_fill': (239, 246, 255),
    'node_stroke': (31, 41, 55),
    'node_selected_stroke': (37, 99, 235),
    'text': (17, 24, 39),
}


@dataclass
class NodeStyle:
    """Fill/stroke used to paint one ellipse"""
    fill: Color = COLORS['node_fill']
    stroke: Color = COLORS['node_stroke']
    line_width: float = 2.0


DEFAULT_NODE_STYLE = NodeStyle()
HOVERED_NODE_STYLE = NodeStyle(fill=COLORS['node_hover_fill'])
SELECTED_NODE_STYLE = NodeStyle(stroke=COLORS['node_selected_stroke'], line_width=3.0)


@dataclass
class CanvasConfig:
    """
    Numeric constants for a canvas engine.

    Raises:
        ValueError: On construction if any bound is out of range
    """
    min_scale: float = 0.25
    max_scale: float = 4.0
    grid_spacing_world: float = 100.0
    zoom_in_factor: float = 1.1
    zoom_out_factor: float = 0.9
    background_color: Color = field(default=COLORS['background'])

    def __post_init__(self):
        if self.min_scale <= 0:
            raise ValueError(f"min_scale must be positive, got {self.min_scale}")
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed "
                f"max_scale ({self.max_scale})"
            )
        if self.grid_spacing_world <= 0:
            raise ValueError(
                f"grid_spacing_world must be positive, got {self.grid_spacing_world}"
            )
        if self.zoom_in_factor <= 0 or self.zoom_out_factor <= 0:
            raise ValueError("zoom factors must be positive")
