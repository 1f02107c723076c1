# InfiniCanvas Core Module
# Contains the camera transform, layers, canvas engine and interaction logic

from .geometry import Vector2, ViewportSize, clamp, round_down_to_multiple
from .transform import world_to_screen, screen_to_world
from .camera import Camera
from .config import CanvasConfig, NodeStyle, COLORS
from .surface import DrawingSurface, SurfaceUnavailableError
from .layers import Layer, GridLayer, Node, NodeLayer
from .engine import CanvasEngine
from .interaction import (
    InteractionMode,
    PanDragController,
    ZoomController,
    reduce_pointer,
)
from .render_loop import RenderLoop

__all__ = [
    'Vector2',
    'ViewportSize',
    'clamp',
    'round_down_to_multiple',
    'world_to_screen',
    'screen_to_world',
    'Camera',
    'CanvasConfig',
    'NodeStyle',
    'COLORS',
    'DrawingSurface',
    'SurfaceUnavailableError',
    'Layer',
    'GridLayer',
    'Node',
    'NodeLayer',
    'CanvasEngine',
    'InteractionMode',
    'PanDragController',
    'ZoomController',
    'reduce_pointer',
    'RenderLoop'
]
