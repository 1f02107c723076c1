# InfiniCanvas UI Module
# Contains the pygame drawing surface and event routing for the canvas

from .pygame_surface import PygameSurface, create_window_surface
from .input_router import (
    EventRouter,
    Subscription,
    bind_pan_handlers,
    bind_zoom_handlers,
    bind_resize_handler,
)

__all__ = [
    'PygameSurface',
    'create_window_surface',
    'EventRouter',
    'Subscription',
    'bind_pan_handlers',
    'bind_zoom_handlers',
    'bind_resize_handler'
]
