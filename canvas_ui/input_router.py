"""
InfiniCanvas Input Router
=========================

Routes pygame events to handlers through revocable subscriptions, and
binds the interaction controllers to raw mouse events.

Each bind_* function returns a cleanup callable that revokes everything it
subscribed. Calling the cleanup more than once is harmless.
"""

from typing import Callable, Dict, List, Optional, Tuple

import pygame

from canvas_core.geometry import Vector2, ViewportSize

Handler = Callable[[pygame.event.Event], None]


class Subscription:
    """Handle returned by EventRouter.subscribe"""

    def __init__(self, router: "EventRouter", event_type: int, handler: Handler):
        self._router = router
        self.event_type = event_type
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def revoke(self):
        if not self._active:
            return
        self._active = False
        self._router._remove(self)


class EventRouter:
    """
    Event type -> handler fan-out.

    Args:
        event_source: Callable returning pending events (pygame.event.get)
    """

    def __init__(self, event_source: Optional[Callable[[], List[pygame.event.Event]]] = None):
        self._event_source = event_source or pygame.event.get
        self._handlers: Dict[int, List[Subscription]] = {}

    def subscribe(self, event_type: int, handler: Handler) -> Subscription:
        subscription = Subscription(self, event_type, handler)
        self._handlers.setdefault(event_type, []).append(subscription)
        return subscription

    def _remove(self, subscription: Subscription):
        subs = self._handlers.get(subscription.event_type, [])
        if subscription in subs:
            subs.remove(subscription)
        if not subs:
            self._handlers.pop(subscription.event_type, None)

    def handler_count(self, event_type: Optional[int] = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(subs) for subs in self._handlers.values())

    def dispatch(self, event: pygame.event.Event) -> int:
        """Send one event to its handlers. Returns how many ran."""
        subs = list(self._handlers.get(event.type, []))
        for subscription in subs:
            subscription.handler(event)
        return len(subs)

    def pump(self) -> List[pygame.event.Event]:
        """Fetch pending events from the source and dispatch them"""
        events = self._event_source()
        for event in events:
            self.dispatch(event)
        return events

    def close(self):
        """Revoke every subscription"""
        for subs in list(self._handlers.values()):
            for subscription in list(subs):
                subscription.revoke()


def _cleanup_once(subscriptions: List[Subscription]) -> Callable[[], None]:
    def cleanup():
        for subscription in subscriptions:
            subscription.revoke()
    return cleanup


def _local(pos: Tuple[int, int], canvas_origin: Tuple[float, float]) -> Tuple[Vector2, Vector2]:
    client = Vector2(float(pos[0]), float(pos[1]))
    return client.sub(Vector2.from_tuple(canvas_origin)), client


# ==============================================================================
# Binders
# ==============================================================================

def bind_pan_handlers(
    router: EventRouter,
    controller,
    canvas_origin: Tuple[float, float] = (0, 0)
) -> Callable[[], None]:
    """
    Connect mouse button/motion/leave events to a PanDragController.

    Args:
        router: Event router to subscribe on
        controller: PanDragController
        canvas_origin: Canvas top-left in window coordinates
    """
    def handle_down(event):
        local, client = _local(event.pos, canvas_origin)
        controller.on_pointer_down(local, client, event.button)

    def handle_motion(event):
        local, client = _local(event.pos, canvas_origin)
        controller.on_pointer_move(local, client)

    def handle_up(event):
        local, client = _local(event.pos, canvas_origin)
        controller.on_pointer_up(local, client, event.button)

    def handle_leave(event):
        controller.on_pointer_leave()

    return _cleanup_once([
        router.subscribe(pygame.MOUSEBUTTONDOWN, handle_down),
        router.subscribe(pygame.MOUSEMOTION, handle_motion),
        router.subscribe(pygame.MOUSEBUTTONUP, handle_up),
        router.subscribe(pygame.WINDOWLEAVE, handle_leave),
    ])


def bind_zoom_handlers(
    router: EventRouter,
    controller,
    canvas_origin: Tuple[float, float] = (0, 0),
    pointer_pos: Optional[Callable[[], Tuple[int, int]]] = None
) -> Callable[[], None]:
    """
    Connect MOUSEWHEEL events to a ZoomController.

    pygame reports wheel-up as positive y (negated when `flipped` is set);
    the controller expects wheel-up as a negative delta.
    """
    get_pos = pointer_pos or pygame.mouse.get_pos

    def handle_wheel(event):
        delta_y = -event.y
        if getattr(event, 'flipped', False):
            delta_y = -delta_y
        local, _ = _local(get_pos(), canvas_origin)
        controller.on_wheel(local, delta_y)

    return _cleanup_once([router.subscribe(pygame.MOUSEWHEEL, handle_wheel)])


def bind_resize_handler(
    router: EventRouter,
    engine,
    surface=None
) -> Callable[[], None]:
    """
    Keep the engine viewport in sync with the window size.

    When a PygameSurface is given it is re-pointed at the current display
    surface after each resize.
    """
    def handle_resize(event):
        if surface is not None:
            display = pygame.display.get_surface()
            if display is not None:
                surface.target = display
        engine.resize(ViewportSize(float(event.w), float(event.h)))

    return _cleanup_once([router.subscribe(pygame.VIDEORESIZE, handle_resize)])
