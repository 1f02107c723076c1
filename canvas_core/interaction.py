"""
InfiniCanvas Interaction Module
===============================

Turns pointer and wheel input into engine calls.

Pointer gestures run through a small state machine. The transition logic
is a pure reducer, reduce_pointer(state, event) -> (state, effects); the
controller resolves hit-tests, feeds events in and applies the effects.

State Transitions:
    IDLE ──(primary down on node)──▶ DRAGGING_NODE   (node selected)
    IDLE ──(primary down on empty)──▶ PANNING
    PANNING ──(move)──▶ PANNING                      (camera pans)
    DRAGGING_NODE ──(move)──▶ DRAGGING_NODE          (node moves)
    ANY ──(primary up / leave)──▶ IDLE               (selection cleared)

Pan deltas are taken from client (window) coordinates, drag deltas from
canvas-local coordinates. Both are the same displacement; each gesture
sticks to one frame.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import List, Optional, Tuple

from .geometry import Vector2

PRIMARY_BUTTON = 1


class InteractionMode(Enum):
    """Pointer interaction states"""
    IDLE = auto()
    PANNING = auto()
    DRAGGING_NODE = auto()


class PointerEventKind(Enum):
    DOWN = auto()
    MOVE = auto()
    UP = auto()
    LEAVE = auto()


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer input reduced to what the state machine needs.

    Attributes:
        kind: DOWN / MOVE / UP / LEAVE
        local: Position relative to the canvas origin
        client: Position in window coordinates
        button: Button for DOWN/UP events (1 = primary)
        hit_node_id: Id of the node under `local`, resolved by the controller
    """
    kind: PointerEventKind
    local: Vector2
    client: Vector2
    button: int = PRIMARY_BUTTON
    hit_node_id: Optional[str] = None


@dataclass(frozen=True)
class InteractionState:
    mode: InteractionMode = InteractionMode.IDLE
    last_point: Optional[Vector2] = None
    dragged_node_id: Optional[str] = None
    hovered_node_id: Optional[str] = None


# ==============================================================================
# Effects
# ==============================================================================

@dataclass(frozen=True)
class PanBy:
    delta: Vector2

    def apply(self, engine):
        engine.pan_by_screen_delta(self.delta)


@dataclass(frozen=True)
class MoveNodeBy:
    node_id: str
    delta: Vector2

    def apply(self, engine):
        engine.move_node_by_screen_delta(self.node_id, self.delta)


@dataclass(frozen=True)
class SelectNode:
    node_id: Optional[str]

    def apply(self, engine):
        engine.select_node(self.node_id)


@dataclass(frozen=True)
class HoverNode:
    node_id: Optional[str]

    def apply(self, engine):
        engine.hover_node(self.node_id)


# ==============================================================================
# Reducer
# ==============================================================================

def _end_gesture(state: InteractionState, hovered: Optional[str]) -> Tuple[InteractionState, list]:
    effects = [SelectNode(None)]
    if hovered != state.hovered_node_id:
        effects.append(HoverNode(hovered))
    return InteractionState(hovered_node_id=hovered), effects


def reduce_pointer(
    state: InteractionState,
    event: PointerEvent
) -> Tuple[InteractionState, list]:
    """
    Compute the next interaction state and the engine effects to apply.

    Args:
        state: Current state
        event: Incoming pointer event (hit_node_id already resolved)

    Returns:
        Tuple of (new_state, effects)
    """
    kind = event.kind

    if kind == PointerEventKind.DOWN:
        if event.button != PRIMARY_BUTTON or state.mode != InteractionMode.IDLE:
            return state, []
        if event.hit_node_id is not None:
            new_state = replace(
                state,
                mode=InteractionMode.DRAGGING_NODE,
                last_point=event.local,
                dragged_node_id=event.hit_node_id
            )
            return new_state, [SelectNode(event.hit_node_id)]
        new_state = replace(state, mode=InteractionMode.PANNING, last_point=event.client)
        return new_state, []

    if kind == PointerEventKind.MOVE:
        if state.mode == InteractionMode.PANNING and state.last_point is not None:
            delta = event.client.sub(state.last_point)
            return replace(state, last_point=event.client), [PanBy(delta)]

        if (state.mode == InteractionMode.DRAGGING_NODE
                and state.dragged_node_id is not None
                and state.last_point is not None):
            delta = event.local.sub(state.last_point)
            return (
                replace(state, last_point=event.local),
                [MoveNodeBy(state.dragged_node_id, delta)]
            )

        if state.mode == InteractionMode.IDLE and event.hit_node_id != state.hovered_node_id:
            return (
                replace(state, hovered_node_id=event.hit_node_id),
                [HoverNode(event.hit_node_id)]
            )
        return state, []

    if kind == PointerEventKind.UP:
        if event.button != PRIMARY_BUTTON:
            return state, []
        # The pointer may rest on a different node once a pan or drag ends
        return _end_gesture(state, hovered=event.hit_node_id)

    if kind == PointerEventKind.LEAVE:
        return _end_gesture(state, hovered=None)

    return state, []


# ==============================================================================
# Controllers
# ==============================================================================

class PanDragController:
    """
    Pointer controller: pan on empty canvas, drag on nodes, hover tracking.

    Holds the only copy of the gesture state; the engine is used for
    hit-tests and receives the resulting effects.
    """

    def __init__(self, engine, debug: bool = False):
        self.engine = engine
        self.debug = debug
        self._state = InteractionState()

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def mode(self) -> InteractionMode:
        return self._state.mode

    def _hit_id(self, local: Vector2) -> Optional[str]:
        node = self.engine.hit_test_node_at_screen_point(local)
        return node.id if node else None

    def dispatch(self, event: PointerEvent) -> List:
        """Run one event through the reducer and apply its effects"""
        previous = self._state.mode
        self._state, effects = reduce_pointer(self._state, event)

        if self.debug and self._state.mode != previous:
            print(f"[FSM] {previous.name} → {self._state.mode.name}")

        for effect in effects:
            effect.apply(self.engine)
        return effects

    def on_pointer_down(
        self,
        local: Vector2,
        client: Optional[Vector2] = None,
        button: int = PRIMARY_BUTTON
    ) -> List:
        hit_id = None
        if button == PRIMARY_BUTTON and self._state.mode == InteractionMode.IDLE:
            hit_id = self._hit_id(local)
        return self.dispatch(PointerEvent(
            PointerEventKind.DOWN, local, client or local, button, hit_id
        ))

    def on_pointer_move(self, local: Vector2, client: Optional[Vector2] = None) -> List:
        # Hover only changes while idle, so skip the hit-test mid-gesture
        hit_id = self._hit_id(local) if self._state.mode == InteractionMode.IDLE else None
        return self.dispatch(PointerEvent(
            PointerEventKind.MOVE, local, client or local, hit_node_id=hit_id
        ))

    def on_pointer_up(
        self,
        local: Vector2,
        client: Optional[Vector2] = None,
        button: int = PRIMARY_BUTTON
    ) -> List:
        hit_id = self._hit_id(local) if button == PRIMARY_BUTTON else None
        return self.dispatch(PointerEvent(
            PointerEventKind.UP, local, client or local, button, hit_id
        ))

    def on_pointer_leave(self) -> List:
        return self.dispatch(PointerEvent(
            PointerEventKind.LEAVE, Vector2.zero(), Vector2.zero()
        ))


class ZoomController:
    """
    Wheel controller.

    delta_y follows the usual scroll convention: negative means the wheel
    moved up (zoom in), positive means down (zoom out).
    """

    def __init__(
        self,
        engine,
        zoom_in_factor: Optional[float] = None,
        zoom_out_factor: Optional[float] = None
    ):
        self.engine = engine
        config = engine.config
        if zoom_in_factor is None:
            zoom_in_factor = config.zoom_in_factor
        if zoom_out_factor is None:
            zoom_out_factor = config.zoom_out_factor
        if zoom_in_factor <= 0:
            raise ValueError(f"zoom_in_factor must be positive, got {zoom_in_factor}")
        if zoom_out_factor <= 0:
            raise ValueError(f"zoom_out_factor must be positive, got {zoom_out_factor}")
        self.zoom_in_factor = zoom_in_factor
        self.zoom_out_factor = zoom_out_factor

    def factor_for(self, delta_y: float) -> Optional[float]:
        if delta_y < 0:
            return self.zoom_in_factor
        if delta_y > 0:
            return self.zoom_out_factor
        return None

    def on_wheel(self, local: Vector2, delta_y: float) -> Optional[float]:
        """
        Zoom around the cursor.

        Returns:
            The factor applied, or None for a zero delta
        """
        factor = self.factor_for(delta_y)
        if factor is None:
            return None
        self.engine.zoom_at_screen_point(local, factor)
        return factor
