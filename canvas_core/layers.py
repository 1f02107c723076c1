"""
InfiniCanvas Layers Module
==========================

Everything the engine paints is a Layer: an object with a single
draw(surface, camera, viewport) method. The engine calls layers in
insertion order, so earlier layers end up underneath later ones.

Classes:
    - Layer: Abstract drawing capability
    - GridLayer: Infinite background grid spaced in world units
    - Node: Labeled ellipse in world space
    - NodeLayer: Node store with hit-testing, selection and hover state
"""

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .camera import Camera
from .config import (
    COLORS,
    Color,
    DEFAULT_NODE_STYLE,
    HOVERED_NODE_STYLE,
    SELECTED_NODE_STYLE,
    NodeStyle,
)
from .geometry import Vector2, ViewportSize, round_down_to_multiple
from .surface import DrawingSurface


class Layer(ABC):
    """Something the engine can paint once per frame"""

    @abstractmethod
    def draw(self, surface: DrawingSurface, camera: Camera, viewport: ViewportSize):
        """
        Paint this layer.

        The camera and viewport are only valid for the duration of the call;
        layers must not keep references to them.
        """


# ==============================================================================
# Grid
# ==============================================================================

def grid_line_positions(start: float, end: float, step: float) -> np.ndarray:
    """
    World positions of grid lines covering [start, end].

    The first line is start rounded down to a multiple of step, the last is
    end rounded down the same way. Floor rounding keeps negative ranges
    aligned with the lines on the positive side of the origin.
    """
    first = round_down_to_multiple(start, step)
    last = round_down_to_multiple(end, step)
    count = int(round((last - first) / step)) + 1
    if count <= 0:
        return np.empty(0)
    return first + np.arange(count) * step


class GridLayer(Layer):
    """
    Background grid with lines every grid_spacing_world world units.

    Spacing is in world units, so lines spread apart when zooming in.
    """

    def __init__(
        self,
        grid_spacing_world: float = 100.0,
        color: Color = COLORS['grid'],
        line_width: float = 1.0
    ):
        if grid_spacing_world <= 0:
            raise ValueError(
                f"grid_spacing_world must be positive, got {grid_spacing_world}"
            )
        self.grid_spacing_world = grid_spacing_world
        self.color = color
        self.line_width = line_width

    def visible_world_rect(
        self,
        camera: Camera,
        viewport: ViewportSize
    ) -> Tuple[float, float, float, float]:
        """Return the visible area as world (left, top, right, bottom)"""
        top_left = camera.screen_to_world(Vector2(0.0, 0.0), viewport)
        bottom_right = camera.screen_to_world(
            Vector2(viewport.width, viewport.height), viewport
        )
        return (top_left.x, top_left.y, bottom_right.x, bottom_right.y)

    def draw(self, surface: DrawingSurface, camera: Camera, viewport: ViewportSize):
        left, top, right, bottom = self.visible_world_rect(camera, viewport)
        step = self.grid_spacing_world

        # Scratch vectors reused for every line endpoint
        start = Vector2()
        end = Vector2()

        # Vertical lines
        for x in grid_line_positions(left, right, step):
            p1 = camera.world_to_screen(start.set(float(x), top), viewport)
            p2 = camera.world_to_screen(end.set(float(x), bottom), viewport)
            surface.draw_line(p1, p2, self.color, self.line_width)

        # Horizontal lines
        for y in grid_line_positions(top, bottom, step):
            p1 = camera.world_to_screen(start.set(left, float(y)), viewport)
            p2 = camera.world_to_screen(end.set(right, float(y)), viewport)
            surface.draw_line(p1, p2, self.color, self.line_width)


# ==============================================================================
# Nodes
# ==============================================================================

@dataclass
class Node:
    """
    Ellipse node in world space.

    Attributes:
        id: Caller-assigned identifier. Lookups take the first match.
        center: Center in world coordinates
        radius: Half-extents in world units (x and y independent)
        label: Text drawn at the center
    """
    id: str
    center: Vector2 = field(default_factory=Vector2.zero)
    radius: Vector2 = field(default_factory=lambda: Vector2(120.0, 60.0))
    label: str = ""

    def copy(self) -> "Node":
        return Node(
            id=self.id,
            center=self.center.copy(),
            radius=self.radius.copy(),
            label=self.label
        )


def inside_ellipses(offsets: np.ndarray, radii: np.ndarray) -> np.ndarray:
    """
    Vectorised ellipse containment test.

    Args:
        offsets: (N, 2) point minus ellipse center
        radii: (N, 2) ellipse half-extents

    Returns:
        (N,) bool array, True where (dx/rx)^2 + (dy/ry)^2 <= 1.
        Points on the boundary count as inside.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        metric = (offsets * offsets / (radii * radii)).sum(axis=1)
    # NaN (zero radius, zero offset) compares False
    return metric <= 1.0


class NodeLayer(Layer):
    """
    Ordered collection of ellipse nodes.

    Features:
        - Store: add / set / update / move / resize / relabel / remove by id
        - Hit-testing in screen space, first inserted node wins
        - Selected and hovered ids (may be stale; a stale id matches nothing)
        - Rendering with selected > hovered > default style precedence
    """

    def __init__(
        self,
        default_style: NodeStyle = DEFAULT_NODE_STYLE,
        hovered_style: NodeStyle = HOVERED_NODE_STYLE,
        selected_style: NodeStyle = SELECTED_NODE_STYLE,
        text_color: Color = COLORS['text'],
        base_font_size: float = 16.0
    ):
        self.default_style = default_style
        self.hovered_style = hovered_style
        self.selected_style = selected_style
        self.text_color = text_color
        self.base_font_size = base_font_size

        self._nodes: List[Node] = []
        self._selected_id: Optional[str] = None
        self._hovered_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self._nodes)

    # ---- Store -------------------------------------------------------------

    def _find(self, node_id: str) -> Optional[Node]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def set_nodes(self, nodes: Iterable[Node]):
        """Replace the whole collection"""
        self._nodes = [node.copy() for node in nodes]

    def get_nodes(self) -> Tuple[Node, ...]:
        """Snapshot of all nodes in storage order"""
        return tuple(node.copy() for node in self._nodes)

    def get_node(self, node_id: str) -> Optional[Node]:
        node = self._find(node_id)
        return node.copy() if node else None

    def add_node(self, node: Node):
        self._nodes.append(node.copy())

    def remove_node(self, node_id: str) -> bool:
        """Remove the first node with this id. Returns False if none matched."""
        for idx, node in enumerate(self._nodes):
            if node.id == node_id:
                del self._nodes[idx]
                return True
        return False

    def update_node(self, node_id: str, **changes):
        """
        Replace some fields of a node.

        Raises:
            TypeError: If a keyword is not a Node field
        """
        for idx, node in enumerate(self._nodes):
            if node.id == node_id:
                self._nodes[idx] = dataclasses.replace(node, **changes).copy()
                return

    def move_node(self, node_id: str, delta_world: Vector2):
        node = self._find(node_id)
        if node is None:
            return
        node.center = node.center.add(delta_world)

    def resize_node(self, node_id: str, radius: Vector2):
        node = self._find(node_id)
        if node is None:
            return
        node.radius = radius.copy()

    def set_label(self, node_id: str, label: str):
        node = self._find(node_id)
        if node is None:
            return
        node.label = label

    # ---- Selection / hover ---------------------------------------------------

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def hovered_node_id(self) -> Optional[str]:
        return self._hovered_id

    def set_selected_node(self, node_id: Optional[str]):
        self._selected_id = node_id

    def set_hovered_node(self, node_id: Optional[str]):
        self._hovered_id = node_id

    def get_selected_node(self) -> Optional[Node]:
        if self._selected_id is None:
            return None
        return self.get_node(self._selected_id)

    def get_hovered_node(self) -> Optional[Node]:
        if self._hovered_id is None:
            return None
        return self.get_node(self._hovered_id)

    def style_for(self, node: Node) -> NodeStyle:
        """Selected wins over hovered, hovered over default"""
        if node.id == self._selected_id:
            return self.selected_style
        if node.id == self._hovered_id:
            return self.hovered_style
        return self.default_style

    # ---- Hit-testing -------------------------------------------------------

    def hit_test(
        self,
        screen_point: Vector2,
        camera: Camera,
        viewport: ViewportSize
    ) -> Optional[Node]:
        """
        Find the node under a screen point.

        Each center is projected to screen space and each radius scaled by
        camera.scale, then tested with (dx/rx)^2 + (dy/ry)^2 <= 1.

        Returns:
            A copy of the first matching node in storage order, or None
        """
        if not self._nodes:
            return None

        centers = np.array([n.center.as_tuple() for n in self._nodes], dtype=float)
        radii = np.array([n.radius.as_tuple() for n in self._nodes], dtype=float)

        cam_pos = np.array(camera.position.as_tuple(), dtype=float)
        view_center = np.array(viewport.center.as_tuple(), dtype=float)

        centers_screen = view_center + (centers - cam_pos) * camera.scale
        offsets = np.array(screen_point.as_tuple(), dtype=float) - centers_screen

        hits = np.flatnonzero(inside_ellipses(offsets, radii * camera.scale))
        if hits.size == 0:
            return None
        return self._nodes[int(hits[0])].copy()

    # ---- Rendering ---------------------------------------------------------

    def draw(self, surface: DrawingSurface, camera: Camera, viewport: ViewportSize):
        if viewport.is_empty:
            return

        font_size = self.base_font_size * camera.scale

        for node in self._nodes:
            center_screen = camera.world_to_screen(node.center, viewport)
            radius_screen = node.radius.scale(camera.scale)
            style = self.style_for(node)

            surface.draw_ellipse(
                center_screen,
                radius_screen,
                style.fill,
                style.stroke,
                style.line_width
            )

            if node.label and font_size >= 1:
                surface.draw_text(node.label, center_screen, self.text_color, font_size)
