"""
InfiniCanvas Geometry Module
============================

Small value types shared by every other part of the canvas.

Classes:
    - Vector2: 2D point / displacement. Arithmetic returns new instances.
    - ViewportSize: Snapshot of the drawing surface size in screen units.

Helpers:
    - clamp: Bound a value to [low, high]
    - round_down_to_multiple: Floor a value onto a grid step
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Vector2:
    """
    2D vector used for world points, screen points and deltas.

    add/sub/scale never touch their operands. The only in-place
    operation is set(), meant for reusing a scratch vector in hot loops.
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    @classmethod
    def from_tuple(cls, values: Tuple[float, float]) -> "Vector2":
        return cls(float(values[0]), float(values[1]))

    def set(self, x: float, y: float) -> "Vector2":
        """Overwrite both components in place and return self"""
        self.x = x
        self.y = y
        return self

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Vector2":
        return Vector2(self.x * factor, self.y * factor)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, factor: float) -> "Vector2":
        return self.scale(factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)


@dataclass(frozen=True)
class ViewportSize:
    """Current drawing-surface size, same units as screen coordinates"""
    width: float
    height: float

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2, self.height / 2)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to [low, high]"""
    return max(low, min(high, value))


def round_down_to_multiple(value: float, step: float) -> float:
    """
    Round value down to the nearest multiple of step.

    Uses floor, so negative values move away from zero:
        round_down_to_multiple(540, 100)  -> 500
        round_down_to_multiple(-40, 100)  -> -100

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return math.floor(value / step) * step
