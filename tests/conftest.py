import os

# Headless pygame for surface/font tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from canvas_core import CanvasEngine, Node, Vector2, ViewportSize


class RecordingSurface:
    """DrawingSurface fake that records every call as (name, args)"""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []

    def get_size(self):
        return (self.width, self.height)

    def clear(self):
        self.calls.append(("clear", ()))

    def fill_rect(self, top_left, size, color):
        self.calls.append(("fill_rect", (top_left, size, color)))

    def draw_line(self, start, end, color, width=1):
        self.calls.append(("draw_line", (start, end, color, width)))

    def draw_ellipse(self, center, radius, fill, stroke, line_width=1):
        self.calls.append(("draw_ellipse", (center, radius, fill, stroke, line_width)))

    def draw_text(self, text, center, color, font_size):
        self.calls.append(("draw_text", (text, center, color, font_size)))

    def names(self):
        return [name for name, _ in self.calls]

    def of(self, name):
        return [args for call_name, args in self.calls if call_name == name]

    def reset(self):
        self.calls.clear()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def viewport():
    return ViewportSize(800, 600)


@pytest.fixture
def engine(surface):
    return CanvasEngine(surface)


@pytest.fixture
def node_a():
    return Node(id="a", center=Vector2(0, 0), radius=Vector2(120, 60), label="X")
