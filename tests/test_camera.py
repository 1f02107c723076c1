import pytest

from canvas_core import Camera, CanvasConfig, Vector2, ViewportSize

VIEWPORT = ViewportSize(800, 600)


def test_zoom_at_center_keeps_position():
    camera = Camera()
    camera.zoom_at_screen_point(Vector2(400, 300), 2.0, VIEWPORT)

    assert camera.scale == pytest.approx(2.0)
    assert camera.position.as_tuple() == pytest.approx((0, 0))


def test_zoom_off_center_keeps_anchor_under_cursor():
    camera = Camera()
    anchor = Vector2(0, 0)
    before = camera.screen_to_world(anchor, VIEWPORT)
    assert before.as_tuple() == pytest.approx((-400, -300))

    camera.zoom_at_screen_point(anchor, 2.0, VIEWPORT)

    assert camera.world_to_screen(before, VIEWPORT).as_tuple() == pytest.approx((0, 0))
    assert camera.position.as_tuple() == pytest.approx((-200, -150))


def test_anchor_holds_when_scale_is_clamped():
    camera = Camera(scale=3.5)
    anchor = Vector2(123, 456)
    before = camera.screen_to_world(anchor, VIEWPORT)

    camera.zoom_at_screen_point(anchor, 10.0, VIEWPORT)

    assert camera.scale == 4.0
    assert camera.world_to_screen(before, VIEWPORT).as_tuple() == pytest.approx((123, 456))


def test_repeated_zoom_stays_within_bounds():
    camera = Camera()
    for _ in range(100):
        camera.zoom_at_screen_point(Vector2(10, 10), 0.9, VIEWPORT)
    assert camera.scale == pytest.approx(0.25)

    for _ in range(100):
        camera.zoom_at_screen_point(Vector2(700, 20), 1.1, VIEWPORT)
    assert camera.scale == pytest.approx(4.0)


def test_zoom_rejects_non_positive_factor():
    camera = Camera()
    with pytest.raises(ValueError):
        camera.zoom_at_screen_point(Vector2(0, 0), 0, VIEWPORT)
    with pytest.raises(ValueError):
        camera.zoom_at_screen_point(Vector2(0, 0), -1.5, VIEWPORT)
    assert camera.scale == 1.0


def test_pan_zero_delta_is_noop():
    camera = Camera(position=Vector2(12, -7))
    camera.pan_by_screen_delta(Vector2(0, 0))
    assert camera.position == Vector2(12, -7)


def test_pan_moves_focus_opposite_to_drag_and_divides_by_scale():
    camera = Camera(scale=2.0)
    camera.pan_by_screen_delta(Vector2(100, -40))
    assert camera.position.as_tuple() == pytest.approx((-50, 20))


def test_construction_does_not_clamp_but_mutation_does():
    camera = Camera(scale=10.0)
    assert camera.scale == 10.0
    camera.set_scale(10.0)
    assert camera.scale == 4.0


def test_reset_and_copy_are_independent():
    camera = Camera(position=Vector2(5, 5), scale=2.0)
    snapshot = camera.copy()
    camera.reset()

    assert camera.position == Vector2(0, 0)
    assert camera.scale == 1.0
    assert snapshot.position == Vector2(5, 5)
    assert snapshot.scale == 2.0


class TestCanvasConfig:
    def test_defaults(self):
        config = CanvasConfig()
        assert (config.min_scale, config.max_scale) == (0.25, 4.0)
        assert config.grid_spacing_world == 100.0
        assert (config.zoom_in_factor, config.zoom_out_factor) == (1.1, 0.9)

    @pytest.mark.parametrize("kwargs", [
        {"min_scale": 0},
        {"min_scale": 5, "max_scale": 4},
        {"grid_spacing_world": -1},
        {"zoom_out_factor": 0},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            CanvasConfig(**kwargs)
