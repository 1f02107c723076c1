import pytest

from canvas_core import Vector2, ViewportSize, clamp, round_down_to_multiple
from canvas_core.transform import screen_to_world, world_to_screen


class TestVector2:
    def test_operations_return_new_instances(self):
        a = Vector2(1, 2)
        b = Vector2(3, 5)

        assert a.add(b) == Vector2(4, 7)
        assert b.sub(a) == Vector2(2, 3)
        assert a.scale(2.5) == Vector2(2.5, 5)
        # operands untouched
        assert a == Vector2(1, 2)
        assert b == Vector2(3, 5)

    def test_operators_match_methods(self):
        a = Vector2(1, 2)
        b = Vector2(3, 5)
        assert a + b == a.add(b)
        assert b - a == b.sub(a)
        assert a * 2 == 2 * a == Vector2(2, 4)
        assert -a == Vector2(-1, -2)

    def test_set_mutates_in_place(self):
        v = Vector2()
        assert v.set(4, -1) is v
        assert v.as_tuple() == (4, -1)


class TestHelpers:
    def test_round_down_positive(self):
        assert round_down_to_multiple(540, 100) == 500

    def test_round_down_negative_uses_floor(self):
        assert round_down_to_multiple(-40, 100) == -100
        assert round_down_to_multiple(-100, 100) == -100

    def test_round_down_rejects_bad_step(self):
        with pytest.raises(ValueError):
            round_down_to_multiple(10, 0)

    def test_clamp(self):
        assert clamp(5, 0, 4) == 4
        assert clamp(-1, 0, 4) == 0
        assert clamp(2, 0, 4) == 2


class TestTransform:
    def test_camera_position_maps_to_viewport_center(self):
        viewport = ViewportSize(800, 600)
        screen = world_to_screen(Vector2(50, -20), viewport, Vector2(50, -20), 3.0)
        assert screen.as_tuple() == pytest.approx((400, 300))

    def test_world_to_screen_scales_offsets(self):
        viewport = ViewportSize(800, 600)
        screen = world_to_screen(Vector2(10, 10), viewport, Vector2(0, 0), 2.0)
        assert screen.as_tuple() == pytest.approx((420, 320))

    @pytest.mark.parametrize("point, camera_pos, scale", [
        (Vector2(0, 0), Vector2(0, 0), 1.0),
        (Vector2(-1234.5, 987.25), Vector2(300, -40), 0.25),
        (Vector2(17.3, -0.004), Vector2(-5000, 5000), 4.0),
        (Vector2(1e6, -1e6), Vector2(2.5, 2.5), 1.7),
    ])
    def test_round_trip(self, point, camera_pos, scale):
        viewport = ViewportSize(1024, 768)
        screen = world_to_screen(point, viewport, camera_pos, scale)
        back = screen_to_world(screen, viewport, camera_pos, scale)
        assert back.as_tuple() == pytest.approx(point.as_tuple())
