import pytest

from canvas_core import RenderLoop, Vector2


class FakeClock:
    def __init__(self):
        self.ticks = []

    def tick(self, fps):
        self.ticks.append(fps)


def test_draws_once_then_idles(engine, surface):
    presented = []
    loop = RenderLoop(engine, present=lambda: presented.append(True), fps=30, clock=FakeClock())

    loop.run(max_frames=5)

    assert loop.frame_count == 5
    assert loop.drawn_count == 1
    assert len(presented) == 1
    assert loop.clock.ticks == [30] * 5
    assert loop.running


def test_redraws_after_state_change(engine):
    loop = RenderLoop(engine, clock=FakeClock())
    loop.step()
    assert loop.step() is False

    engine.pan_by_screen_delta(Vector2(3, 4))
    assert loop.step() is True


def test_cancel_stops_loop_and_runs_callbacks_once(engine):
    calls = []
    loop = RenderLoop(engine, clock=FakeClock())
    loop.on_cancel(lambda: calls.append("a"))
    loop.on_cancel(lambda: calls.append("b"))

    loop.cancel()
    loop.cancel()

    assert calls == ["b", "a"]
    assert not loop.running
    assert loop.step() is False


def test_before_frame_can_cancel_unbounded_run(engine):
    clock = FakeClock()
    loop = RenderLoop(engine, clock=clock)

    def before_frame():
        if loop.frame_count == 3:
            loop.cancel()

    loop.before_frame = before_frame
    loop.run()

    assert loop.frame_count == 3
    assert not loop.running


def test_context_manager_cancels_on_exit(engine):
    calls = []
    with RenderLoop(engine, clock=FakeClock()) as loop:
        loop.on_cancel(lambda: calls.append("done"))
        loop.step()
    assert calls == ["done"]
    assert not loop.running


def test_on_cancel_after_cancel_runs_immediately(engine):
    loop = RenderLoop(engine, clock=FakeClock())
    loop.cancel()
    calls = []
    loop.on_cancel(lambda: calls.append(1))
    assert calls == [1]


def test_failing_callback_does_not_skip_the_rest(engine):
    calls = []

    def boom():
        raise RuntimeError("boom")

    loop = RenderLoop(engine, clock=FakeClock())
    loop.on_cancel(lambda: calls.append("unsubscribe"))
    loop.on_cancel(boom)

    with pytest.raises(RuntimeError, match="boom"):
        loop.cancel()
    loop.cancel()

    assert calls == ["unsubscribe"]
    assert not loop.running
