"""Tests for PlaybackController navigation, population and auto-advance."""

import time

from algotrace.playback import (
    PlaybackController,
    PlaybackMode,
    StepSource,
    ThreadingScheduler,
)
from algotrace.step_metadata import ElementMeta
from algotrace.step_types import OperationStep, StructureKind


def _make_steps(count):
    return [
        OperationStep(
            type="push",
            target=StructureKind.STACK,
            args=(i,),
            result=list(range(i + 1)),
            timestamp=float(i),
            metadata=ElementMeta(index=i, value=i),
        )
        for i in range(count)
    ]


def _user_code_controller(count, **kwargs):
    controller = PlaybackController(**kwargs)
    controller.set_code_runnable(True)
    controller.set_steps(StepSource.USER_CODE, _make_steps(count))
    controller.set_mode(PlaybackMode.USER_CODE)
    return controller


class TestNavigation:
    def test_starts_in_skeleton_mode(self):
        controller = PlaybackController()

        assert controller.mode == PlaybackMode.SKELETON
        assert controller.cursor == 0
        assert controller.current_step is None

    def test_next_clamps_at_end(self):
        controller = _user_code_controller(3)

        for _ in range(10):
            controller.next()

        assert controller.cursor == 2
        assert controller.current_step.args == (2,)

    def test_previous_clamps_at_zero(self):
        controller = _user_code_controller(3)

        controller.previous()

        assert controller.cursor == 0

    def test_empty_array_navigation_is_harmless(self):
        controller = PlaybackController()

        controller.next()
        controller.previous()

        assert controller.cursor == 0

    def test_jump_to_clamps(self):
        controller = _user_code_controller(4)

        controller.jump_to(99)
        assert controller.cursor == 3
        controller.jump_to(-5)
        assert controller.cursor == 0

    def test_set_steps_resets_cursor(self):
        controller = _user_code_controller(4)
        controller.jump_to(3)

        controller.set_steps(StepSource.REFERENCE, _make_steps(2))

        assert controller.cursor == 0

    def test_set_mode_resets_cursor(self):
        controller = _user_code_controller(4)
        controller.set_steps(StepSource.REFERENCE, _make_steps(4))
        controller.next()

        controller.set_mode(PlaybackMode.REFERENCE)

        assert controller.cursor == 0

    def test_comparison_clamps_to_shorter_array(self):
        controller = _user_code_controller(5)
        controller.set_steps(StepSource.EXPECTED_OUTPUT, _make_steps(3))
        controller.set_mode(PlaybackMode.COMPARISON)

        for _ in range(10):
            controller.next()

        assert controller.cursor == 2
        left, right = controller.comparison_steps
        assert (len(left), len(right)) == (5, 3)


class TestPopulation:
    def test_reference_mode_requests_population_once(self):
        requests = []
        controller = PlaybackController(on_needs_population=requests.append)

        controller.set_mode(PlaybackMode.REFERENCE)
        controller.set_mode(PlaybackMode.REFERENCE)

        assert requests == [StepSource.REFERENCE]
        assert controller.is_population_pending(StepSource.REFERENCE)

    def test_populated_mode_is_not_requested_again(self):
        requests = []
        controller = PlaybackController(on_needs_population=requests.append)
        controller.set_mode(PlaybackMode.EXPECTED_OUTPUT)
        controller.set_steps(StepSource.EXPECTED_OUTPUT, _make_steps(2))

        controller.set_mode(PlaybackMode.SKELETON)
        controller.set_mode(PlaybackMode.EXPECTED_OUTPUT)

        assert requests == [StepSource.EXPECTED_OUTPUT]
        assert not controller.is_population_pending(StepSource.EXPECTED_OUTPUT)

    def test_comparison_requests_expected_side(self):
        requests = []
        controller = _user_code_controller(2, on_needs_population=requests.append)

        controller.set_mode(PlaybackMode.COMPARISON)

        assert requests == [StepSource.EXPECTED_OUTPUT]

    def test_user_code_is_never_requested(self):
        requests = []
        controller = PlaybackController(on_needs_population=requests.append)

        controller.set_mode(PlaybackMode.USER_CODE)

        assert requests == []

    def test_cancelled_population_can_be_retried(self):
        requests = []
        controller = PlaybackController(on_needs_population=requests.append)
        controller.set_mode(PlaybackMode.REFERENCE)

        controller.cancel_population(StepSource.REFERENCE)
        controller.set_mode(PlaybackMode.REFERENCE)

        assert requests == [StepSource.REFERENCE, StepSource.REFERENCE]

    def test_synchronous_population(self):
        controller = PlaybackController()
        controller.on_needs_population = lambda source: controller.set_steps(
            source, _make_steps(3)
        )

        controller.set_mode(PlaybackMode.REFERENCE)

        assert len(controller.active_steps) == 3
        assert controller.cursor == 0


class TestFallback:
    def test_user_code_without_steps_falls_back(self):
        controller = PlaybackController()
        controller.set_code_runnable(True)

        controller.set_mode(PlaybackMode.USER_CODE)

        assert controller.mode == PlaybackMode.SKELETON

    def test_user_code_not_runnable_falls_back(self):
        controller = PlaybackController()
        controller.set_steps(StepSource.USER_CODE, _make_steps(2))

        controller.set_mode(PlaybackMode.USER_CODE)

        assert controller.mode == PlaybackMode.SKELETON

    def test_code_becoming_unrunnable_forces_skeleton(self):
        controller = _user_code_controller(3)
        assert controller.mode == PlaybackMode.USER_CODE

        controller.set_code_runnable(False)

        assert controller.mode == PlaybackMode.SKELETON

    def test_reset_clears_everything(self):
        controller = _user_code_controller(3)
        controller.set_mode(PlaybackMode.REFERENCE)

        controller.reset()

        assert controller.mode == PlaybackMode.SKELETON
        assert controller.steps(StepSource.USER_CODE) == []
        assert not controller.is_population_pending(StepSource.REFERENCE)


class TestAutoAdvance:
    def test_ticks_until_end_then_pauses(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)

        controller.play()
        assert scheduler.live[0].delay == 0.8

        while scheduler.fire():
            pass

        assert controller.cursor == 2
        assert controller.is_playing is False
        assert scheduler.live == []

    def test_pause_cancels_timer(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)
        controller.play()

        controller.pause()

        assert scheduler.live == []
        assert controller.cursor == 0

    def test_mode_change_cancels_timer(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)
        controller.set_steps(StepSource.REFERENCE, _make_steps(3))
        controller.set_mode(PlaybackMode.USER_CODE)
        controller.play()

        controller.set_mode(PlaybackMode.REFERENCE)

        assert controller.is_playing is False
        assert scheduler.live == []

    def test_emptied_array_cancels_timer(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)
        controller.play()

        controller.set_steps(StepSource.USER_CODE, [])

        assert controller.is_playing is False
        assert scheduler.live == []
        assert controller.mode == PlaybackMode.SKELETON

    def test_play_at_end_restarts(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)
        controller.jump_to(2)

        controller.play()

        assert controller.cursor == 0
        assert controller.is_playing is True

    def test_play_on_empty_does_nothing(self, scheduler):
        controller = PlaybackController(scheduler=scheduler)

        controller.play()

        assert controller.is_playing is False
        assert scheduler.handles == []

    def test_stale_tick_is_ignored(self, scheduler):
        controller = _user_code_controller(3, scheduler=scheduler)
        controller.play()
        handle = scheduler.live[0]
        controller.pause()

        handle.callback()

        assert controller.cursor == 0


class TestDefaultScheduler:
    def test_play_advances_on_timer_threads(self):
        controller = PlaybackController(tick_ms=10)
        controller.set_steps(StepSource.REFERENCE, _make_steps(3))
        controller.set_mode(PlaybackMode.REFERENCE)

        controller.play()
        deadline = time.monotonic() + 5
        while controller.is_playing and time.monotonic() < deadline:
            time.sleep(0.01)

        assert controller.is_playing is False
        assert controller.cursor == 2

    def test_pause_stops_the_timer_thread(self):
        controller = PlaybackController(tick_ms=50)
        controller.set_steps(StepSource.REFERENCE, _make_steps(3))
        controller.set_mode(PlaybackMode.REFERENCE)

        controller.play()
        controller.pause()
        time.sleep(0.2)

        assert controller.cursor == 0

    def test_threading_scheduler_returns_cancellable_timer(self):
        fired = []
        timer = ThreadingScheduler().call_later(10, lambda: fired.append(True))

        timer.cancel()

        assert timer.daemon is True
        assert fired == []
