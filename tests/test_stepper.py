import pytest

from algorithms.errors import InvalidInputError, PlaybackError
from engine import SPEED_PRESETS, StepCollector, Stepper, StepperState, plan


@pytest.fixture
def sequence():
    # bubble sort on [2, 1]: compare, swap, mark-sorted, mark-sorted
    return plan("bubble_sort", {"values": [2, 1]})


def test_starts_idle_and_refuses_to_advance():
    stepper = Stepper()
    assert stepper.state is StepperState.IDLE
    with pytest.raises(PlaybackError):
        stepper.advance()


def test_full_lifecycle(sequence):
    stepper = Stepper()
    stepper.load(sequence)
    assert stepper.state is StepperState.READY

    first = stepper.advance()
    assert first.step_number == 0
    assert stepper.state is StepperState.PLAYING

    while stepper.advance() is not None:
        pass
    assert stepper.state is StepperState.COMPLETED
    assert stepper.current_step.is_final
    assert stepper.advance() is None


def test_loading_while_playing_is_refused(sequence):
    stepper = Stepper()
    stepper.load(sequence)
    stepper.advance()

    with pytest.raises(PlaybackError):
        stepper.load(sequence)
    with pytest.raises(PlaybackError):
        stepper.plan("bubble_sort", {"values": [3, 1]})


def test_loading_after_completion_is_allowed(sequence):
    stepper = Stepper()
    stepper.load(sequence)
    stepper.jump_to_end()
    assert stepper.is_finished

    stepper.plan("quick_sort", {"values": [3, 1, 2]})
    assert stepper.state is StepperState.READY
    assert stepper.sequence.algorithm == "quick_sort"


def test_invalid_plan_falls_back_to_idle():
    stepper = Stepper()
    with pytest.raises(InvalidInputError):
        stepper.plan("bubble_sort", {"values": "1, two"})
    assert stepper.state is StepperState.IDLE
    assert stepper.sequence is None


def test_plan_can_enforce_limits():
    stepper = Stepper()
    with pytest.raises(InvalidInputError):
        stepper.plan("merge_sort", {"values": list(range(9))}, enforce_limits=True)


def test_reset_is_idempotent(sequence):
    stepper = Stepper()
    stepper.reset()
    assert stepper.state is StepperState.IDLE

    stepper.load(sequence)
    stepper.advance()
    stepper.reset()
    stepper.reset()
    assert stepper.state is StepperState.IDLE
    assert stepper.steps == [] and stepper.current_idx == -1


def test_prev_goto_and_rewind(sequence):
    stepper = Stepper()
    stepper.load(sequence)
    assert not stepper.prev_step()

    assert stepper.goto_step(2)
    assert stepper.current_step.step_number == 2
    assert stepper.prev_step()
    assert stepper.current_idx == 1

    stepper.rewind()
    assert stepper.current_idx == 0
    assert not stepper.goto_step(99)


def test_replay_restarts_the_same_sequence(sequence):
    stepper = Stepper()
    with pytest.raises(PlaybackError):
        stepper.replay()

    stepper.load(sequence)
    stepper.jump_to_end()
    total = stepper.total_steps_fetched
    stepper.replay()

    assert stepper.state is StepperState.READY
    assert stepper.total_steps_fetched == 0
    stepper.jump_to_end()
    assert stepper.total_steps_fetched == total


def test_observers_see_every_displayed_step(sequence):
    seen = StepCollector()
    stepper = Stepper()
    unsubscribe = stepper.subscribe(seen)

    stepper.load(sequence)
    stepper.advance()
    stepper.advance()
    stepper.prev_step()
    assert [s.step_number for s in seen.steps] == [0, 1, 0]

    unsubscribe()
    unsubscribe()
    stepper.advance()
    assert len(seen.steps) == 3


def test_speed_presets():
    stepper = Stepper()
    stepper.set_speed("fast")
    assert stepper.speed == SPEED_PRESETS["fast"]
    stepper.set_speed("warp")
    assert stepper.speed == SPEED_PRESETS["medium"]
    stepper.set_speed_value(0)
    assert stepper.speed == 0.02
