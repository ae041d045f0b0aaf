import pytest

from algorithms.errors import InvalidInputError, PlaybackError
from engine import Recorder, compare


def recorded(algorithm, payload):
    rec = Recorder()
    rec.start(algorithm, payload)
    rec.run_to_completion()
    return rec


def test_metrics_for_bubble_sort():
    metrics = recorded("bubble_sort", {"values": [3, 2, 1]}).get_metrics()

    assert metrics.comparisons == 3
    assert metrics.swaps == 3
    assert metrics.sorted is True
    assert metrics.found is False
    assert metrics.input_size == 3
    assert metrics.total_steps == 9


def test_found_flag_for_search():
    assert recorded("binary_search", {"values": [1, 2, 3], "key": 3}).metrics.found
    missing = recorded("binary_search", {"values": [1, 2, 3], "key": 9}).metrics
    assert not missing.found
    assert missing.rejects == 1
    assert not missing.sorted


def test_export_is_serialisable():
    rec = recorded("brute_force", {"text": "ABC", "pattern": "BC"})
    data = rec.export()

    assert data["algorithm"] == "brute_force"
    assert data["metrics"]["found"] is True
    assert data["steps"][-1]["kind"] == "accept"
    assert data["steps"][-1]["is_final"] is True
    assert data["pseudocode"]


def test_compare_picks_fewer_comparisons():
    payload = {"values": [3, 2, 1]}
    result = compare(recorded("bubble_sort", payload), recorded("merge_sort", payload))

    assert result.left.comparisons == 3
    assert result.right.comparisons == 2
    assert result.winner_comparisons == "merge_sort"
    assert result.to_dict()["left"]["algorithm"] == "bubble_sort"


def test_compare_reports_ties():
    payload = {"values": [1, 2]}
    result = compare(recorded("bubble_sort", payload), recorded("bubble_sort", payload))
    assert result.winner_steps == "tie"


def test_run_before_start():
    with pytest.raises(PlaybackError):
        Recorder().run_to_completion()


def test_invalid_input_raises_on_start():
    with pytest.raises(InvalidInputError):
        Recorder().start("quick_sort", {"values": ""})


def test_steps_come_from_the_stepper_buffer():
    rec = recorded("binary_search", {"values": [1, 3, 5], "key": 3})

    assert rec.steps == rec.stepper.steps
    assert rec.stepper.is_finished
    assert rec.metrics.total_steps == len(rec.steps)
