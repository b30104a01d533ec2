import pytest

from schedviz.errors import EmptyProcessSetError
from schedviz.metrics import compute_metrics, format_metrics
from schedviz.models import ProcessResult


def _result(name, arrival, burst, start, completion):
    turnaround = completion - arrival
    return ProcessResult(
        name=name,
        arrival=arrival,
        burst=burst,
        priority=0,
        start=start,
        completion=completion,
        turnaround=turnaround,
        waiting=turnaround - burst,
        response=start - arrival,
    )


def test_averages_and_utilization():
    metrics = compute_metrics([_result("P1", 0, 5, 0, 5), _result("P2", 1, 3, 5, 8)])
    assert metrics.avg_waiting == pytest.approx(2.0)
    assert metrics.avg_turnaround == pytest.approx(6.0)
    assert metrics.avg_response == pytest.approx(2.0)
    assert metrics.cpu_utilization == pytest.approx(100.0)
    assert metrics.makespan == 8
    assert metrics.busy_time == 8
    assert metrics.throughput == pytest.approx(0.25)


def test_idle_time_lowers_utilization():
    metrics = compute_metrics([_result("A", 1, 2, 1, 3)])
    assert metrics.cpu_utilization == pytest.approx(200 / 3)
    assert format_metrics(metrics)["cpu_utilization"] == "66.67%"


def test_format_uses_two_decimals():
    metrics = compute_metrics([_result("P1", 0, 1, 0, 1), _result("P2", 0, 1, 1, 2), _result("P3", 0, 1, 2, 3)])
    shown = format_metrics(metrics)
    assert shown["avg_waiting"] == "1.00"
    assert shown["avg_turnaround"] == "2.00"
    assert shown["avg_response"] == "1.00"
    assert shown["cpu_utilization"] == "100.00%"


def test_empty_results_are_rejected():
    with pytest.raises(EmptyProcessSetError):
        compute_metrics([])
