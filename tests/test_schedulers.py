from collections import Counter

import pytest

from schedviz.algorithms import (
    ALGORITHMS,
    ReadyQueue,
    run_simulation,
    schedule_fcfs,
    schedule_priority_np,
    schedule_priority_p,
    schedule_rr,
    schedule_sjf,
    schedule_srtf,
    _working_copies,
)
from schedviz.metrics import format_metrics
from schedviz.models import IDLE, ProcessSpec


def _procs():
    return [
        ProcessSpec("P1", arrival=0, burst=5, priority=2),
        ProcessSpec("P2", arrival=1, burst=3, priority=1),
        ProcessSpec("P3", arrival=2, burst=8, priority=3),
    ]


def _mixed():
    return [
        ProcessSpec("A", arrival=3, burst=4, priority=2),
        ProcessSpec("B", arrival=0, burst=2, priority=3),
        ProcessSpec("C", arrival=4, burst=1, priority=1),
        ProcessSpec("D", arrival=12, burst=3, priority=1),
        ProcessSpec("E", arrival=5, burst=6, priority=2),
    ]


def _spans(result):
    return [(b.label, b.start, b.end) for b in result.blocks()]


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [p.name for p in res.processes] == ["P1", "P2", "P3"]
    assert [p.waiting for p in res.processes] == [0, 4, 6]


def test_fcfs_two_process_scenario():
    res = schedule_fcfs([ProcessSpec("P1", 0, 5), ProcessSpec("P2", 1, 3)])
    p1, p2 = res.processes
    assert (p1.start, p1.completion) == (0, 5)
    assert (p2.start, p2.completion) == (5, 8)
    assert format_metrics(res.metrics)["avg_waiting"] == "2.00"


def test_fcfs_equal_arrivals_keep_input_order():
    res = schedule_fcfs([ProcessSpec("Z", 0, 2), ProcessSpec("A", 0, 1), ProcessSpec("M", 0, 3)])
    assert [p.name for p in res.processes] == ["Z", "A", "M"]


def test_sjf_picks_shortest_available_job():
    res = schedule_sjf([ProcessSpec("P1", 0, 7), ProcessSpec("P2", 2, 4), ProcessSpec("P3", 4, 1)])
    assert [(p.name, p.start, p.completion) for p in res.processes] == [
        ("P1", 0, 7),
        ("P3", 7, 8),
        ("P2", 8, 12),
    ]


def test_sjf_tie_breaks_by_arrival_then_input_order():
    res = schedule_sjf([ProcessSpec("X", 0, 1), ProcessSpec("Y", 1, 3), ProcessSpec("Z", 1, 3)])
    assert [p.name for p in res.processes] == ["X", "Y", "Z"]

    res = schedule_sjf([ProcessSpec("Y", 2, 3), ProcessSpec("Z", 1, 3), ProcessSpec("X", 0, 3)])
    assert [p.name for p in res.processes] == ["X", "Z", "Y"]


def test_sjf_jumps_to_next_arrival_and_records_idle():
    res = schedule_sjf([ProcessSpec("A", 0, 2), ProcessSpec("B", 5, 1)])
    assert res.timeline == ["A", "A", IDLE, IDLE, IDLE, "B"]
    assert res.processes[1].start == 5
    assert res.metrics.cpu_utilization == pytest.approx(50.0)


def test_priority_np_order():
    res = schedule_priority_np(_procs())
    # P1 runs alone at t=0; by t=5 P2 (priority 1) beats P3.
    assert [p.name for p in res.processes] == ["P1", "P2", "P3"]

    res = schedule_priority_np(
        [ProcessSpec("L", 0, 1, priority=5), ProcessSpec("H", 0, 1, priority=1), ProcessSpec("M", 0, 1, priority=3)]
    )
    assert [p.name for p in res.processes] == ["H", "M", "L"]


def test_srtf_preempts_longer_job():
    res = schedule_srtf([ProcessSpec("P1", 0, 8), ProcessSpec("P2", 1, 4)])
    assert _spans(res) == [("P1", 0, 1), ("P2", 1, 5), ("P1", 5, 12)]

    by_name = {p.name: p for p in res.processes}
    assert by_name["P1"].waiting == 4
    assert by_name["P2"].waiting == 0
    assert by_name["P1"].response == 0
    # Results come out in completion order.
    assert [p.name for p in res.processes] == ["P2", "P1"]


def test_priority_p_preempts_on_higher_priority_arrival():
    res = schedule_priority_p(_procs())
    assert _spans(res) == [("P1", 0, 1), ("P2", 1, 4), ("P1", 4, 8), ("P3", 8, 16)]
    by_name = {p.name: p for p in res.processes}
    assert by_name["P1"].completion == 8
    assert by_name["P1"].waiting == 3
    assert by_name["P3"].response == 6


def test_preemptive_idle_before_first_arrival():
    res = schedule_srtf([ProcessSpec("A", 2, 3)])
    assert res.timeline == [IDLE, IDLE, "A", "A", "A"]
    assert res.processes[0].start == 2
    assert format_metrics(res.metrics)["cpu_utilization"] == "60.00%"


def test_rr_quantum_2():
    res = schedule_rr([ProcessSpec("P1", 0, 5), ProcessSpec("P2", 1, 3)], quantum=2)
    assert _spans(res) == [("P1", 0, 2), ("P2", 2, 4), ("P1", 4, 6), ("P2", 6, 7), ("P1", 7, 8)]
    by_name = {p.name: p for p in res.processes}
    assert by_name["P1"].completion == 8
    assert by_name["P2"].completion == 7
    assert by_name["P2"].response == 1


def test_rr_arrival_at_quantum_expiry_goes_first():
    res = schedule_rr([ProcessSpec("A", 0, 4), ProcessSpec("B", 2, 2)], quantum=2)
    assert res.timeline == ["A", "A", "B", "B", "A", "A"]


def test_rr_idles_until_arrival():
    res = schedule_rr([ProcessSpec("A", 2, 3)], quantum=2)
    assert res.timeline == [IDLE, IDLE, "A", "A", "A"]
    assert res.processes[0].completion == 5


def test_rr_large_quantum_behaves_like_fcfs():
    rr = schedule_rr(_procs(), quantum=100)
    fcfs = schedule_fcfs(_procs())
    assert rr.timeline == fcfs.timeline


def test_ready_queue_tracks_membership_by_index():
    a, b = _working_copies([ProcessSpec("A", 0, 1), ProcessSpec("B", 0, 1)])
    queue = ReadyQueue()
    queue.push(a)
    queue.push(a)
    queue.push(b)
    assert len(queue) == 2
    assert queue.names() == ["A", "B"]
    assert queue.pop() is a
    assert a not in queue
    assert b in queue


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_every_algorithm_honours_burst_and_metric_invariants(algorithm):
    procs = _mixed()
    res = run_simulation(algorithm, procs, quantum=2)

    assert sorted(p.name for p in res.processes) == sorted(p.name for p in procs)

    executed = Counter(label for label in res.timeline if label != IDLE)
    for spec in procs:
        assert executed[spec.name] == spec.burst

    for p in res.processes:
        assert p.completion >= p.start >= p.arrival
        assert p.turnaround == p.completion - p.arrival
        assert p.waiting == p.turnaround - p.burst
        assert p.waiting >= 0
        assert p.response == p.start - p.arrival
        assert res.timeline[p.start] == p.name
        assert res.timeline[p.completion - 1] == p.name
        if not res.preemptive:
            assert p.response == p.waiting

    assert len(res.timeline) == res.metrics.makespan
    completions = [p.completion for p in res.processes]
    assert completions == sorted(completions)


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_full_load_utilization_is_100_percent(algorithm):
    res = run_simulation(algorithm, _procs(), quantum=3)
    assert IDLE not in res.timeline
    assert format_metrics(res.metrics)["cpu_utilization"] == "100.00%"


@pytest.mark.parametrize("algorithm", list(ALGORITHMS))
def test_repeat_runs_are_identical_and_do_not_touch_input(algorithm):
    procs = _mixed()
    snapshot = list(procs)

    first = run_simulation(algorithm, procs, quantum=2)
    second = run_simulation(algorithm, procs, quantum=2)

    assert first == second
    assert procs == snapshot


def test_rr_admits_same_slice_arrivals_in_arrival_order():
    res = schedule_rr([ProcessSpec("X", 0, 4), ProcessSpec("A", 2, 1), ProcessSpec("B", 1, 1)], quantum=4)
    assert res.timeline == ["X", "X", "X", "X", "B", "A"]
    assert [p.name for p in res.processes] == ["X", "B", "A"]


def test_finalize_requires_a_dispatched_process():
    (proc,) = _working_copies([ProcessSpec("A", 0, 1)])
    with pytest.raises(RuntimeError, match="without being dispatched"):
        proc.finalize(1)
