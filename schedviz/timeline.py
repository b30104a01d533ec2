from __future__ import annotations

from typing import Iterable, List

from .models import TimelineBlock


def collapse_timeline(entries: Iterable[str]) -> List[TimelineBlock]:
    """
    Merge consecutive identical per-unit entries into [start, end) blocks.

    ["P1", "P1", "Idle", "P2"] -> P1[0, 2), Idle[2, 3), P2[3, 4)
    """
    blocks: List[TimelineBlock] = []
    current = None
    start = 0
    t = 0

    for t, label in enumerate(entries):
        if label != current:
            if current is not None:
                blocks.append(TimelineBlock(label=current, start=start, end=t))
            current = label
            start = t
    if current is not None:
        blocks.append(TimelineBlock(label=current, start=start, end=t + 1))

    return blocks
