from __future__ import annotations

from typing import Dict, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineBlock

# Fixed colors for the usual P1..P8 names; anything else cycles through FALLBACK_COLORS.
PROCESS_COLORS = {
    "P1": "red",
    "P2": "deep_sky_blue1",
    "P3": "green1",
    "P4": "yellow1",
    "P5": "dark_orange",
    "P6": "purple",
    "P7": "magenta",
    "P8": "cyan",
}
FALLBACK_COLORS = ["bright_red", "bright_green", "bright_yellow", "bright_blue", "bright_magenta", "bright_cyan"]
IDLE_STYLE = "on grey23"


class ColorMap:
    """
    Stable label -> color assignment for one rendering.
    """

    def __init__(self) -> None:
        self._assigned: Dict[str, str] = {}

    def __call__(self, label: str) -> str:
        if label in PROCESS_COLORS:
            return PROCESS_COLORS[label]
        if label not in self._assigned:
            idx = len(self._assigned) % len(FALLBACK_COLORS)
            self._assigned[label] = FALLBACK_COLORS[idx]
        return self._assigned[label]


def render_gantt(blocks: Sequence[TimelineBlock]) -> str:
    """
    Plain-text Gantt chart; idle units are drawn as dots.
    """
    if not blocks:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"

    for block in blocks:
        width = max(1, block.length)
        line += ("." if block.is_idle else "=") * width
        labels += ("" if block.is_idle else block.label[:width]).ljust(width)
        time_marks += f"{block.end:>{width}}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(blocks: Sequence[TimelineBlock], unit_width: int = 3) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    Each time unit is ``unit_width`` characters wide so labels and marks line up.
    """
    if not blocks:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    color_for = ColorMap()

    timeline = Text()
    labels = Text()
    time_marks = ""

    for block in blocks:
        width = max(1, block.length) * unit_width

        if block.is_idle:
            timeline.append(" " * width, style=IDLE_STYLE)
            labels.append("idle"[:width].center(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {color_for(block.label)}")
            labels.append(block.label[:width].center(width), style="bold")

        time_marks += f"{block.start:<{width}}"

    time_marks += str(blocks[-1].end)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
