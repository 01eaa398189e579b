"""Plain-text bar chart for terminal output.

Renders a numeric series as block-character columns with a labelled
left axis.  Output is a list of lines so callers can style or capture it.
"""

from __future__ import annotations

import math

BAR_CHAR = "█"
EMPTY_CHAR = " "


def _compress(values: list[int], width: int) -> list[int]:
    """Merge adjacent values so the series fits in *width* columns.

    Each column shows the mean of its group, rounded up.
    """
    if len(values) <= width:
        return list(values)
    size = math.ceil(len(values) / width)
    groups = [values[i : i + size] for i in range(0, len(values), size)]
    return [math.ceil(sum(g) / len(g)) for g in groups]


def _bar_height(value: int, top: int, height: int) -> int:
    if value <= 0 or top <= 0:
        return 0
    return max(1, round(value / top * height))


def render_chart(
    values: list[int],
    *,
    height: int = 15,
    width: int = 70,
    title: str = "",
    x_label: str = "",
    y_label: str = "",
) -> list[str]:
    """Render *values* as a vertical bar chart.

    Args:
        values: Non-negative counts, one per column.
        height: Number of bar rows.
        width: Maximum number of columns; longer series are compressed.
        title: Line printed above the chart.
        x_label: Label printed under the bottom axis, right-aligned.
        y_label: Label printed above the left axis.

    Returns:
        List of text lines, top to bottom.
    """
    columns = _compress(values, width)
    top = max(columns, default=0)
    tick_width = len(str(top))
    lines = [title] if title else []
    if y_label:
        lines.append(f"{'':>{tick_width}} {y_label}")

    if not columns:
        lines.append(f"{'0':>{tick_width}} └" + "─" * width)
        lines.append(f"{'':>{tick_width}}   (no data)")
        if x_label:
            lines.append(f"{x_label:>{tick_width + 2 + width}}")
        return lines

    heights = [_bar_height(v, top, height) for v in columns]
    middle = (height + 1) // 2
    for row in range(height, 0, -1):
        if row == height:
            tick = str(top)
        elif row == middle:
            tick = str(round(top * row / height))
        else:
            tick = ""
        bars = "".join(BAR_CHAR if h >= row else EMPTY_CHAR for h in heights)
        lines.append(f"{tick:>{tick_width}} │{bars}")

    lines.append(f"{'0':>{tick_width}} └" + "─" * len(columns))
    if x_label:
        lines.append(f"{x_label:>{tick_width + 2 + len(columns)}}")
    return lines
