"""Fixed-width text table for slot listings.

This module renders slot summaries as a boxed plain-text table.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import ANONYMOUS_LABEL_PLACEHOLDER, TABLE_HEADERS
from core.types import SlotSummary


def render_slot_table(summaries: Sequence[SlotSummary]) -> str:
    """Render one table row per slot.

    Args:
        summaries: Slot listing rows in store order.

    Returns:
        Table text ending with a newline.
    """
    rows = [
        (
            str(summary.index),
            summary.label if summary.label is not None else ANONYMOUS_LABEL_PLACEHOLDER,
            str(summary.count),
        )
        for summary in summaries
    ]
    widths = [
        max([len(header)] + [len(row[column]) for row in rows])
        for column, header in enumerate(TABLE_HEADERS)
    ]
    lines = [
        _rule(".", "+", ".", widths),
        _row(TABLE_HEADERS, widths),
        _rule("+", "+", "+", widths),
    ]
    lines.extend(_row(row, widths) for row in rows)
    lines.append(_rule("'", "+", "'", widths))
    return "\n".join(lines) + "\n"


def _rule(left: str, middle: str, right: str, widths: Sequence[int]) -> str:
    return left + middle.join("-" * (width + 2) for width in widths) + right


def _row(cells: Sequence[str], widths: Sequence[int]) -> str:
    padded = (f" {cell.ljust(width)} " for cell, width in zip(cells, widths))
    return "|" + "|".join(padded) + "|"
