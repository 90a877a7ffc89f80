"""Row budget: how much of the terminal height the image may use."""

from __future__ import annotations

import math

# One blank row is kept between the bubble and the image.
SEPARATOR_ROWS = 1


def image_rows(total_rows: int, bubble_lines: int, max_height_ratio: float) -> int:
    """Rows available to the image, capped by *max_height_ratio* and never below 1."""
    remaining = max(0, total_rows - bubble_lines - SEPARATOR_ROWS)
    capped = math.floor(total_rows * max_height_ratio)
    return max(1, min(capped, remaining))
