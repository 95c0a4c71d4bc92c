"""Display formatting helpers shared by the view-models.

Kept free of any UI toolkit so views of any kind can reuse the exact same
texts.
"""

from __future__ import annotations

from datetime import date

_KB = 1024
_MB = 1024**2
_GB = 1024**3


def format_file_size(num_bytes: int) -> str:
    """Format a byte count as B/KB/MB/GB with two decimals above bytes."""
    if num_bytes < _KB:
        return f"{num_bytes} B"
    if num_bytes < _MB:
        return f"{num_bytes / _KB:.2f} KB"
    if num_bytes < _GB:
        return f"{num_bytes / _MB:.2f} MB"
    return f"{num_bytes / _GB:.2f} GB"


def format_month_title(day: date) -> str:
    """e.g. "June 2024"."""
    return f"{day:%B %Y}"


def format_day_tooltip(day: date, count: int) -> str:
    """Tooltip for a calendar cell; empty when the day has no media."""
    if count <= 0:
        return ""
    return f"{day:%b} {day.day}, {day.year} - {count} files"
