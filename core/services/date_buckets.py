"""Calendar-day bucketing of media records for calendar and timeline views.

Records are assigned to the calendar day of their effective date (capture date
when known, else ingestion date) in the viewer-local time zone. Aware
timestamps are converted to that zone first; naive timestamps are taken as
local wall time. Records whose date cannot be parsed are logged and left out
of every bucket.

All functions here are pure: callers recompute grids and timelines from the
full media collection whenever the collection or the reference month changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from loguru import logger

from core.errors import UnparseableDate
from core.models import DayCell, MediaRecord, MonthGrid, TimelineGroup

DAYS_PER_WEEK = 7


def parse_timestamp(value: str | datetime | None, tz: tzinfo | None = None) -> datetime:
    """Resolve `value` to a naive datetime in the viewer-local zone.

    Args:
        value: ISO-8601 string (optionally with `Z` or an offset) or datetime.
        tz: Viewer zone for aware values; defaults to the system local zone.

    Raises:
        UnparseableDate: If `value` is empty or not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as ex:
            raise UnparseableDate(value) from ex
    else:
        raise UnparseableDate(value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed


def effective_datetime(record: MediaRecord, tz: tzinfo | None = None) -> datetime:
    """Return the capture timestamp when present, else the creation timestamp.

    A present but malformed capture timestamp does not fall back.
    """
    raw = record.captured_at if record.captured_at not in (None, "") else record.created_at
    try:
        return parse_timestamp(raw, tz)
    except UnparseableDate as ex:
        raise UnparseableDate(raw, record.id) from ex


def start_of_month(day: date) -> date:
    return date(day.year, day.month, 1)


def end_of_month(day: date) -> date:
    return next_month(day) - timedelta(days=1)


def next_month(day: date) -> date:
    """First day of the month after the one containing `day`."""
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def previous_month(day: date) -> date:
    """First day of the month before the one containing `day`."""
    if day.month == 1:
        return date(day.year - 1, 12, 1)
    return date(day.year, day.month - 1, 1)


def start_of_week(day: date, week_starts_on: int = 0) -> date:
    """First day of the week containing `day`.

    Args:
        day: Any calendar day.
        week_starts_on: 0 = Sunday, 1 = Monday, ... 6 = Saturday.
    """
    # date.weekday() counts from Monday
    sunday_based = (day.weekday() + 1) % DAYS_PER_WEEK
    offset = (sunday_based - week_starts_on) % DAYS_PER_WEEK
    return _as_date(day) - timedelta(days=offset)


def end_of_week(day: date, week_starts_on: int = 0) -> date:
    return start_of_week(day, week_starts_on) + timedelta(days=DAYS_PER_WEEK - 1)


def timeline_label(day: date, today: date) -> str:
    """Human label for a timeline day header."""
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day:%B} {day.day}, {day.year}"


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class DateBucketAggregator:
    """Groups media into day buckets for the calendar grid and the timeline."""

    def __init__(self, week_starts_on: int = 0, tz: tzinfo | None = None) -> None:
        if not 0 <= week_starts_on < DAYS_PER_WEEK:
            raise ValueError(f"week_starts_on must be within 0..6, got {week_starts_on}")
        self.week_starts_on = week_starts_on
        self._tz = tz

    def _dated(self, media: Iterable[MediaRecord]) -> list[tuple[datetime, MediaRecord]]:
        dated: list[tuple[datetime, MediaRecord]] = []
        for record in media:
            try:
                dated.append((effective_datetime(record, self._tz), record))
            except UnparseableDate as ex:
                logger.warning("Skipping media with unparseable date: {}", ex)
        return dated

    def bucket_by_day(self, media: Iterable[MediaRecord]) -> dict[date, list[MediaRecord]]:
        """Map each calendar day to its records, keeping input order per day."""
        buckets: dict[date, list[MediaRecord]] = {}
        for moment, record in self._dated(media):
            buckets.setdefault(moment.date(), []).append(record)
        return buckets

    def build_month_grid(
        self,
        media: Iterable[MediaRecord],
        reference_month: date,
        today: date | None = None,
    ) -> MonthGrid:
        """Build a padded grid of complete weeks around `reference_month`.

        Args:
            media: Flat, unordered media collection.
            reference_month: Any day inside the month to display.
            today: Current date for the `is_today` flag; defaults to today.

        Returns:
            A `MonthGrid` whose stats only count cells of the reference month.
        """
        today = _as_date(today) if today is not None else date.today()
        month_start = start_of_month(reference_month)
        month_end = end_of_month(month_start)
        grid_start = start_of_week(month_start, self.week_starts_on)
        grid_end = end_of_week(month_end, self.week_starts_on)

        buckets = self.bucket_by_day(media)
        cells: list[DayCell] = []
        total_count = 0
        days_with_media = 0

        day = grid_start
        while day <= grid_end:
            members = buckets.get(day, [])
            in_month = (day.year, day.month) == (month_start.year, month_start.month)
            if in_month and members:
                total_count += len(members)
                days_with_media += 1
            cells.append(
                DayCell(
                    date=day,
                    members=list(members),
                    is_current_month=in_month,
                    is_today=day == today,
                )
            )
            day += timedelta(days=1)

        return MonthGrid(
            reference_month=month_start,
            cells=cells,
            total_count=total_count,
            days_with_media=days_with_media,
        )

    def build_timeline_groups(
        self, media: Iterable[MediaRecord], today: date | None = None
    ) -> list[TimelineGroup]:
        """Group media per day, most recent day first.

        Records are sorted by effective timestamp descending; ties keep input
        order.
        """
        today = _as_date(today) if today is not None else date.today()
        dated = self._dated(media)
        # list.sort is stable with reverse=True
        dated.sort(key=lambda pair: pair[0], reverse=True)

        by_day: dict[date, list[MediaRecord]] = {}
        for moment, record in dated:
            by_day.setdefault(moment.date(), []).append(record)

        return [
            TimelineGroup(date=day, label=timeline_label(day, today), members=members)
            for day, members in by_day.items()
        ]
