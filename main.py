from __future__ import annotations

import argparse
import asyncio
from datetime import date, datetime
from pathlib import Path

from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from core.models import MonthGrid
from core.services.date_buckets import DateBucketAggregator
from infrastructure.json_media_source import JsonFileMediaSource
from infrastructure.logging import find_latest_log_file, init_logging
from infrastructure.settings import JsonSettings, load_gallery_config

BASE_DIR = Path(__file__).parent


class ConsoleReporter:
    """StatusReporter printing to stdout."""

    def show_status(self, message: str, level: str = "info") -> None:
        print(f"[{level}] {message}")


def _parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from ex


def render_month(grid: MonthGrid) -> str:
    """Render a grid as text: one row per week, `day:count` per cell."""
    lines: list[str] = []
    for week in grid.weeks():
        cells = []
        for cell in week:
            count = f"{cell.count:<3}" if cell.count else "   "
            text = f"{cell.date.day:>2}:{count}"
            if not cell.is_current_month:
                text = text.replace(" ", ".")
            cells.append(f"*{text}" if cell.is_today else f" {text}")
        lines.append(" ".join(cells))
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> int:
    settings = JsonSettings(args.settings)
    config = load_gallery_config(settings)
    log_dir = init_logging(config.log_dir)

    vm = GalleryVM(
        JsonFileMediaSource(args.media_json),
        ConsoleReporter(),
        DateBucketAggregator(week_starts_on=config.week_starts_on),
        page_size=config.page_size,
    )
    if not await vm.load(args.page):
        return 1
    if args.month:
        vm.current_month = args.month

    grid = vm.calendar()
    print(vm.month_title)
    print(f"{grid.total_count} files in {grid.days_with_media} days")
    print(render_month(grid))
    print()
    for group in vm.timeline():
        print(f"{group.label}: {group.count}")
    logger.info("Rendered {} for {} media", vm.month_title, len(vm.media))
    if args.show_log:
        print(f"Log file: {find_latest_log_file(str(log_dir))}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show calendar and timeline of a media export.")
    parser.add_argument("media_json", help="JSON media array or page with `content`")
    parser.add_argument("--month", type=_parse_month, help="month to show, YYYY-MM")
    parser.add_argument("--page", type=int, default=0, help="page of media to load")
    parser.add_argument("--settings", default=str(BASE_DIR / "settings.json"))
    parser.add_argument("--show-log", action="store_true", help="print the current log file path")
    args = parser.parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
