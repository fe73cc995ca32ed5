"""
Statistics over a user's score history.

Everything here is a pure function of the records passed in and ``now``.
Calendar days and months are evaluated in ``tz``; stored datetimes without
tzinfo are taken to be UTC.
"""
import math
import re
from collections import Counter
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Iterable, NamedTuple

import pytz

from wodtracker.config import settings

from . import constants
from .schemas import MonthlyCount, PersonalRecord, RecentWorkout, ScoreEntry, StatsReport

_LEADING_INT = re.compile(r"\s*(\d+)")


class _Dated(NamedTuple):
    entry: ScoreEntry
    instant: datetime
    day: date


def get_stats_timezone() -> tzinfo:
    return pytz.timezone(settings.STATS_TIMEZONE)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def local_day(value: datetime, tz: tzinfo) -> date:
    return as_utc(value).astimezone(tz).date()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int, tz: tzinfo) -> tuple[datetime, datetime]:
    """UTC instants [start, end) of a calendar month in ``tz``."""
    next_year, next_month = shift_month(year, month, 1)
    start = _localize(datetime(year, month, 1), tz)
    end = _localize(datetime(next_year, next_month, 1), tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def _localize(naive: datetime, tz: tzinfo) -> datetime:
    # pytz zones need localize() to pick the right offset
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def parse_time_to_seconds(value: str) -> int:
    """
    "MM:SS" or "H:MM:SS" to seconds. A value without a colon is read as raw
    seconds. Each part is read up to its first non-digit, so "9:30.5" and
    "9:30 min" are both 570. Anything unparseable is 0; this never raises.
    """
    if not value:
        return 0

    if ":" not in value:
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return 0

    seconds = 0
    for part in parts:
        match = _LEADING_INT.match(part)
        if match is None:
            return 0
        seconds = seconds * 60 + int(match.group(1))
    return seconds


def is_better_score(candidate: ScoreEntry, best: ScoreEntry) -> bool:
    if candidate.scoring_type in constants.LOWER_IS_BETTER:
        return parse_time_to_seconds(candidate.score) < parse_time_to_seconds(best.score)
    if candidate.scoring_type in constants.HIGHER_IS_BETTER:
        return candidate.score_value > best.score_value
    # No ranking rule: the first record seen stays
    return False


def calculate_streaks(days: Iterable[date], today: date) -> tuple[int, int]:
    """
    Returns (current, longest) runs of consecutive occupied days.

    The current streak is only live when the latest occupied day up to today
    is today or yesterday.
    """
    ordered = sorted(set(days))

    longest = 0
    run = 0
    previous: date | None = None
    for day in ordered:
        run = run + 1 if previous is not None and (day - previous).days == 1 else 1
        longest = max(longest, run)
        previous = day

    current = 0
    expected: date | None = None
    for day in reversed([d for d in ordered if d <= today]):
        if expected is None:
            if (today - day).days > 1:
                break
        elif day != expected:
            break
        current += 1
        expected = day - timedelta(days=1)

    return current, longest


def calculate_average_per_week(days: list[date], total: int) -> float:
    if not total:
        return 0.0
    span = (max(days) - min(days)).days
    weeks = max(math.ceil(span / 7), 1)
    return round(total / weeks, 1)


def select_personal_records(ordered: list[_Dated]) -> list[PersonalRecord]:
    """Best record per WOD, most recent first. ``ordered`` is newest first."""
    best: dict[str, _Dated] = {}
    for item in ordered:
        key = item.entry.wod_id or item.entry.wod_name
        current = best.get(key)
        if current is None or is_better_score(item.entry, current.entry):
            best[key] = item

    winners = sorted(best.values(), key=lambda item: item.instant, reverse=True)
    return [
        PersonalRecord(
            wod_id=item.entry.wod_id,
            wod_name=item.entry.wod_name,
            score=item.entry.score,
            date=item.entry.date,
            rxd=item.entry.rxd,
            scoring_type=item.entry.scoring_type,
        )
        for item in winners[: constants.PERSONAL_RECORDS_LIMIT]
    ]


def calculate_feeling_stats(entries: Iterable[ScoreEntry]) -> dict[int, int]:
    stats = dict.fromkeys(constants.FEELING_RATINGS, 0)
    for entry in entries:
        if entry.feeling_rating in stats:
            stats[entry.feeling_rating] += 1
    return stats


def calculate_monthly_progress(days: Iterable[date], today: date) -> list[MonthlyCount]:
    per_month = Counter((day.year, day.month) for day in days)
    progress = []
    for offset in range(constants.MONTHLY_PROGRESS_MONTHS - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        progress.append(
            MonthlyCount(month=f"{year:04d}-{month:02d}", count=per_month[(year, month)])
        )
    return progress


def compute_user_stats(
    records: Iterable[ScoreEntry],
    now: datetime | None = None,
    tz: tzinfo = pytz.utc,
) -> StatsReport:
    now = as_utc(now or datetime.now(UTC))
    today = now.astimezone(tz).date()

    dated = [
        _Dated(entry, as_utc(entry.date), local_day(entry.date, tz)) for entry in records
    ]
    # Newest first; equal instants keep their input order
    dated.sort(key=lambda item: item.instant, reverse=True)
    days = [item.day for item in dated]

    this_month = (today.year, today.month)
    last_month = shift_month(today.year, today.month, -1)
    year_start = date(today.year, 1, 1)

    current_streak, longest_streak = calculate_streaks(days, today)

    return StatsReport(
        total_workouts=len(dated),
        this_month_workouts=sum(1 for d in days if (d.year, d.month) == this_month),
        last_month_workouts=sum(1 for d in days if (d.year, d.month) == last_month),
        this_year_workouts=sum(1 for d in days if d >= year_start),
        current_streak=current_streak,
        longest_streak=longest_streak,
        average_workouts_per_week=calculate_average_per_week(days, len(dated)),
        wod_type_distribution=dict(Counter(item.entry.scoring_type for item in dated)),
        personal_records=select_personal_records(dated),
        recent_workouts=[
            RecentWorkout(
                wod_name=item.entry.wod_name,
                score=item.entry.score,
                date=item.entry.date,
                rxd=item.entry.rxd,
            )
            for item in dated[: constants.RECENT_WORKOUTS_LIMIT]
        ],
        feeling_stats=calculate_feeling_stats(item.entry for item in dated),
        monthly_progress=calculate_monthly_progress(days, today),
    )
