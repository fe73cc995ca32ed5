# wodtracker/analytics/schemas.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ScoreEntry(BaseModel):
    """The slice of a score the statistics engine needs."""

    wod_id: str | None = None
    wod_name: str
    scoring_type: str
    score: str
    score_value: float = 0
    rxd: bool = False
    feeling_rating: int | None = None
    date: datetime

    model_config = ConfigDict(frozen=True, from_attributes=True)


class PersonalRecord(BaseModel):
    wod_id: str | None
    wod_name: str
    score: str
    date: datetime
    rxd: bool
    scoring_type: str


class RecentWorkout(BaseModel):
    wod_name: str
    score: str
    date: datetime
    rxd: bool


class MonthlyCount(BaseModel):
    month: str
    count: int


class StatsReport(BaseModel):
    total_workouts: int
    this_month_workouts: int
    last_month_workouts: int
    this_year_workouts: int
    current_streak: int
    longest_streak: int
    average_workouts_per_week: float
    wod_type_distribution: dict[str, int]
    personal_records: list[PersonalRecord]
    recent_workouts: list[RecentWorkout]
    feeling_stats: dict[int, int]
    monthly_progress: list[MonthlyCount]
