# wodtracker/users/schemas.py
from datetime import date as date_type
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wodtracker.auth.models import User

# The "Girls" benchmark workouts a user can keep a best score for
BENCHMARK_WODS = frozenset(
    {
        "fran", "grace", "helen", "diane", "elizabeth", "cindy", "annie",
        "kelly", "jackie", "karen", "amanda", "murph", "chelsea", "mary",
        "angie", "barbara", "eva", "lynne", "nicole", "isabel",
    }
)


class InjuryNote(BaseModel):
    date: date_type
    note: str = Field(..., min_length=1, max_length=1000)


class PersonalInfo(BaseModel):
    height: float | None = Field(None, gt=0, le=300)
    weight: float | None = Field(None, gt=0, le=500)
    birth_date: date_type | None = None
    gender: Literal["male", "female", "other"] | None = None
    injury_notes: list[InjuryNote] = []


class PersonalInfoUpdate(BaseModel):
    height: float | None = Field(None, gt=0, le=300)
    weight: float | None = Field(None, gt=0, le=500)
    birth_date: date_type | None = None
    gender: Literal["male", "female", "other"] | None = None
    injury_notes: list[InjuryNote] | None = None


class Preferences(BaseModel):
    is_profile_public: bool = True
    show_age: bool = True
    show_weight: bool = True
    preferred_equipment: list[str] = []
    skill_level: int | None = Field(None, ge=1, le=5)
    language: str = "en"


class PreferencesUpdate(BaseModel):
    is_profile_public: bool | None = None
    show_age: bool | None = None
    show_weight: bool | None = None
    preferred_equipment: list[str] | None = None
    skill_level: int | None = Field(None, ge=1, le=5)
    language: str | None = Field(None, min_length=2, max_length=10)


class ProfileUpdate(BaseModel):
    username: str | None = Field(
        None, min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_-]+$"
    )
    display_name: str | None = Field(None, min_length=1, max_length=50)
    bio: str | None = Field(None, max_length=500)
    preferences: PreferencesUpdate | None = None

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else None


class BenchmarkScore(BaseModel):
    time: str | None = None
    rounds: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    date: datetime
    rxd: bool = False


class BenchmarkScoreInput(BaseModel):
    time: str | None = None
    rounds: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    date: datetime | None = None
    rxd: bool = False


class BenchmarkScoreUpdate(BaseModel):
    wod_name: str = Field(..., min_length=1)
    score: BenchmarkScoreInput

    @field_validator("wod_name")
    @classmethod
    def known_benchmark(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in BENCHMARK_WODS:
            raise ValueError(f"Invalid WOD name: '{v}'")
        return name


class LiftRecord(BaseModel):
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    date: datetime


class LiftRecordUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    date: datetime | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return v.strip().lower()


class UserStats(BaseModel):
    total_workouts: int
    current_streak: int
    longest_streak: int
    last_workout_date: datetime | None = None


class PublicUserResponse(BaseModel):
    id: str
    username: str
    display_name: str
    profile_picture: str | None = None
    bio: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(PublicUserResponse):
    personal_info: PersonalInfo
    benchmark_scores: dict[str, BenchmarkScore]
    personal_records: dict[str, LiftRecord]
    following: list[str]
    followers: list[str]
    preferences: Preferences
    stats: UserStats
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            profile_picture=user.profile_picture,
            bio=user.bio,
            personal_info=user.personal_info or {},
            benchmark_scores=user.benchmark_scores or {},
            personal_records=user.personal_records or {},
            following=user.following or [],
            followers=user.followers or [],
            preferences=user.preferences or {},
            stats=UserStats(
                total_workouts=user.total_workouts or 0,
                current_streak=user.current_streak or 0,
                longest_streak=user.longest_streak or 0,
                last_workout_date=user.last_workout_date,
            ),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class PersonalInfoResponse(BaseModel):
    personal_info: PersonalInfo


class BenchmarkScoresResponse(BaseModel):
    benchmark_scores: dict[str, BenchmarkScore]


class FollowResponse(BaseModel):
    following: list[str]
    followers_count: int
