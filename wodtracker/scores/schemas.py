# wodtracker/scores/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from wodtracker.ids import ObjectId
from wodtracker.pagination import Pagination
from wodtracker.wods.schemas import ScoringType

from .models import Score


class PerformanceCreate(BaseModel):
    score: str = Field(..., min_length=1, max_length=100)
    score_value: float | None = None
    # Optional: the WOD's scoring type is authoritative
    scoring_type: ScoringType | None = None
    rxd: bool = False
    scaled: bool = False

    @model_validator(mode="after")
    def check_rxd_or_scaled(self):
        if self.rxd and self.scaled:
            raise ValueError("A score cannot be both RX'd and scaled")
        return self


class PerformanceUpdate(BaseModel):
    score: str | None = Field(None, min_length=1, max_length=100)
    score_value: float | None = None
    rxd: bool | None = None
    scaled: bool | None = None


class DetailsCreate(BaseModel):
    date: datetime | None = None
    notes: str = Field("", max_length=500)
    feeling_rating: int | None = Field(None, ge=1, le=5)


class DetailsUpdate(BaseModel):
    date: datetime | None = None
    notes: str | None = Field(None, max_length=500)
    feeling_rating: int | None = Field(None, ge=1, le=5)


class ScoreCreate(BaseModel):
    wod_id: ObjectId
    performance: PerformanceCreate
    details: DetailsCreate = DetailsCreate()


class ScoreUpdate(BaseModel):
    performance: PerformanceUpdate | None = None
    details: DetailsUpdate | None = None


class WodSummary(BaseModel):
    id: str | None
    name: str
    scoring_type: str


class PerformanceRead(BaseModel):
    score: str
    score_value: float
    scoring_type: str
    rxd: bool
    scaled: bool


class DetailsRead(BaseModel):
    date: datetime
    notes: str
    feeling_rating: int | None = None


class ScoreResponse(BaseModel):
    id: str
    user_id: str
    wod: WodSummary
    performance: PerformanceRead
    details: DetailsRead
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_score(cls, score: Score) -> "ScoreResponse":
        return cls(
            id=score.id,
            user_id=score.user_id,
            wod=WodSummary(
                id=score.wod_id, name=score.wod_name, scoring_type=score.scoring_type
            ),
            performance=PerformanceRead(
                score=score.score,
                score_value=score.score_value,
                scoring_type=score.scoring_type,
                rxd=score.rxd,
                scaled=score.scaled,
            ),
            details=DetailsRead(
                date=score.date, notes=score.notes, feeling_rating=score.feeling_rating
            ),
            created_at=score.created_at,
            updated_at=score.updated_at,
        )


class ScoreListResponse(BaseModel):
    scores: list[ScoreResponse]
    pagination: Pagination | None = None
