# wodtracker/wods/schemas.py
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from wodtracker.pagination import Pagination


class ScoringType(str, Enum):
    FOR_TIME = "For Time"
    AMRAP = "AMRAP"
    EMOM = "EMOM"
    TABATA = "Tabata"
    MAX_REPS = "Max Reps"
    MAX_WEIGHT = "Max Weight"
    NOT_SCORED = "Not Scored"


class StructureType(str, Enum):
    ROUNDS = "rounds"
    TIME_BASED = "time-based"
    MAX_EFFORT = "max-effort"


class MovementWeight(BaseModel):
    male: str | None = None
    female: str | None = None


class Movement(BaseModel):
    name: str = Field(..., min_length=1)
    reps: int | None = Field(None, gt=0)
    weight: MovementWeight | None = None
    notes: str | None = None


class Classification(BaseModel):
    scoring_type: ScoringType
    equipment: list[str] = []
    movements: list[str] = []
    difficulty: int | None = Field(None, ge=1, le=5)
    estimated_duration: int | None = Field(None, gt=0)
    tags: list[str] = []


class ClassificationUpdate(BaseModel):
    scoring_type: ScoringType | None = None
    equipment: list[str] | None = None
    movements: list[str] | None = None
    difficulty: int | None = Field(None, ge=1, le=5)
    estimated_duration: int | None = Field(None, gt=0)
    tags: list[str] | None = None


class Structure(BaseModel):
    type: StructureType | None = None
    rounds: int | None = Field(None, gt=0)
    time_limit: int | None = Field(None, gt=0, description="Seconds")
    movements: list[Movement] = Field(..., min_length=1)


class StructureUpdate(BaseModel):
    type: StructureType | None = None
    rounds: int | None = Field(None, gt=0)
    time_limit: int | None = Field(None, gt=0)
    movements: list[Movement] | None = Field(None, min_length=1)


class WodCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    classification: Classification
    structure: Structure
    is_public: bool = True


class WodUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    classification: ClassificationUpdate | None = None
    structure: StructureUpdate | None = None
    is_public: bool | None = None


class WodResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    classification: Classification
    structure: Structure
    created_by: str
    is_public: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WodListResponse(BaseModel):
    wods: list[WodResponse]
    pagination: Pagination
