# wodtracker/wods/benchmarks.py
"""
Public definitions of the benchmark ("Girls" and hero) WODs.

Names line up with the benchmark keys users keep best scores under, so a
seeded "Fran" is the WOD those scores refer to.
"""
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Wod
from .schemas import WodCreate
from .service import create_wod

logger = logging.getLogger(__name__)


def _movement(name: str, reps: int | None = None, male: str | None = None,
              female: str | None = None, notes: str | None = None) -> dict[str, Any]:
    movement: dict[str, Any] = {"name": name, "reps": reps, "notes": notes}
    if male or female:
        movement["weight"] = {"male": male, "female": female}
    return movement


def _definition(name: str, description: str, scoring_type: str, movements: list[dict],
                equipment: list[str] | None = None, difficulty: int | None = None,
                structure_type: str = "rounds", rounds: int | None = None,
                time_limit: int | None = None, tags: list[str] | None = None) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "classification": {
            "scoring_type": scoring_type,
            "equipment": equipment or [],
            "movements": [m["name"] for m in movements],
            "difficulty": difficulty,
            "tags": ["benchmark", *(tags or [])],
        },
        "structure": {
            "type": structure_type,
            "rounds": rounds,
            "time_limit": time_limit,
            "movements": movements,
        },
        "is_public": True,
    }


BENCHMARK_DEFINITIONS: list[dict[str, Any]] = [
    _definition(
        "Fran", "21-15-9 reps for time of thrusters and pull-ups", "For Time",
        [_movement("Thrusters", 21, "95 lbs", "65 lbs", "21-15-9"), _movement("Pull-ups", 21, notes="21-15-9")],
        equipment=["barbell", "pull-up bar"], difficulty=4, tags=["classic", "21-15-9"],
    ),
    _definition(
        "Grace", "30 clean and jerks for time", "For Time",
        [_movement("Clean and Jerk", 30, "135 lbs", "95 lbs")],
        equipment=["barbell"], difficulty=4,
    ),
    _definition(
        "Isabel", "30 snatches for time", "For Time",
        [_movement("Snatch", 30, "135 lbs", "95 lbs")],
        equipment=["barbell"], difficulty=4,
    ),
    _definition(
        "Helen", "3 rounds for time", "For Time",
        [
            _movement("Run", notes="400m"),
            _movement("Kettlebell Swings", 21, "24 kg", "16 kg"),
            _movement("Pull-ups", 12),
        ],
        equipment=["kettlebell", "pull-up bar"], difficulty=3, rounds=3,
    ),
    _definition(
        "Diane", "21-15-9 reps for time of deadlifts and handstand push-ups", "For Time",
        [_movement("Deadlift", 21, "225 lbs", "155 lbs", "21-15-9"), _movement("Handstand Push-ups", 21, notes="21-15-9")],
        equipment=["barbell"], difficulty=4, tags=["21-15-9"],
    ),
    _definition(
        "Elizabeth", "21-15-9 reps for time of cleans and ring dips", "For Time",
        [_movement("Clean", 21, "135 lbs", "95 lbs", "21-15-9"), _movement("Ring Dips", 21, notes="21-15-9")],
        equipment=["barbell", "rings"], difficulty=4, tags=["21-15-9"],
    ),
    _definition(
        "Amanda", "9-7-5 reps for time of muscle-ups and squat snatches", "For Time",
        [_movement("Muscle-ups", 9, notes="9-7-5"), _movement("Squat Snatch", 9, "135 lbs", "95 lbs", "9-7-5")],
        equipment=["barbell", "rings"], difficulty=5,
    ),
    _definition(
        "Annie", "50-40-30-20-10 reps for time of double-unders and sit-ups", "For Time",
        [_movement("Double-unders", 50, notes="50-40-30-20-10"), _movement("Sit-ups", 50, notes="50-40-30-20-10")],
        equipment=["jump rope"], difficulty=2,
    ),
    _definition(
        "Angie", "For time, complete each movement before moving on", "For Time",
        [_movement("Pull-ups", 100), _movement("Push-ups", 100), _movement("Sit-ups", 100), _movement("Air Squats", 100)],
        equipment=["pull-up bar"], difficulty=3,
    ),
    _definition(
        "Barbara", "5 rounds for time, 3 minutes rest between rounds", "For Time",
        [_movement("Pull-ups", 20), _movement("Push-ups", 30), _movement("Sit-ups", 40), _movement("Air Squats", 50)],
        equipment=["pull-up bar"], difficulty=3, rounds=5,
    ),
    _definition(
        "Jackie", "For time", "For Time",
        [_movement("Row", notes="1000m"), _movement("Thrusters", 50, "45 lbs", "35 lbs"), _movement("Pull-ups", 30)],
        equipment=["rower", "barbell", "pull-up bar"], difficulty=3,
    ),
    _definition(
        "Karen", "150 wall-ball shots for time", "For Time",
        [_movement("Wall Balls", 150, "20 lbs", "14 lbs")],
        equipment=["medicine ball"], difficulty=3,
    ),
    _definition(
        "Kelly", "5 rounds for time", "For Time",
        [_movement("Run", notes="400m"), _movement("Box Jumps", 30, notes="24/20 in"), _movement("Wall Balls", 30, "20 lbs", "14 lbs")],
        equipment=["box", "medicine ball"], difficulty=4, rounds=5,
    ),
    _definition(
        "Eva", "5 rounds for time", "For Time",
        [_movement("Run", notes="800m"), _movement("Kettlebell Swings", 30, "32 kg", "24 kg"), _movement("Pull-ups", 30)],
        equipment=["kettlebell", "pull-up bar"], difficulty=5, rounds=5,
    ),
    _definition(
        "Murph", "For time, partition the pull-ups, push-ups and squats as needed", "For Time",
        [
            _movement("Run", notes="1 mile"),
            _movement("Pull-ups", 100),
            _movement("Push-ups", 200),
            _movement("Air Squats", 300),
            _movement("Run", notes="1 mile"),
        ],
        equipment=["pull-up bar", "weight vest"], difficulty=5, tags=["hero"],
    ),
    _definition(
        "Cindy", "As many rounds as possible in 20 minutes", "AMRAP",
        [_movement("Pull-ups", 5), _movement("Push-ups", 10), _movement("Air Squats", 15)],
        equipment=["pull-up bar"], difficulty=3, structure_type="time-based", time_limit=20 * 60,
    ),
    _definition(
        "Mary", "As many rounds as possible in 20 minutes", "AMRAP",
        [_movement("Handstand Push-ups", 5), _movement("Pistols", 10, notes="alternating legs"), _movement("Pull-ups", 15)],
        equipment=["pull-up bar"], difficulty=5, structure_type="time-based", time_limit=20 * 60,
    ),
    _definition(
        "Nicole", "As many rounds as possible in 20 minutes; score is total pull-ups", "Max Reps",
        [_movement("Run", notes="400m"), _movement("Pull-ups", notes="max reps")],
        equipment=["pull-up bar"], difficulty=3, structure_type="time-based", time_limit=20 * 60,
    ),
    _definition(
        "Chelsea", "Every minute on the minute for 30 minutes", "EMOM",
        [_movement("Pull-ups", 5), _movement("Push-ups", 10), _movement("Air Squats", 15)],
        equipment=["pull-up bar"], difficulty=3, structure_type="time-based", time_limit=30 * 60,
    ),
    _definition(
        "Lynne", "5 rounds for max reps; score is total reps", "Max Reps",
        [_movement("Bench Press", notes="bodyweight, max reps"), _movement("Pull-ups", notes="max reps")],
        equipment=["barbell", "bench", "pull-up bar"], difficulty=3, structure_type="max-effort", rounds=5,
    ),
]


def benchmark_wods() -> list[WodCreate]:
    return [WodCreate.model_validate(definition) for definition in BENCHMARK_DEFINITIONS]


async def seed_benchmark_wods(owner_id: str, db: AsyncSession, commit: bool = True) -> list[str]:
    """
    Create the benchmark WODs the owner does not have yet.

    Matching is by case-insensitive name, so running it twice is a no-op.
    Returns the names that were (or, with ``commit=False``, would be) created.
    """
    result = await db.execute(
        select(func.lower(Wod.name)).where(Wod.created_by == owner_id)
    )
    existing = set(result.scalars().all())

    created: list[str] = []
    for wod in benchmark_wods():
        if wod.name.lower() in existing:
            logger.debug("Benchmark WOD %s already present for %s", wod.name, owner_id)
            continue
        if commit:
            await create_wod(owner_id, wod, db)
        created.append(wod.name)

    logger.info(
        "Benchmark WODs %s: %d for %s",
        "seeded" if commit else "to seed", len(created), owner_id,
    )
    return created
