# tests/unit/scores/test_score_schemas.py
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from wodtracker.scores.schemas import DetailsCreate, ScoreCreate


# --- Test ID: UTC-40 ---
class TestScoreCreateSchema:
    def test_minimal_score(self):
        """UTC-40-TC-01: Only the WOD id and the score text are required."""
        score = ScoreCreate.model_validate(
            {"wod_id": "ABCDEF0123456789ABCDEF01", "performance": {"score": "4:32"}}
        )

        assert score.wod_id == "abcdef0123456789abcdef01"
        assert score.performance.rxd is False
        assert score.details.notes == ""
        assert score.details.date is None

    def test_malformed_wod_id(self):
        """UTC-40-TC-02: WOD ids must be 24 hex characters."""
        with pytest.raises(ValidationError):
            ScoreCreate.model_validate({"wod_id": "123", "performance": {"score": "4:32"}})

    def test_rxd_and_scaled_are_exclusive(self):
        """UTC-40-TC-03: A score is either RX'd or scaled, not both."""
        with pytest.raises(ValidationError) as exc_info:
            ScoreCreate.model_validate(
                {
                    "wod_id": "a" * 24,
                    "performance": {"score": "4:32", "rxd": True, "scaled": True},
                }
            )
        assert "cannot be both" in str(exc_info.value)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_feeling_rating_range(self, rating):
        """UTC-40-TC-04: Feeling ratings are 1-5."""
        with pytest.raises(ValidationError):
            DetailsCreate(feeling_rating=rating)

    def test_notes_length(self):
        """UTC-40-TC-05: Notes are capped at 500 characters."""
        with pytest.raises(ValidationError):
            DetailsCreate(notes="x" * 501)

    def test_details_accept_iso_dates(self):
        """UTC-40-TC-06: Dates are parsed from ISO strings."""
        details = DetailsCreate.model_validate({"date": "2025-03-01T07:30:00Z"})
        assert details.date == datetime(2025, 3, 1, 7, 30, tzinfo=UTC)
