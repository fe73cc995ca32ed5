# wodtracker/scores/models.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)

from wodtracker.database import Base
from wodtracker.ids import generate_id


class Score(Base):
    __tablename__ = "scores"
    id = Column(String(24), primary_key=True, default=generate_id)
    user_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    wod_id = Column(
        String(24), ForeignKey("wods.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Copied from the WOD when the score is recorded. Later edits to the WOD
    # must not change what a historical score means.
    wod_name = Column(String(100), nullable=False)
    scoring_type = Column(String(20), nullable=False)

    score = Column(String(100), nullable=False)
    score_value = Column(Float, nullable=False, default=0)
    rxd = Column(Boolean, nullable=False, default=False)
    scaled = Column(Boolean, nullable=False, default=False)

    date = Column(DateTime(timezone=True), nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
    feeling_rating = Column(Integer, nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("ix_scores_user_wod_date", "user_id", "wod_id", "date"),
        Index("ix_scores_wod_score_value", "wod_id", "score_value"),
    )
