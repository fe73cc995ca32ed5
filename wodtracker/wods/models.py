# wodtracker/wods/models.py
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, String, Text, func

from wodtracker.database import Base
from wodtracker.ids import generate_id


class Wod(Base):
    __tablename__ = "wods"
    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    # {scoring_type, equipment, movements, difficulty, estimated_duration, tags}
    classification = Column(JSON, nullable=False)
    # {type, rounds, time_limit, movements: [{name, reps, weight, notes}]}
    structure = Column(JSON, nullable=False)

    created_by = Column(String(24), ForeignKey("users.id"), nullable=False)
    is_public = Column(Boolean, nullable=False, default=True)

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
        Index("ix_wods_created_by_created_at", "created_by", "created_at"),
        Index("ix_wods_is_public_created_at", "is_public", "created_at"),
    )

    @property
    def scoring_type(self) -> str:
        return self.classification["scoring_type"]
