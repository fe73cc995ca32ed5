# wodtracker/auth/models.py
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func

from wodtracker.database import Base
from wodtracker.ids import generate_id


class User(Base):
    __tablename__ = "users"
    id = Column(String(24), primary_key=True, default=generate_id)
    line_user_id = Column(String, unique=True, index=True, nullable=False)
    username = Column(String(30), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=False)
    profile_picture = Column(String, nullable=False, default="")
    bio = Column(Text, nullable=True)

    # {height, weight, birth_date, gender, injury_notes: [{date, note}]}
    personal_info = Column(JSON, nullable=False, default=dict)
    # benchmark name -> {time, rounds, reps, weight, date, rxd}
    benchmark_scores = Column(JSON, nullable=False, default=dict)
    # lift name -> {weight, reps, distance, date}
    personal_records = Column(JSON, nullable=False, default=dict)

    following = Column(JSON, nullable=False, default=list)
    followers = Column(JSON, nullable=False, default=list)
    preferences = Column(JSON, nullable=False, default=dict)

    # Cached aggregates, refreshed whenever the user's scores change
    total_workouts = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_workout_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
