from datetime import date, datetime, timezone
from typing import Optional, List
from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime, JSON, UniqueConstraint, Index

from studymate.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    firebase_uid: str = Field(max_length=128, unique=True, index=True)
    email: str = Field(default="unknown@example.com")
    display_name: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class StudyPlan(SQLModel, table=True):
    __tablename__ = "study_plans"
    __table_args__ = (Index("ix_study_plans_user_active", "user_id", "is_active"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id")
    title: str
    schedule: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    start_date: date
    end_date: date
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class Exam(SQLModel, table=True):
    __tablename__ = "exams"
    __table_args__ = (
        Index("ix_exams_user_date", "user_id", "exam_date"),
        Index("ix_exams_user_completed", "user_id", "is_completed"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id")
    name: str = Field(max_length=255)
    subject: str = Field(max_length=255)
    exam_date: date
    exam_time: Optional[str] = None  # "HH:MM"
    location: Optional[str] = None
    syllabus: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    reminder_days: List[int] = Field(default_factory=lambda: list(settings.default_reminder_days), sa_column=Column(JSON))
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    def days_remaining(self, today: Optional[date] = None) -> int:
        """Days until the exam; negative once it has passed."""
        return (self.exam_date - (today or date.today())).days


class PerformanceRecord(SQLModel, table=True):
    __tablename__ = "performance_records"
    __table_args__ = (
        Index("ix_performance_user_subject", "user_id", "subject"),
        Index("ix_performance_user_flashcard", "user_id", "flashcard_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id")
    flashcard_id: str = Field(max_length=128)
    subject: Optional[str] = None
    topic: Optional[str] = None
    is_correct: bool
    response_time: Optional[float] = None  # seconds
    attempted_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)


class WeakTopic(SQLModel, table=True):
    __tablename__ = "weak_topics"
    __table_args__ = (
        UniqueConstraint("user_id", "subject", "topic", name="uq_weak_topic"),
        Index("ix_weak_topics_user_accuracy", "user_id", "accuracy"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id")
    subject: str
    topic: str
    accuracy: float  # percent, 0-100
    total_attempts: int = 0
    last_attempted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
