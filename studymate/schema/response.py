"""
Response schemas for the StudyMate API.
Stored rows are serialized with their column names, as the mobile client expects.
"""

from datetime import date, datetime
from typing import Optional, List, Dict
from pydantic import BaseModel


class StudyPlanRead(BaseModel):
    id: int
    user_id: int
    title: str
    schedule: List[dict]
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExamRead(BaseModel):
    id: int
    user_id: int
    name: str
    subject: str
    exam_date: date
    exam_time: Optional[str] = None
    location: Optional[str] = None
    syllabus: Optional[List[str]] = None
    reminder_days: Optional[List[int]] = None
    is_completed: bool
    days_remaining: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @classmethod
    def from_exam(cls, exam) -> "ExamRead":
        return cls(
            **exam.model_dump(),
            days_remaining=exam.days_remaining(),
        )


class WeakTopicRead(BaseModel):
    id: int
    subject: str
    topic: str
    accuracy: float
    total_attempts: int
    last_attempted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubjectStatistics(BaseModel):
    subject: str
    total_attempts: int
    correct: int
    accuracy: float


class PerformanceStatistics(BaseModel):
    total_attempts: int
    correct: int
    accuracy: float
    average_response_time: Optional[float] = None
    subjects: List[SubjectStatistics]
    weak_topic_count: int


class SearchResults(BaseModel):
    query: str
    exams: List[ExamRead]
    study_plans: List[StudyPlanRead]
    counts: Dict[str, int]
