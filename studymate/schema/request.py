"""
Request schemas for the StudyMate API.
JSON keys follow the mobile client's camelCase; Python attributes are snake_case.
"""

from datetime import date as dt_date
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, field_validator


class SubjectInput(BaseModel):
    name: str
    difficulty: Literal["easy", "medium", "hard"]
    # left optional so the planner can report which subject is missing a date
    exam_date: Optional[dt_date] = Field(None, alias="examDate")

    class Config:
        populate_by_name = True


class GenerateStudyPlanRequest(BaseModel):
    subjects: List[SubjectInput]
    available_hours_per_day: int = Field(..., alias="availableHoursPerDay")
    preferred_study_time: Literal["morning", "afternoon", "evening", "night"] = Field(
        ..., alias="preferredStudyTime"
    )

    class Config:
        populate_by_name = True


class StudyPlanUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    schedule: Optional[List[dict]] = None
    is_active: Optional[bool] = None


class ExamCreate(BaseModel):
    name: str = Field(..., max_length=255)
    subject: str = Field(..., max_length=255)
    exam_date: dt_date = Field(..., alias="date")
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    location: Optional[str] = Field(None, max_length=255)
    syllabus: Optional[List[str]] = None
    reminder_days: Optional[List[int]] = Field(None, alias="reminderDays")

    class Config:
        populate_by_name = True

    @field_validator("exam_date")
    @classmethod
    def date_after_today(cls, value: dt_date) -> dt_date:
        if value <= dt_date.today():
            raise ValueError("Exam date must be after today")
        return value


class ExamUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    exam_date: Optional[dt_date] = Field(None, alias="date")
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    location: Optional[str] = Field(None, max_length=255)
    syllabus: Optional[List[str]] = None
    reminder_days: Optional[List[int]] = Field(None, alias="reminderDays")
    is_completed: Optional[bool] = Field(None, alias="isCompleted")

    class Config:
        populate_by_name = True


class ScoreUpdateRequest(BaseModel):
    """One flashcard attempt reported by the client."""
    flashcard_id: str = Field(..., alias="flashcardId", min_length=1, max_length=128)
    subject: str = Field(..., min_length=1, max_length=255)
    topic: str = Field(..., min_length=1, max_length=255)
    is_correct: bool = Field(..., alias="isCorrect")
    response_time: Optional[float] = Field(None, alias="responseTime", ge=0, le=999.99)

    class Config:
        populate_by_name = True
