"""
Study schedule planner.

Splits a daily hour budget across subjects, weighted by difficulty and
ordered by exam proximity. Pure and deterministic: the only clock it reads
is the planning date handed to `plan()`.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Sequence


MAX_HORIZON_DAYS = 14
MIN_HOURS_PER_DAY = 1
MAX_HOURS_PER_DAY = 12

GENERAL_RECOMMENDATIONS = (
    "Review weak topics identified from flashcard performance",
    "Take breaks every 25 minutes (Pomodoro technique)",
)


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class PreferredTime(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"
    night = "night"


DIFFICULTY_WEIGHTS = {
    Difficulty.easy: 1,
    Difficulty.medium: 2,
    Difficulty.hard: 3,
}

START_TIMES = {
    PreferredTime.morning: "08:00",
    PreferredTime.afternoon: "14:00",
    PreferredTime.evening: "18:00",
    PreferredTime.night: "20:00",
}


class ValidationError(ValueError):
    """Raised when a schedule request is malformed."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.message = message
        self.field = field


@dataclass(frozen=True)
class StudySubject:
    name: str
    difficulty: Difficulty
    exam_date: Optional[date]


@dataclass(frozen=True)
class ScheduleRequest:
    subjects: Sequence[StudySubject]
    hours_per_day: int
    preferred_time: PreferredTime = PreferredTime.morning


@dataclass(frozen=True)
class Task:
    subject: str
    topic: str
    duration_hours: int
    start_time: str

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "topic": self.topic,
            "duration": self.duration_hours,
            "startTime": self.start_time,
        }


@dataclass(frozen=True)
class DaySchedule:
    date: date
    tasks: List[Task] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "tasks": [t.to_dict() for t in self.tasks],
        }


@dataclass(frozen=True)
class ScheduleResult:
    days: List[DaySchedule]
    recommendations: List[str]

    def schedule_dict(self) -> List[dict]:
        return [d.to_dict() for d in self.days]

    def to_dict(self) -> dict:
        return {
            "schedule": self.schedule_dict(),
            "recommendations": list(self.recommendations),
        }


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator/denominator to the nearest int, halves going up."""
    return (2 * numerator + denominator) // (2 * denominator)


def _resolve_difficulty(value, index: int) -> Difficulty:
    try:
        return Difficulty(value)
    except ValueError:
        raise ValidationError(
            f"Unknown difficulty {value!r}; expected easy, medium or hard",
            f"subjects[{index}].difficulty",
        ) from None


def _resolve_preferred_time(value) -> PreferredTime:
    try:
        return PreferredTime(value)
    except ValueError:
        raise ValidationError(
            f"Unknown study time {value!r}; expected morning, afternoon, evening or night",
            "preferredTime",
        ) from None


def _validate(request: ScheduleRequest, today: date) -> List[tuple]:
    """Check the request and return (subject, difficulty, days_until_exam) rows."""
    if not request.subjects:
        raise ValidationError("At least one subject is required", "subjects")

    hours = request.hours_per_day
    if isinstance(hours, bool) or not isinstance(hours, int):
        raise ValidationError("Hours per day must be a whole number", "hoursPerDay")
    if not MIN_HOURS_PER_DAY <= hours <= MAX_HOURS_PER_DAY:
        raise ValidationError(
            f"Hours per day must be between {MIN_HOURS_PER_DAY} and {MAX_HOURS_PER_DAY}",
            "hoursPerDay",
        )

    rows = []
    for i, subject in enumerate(request.subjects):
        if not subject.name or not subject.name.strip():
            raise ValidationError("Subject name is required", f"subjects[{i}].name")
        difficulty = _resolve_difficulty(subject.difficulty, i)
        if subject.exam_date is None:
            raise ValidationError(
                "Please select exam dates for all subjects",
                f"subjects[{i}].examDate",
            )
        days_until_exam = (subject.exam_date - today).days
        if days_until_exam < 0:
            raise ValidationError(
                f"Exam date for {subject.name} is in the past",
                f"subjects[{i}].examDate",
            )
        rows.append((subject, difficulty, days_until_exam))
    return rows


def plan(request: ScheduleRequest, today: Optional[date] = None) -> ScheduleResult:
    """
    Build a day-by-day schedule for `request`, starting on `today`.

    Subjects are ranked by days until their exam (stable, so ties keep input
    order). Each day every subject in rank order gets
    round_half_up(weight / total_weight * hours_per_day) hours, capped by
    what is left of the day's budget. The horizon is the nearest exam or
    14 days, whichever is smaller, and never less than one day.
    """
    today = today or date.today()
    rows = _validate(request, today)
    start_time = START_TIMES[_resolve_preferred_time(request.preferred_time)]
    hours_per_day = request.hours_per_day

    ranked = sorted(rows, key=lambda row: row[2])
    weights = [DIFFICULTY_WEIGHTS[difficulty] for _, difficulty, _ in ranked]
    total_weight = sum(weights)

    horizon = max(1, min(MAX_HORIZON_DAYS, ranked[0][2]))

    days = []
    for day in range(horizon):
        tasks = []
        remaining = hours_per_day
        for (subject, _, _), weight in zip(ranked, weights):
            if remaining <= 0:
                break
            if total_weight > 0:
                hours = round_half_up(weight * hours_per_day, total_weight)
            else:
                hours = round_half_up(hours_per_day, len(ranked))
            hours = min(hours, remaining)
            if hours > 0:
                tasks.append(Task(
                    subject=subject.name,
                    topic=f"Review session {day + 1}",
                    duration_hours=hours,
                    start_time=start_time,
                ))
                remaining -= hours
        days.append(DaySchedule(date=today + timedelta(days=day), tasks=tasks))

    recommendations = [
        f"Focus more on {subject.name} due to higher difficulty"
        for subject, difficulty, _ in ranked
        if difficulty == Difficulty.hard
    ]
    recommendations.extend(GENERAL_RECOMMENDATIONS)

    return ScheduleResult(days=days, recommendations=recommendations)
