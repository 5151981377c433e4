from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studymate.config import settings
from studymate.models import Exam, utcnow
from studymate.schema.request import ExamCreate

# request attribute -> column
EXAM_UPDATE_COLUMNS = {
    "name": "name",
    "subject": "subject",
    "exam_date": "exam_date",
    "time": "exam_time",
    "location": "location",
    "syllabus": "syllabus",
    "reminder_days": "reminder_days",
    "is_completed": "is_completed",
}


async def create_exam(db: AsyncSession, user_id: int, body: ExamCreate) -> Exam:
    exam = Exam(
        user_id=user_id,
        name=body.name,
        subject=body.subject,
        exam_date=body.exam_date,
        exam_time=body.time,
        location=body.location,
        syllabus=body.syllabus or [],
    )
    if body.reminder_days:
        exam.reminder_days = body.reminder_days
    db.add(exam)
    await db.commit()
    await db.refresh(exam)
    return exam


async def list_exams(db: AsyncSession, user_id: int) -> List[Exam]:
    res = await db.execute(
        select(Exam).where(Exam.user_id == user_id).order_by(Exam.exam_date, Exam.id)
    )
    return list(res.scalars().all())


async def upcoming_exams(
    db: AsyncSession,
    user_id: int,
    today: Optional[date] = None,
    limit: Optional[int] = None,
) -> List[Exam]:
    """Exams not yet completed, from today on, soonest first."""
    today = today or date.today()
    res = await db.execute(
        select(Exam)
        .where(Exam.user_id == user_id)
        .where(Exam.is_completed == False)  # noqa: E712
        .where(Exam.exam_date >= today)
        .order_by(Exam.exam_date, Exam.id)
        .limit(limit or settings.upcoming_exam_limit)
    )
    return list(res.scalars().all())


async def get_exam(db: AsyncSession, user_id: int, exam_id: int) -> Optional[Exam]:
    return await db.scalar(select(Exam).where(Exam.id == exam_id, Exam.user_id == user_id))


async def update_exam(db: AsyncSession, exam: Exam, changes: dict) -> Exam:
    for key, value in changes.items():
        column = EXAM_UPDATE_COLUMNS.get(key)
        if column is None or value is None:
            continue
        setattr(exam, column, value)
    exam.updated_at = utcnow()
    db.add(exam)
    await db.commit()
    await db.refresh(exam)
    return exam


async def delete_exam(db: AsyncSession, exam: Exam) -> None:
    await db.delete(exam)
    await db.commit()
