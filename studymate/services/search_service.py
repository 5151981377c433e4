from typing import List, Tuple

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studymate.models import Exam, StudyPlan


def _contains(column, needle: str):
    return func.lower(column).contains(needle.lower(), autoescape=True)


async def search(db: AsyncSession, user_id: int, query: str) -> Tuple[List[Exam], List[StudyPlan]]:
    """Case-insensitive substring search over a user's exams and plan titles."""
    exams = await db.execute(
        select(Exam)
        .where(Exam.user_id == user_id)
        .where(or_(
            _contains(Exam.name, query),
            _contains(Exam.subject, query),
            _contains(func.coalesce(Exam.location, ""), query),
        ))
        .order_by(Exam.exam_date, Exam.id)
    )
    plans = await db.execute(
        select(StudyPlan)
        .where(StudyPlan.user_id == user_id)
        .where(_contains(StudyPlan.title, query))
        .order_by(StudyPlan.created_at.desc(), StudyPlan.id.desc())
    )
    return list(exams.scalars().all()), list(plans.scalars().all())
