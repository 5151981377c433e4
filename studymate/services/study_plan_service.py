import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studymate.models import StudyPlan, utcnow
from studymate.planner import ScheduleRequest, ScheduleResult, StudySubject, plan
from studymate.schema.request import GenerateStudyPlanRequest

logger = logging.getLogger("studymate")


def to_schedule_request(body: GenerateStudyPlanRequest) -> ScheduleRequest:
    return ScheduleRequest(
        subjects=[
            StudySubject(name=s.name, difficulty=s.difficulty, exam_date=s.exam_date)
            for s in body.subjects
        ],
        hours_per_day=body.available_hours_per_day,
        preferred_time=body.preferred_study_time,
    )


def plan_title(today: date) -> str:
    return f"Study Plan - {today.strftime('%b %Y')}"


async def deactivate_plans(db: AsyncSession, user_id: int, keep_id: Optional[int] = None) -> None:
    stmt = update(StudyPlan).where(StudyPlan.user_id == user_id)
    if keep_id is not None:
        stmt = stmt.where(StudyPlan.id != keep_id)
    await db.execute(stmt.values(is_active=False, updated_at=utcnow()))


async def generate_study_plan(
    db: AsyncSession,
    user_id: int,
    body: GenerateStudyPlanRequest,
    today: Optional[date] = None,
) -> tuple[StudyPlan, ScheduleResult]:
    """
    Run the planner and store its schedule as the user's only active plan.
    Planner validation errors propagate before anything is written.
    """
    today = today or date.today()
    request = to_schedule_request(body)
    result = plan(request, today=today)

    await deactivate_plans(db, user_id)
    study_plan = StudyPlan(
        user_id=user_id,
        title=plan_title(today),
        schedule=result.schedule_dict(),
        start_date=today,
        end_date=max(s.exam_date for s in request.subjects),
        is_active=True,
    )
    db.add(study_plan)
    await db.commit()
    await db.refresh(study_plan)

    logger.info(
        "study_plan_generated",
        extra={
            "user_id": user_id,
            "plan_id": study_plan.id,
            "days": len(result.days),
            "subjects": len(request.subjects),
        },
    )
    return study_plan, result


async def list_study_plans(db: AsyncSession, user_id: int) -> List[StudyPlan]:
    res = await db.execute(
        select(StudyPlan)
        .where(StudyPlan.user_id == user_id)
        .order_by(StudyPlan.created_at.desc(), StudyPlan.id.desc())
    )
    return list(res.scalars().all())


async def get_study_plan(db: AsyncSession, user_id: int, plan_id: int) -> Optional[StudyPlan]:
    return await db.scalar(
        select(StudyPlan).where(StudyPlan.id == plan_id, StudyPlan.user_id == user_id)
    )


async def update_study_plan(db: AsyncSession, study_plan: StudyPlan, changes: dict) -> StudyPlan:
    if changes.get("is_active"):
        await deactivate_plans(db, study_plan.user_id, keep_id=study_plan.id)
    for key, value in changes.items():
        setattr(study_plan, key, value)
    study_plan.updated_at = utcnow()
    db.add(study_plan)
    await db.commit()
    await db.refresh(study_plan)
    return study_plan


async def delete_study_plan(db: AsyncSession, study_plan: StudyPlan) -> None:
    await db.delete(study_plan)
    await db.commit()
    logger.info("study_plan_deleted", extra={"plan_id": study_plan.id})
