"""
Study plan API: generation, listing and lifecycle of a user's plans.
Only one plan per user is active at a time.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from studymate.api.auth import get_current_user
from studymate.db import get_db
from studymate.models import User
from studymate.schema.request import GenerateStudyPlanRequest, StudyPlanUpdate
from studymate.schema.response import StudyPlanRead
from studymate.services import study_plan_service


router = APIRouter(prefix="/study-plan", tags=["study-plan"])


async def _get_plan_or_404(db: AsyncSession, user: User, plan_id: int):
    plan = await study_plan_service.get_study_plan(db, user.id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Study plan not found")
    return plan


@router.get("", response_model=dict)
async def list_plans(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    plans = await study_plan_service.list_study_plans(db, user.id)
    return {
        "success": True,
        "data": [StudyPlanRead.model_validate(p).model_dump(mode="json") for p in plans],
    }


@router.post("/generate", response_model=dict, status_code=201)
async def generate_plan(
    body: GenerateStudyPlanRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Generate a schedule from subjects, exam dates and available hours,
    store it as the active plan and return it with recommendations.
    """
    plan, result = await study_plan_service.generate_study_plan(db, user.id, body)
    return {
        "success": True,
        "data": {
            "id": plan.id,
            **result.to_dict(),
        },
    }


@router.get("/{plan_id}", response_model=dict)
async def show_plan(
    plan_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    plan = await _get_plan_or_404(db, user, plan_id)
    return {"success": True, "data": StudyPlanRead.model_validate(plan).model_dump(mode="json")}


@router.put("/{plan_id}", response_model=dict)
async def update_plan(
    plan_id: int,
    body: StudyPlanUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Rename, replace the schedule, or (de)activate a plan."""
    plan = await _get_plan_or_404(db, user, plan_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    plan = await study_plan_service.update_study_plan(db, plan, changes)
    return {"success": True, "data": StudyPlanRead.model_validate(plan).model_dump(mode="json")}


@router.delete("/{plan_id}", response_model=dict)
async def delete_plan(
    plan_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    plan = await _get_plan_or_404(db, user, plan_id)
    await study_plan_service.delete_study_plan(db, plan)
    return {"success": True, "message": "Study plan deleted successfully"}
