"""
Exams API: CRUD over a user's exams plus the upcoming-exams countdown feed.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from studymate.api.auth import get_current_user
from studymate.db import get_db
from studymate.models import User
from studymate.schema.request import ExamCreate, ExamUpdate
from studymate.schema.response import ExamRead
from studymate.services import exam_service


router = APIRouter(prefix="/exams", tags=["exams"])


def _serialize(exam) -> dict:
    return ExamRead.from_exam(exam).model_dump(mode="json")


async def _get_exam_or_404(db: AsyncSession, user: User, exam_id: int):
    exam = await exam_service.get_exam(db, user.id, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")
    return exam


@router.get("", response_model=dict)
async def list_exams(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exams = await exam_service.list_exams(db, user.id)
    return {"success": True, "data": [_serialize(e) for e in exams]}


@router.get("/upcoming", response_model=dict)
async def upcoming(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exams = await exam_service.upcoming_exams(db, user.id)
    return {"success": True, "data": [_serialize(e) for e in exams]}


@router.post("", response_model=dict, status_code=201)
async def create_exam(
    body: ExamCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exam = await exam_service.create_exam(db, user.id, body)
    return {
        "success": True,
        "data": {
            "id": exam.id,
            "name": exam.name,
            "daysRemaining": exam.days_remaining(),
            "message": "Exam added successfully. Reminders set.",
        },
    }


@router.get("/{exam_id}", response_model=dict)
async def show_exam(
    exam_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exam = await _get_exam_or_404(db, user, exam_id)
    return {"success": True, "data": _serialize(exam)}


@router.put("/{exam_id}", response_model=dict)
async def update_exam(
    exam_id: int,
    body: ExamUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exam = await _get_exam_or_404(db, user, exam_id)
    exam = await exam_service.update_exam(db, exam, body.model_dump(exclude_unset=True))
    return {"success": True, "data": _serialize(exam)}


@router.delete("/{exam_id}", response_model=dict)
async def delete_exam(
    exam_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exam = await _get_exam_or_404(db, user, exam_id)
    await exam_service.delete_exam(db, exam)
    return {"success": True, "message": "Exam deleted successfully"}
