"""
Performance API: flashcard attempt scoring, weak topics and statistics.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from studymate.api.auth import get_current_user
from studymate.db import get_db
from studymate.models import User
from studymate.schema.request import ScoreUpdateRequest
from studymate.schema.response import WeakTopicRead
from studymate.services import performance_service


router = APIRouter(prefix="/performance", tags=["performance"])


@router.post("/update-score", response_model=dict, status_code=201)
async def update_score(
    body: ScoreUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record, topic = await performance_service.record_attempt(db, user.id, body)
    return {
        "success": True,
        "data": {
            "recordId": record.id,
            "topic": WeakTopicRead.model_validate(topic).model_dump(mode="json"),
        },
    }


@router.get("/weak-topics", response_model=dict)
async def weak_topics(
    threshold: Optional[float] = Query(None, ge=0, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    topics = await performance_service.weak_topics(db, user.id, threshold)
    return {
        "success": True,
        "data": [WeakTopicRead.model_validate(t).model_dump(mode="json") for t in topics],
    }


@router.get("/statistics", response_model=dict)
async def statistics(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stats = await performance_service.statistics(db, user.id)
    return {"success": True, "data": stats.model_dump(mode="json")}
