from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from studymate.api.auth import get_current_user
from studymate.db import get_db
from studymate.models import User
from studymate.schema.response import ExamRead, SearchResults, StudyPlanRead
from studymate.services import search_service


router = APIRouter(tags=["search"])


@router.get("/search", response_model=dict)
async def search(
    q: str = Query(..., min_length=1, max_length=255),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    query = q.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Search query must not be blank")
    exams, plans = await search_service.search(db, user.id, query)
    results = SearchResults(
        query=query,
        exams=[ExamRead.from_exam(e) for e in exams],
        study_plans=[StudyPlanRead.model_validate(p) for p in plans],
        counts={"exams": len(exams), "study_plans": len(plans)},
    )
    return {"success": True, "data": results.model_dump(mode="json")}
