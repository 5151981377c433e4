"""
StudyMate API - Main Application
Study plan generation + exam tracking + flashcard performance for the
StudyMate mobile app.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studymate import __version__
from studymate.config import settings
from studymate.db import create_db_and_tables
from studymate.models import utcnow
from studymate.planner import ValidationError as PlannerValidationError
from studymate.api import exams, performance, search, study_plans

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("studymate")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.env != "prod":
        await create_db_and_tables()
    logger.info("studymate_online", extra={"env": settings.env, "version": __version__})
    yield
    logger.info("studymate_offline")


app = FastAPI(
    title="StudyMate",
    description="Backend for the StudyMate study assistant: plans, exams and performance.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlannerValidationError)
async def planner_validation_handler(request: Request, exc: PlannerValidationError):
    logger.info("schedule_request_rejected", extra={"field": exc.field, "path": request.url.path})
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": exc.message, "field": exc.field},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": message, "errors": jsonable_encoder(errors)},
    )


@app.get("/health")
@app.get("/api/health")
def health():
    return {
        "success": True,
        "message": "AI StudyMate API is running",
        "version": __version__,
        "timestamp": utcnow().isoformat(),
    }


app.include_router(study_plans.router, prefix="/api")
app.include_router(exams.router, prefix="/api")
app.include_router(performance.router, prefix="/api")
app.include_router(search.router, prefix="/api")
