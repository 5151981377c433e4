"""
Flashcard performance tracking.
Every attempt is stored; the (subject, topic) accuracy is recomputed from
the full attempt history so weak topics never drift from the records.
"""

import logging
from typing import List, Optional

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studymate.config import settings
from studymate.models import PerformanceRecord, WeakTopic, utcnow
from studymate.schema.request import ScoreUpdateRequest
from studymate.schema.response import PerformanceStatistics, SubjectStatistics

logger = logging.getLogger("studymate")


def accuracy_percent(correct: int, total: int) -> float:
    if not total:
        return 0.0
    return round(correct * 100.0 / total, 2)


async def record_attempt(
    db: AsyncSession,
    user_id: int,
    body: ScoreUpdateRequest,
) -> tuple[PerformanceRecord, WeakTopic]:
    now = utcnow()
    record = PerformanceRecord(
        user_id=user_id,
        flashcard_id=body.flashcard_id,
        subject=body.subject,
        topic=body.topic,
        is_correct=body.is_correct,
        response_time=body.response_time,
        attempted_at=now,
    )
    db.add(record)
    await db.flush()

    total, correct = (await db.execute(
        select(
            func.count(PerformanceRecord.id),
            func.sum(case((PerformanceRecord.is_correct == True, 1), else_=0)),  # noqa: E712
        )
        .where(PerformanceRecord.user_id == user_id)
        .where(PerformanceRecord.subject == body.subject)
        .where(PerformanceRecord.topic == body.topic)
    )).one()

    topic = await db.scalar(
        select(WeakTopic)
        .where(WeakTopic.user_id == user_id)
        .where(WeakTopic.subject == body.subject)
        .where(WeakTopic.topic == body.topic)
    )
    if topic is None:
        topic = WeakTopic(user_id=user_id, subject=body.subject, topic=body.topic, accuracy=0.0)
    topic.accuracy = accuracy_percent(correct or 0, total)
    topic.total_attempts = total
    topic.last_attempted_at = now
    topic.updated_at = now
    db.add(topic)

    await db.commit()
    await db.refresh(record)
    await db.refresh(topic)

    logger.info(
        "flashcard_attempt_recorded",
        extra={"user_id": user_id, "subject": body.subject, "topic": body.topic, "accuracy": topic.accuracy},
    )
    return record, topic


async def weak_topics(
    db: AsyncSession,
    user_id: int,
    threshold: Optional[float] = None,
) -> List[WeakTopic]:
    """Topics below `threshold` percent accuracy, weakest first."""
    threshold = settings.weak_topic_threshold if threshold is None else threshold
    res = await db.execute(
        select(WeakTopic)
        .where(WeakTopic.user_id == user_id)
        .where(WeakTopic.accuracy < threshold)
        .order_by(WeakTopic.accuracy, WeakTopic.subject, WeakTopic.topic)
    )
    return list(res.scalars().all())


async def statistics(db: AsyncSession, user_id: int) -> PerformanceStatistics:
    correct_expr = func.sum(case((PerformanceRecord.is_correct == True, 1), else_=0))  # noqa: E712

    rows = (await db.execute(
        select(PerformanceRecord.subject, func.count(PerformanceRecord.id), correct_expr)
        .where(PerformanceRecord.user_id == user_id)
        .group_by(PerformanceRecord.subject)
        .order_by(PerformanceRecord.subject)
    )).all()

    subjects = [
        SubjectStatistics(
            subject=subject or "Uncategorized",
            total_attempts=total,
            correct=correct or 0,
            accuracy=accuracy_percent(correct or 0, total),
        )
        for subject, total, correct in rows
    ]
    total = sum(s.total_attempts for s in subjects)
    correct = sum(s.correct for s in subjects)

    avg_response = await db.scalar(
        select(func.avg(PerformanceRecord.response_time))
        .where(PerformanceRecord.user_id == user_id)
    )
    weak = await weak_topics(db, user_id)

    return PerformanceStatistics(
        total_attempts=total,
        correct=correct,
        accuracy=accuracy_percent(correct, total),
        average_response_time=round(avg_response, 2) if avg_response is not None else None,
        subjects=subjects,
        weak_topic_count=len(weak),
    )
