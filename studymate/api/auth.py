"""
Caller identity.
Tokens are issued by the mobile app's identity provider; the API only
verifies them and maps the `sub` claim to a local user row.
"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from studymate.config import settings
from studymate.db import get_db
from studymate.models import User, utcnow

logger = logging.getLogger("studymate")
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(uid: str, email: Optional[str] = None, name: Optional[str] = None) -> str:
    """Mint a token the way the identity provider does. Dev scripts and tests only."""
    now = utcnow()
    payload = {
        "sub": uid,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    if email:
        payload["email"] = email
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Token has no subject")
    return payload


async def get_or_create_user(
    db: AsyncSession,
    firebase_uid: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
) -> User:
    stmt = select(User).where(User.firebase_uid == firebase_uid)
    user = await db.scalar(stmt)
    if user:
        return user

    user = User(
        firebase_uid=firebase_uid,
        email=email or "unknown@example.com",
        display_name=display_name,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # a concurrent first request inserted the same uid
        await db.rollback()
        return await db.scalar(stmt)
    await db.refresh(user)
    logger.info("user_created", extra={"user_id": user.id})
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    payload = decode_token(credentials.credentials)
    return await get_or_create_user(
        db,
        payload["sub"],
        email=payload.get("email"),
        display_name=payload.get("name"),
    )
