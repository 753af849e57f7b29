"""
Request Dependencies.

Shared FastAPI dependencies: database session, caller identity, service token
and CSRF checks, and the narrative model used by the AI endpoints.
"""

import secrets
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.core.database import get_session
from trackprofit.core.models.io.common import MONTH_LABEL_PATTERN
from trackprofit.llm import NarrativeModel
from trackprofit.security import csrf_protection, log_security_event

from ..core.config import settings
from ..core.constant import CSRF_HEADER, SERVICE_TOKEN_HEADER, USER_ID_HEADER
from .security_audit import persist_security_events

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user_id(
    user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER, description="Authenticated user id")] = None,
) -> str:
    """Caller identity, forwarded by the authenticating gateway."""
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Missing {USER_ID_HEADER} header")
    return user_id.strip()


CurrentUserDep = Annotated[str, Depends(get_current_user_id)]


async def verify_service_token(
    token: Annotated[Optional[str], Header(alias=SERVICE_TOKEN_HEADER)] = None,
) -> None:
    """Guard scheduled job endpoints when a service token is configured."""
    expected = settings.security.service_token
    if not expected:
        return
    if not token or not secrets.compare_digest(token, expected):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid service token")


ServiceTokenDep = Depends(verify_service_token)


async def verify_csrf_token(
    session: SessionDep,
    token: Annotated[Optional[str], Header(alias=CSRF_HEADER)] = None,
    user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> None:
    """
    Require a valid single use CSRF token on mutating requests when protection is enabled.

    Rejections are recorded in the security audit trail before the 403 is raised.
    """
    if not settings.security.csrf_protection_enabled:
        return
    if not token:
        log_security_event(
            event_type="CSRF_TOKEN_MISSING",
            severity="medium",
            description="Mutating request without CSRF token",
            user_id=user_id,
        )
    elif csrf_protection.validate_token(token, user_id=user_id):
        return
    await persist_security_events(session)
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or missing CSRF token")


CSRFDep = Depends(verify_csrf_token)


@lru_cache
def get_narrative_model() -> NarrativeModel:
    """Process-wide narrative model, built on first use."""
    return NarrativeModel()


NarrativeModelDep = Annotated[NarrativeModel, Depends(get_narrative_model)]

MonthQuery = Annotated[str, Query(pattern=MONTH_LABEL_PATTERN, description="Month to read (YYYY-MM)")]
ArchiveQuery = Annotated[bool, Query(description="Read the archive table of the month instead of the current one")]
