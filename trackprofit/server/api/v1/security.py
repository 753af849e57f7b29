"""
Security endpoints.

CSRF token issuing for the dashboard, and read access to the security audit
trail for operators (guarded by the service token).
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Header, Query

from trackprofit.core.database.repositories import SecurityEventRepository
from trackprofit.core.models.io import CSRFTokenResponse, SecurityEventRead
from trackprofit.security import csrf_protection
from trackprofit.security.csrf import TOKEN_LIFETIME_SECONDS

from ...core.constant import CSRF_HEADER, USER_ID_HEADER
from ...services.deps import ServiceTokenDep, SessionDep
from ...services.security_audit import persist_security_events

router = APIRouter(tags=["security"])


@router.get(
    "/csrf-token",
    response_model=CSRFTokenResponse,
    summary="Issue CSRF Token",
    description="Issue a single use token to send in the X-CSRF-Token header of the next mutating request.",
)
async def issue_csrf_token(
    user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> CSRFTokenResponse:
    token = csrf_protection.generate_token(session_id=user_id)
    return CSRFTokenResponse(token=token, expires_in=TOKEN_LIFETIME_SECONDS, header=CSRF_HEADER)


@router.get(
    "/events",
    response_model=List[SecurityEventRead],
    dependencies=[ServiceTokenDep],
    summary="List Security Events",
    description="Most recent security events, newest first. Events still queued in memory are stored first.",
)
async def list_security_events(
    session: SessionDep,
    event_type: Annotated[Optional[str], Query(max_length=64)] = None,
    user_id: Annotated[Optional[str], Query(max_length=64)] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> List[SecurityEventRead]:
    await persist_security_events(session)
    events = await SecurityEventRepository(session).latest(limit=limit, event_type=event_type, user_id=user_id)
    return [SecurityEventRead.model_validate(event) for event in events]
