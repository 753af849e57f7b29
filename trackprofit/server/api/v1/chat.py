"""
Assistant chat endpoints.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from trackprofit.core.database.repositories import ChatHistoryRepository
from trackprofit.core.models.io import ChatMessageRead, ChatRequest, ChatResponse

from ...services.chat_service import ChatService
from ...services.deps import CSRFDep, CurrentUserDep, NarrativeModelDep, SessionDep

router = APIRouter(tags=["chat"])


@router.post(
    "",
    response_model=ChatResponse,
    dependencies=[CSRFDep],
    summary="Ask the Assistant",
    description="Send a message to the marketing assistant. The last six messages of the session are used as context.",
    responses={400: {"description": "Empty message"}, 502: {"description": "The language model call failed"}},
)
async def chat(
    payload: ChatRequest, user_id: CurrentUserDep, session: SessionDep, narrative_model: NarrativeModelDep
) -> ChatResponse:
    try:
        return await ChatService(session, narrative_model).chat(
            user_id, payload.session_id, payload.message, payload.context
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get(
    "/{session_id}/messages",
    response_model=List[ChatMessageRead],
    summary="Chat History",
    description="The latest messages of a session in chronological order.",
)
async def chat_history(
    session_id: str, user_id: CurrentUserDep, session: SessionDep, limit: int = Query(default=50, ge=1, le=200)
) -> List[ChatMessageRead]:
    messages = await ChatHistoryRepository(session).recent(user_id, session_id, limit=limit)
    return [ChatMessageRead.model_validate(message) for message in messages]
