"""
Security Audit Service.

Moves security events queued by ``log_security_event`` into the
``security_events`` table. Storing is best effort: when the database rejects
the batch, the events go back to the queue for the next attempt.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trackprofit.core.database.repositories import SecurityEventRepository
from trackprofit.core.logging_config import get_logger
from trackprofit.security import drain_pending_events, requeue_events

logger = get_logger(__name__)


async def persist_security_events(session: AsyncSession) -> int:
    """
    Store every queued security event.

    Args:
        session: Database session to write with

    Returns:
        Number of events stored (0 when the write failed)
    """
    events = drain_pending_events()
    if not events:
        return 0

    try:
        await SecurityEventRepository(session).record(events)
    except Exception as e:
        await session.rollback()
        requeue_events(events)
        logger.warning(f"Could not store {len(events)} security events: {e}")
        return 0

    logger.debug(f"Stored {len(events)} security events")
    return len(events)


async def persist_with_factory(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Store queued events with a session of its own, for code running outside a request scope."""
    async with session_factory() as session:
        return await persist_security_events(session)
