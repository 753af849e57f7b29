"""
Database layer for TrackProfit.

Structure:
- entities/: SQLModel tables, one module per tracked concern (current and archive tables)
- repositories/: data access, one module per concern
- session.py: global engine and session factory
- utils.py: engine, session factory and table creation helpers
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]
