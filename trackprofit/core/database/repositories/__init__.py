"""
Repositories, one per concern.
"""

from .archive import ARCHIVE_PAIRS, ARCHIVE_TABLES, ArchivePair, ArchiveRepository, archive_model_for
from .base import AsyncBaseRepository, QueryBuilder
from .chat_history import ChatHistoryRepository
from .country_data import CountryDataRepository
from .insights import AIAlertRepository, InsightsCacheRepository
from .security_events import SecurityEventRepository
from .system_logs import SystemLogRepository
from .tracking import TrackedRowRepository

__all__ = [
    "AIAlertRepository",
    "ARCHIVE_PAIRS",
    "ARCHIVE_TABLES",
    "ArchivePair",
    "ArchiveRepository",
    "AsyncBaseRepository",
    "ChatHistoryRepository",
    "CountryDataRepository",
    "InsightsCacheRepository",
    "QueryBuilder",
    "SecurityEventRepository",
    "SystemLogRepository",
    "TrackedRowRepository",
    "archive_model_for",
]
