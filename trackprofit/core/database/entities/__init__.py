"""
Database entities.

Importing this package registers every table on the shared metadata.
"""

from .ad_spending import AdSpendingData, ArchiveAdSpendingData
from .bonus import MonthlyBonus
from .chat_history import AIChatMessage, MessageRole
from .country_data import CountryData
from .financial import ArchiveFinancialTracking, FinancialTracking
from .insights import AIAlert, InsightsCache
from .marketing import ArchiveMarketingPerformance, MarketingPerformance
from .profits import CPD_CATEGORIES, ArchiveProfitTracking, ProfitTracking, SourceType
from .sales import ArchiveSalesData, SalesData
from .security_events import SecurityEvent
from .system_logs import SystemLog

__all__ = [
    "AIAlert",
    "AIChatMessage",
    "AdSpendingData",
    "ArchiveAdSpendingData",
    "ArchiveFinancialTracking",
    "ArchiveMarketingPerformance",
    "ArchiveProfitTracking",
    "ArchiveSalesData",
    "CPD_CATEGORIES",
    "CountryData",
    "FinancialTracking",
    "InsightsCache",
    "MarketingPerformance",
    "MessageRole",
    "MonthlyBonus",
    "ProfitTracking",
    "SalesData",
    "SecurityEvent",
    "SourceType",
    "SystemLog",
]
