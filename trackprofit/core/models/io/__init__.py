"""
Pydantic request and response schemas of the HTTP API.
"""

from .ad_spending import AdSpendingCreate, AdSpendingRead
from .archive import CloseMonthRequest, CloseMonthResponse
from .bonus import MonthlyBonusRead, MonthlyBonusWrite
from .chat import ChatContext, ChatMessageRead, ChatRequest, ChatResponse
from .common import DeleteResponse, TrackedRowRead
from .countries import CountryDataRead, CountryDataWrite
from .financial import FinancialSummary, FinancialTrackingRead, FinancialTrackingWrite
from .insights import AIAlertRead, AnomalyRunRequest, AnomalyRunResponse, InsightsRequest, InsightsResponse
from .marketing import (
    MarketingPerformanceRead,
    MarketingPerformanceWrite,
    MarketingResultRow,
    MarketingResultsResponse,
)
from .profits import ProfitTrackingCreate, ProfitTrackingRead, ProfitTrackingUpdate
from .sales import SalesDataCreate, SalesDataRead
from .security import CSRFTokenResponse, SecurityEventRead

__all__ = [
    "AIAlertRead",
    "AdSpendingCreate",
    "AdSpendingRead",
    "AnomalyRunRequest",
    "AnomalyRunResponse",
    "CSRFTokenResponse",
    "ChatContext",
    "ChatMessageRead",
    "ChatRequest",
    "ChatResponse",
    "CloseMonthRequest",
    "CloseMonthResponse",
    "CountryDataRead",
    "CountryDataWrite",
    "DeleteResponse",
    "FinancialSummary",
    "FinancialTrackingRead",
    "FinancialTrackingWrite",
    "InsightsRequest",
    "InsightsResponse",
    "MarketingPerformanceRead",
    "MarketingPerformanceWrite",
    "MarketingResultRow",
    "MarketingResultsResponse",
    "MonthlyBonusRead",
    "MonthlyBonusWrite",
    "ProfitTrackingCreate",
    "ProfitTrackingRead",
    "ProfitTrackingUpdate",
    "SalesDataCreate",
    "SalesDataRead",
    "SecurityEventRead",
    "TrackedRowRead",
]
