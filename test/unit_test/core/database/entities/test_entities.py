"""Unit tests for the database entity models.

Tests table names, defaults and the archive table layout.
"""

from __future__ import annotations

from datetime import date

from trackprofit.core.database.base import Base
from trackprofit.core.database.entities import (
    CPD_CATEGORIES,
    AIAlert,
    AIChatMessage,
    ArchiveMarketingPerformance,
    CountryData,
    InsightsCache,
    MarketingPerformance,
    MessageRole,
    ProfitTracking,
    SecurityEvent,
    SourceType,
)
from trackprofit.core.database.repositories import ARCHIVE_PAIRS


class TestTrackingEntities:
    """Tests for the per-day tracking tables."""

    def test_marketing_defaults(self):
        row = MarketingPerformance(user_id="user-1", date=date(2024, 3, 1))

        assert row.spend_usd == 0.0
        assert row.leads == 0
        assert row.deliveries == 0
        assert row.created_at is not None

    def test_profit_source_type_default(self):
        row = ProfitTracking(user_id="user-1", date=date(2024, 3, 1), cpd_category=15, product_name="x", quantity=1)

        assert row.source_type == SourceType.NORMAL.value == "normale"
        assert row.commission_total == 0.0

    def test_cpd_categories(self):
        assert CPD_CATEGORIES[0] == 110
        assert CPD_CATEGORIES == sorted(CPD_CATEGORIES)

    def test_marketing_is_unique_per_user_and_day(self):
        constraints = {c.name for c in MarketingPerformance.__table__.constraints}

        assert "uq_marketing_performance_user_date" in constraints


class TestArchiveTables:
    """Tests for the archive copies of the tracking tables."""

    def test_archive_tables_carry_month_label(self):
        for pair in ARCHIVE_PAIRS:
            dest_columns = set(pair.dest.__table__.columns.keys())
            src_columns = set(pair.src.__table__.columns.keys())

            assert dest_columns - src_columns == {"month_label"}

    def test_archive_row(self):
        row = ArchiveMarketingPerformance(user_id="user-1", date=date(2024, 2, 1), month_label="2024-02")

        assert row.month_label == "2024-02"

    def test_every_table_is_registered(self):
        tables = set(Base.metadata.tables)

        assert {
            "marketing_performance",
            "financial_tracking",
            "profit_tracking",
            "sales_data",
            "ad_spending_data",
            "monthly_bonus",
            "insights_cache",
            "alerts_ai",
            "ai_chat_history",
            "system_logs",
            "security_events",
            "country_data",
        } <= tables


class TestAIEntities:
    """Tests for insights, alerts and chat messages."""

    def test_alert_defaults(self):
        alert = AIAlert(user_id="user-1", title="Anomalies", content="...")

        assert alert.type == "anomaly"
        assert alert.severity == "medium"
        assert alert.is_read is False

    def test_insights_cache_defaults(self):
        entry = InsightsCache(user_id="user-1", content="...")

        assert entry.insights_type == "monthly"
        assert entry.expires_at is None

    def test_chat_message_repr(self):
        message = AIChatMessage(id=3, user_id="user-1", session_id="s-1", role=MessageRole.USER.value, content="hi")

        assert repr(message) == "AIChatMessage(id=3, session_id=s-1, role=user)"


class TestAuditAndCountryEntities:
    """Tests for security events and per-country results."""

    def test_security_event_defaults(self):
        event = SecurityEvent(event_type="CSRF_TOKEN_REUSE", severity="high", description="reuse")

        assert event.user_id is None
        assert event.created_at.tzinfo is not None

    def test_country_data_is_unique_per_period(self):
        constraints = {c.name for c in CountryData.__table__.constraints}

        assert "uq_country_data_user_country_period" in constraints

    def test_country_data_defaults(self):
        row = CountryData(
            user_id="user-1",
            country_code="SN",
            country_name="Sénégal",
            period_start=date(2024, 3, 1),
            period_end=date(2024, 3, 31),
        )

        assert row.revenue_mad == 0.0
        assert row.cpl_mad is None
