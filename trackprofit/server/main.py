"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing, rate limiting), registers the exception handlers and includes
all API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trackprofit.core.database import async_session_maker, init_db
from trackprofit.core.logging_config import get_logger, setup_logging
from trackprofit.core.monitoring import initialize_logfire

from .api.v1 import (
    ad_spending,
    alerts,
    archive,
    bonus,
    chat,
    countries,
    financial,
    health,
    insights,
    kpis,
    marketing,
    profits,
    sales,
    security,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware, RateLimitMiddleware
from .services.security_audit import persist_with_factory

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup; the schema of a production database is
    expected to exist already. Security events still queued are stored on
    shutdown.
    """
    try:
        logger.info("Starting up TrackProfit Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down TrackProfit Server...")
    await persist_with_factory(async_session_maker)


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    TrackProfit Server API

    Backend of the TrackProfit marketing analytics platform for COD e-commerce.
    It records daily marketing, financial, profit, sales and ad spending figures,
    computes KPIs, archives closed months and produces AI narrative insights.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)
setup_exception_handlers(app)

app.add_middleware(LogfireMiddleware)
if settings.security.rate_limit_enabled:
    app.add_middleware(RateLimitMiddleware)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


app.include_router(health.router, tags=["health"])
app.include_router(marketing.router, prefix=f"{constant.API_V1_STR}/marketing")
app.include_router(financial.router, prefix=f"{constant.API_V1_STR}/financial")
app.include_router(profits.router, prefix=f"{constant.API_V1_STR}/profits")
app.include_router(sales.router, prefix=f"{constant.API_V1_STR}/sales")
app.include_router(ad_spending.router, prefix=f"{constant.API_V1_STR}/ad-spending")
app.include_router(bonus.router, prefix=f"{constant.API_V1_STR}/bonus")
app.include_router(kpis.router, prefix=f"{constant.API_V1_STR}/kpis")
app.include_router(archive.router, prefix=f"{constant.API_V1_STR}/archive")
app.include_router(insights.router, prefix=f"{constant.API_V1_STR}/insights")
app.include_router(alerts.router, prefix=f"{constant.API_V1_STR}/alerts")
app.include_router(countries.router, prefix=f"{constant.API_V1_STR}/countries")
app.include_router(chat.router, prefix=f"{constant.API_V1_STR}/chat")
app.include_router(security.router, prefix=f"{constant.API_V1_STR}/security")
