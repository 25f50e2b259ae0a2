"""SSV Rewards API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RewardsError -> structured JSON responses
    - Database and the platform -> verifier mapping initialized once in lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Verifiers stored on app.state so the AdMob key cache outlives individual requests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ssv_rewards.api.error_handlers import register_error_handlers
from ssv_rewards.api.routes import health, reward_webhooks
from ssv_rewards.config import get_settings
from ssv_rewards.infrastructure import database
from ssv_rewards.infrastructure.observability import setup_logging
from ssv_rewards.services.verifier_registry import build_verifiers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.verifiers = build_verifiers(settings)
    logger.info("SSV Rewards API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("SSV Rewards API shutting down")


app = FastAPI(
    title="SSV Rewards API", version="1.0.0", lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(reward_webhooks.router)

register_error_handlers(app)
