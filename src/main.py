"""InternMatch service entry point.

Usage:
    python -m src.main

Serves POST /match and GET /health.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.match import router as match_router
from src.config import settings
from src.eligibility.criteria import get_criteria

logger = logging.getLogger(__name__)


def configure_logging(level: str, json_output: bool = False) -> None:
    """Route stdlib logging to stdout and set up structlog on top of it.

    Production gets JSON lines; everywhere else a readable console format.
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(settings.log_level, json_output=settings.is_production)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Build the rule set up front so a bad configuration fails at startup
    criteria = get_criteria()
    logger.info(
        "InternMatch starting (env=%s): age %d-%d, income ceiling %s, %d premier institutes",
        settings.environment,
        criteria.min_age,
        criteria.max_age,
        criteria.income_ceiling,
        len(criteria.premier_institutes),
    )

    integrations = settings.integrations
    if not integrations.document_analysis_url:
        logger.warning("DOCUMENT_ANALYSIS_URL not set, uploaded documents will be treated as absent")
    logger.info("Listing source: %s", integrations.listing_pool_url or integrations.listing_catalog_path)

    yield

    logger.info("InternMatch stopped")


app = FastAPI(
    title="InternMatch API",
    description="PM Internship Scheme eligibility check and internship matching",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(match_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "environment": settings.environment}


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
