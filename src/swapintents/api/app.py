"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swapintents import __version__
from swapintents.config import get_settings
from swapintents.engine.intents import SwapIntents
from swapintents.web.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    intents: SwapIntents = app.state.intents
    logger.info(f"Serving quotes from: {', '.join(intents.registry.identifiers) or 'none'}")
    yield
    logger.info("Quote API shutting down")


def create_app(intents: Optional[SwapIntents] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        intents: Engine to serve; built from the environment settings if omitted
    """
    settings = get_settings()
    if intents is None:
        intents = SwapIntents(settings)

    app = FastAPI(
        title="Swap Intents API",
        description="Price and quote aggregation across swap and bridge protocols",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.intents = intents
    app.state.quote_service = QuoteService(intents)

    from swapintents.api.routes import health
    from swapintents.web.controllers import quotes_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(quotes_router)

    return app
