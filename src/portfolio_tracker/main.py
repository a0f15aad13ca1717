"""Main module for the portfolio tracker service."""
import functools
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from portfolio_tracker.config import get_settings
from portfolio_tracker.providers.core import ProviderErrorMapper
from portfolio_tracker.providers.core.exceptions import AllSourcesUnavailable
from portfolio_tracker.routers import (history_router, portfolio_router,
                                       quote_router)
from portfolio_tracker.services import PollerRegistry
from portfolio_tracker.services.factory import (create_dashboard_service,
                                                create_history_service,
                                                create_poller,
                                                create_quote_service)

logger = logging.getLogger(__name__)

error_mapper = ProviderErrorMapper()


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create providers and services at startup; close providers on shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting with settings: %s", settings.dict_for_logging())

    quote_service = create_quote_service(settings)
    history_service = create_history_service(settings)

    fastapi_app.state.settings = settings
    fastapi_app.state.quote_service = quote_service
    fastapi_app.state.history_service = history_service
    fastapi_app.state.dashboard_service = create_dashboard_service(settings, quote_service)
    fastapi_app.state.pollers = PollerRegistry(
        functools.partial(create_poller, settings, quote_service)
    )

    yield

    # Close provider resources (httpx clients)
    await quote_service.close()


app = FastAPI(
    title="Portfolio Tracker",
    description="Quote fallback chain, holding metrics and RSU vesting analytics",
    version="0.1.0",
    lifespan=lifespan,
)

# Public, non-sensitive market data: any origin may read it.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(AllSourcesUnavailable)
async def provider_error_handler(_: Request, exc: AllSourcesUnavailable):
    """Render chain failures as {"error", "message", "details"}."""
    return error_mapper.to_response(exc)


app.include_router(quote_router)
app.include_router(portfolio_router)
app.include_router(history_router)


@app.get("/")
def health():
    """Return health check status."""
    return {"status": "ok"}


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    uvicorn.run("portfolio_tracker.main:app", host="127.0.0.1", port=8001)


def run_dev():
    """Run the development server with auto-reload."""
    uvicorn.run("portfolio_tracker.main:app", host="0.0.0.0", port=8000, reload=True)
