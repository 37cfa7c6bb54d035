"""FastAPI application wiring for the accounts service."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .api.errors import register_exception_handlers
from .api.routes import router
from .clients.downstream import DownstreamClient
from .config import Settings, get_settings
from .domain.onboarding import OnboardingOrchestrator
from .domain.service import AccountService
from .ledger import AccountLedger
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    ledger: AccountLedger | None = None,
    downstream: DownstreamClient | None = None,
) -> FastAPI:
    """Build the app; ``ledger`` and ``downstream`` may be injected, otherwise they are created on startup."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the ledger, downstream client and services for the app lifecycle."""
        client = downstream or DownstreamClient(
            settings.identity_base_url,
            settings.catalog_base_url,
            timeout=settings.upstream_timeout_seconds,
        )
        service = AccountService(
            ledger or AccountLedger(),
            client,
            validate_owner=settings.validate_account_owner,
        )
        app.state.account_service = service
        app.state.onboarding = OnboardingOrchestrator(service, client)
        logger.info(
            "%s %s ready (identity=%s, catalog=%s)",
            settings.app_name,
            settings.version,
            settings.identity_base_url,
            settings.catalog_base_url,
        )
        try:
            yield
        finally:
            if downstream is None:
                client.close()

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        """Return a minimal readiness indicator used by orchestration systems."""
        return {"status": "ok", "service": settings.app_name}

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(router)
    return app


app = create_app()
