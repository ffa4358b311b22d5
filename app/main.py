import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, load_settings
from app.errors import ScanFailure, http_exception_handler, scan_failure_handler
from app.logging_config import setup_logging
from app.middleware import RequestLoggingMiddleware
from app.receipt.base import UnconfiguredExtractor
from app.receipt.factory import create_extractor
from app.routes import scan


def _init_sentry(dsn: str) -> None:
    # With RECEIPT_PROVIDER=openai the Agents SDK is imported and sentry-sdk
    # would auto-enable an integration that breaks on current SDK versions
    _disabled = []
    try:
        from sentry_sdk.integrations.openai_agents import OpenAIAgentsIntegration
        _disabled.append(OpenAIAgentsIntegration)
    except ImportError:
        pass
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=0.1,
        send_default_pii=False,
        disabled_integrations=_disabled,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = load_settings()

    if settings.sentry_dsn:
        _init_sentry(settings.sentry_dsn)

    setup_logging(settings.log_level)

    app = FastAPI(title="Splitscan API", version="0.1.0")
    app.state.settings = settings
    app.state.extractor = create_extractor(settings)

    app.add_exception_handler(ScanFailure, scan_failure_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(scan.router, prefix="/api")

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "configured": not isinstance(app.state.extractor, UnconfiguredExtractor),
        }

    return app


app = create_app()
