import os

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from pm_reports.api import errors
from pm_reports.api.routers import (
    admin_private_message_reports_router,
    healthz_router,
    private_messages_router,
)
from pm_reports.logging import setup_logging
from pm_reports.middleware.request_id import request_id_middleware

tags_metadata = [
    {"name": "admin", "description": "Moderation queue for private message reports"},
    {"name": "private-messages", "description": "Filing reports against private messages"},
]


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


def create_app() -> FastAPI:
    # Initialize structured logging first
    setup_logging()

    env = os.getenv("APP_ENV", "dev")
    _init_sentry(env)

    app = FastAPI(
        title="Private Message Report API",
        version="0.1.0",
        openapi_tags=tags_metadata,
    )
    app.middleware("http")(request_id_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(admin_private_message_reports_router)
    app.include_router(private_messages_router)
    app.include_router(healthz_router, tags=["health"])

    structlog.get_logger(__name__).info("app_startup", env=env)
    return app


app = create_app()
