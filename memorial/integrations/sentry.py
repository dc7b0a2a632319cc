# =============================================================================
# Sentry Error Tracking Integration
# =============================================================================
#
# Setup:
#   1. Create a Python project at sentry.io
#   2. Copy DSN to .env: SENTRY_DSN=https://...@sentry.io/...
#
# Usage:
#   init_sentry() is called at app startup (in memorial/api/app.py)
#
# =============================================================================

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from memorial.config import Settings, get_settings
from memorial.core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings | None = None) -> bool:
    """
    Initialize Sentry error tracking.

    Returns True if initialized, False if skipped.
    """
    settings = settings or get_settings()

    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,

        # Performance monitoring (sample 10% of transactions in prod)
        traces_sample_rate=0.1 if settings.is_production else 1.0,

        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],

        send_default_pii=False,

        before_send=_filter_events,
        before_send_transaction=_filter_transactions,
    )

    sentry_sdk.set_tag("storage_backend", settings.storage_backend)

    logger.info("Sentry initialized for %s", settings.environment)
    return True


def _filter_events(event: dict, hint: dict) -> dict | None:
    """Filter out expected errors."""
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]

        # Client mistakes are answered with a 4xx, not reported
        if isinstance(exc_value, (ValidationError, NotFoundError)):
            return None

    return event


def _filter_transactions(event: dict, hint: dict) -> dict | None:
    """Filter out noisy transactions."""
    transaction = event.get("transaction", "")

    if transaction == "/health" or transaction.endswith("health_check"):
        return None

    return event


def capture_exception(error: Exception, **context) -> str | None:
    """
    Capture an exception to Sentry.

    Returns the event ID if captured, None otherwise.
    """
    if not sentry_sdk.get_client().is_active():
        return None

    with sentry_sdk.new_scope() as scope:
        for key, value in context.items():
            scope.set_extra(key, value)
        return sentry_sdk.capture_exception(error)
