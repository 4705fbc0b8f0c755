import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.pymongo import PyMongoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from clouddrive.core.exceptions import AppError

HEALTH_PATHS = ("/health",)
FILTERED = "[Filtered]"
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-api-key"})


def init_sentry(
    dsn: str,
    environment: str = "dev",
    release: str | None = None,
    traces_sample_rate: float = 0.2,
    send_default_pii: bool = False,
):
    """Report server-side storage failures; caller mistakes (4xx) stay out of Sentry"""
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        send_default_pii=send_default_pii,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            PyMongoIntegration(),
            LoggingIntegration(level=None, event_level="ERROR"),
        ],
        before_send=scrub_event,
        before_send_transaction=drop_health_transactions,
    )


def scrub_event(event, hint=None):
    exc_info = (hint or {}).get("exc_info")
    error = exc_info[1] if exc_info else None
    if isinstance(error, AppError):
        if error.status_code < 500:
            return None
        event.setdefault("tags", {})["error.code"] = error.code
        if error.details:
            # Orphaned blob refs and the like, needed for manual reconciliation
            event.setdefault("extra", {})["details"] = error.details

    request = event.get("request") or {}
    headers = request.get("headers") or {}
    for name in list(headers):
        if name.lower() in SENSITIVE_HEADERS:
            headers[name] = FILTERED
    if request.get("data") and str(request.get("url", "")).endswith("/upload"):
        request["data"] = FILTERED
    return event


def drop_health_transactions(event, hint=None):
    name = str(event.get("transaction") or "")
    if any(path in name for path in HEALTH_PATHS):
        return None
    return event
