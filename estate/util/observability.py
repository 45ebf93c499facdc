"""Logfire setup and instrumentation.

Spans and structured events go through ``logfire`` directly::

    with logfire.span("identity_service.create", email=email):
        logfire.info("Identity created", identity_id=str(identity.id))

Verification tokens, one-time codes and password hashes must never be
span attributes. The scrubbing patterns below redact them if they slip
through under their usual names.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from estate.config import Settings

SERVICE_NAME = "estate-api"
SERVICE_VERSION = "0.1.0"

# Attribute names redacted in addition to logfire's defaults
SCRUB_PATTERNS = [
    "otp",
    "phone_otp",
    "verification_token",
    "reset_token",
    "password_hash",
    "credential",
]


def should_send_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins; otherwise send only when a token is configured."""
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current environment.

    Console output is always on. Cloud export is controlled by
    OBSERVABILITY__SEND_TO_LOGFIRE and OBSERVABILITY__LOGFIRE_TOKEN.
    """
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    """Add method, path and client host; WebSocket requests have no method."""
    mapped = dict(attributes)
    method = getattr(request, "method", None)
    if method is not None:
        mapped["method"] = method
    mapped["path"] = request.url.path
    if request.client:
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request. Headers are not captured so bearer tokens stay out."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the identity store engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound HTTP, such as the Google signing-key fetch."""
    logfire.instrument_httpx()
