"""Logfire setup and library instrumentation.

Services and repositories trace their work directly:

    with logfire.span("post_service.toggle_like", post_id=str(post_id)):
        ...
    logfire.info("Post created", post_id=str(post.id), category=post.category.value)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from fpv.config import Settings

SERVICE_NAME = "fpv-backend"


def _should_send(settings: Settings) -> bool:
    """Explicit flag wins, otherwise send only when a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Console output is always on; cloud export follows
    OBSERVABILITY__SEND_TO_LOGFIRE and OBSERVABILITY__LOGFIRE_TOKEN.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
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
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    """Add path and method; drop the bearer token from the traced parameters."""
    mapped = dict(attributes)
    values = mapped.get("values")
    if isinstance(values, dict):
        mapped["values"] = {
            name: value
            for name, value in values.items()
            if name.lower() != "authorization"
        }
    mapped["path"] = request.url.path
    if getattr(request, "method", None):
        mapped["method"] = request.method
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the given engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound HTTP (Firebase signing key fetches)."""
    logfire.instrument_httpx()
