"""Logfire setup for the API, the push worker and the maintenance job.

Services log through the logfire module directly:

    logfire.info("Vote cast", actor_id=str(actor_id), votable_id=str(votable_id))

    with logfire.span("push_delivery_worker.deliver", notification_id=...):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from board.config import Settings

# Attribute names that can carry session tokens or push encryption keys
SECRET_PATTERNS = ["auth_token", "p256dh", "keys_auth", "vapid_private_key"]


def configure_logfire(settings: Settings, service_name: str = "board-api") -> None:
    """Configure Logfire once per process.

    Telemetry goes to Logfire cloud when OBSERVABILITY__SEND_TO_LOGFIRE is
    true, or when it is unset and OBSERVABILITY__LOGFIRE_TOKEN is present.
    Otherwise everything stays on the console.

    Args:
        settings: Application settings
        service_name: Name reported for this process
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=service_name,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SECRET_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        service=service_name,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request with its route and client host.

    Headers are never captured because the session cookie travels in them.
    """

    def _request_attributes(request, attributes):
        result = {**attributes, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement, tagging the SQL with the active span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
