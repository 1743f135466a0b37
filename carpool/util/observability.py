"""Logfire setup for the carpool API.

Services log with ``logfire.info/warn/error`` and wrap each domain operation
in ``logfire.span("<service>.<operation>", trip_id=...)``. This module only
configures the SDK and instruments FastAPI and the SQLAlchemy engine.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from carpool.config import Settings

SERVICE_NAME = "carpool-api"


def configure_logfire(settings: Settings) -> None:
    """Configure the Logfire SDK once per process.

    Traces go to Logfire cloud when ``OBSERVABILITY__SEND_TO_LOGFIRE`` says so,
    or, when that is unset, whenever ``OBSERVABILITY__LOGFIRE_TOKEN`` is present.
    """
    observability = settings.observability
    send_to_logfire = (
        observability.send_to_logfire
        if observability.send_to_logfire is not None
        else bool(observability.logfire_token)
    )

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
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


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    """Tag spans with the transport and the trip a request targets."""
    result = {**attributes}
    # WebSocket scopes have no method
    result["transport"] = "http" if hasattr(request, "method") else "websocket"

    trip_id = request.path_params.get("trip_id")
    if trip_id is not None:
        result["trip_id"] = str(trip_id)

    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and WebSocket connections of the app."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,  # Cookies carry bearer tokens
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
