"""Request handling helpers behind the FastAPI routes.

Keeps the route module thin: body validation, error-to-HTTP mapping, the
stream relay and the JSON builders for the read-only endpoints live here.

Error mapping
-------------
- ``GatewayError`` subclasses answer with their ``status_code`` and a
  plain-text body holding their message.
- Anything else on the chat path is logged and answered with 500
  ``Internal error``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from pydantic import ValidationError

from inference_gateway.base.constants import (
    INTERNAL_ERROR_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    PROVIDER_NOT_FOUND_MESSAGE,
    PROVIDER_REQUIRED_MESSAGE,
    SERVED_BY_HEADER,
)
from inference_gateway.base.dto import ChatBodyDTO
from inference_gateway.base.errors import GatewayError, InvalidRequestError, ProviderNotFoundError, classify_exception
from inference_gateway.base.logging import LogContext, get_logger, log_event, normalized_log_event
from inference_gateway.base.models import CanonicalChatRequest
from inference_gateway.base.streaming import LiveStream
from inference_gateway.di.container import GatewayContainer

_logger = get_logger("gateway.service")

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"

# pydantic error types that mean "a required field is absent or empty"
_MISSING_ERROR_TYPES = {"missing", "too_short", "value_error", "string_type", "list_type"}


def get_container(request: Request) -> GatewayContainer:
    """FastAPI dependency returning the application's container."""
    return request.app.state.container


def _validation_message(exc: ValidationError) -> str:
    if all(err.get("type") in _MISSING_ERROR_TYPES for err in exc.errors()):
        return MISSING_FIELDS_MESSAGE
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"Invalid request: {loc}: {first.get('msg')}"


async def parse_chat_body(request: Request) -> CanonicalChatRequest:
    """Validate the inbound JSON body into a canonical request.

    Raises:
        InvalidRequestError: body is not JSON, not an object, or lacks
            ``messages``/``provider``/``model``.
    """
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE) from exc
    if not isinstance(payload, dict):
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE)
    try:
        return ChatBodyDTO.model_validate(payload).to_canonical()
    except ValidationError as exc:
        raise InvalidRequestError(_validation_message(exc)) from exc


def error_response(exc: GatewayError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def relay_stream(
    stream: LiveStream,
    request: Request,
    ctx: LogContext,
) -> AsyncIterator[bytes]:
    """Forward text deltas as they arrive; close upstream on any exit.

    The client disconnecting (detected between chunks, or as cancellation of
    the response task) ends the relay and closes the upstream connection
    without draining it. Failures after the first byte cannot change the
    status code any more, so they are logged and end the body.
    """
    events = stream.__aiter__()
    phase = "completed"
    try:
        async for event in events:
            if await request.is_disconnected():
                phase = "cancelled"
                break
            yield event.encode()
    except Exception as exc:
        phase = "error"
        normalized_log_event(
            _logger,
            "stream.error",
            ctx,
            phase="streaming",
            emitted=stream.emitted,
            error_code=classify_exception(exc).value,
            level=logging.WARNING,
            error=str(exc),
        )
    except BaseException:
        # client disconnect surfaces as cancellation or generator close
        phase = "cancelled"
        raise
    finally:
        await events.aclose()
        await stream.aclose()
        event_name = "stream.cancelled" if phase == "cancelled" else "stream.end"
        normalized_log_event(_logger, event_name, ctx, phase=phase, emitted=stream.emitted)


async def handle_chat(request: Request, container: GatewayContainer) -> Response:
    """Drive one chat call end to end and build the HTTP response."""
    request_id = uuid.uuid4().hex
    try:
        canonical = await parse_chat_body(request)
        outcome = await container.orchestrator().run(canonical, request_id=request_id)
    except GatewayError as exc:
        log_event(
            _logger,
            "chat.rejected",
            LogContext(provider=exc.provider, model=exc.model, request_id=request_id),
            level=logging.INFO if exc.status_code < 500 else logging.WARNING,
            status=exc.status_code,
            error_code=exc.code.value,
        )
        return error_response(exc)
    except Exception:
        _logger.exception("chat.internal_error request_id=%s", request_id)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

    if not outcome.is_stream:
        return JSONResponse({"result": outcome.result})

    ctx = LogContext(provider=outcome.provider_id, model=canonical.model_id, request_id=request_id)
    return StreamingResponse(
        relay_stream(outcome.stream, request, ctx),
        media_type=STREAM_MEDIA_TYPE,
        headers={SERVED_BY_HEADER: outcome.provider_id, "Cache-Control": "no-cache"},
    )


async def build_models_response(provider: Optional[str], container: GatewayContainer) -> JSONResponse:
    if not provider or not provider.strip():
        return JSONResponse({"error": PROVIDER_REQUIRED_MESSAGE}, status_code=400)
    try:
        models = await container.directory().list_models(provider.strip())
    except ProviderNotFoundError:
        return JSONResponse({"error": PROVIDER_NOT_FOUND_MESSAGE}, status_code=404)
    return JSONResponse({"models": list(models)})


def build_providers_response(container: GatewayContainer) -> Dict[str, Any]:
    """List catalog providers without exposing credentials."""
    credentials = container.credentials()
    return {
        "providers": [
            {
                "id": d.id,
                "display_name": d.display_name,
                "protocol_kind": d.protocol_kind.value,
                "default_models": list(d.default_models),
                "has_credential": credentials.has_credential(d),
            }
            for d in container.registry().descriptors()
        ]
    }


__all__ = [
    "STREAM_MEDIA_TYPE",
    "get_container",
    "parse_chat_body",
    "error_response",
    "relay_stream",
    "handle_chat",
    "build_models_response",
    "build_providers_response",
]
