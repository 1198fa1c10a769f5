"""JSON:API error handling for ASGI and FastAPI applications."""

import logging
from typing import Any

from fastapi import FastAPI, Request

from hateoas_jsonapi.core.errors import JSONAPICodecError, JSONAPIErrorBuilder
from hateoas_jsonapi.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


def codec_error_response(exc: JSONAPICodecError) -> JSONAPIResponse:
    """Render a codec error as a JSON:API error document."""
    return JSONAPIResponse(
        JSONAPIErrorBuilder().from_exception(exc), status_code=int(exc.status)
    )


async def codec_exception_handler(request: Request, exc: JSONAPICodecError) -> JSONAPIResponse:
    """FastAPI exception handler for ``JSONAPICodecError``."""
    logger.info("JSON:API codec error on %s: %s", request.url.path, exc)
    return codec_error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the codec error handler on a FastAPI application."""
    app.add_exception_handler(JSONAPICodecError, codec_exception_handler)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(self, app: Any) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except JSONAPICodecError as exc:
            logger.info("JSON:API codec error: %s", exc)
            await codec_error_response(exc)(scope, receive, send)
        except Exception as exc:  # noqa: BLE001 - last-resort handler
            logger.exception("Unhandled error while serving %s", scope.get("path"))
            response = JSONAPIResponse(
                JSONAPIErrorBuilder().error_document(
                    [
                        JSONAPIErrorBuilder().error_object(
                            status="500",
                            title="Internal Server Error",
                            detail=str(exc),
                        )
                    ]
                ),
                status_code=500,
            )
            await response(scope, receive, send)
