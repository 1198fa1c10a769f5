"""Middleware for JSON:API error rendering."""

from .error_handler import (
    ErrorHandlerMiddleware,
    codec_exception_handler,
    register_exception_handlers,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "codec_exception_handler",
    "register_exception_handlers",
]
