"""Error payloads shared by the CLI and the HTTP API.

Both surfaces render failures the same way: the ``error`` block from
``MemGateError.to_dict`` (or an equivalent one for plain Python errors),
optional request context, and a traceback only in debug mode.
"""

import json
import logging
import traceback
from typing import Any

from ...core.domain.exceptions import (
    ConfigurationError,
    MemGateError,
    RetrievalBackendError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First matching entry wins, so subclasses come before their bases.
_HTTP_STATUS = (
    (ValidationError, 400),
    (RetrievalBackendError, 503),
    (ConfigurationError, 500),
    (MemGateError, 500),
    (ValueError, 400),
    ((ConnectionError, TimeoutError), 503),
)


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the error payload for ``exc``.

    ``extra_context`` is merged into a copy of the error's own context, so
    the exception is left as it was raised.

    Args:
        exc: The exception to format.
        include_trace: Include the formatted traceback.
        extra_context: Request-level context such as path and method.
    """
    if isinstance(exc, MemGateError):
        result = exc.to_dict(include_trace=include_trace)
    else:
        result = {
            "error": {
                "type": type(exc).__name__,
                "code": get_error_code(exc),
                "message": str(exc),
            }
        }
        if include_trace:
            result["stack_trace"] = traceback.format_exception(exc)

    if extra_context:
        result["context"] = {**result.get("context", {}), **extra_context}

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log ``exc`` as a single-line JSON payload, traceback included."""
    payload = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    (log or logger).log(level, json.dumps(payload, ensure_ascii=False))


def get_error_code(exc: Exception) -> str:
    """Get the error code from an exception (e.g. "MG_RET_002" or "PYTHON_ERR")."""
    if isinstance(exc, MemGateError):
        return exc.error_code
    return "PYTHON_ERR"


def get_http_status_code(exc: Exception) -> int:
    """Map exception type to an HTTP status code."""
    for types, status in _HTTP_STATUS:
        if isinstance(exc, types):
            return status
    return 500
