"""Base exception class for memgate.

A memgate error carries a stable error code, the function it was raised
from, an optional underlying cause and caller-supplied context. ``to_dict``
renders all of it for the CLI, the HTTP API and the JSON log formatter.
"""

import inspect
import traceback
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RaiseSite:
    """Function, file and line an error was raised from."""

    function: str
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line} in {self.function}"


def _raise_site(depth: int) -> RaiseSite:
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            break
        frame = frame.f_back

    if frame is None:
        return RaiseSite("<unknown>", "<unknown>", 0)
    return RaiseSite(
        function=frame.f_code.co_name,
        file=frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1],
        line=frame.f_lineno,
    )


class MemGateError(Exception):
    """Base exception for all memgate errors.

    Example:
        try:
            hits = retriever.search(query, top_k=5)
        except Exception as e:
            raise RetrievalBackendError(
                "Memory store search failed",
                cause=e,
                context={"top_k": 5},
            ) from e
    """

    error_code: str = "MG_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = dict(context or {})
        # Frames: _raise_site <- __init__ <- raise site
        self.raised_at = _raise_site(depth=1)

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Render the error as a JSON-ready dictionary.

        The returned dictionary owns its ``context``; callers may add keys to
        it without touching the exception.

        Args:
            include_trace: Include the cause's formatted traceback.
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "raised_at": str(self.raised_at),
        }

        if self.extra_context:
            result["context"] = dict(self.extra_context)

        if self.cause is not None:
            result["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
            if include_trace:
                result["stack_trace"] = traceback.format_exception(self.cause)

        return result
