"""FastAPI application exposing the memgate retrieval gate."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import get_settings
from ....core.domain.exceptions import MemGateError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import gate, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings)
    logger.info("memgate API starting up...")
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    logger.info("memgate API shutting down...")


app = FastAPI(
    title="memgate API",
    description=(
        "Retrieval gate for memory-augmented assistants. Decides whether a message "
        "needs a memory lookup and adds safety-policy anchors to risky queries."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(gate.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(MemGateError)
async def memgate_error_handler(request: Request, exc: MemGateError) -> JSONResponse:
    """Return MemGateError exceptions as structured JSON."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=get_settings().debug),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return unhandled exceptions as structured JSON."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=get_settings().debug),
    )


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


__all__ = ["app", "run"]
