"""HTTP service exposing the HTML to text converter.

Builds a FastAPI application with a single conversion endpoint,
``POST /api/html-to-text``, and runs it with uvicorn. Around the endpoint the
application adds CORS, gzip compression, hardening response headers, a
request log and a per-client rate limit on ``/api/`` routes.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Optional

import uvicorn
from fastapi import APIRouter, Body, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.config.models import ServiceConfig
from .errors import RateLimitError, ValidationError
from .request_handler import ConversionRequestHandler, build_error_response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong!"

# Hardening headers added to every response
SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'Strict-Transport-Security': 'max-age=15552000; includeSubDomains',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'X-DNS-Prefetch-Control': 'off',
    'X-Permitted-Cross-Domain-Policies': 'none',
}


def rate_limit_string(config: ServiceConfig) -> str:
    """Format the configured limit in slowapi notation (e.g. "100 per 900 seconds")."""
    return f"{config.rate_limit_requests} per {config.rate_limit_window} seconds"


def create_router(
    handler: ConversionRequestHandler,
    limiter: Limiter,
    rate_limit: str,
) -> APIRouter:
    """Create the API router bound to a request handler.

    Args:
        handler: Handler that validates and converts each request
        limiter: Rate limiter shared by the application
        rate_limit: Per-client limit applied to every route
    """
    router = APIRouter()

    @router.post("/html-to-text")
    @limiter.limit(rate_limit)
    def html_to_text(request: Request, payload: Any = Body(None)) -> JSONResponse:
        """Convert HTML to plain text; returns text and statistics."""
        status_code, body = handler.handle(payload)
        return JSONResponse(status_code=status_code, content=body)

    return router


def _request_middleware(
    config: ServiceConfig,
) -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    """Build the middleware that logs each request and adds security headers."""

    async def log_and_harden(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        if config.security_headers:
            response.headers.update(SECURITY_HEADERS)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
        )
        return response

    return log_and_harden


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report an undecodable request body as a validation failure."""
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
    error = ValidationError("Invalid JSON body")
    return JSONResponse(status_code=error.status_code, content=build_error_response(error))


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Report a client over its request limit."""
    logger.warning(
        f"Rate limit exceeded by {get_remote_address(request)} on {request.url.path}: {exc.detail}"
    )
    error = RateLimitError()
    return JSONResponse(status_code=error.status_code, content=build_error_response(error))


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; the exception detail is logged, never returned."""
    logger.error(f"Unhandled error for {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={'success': False, 'error': UNEXPECTED_ERROR_MESSAGE},
    )


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Service configuration (defaults when omitted)

    Returns:
        Configured FastAPI application
    """
    config = config or ServiceConfig()

    app = FastAPI(
        title="html-text-toolkit",
        description="Convert HTML to plain text",
        version="0.1.0",
    )
    app.state.config = config

    limiter = Limiter(key_func=get_remote_address, enabled=config.rate_limit_enabled)
    app.state.limiter = limiter

    # Added innermost first; CORS ends up outermost so it answers preflights
    app.middleware("http")(_request_middleware(config))
    app.add_middleware(GZipMiddleware, minimum_size=config.gzip_minimum_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _invalid_body_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    handler = ConversionRequestHandler(config)
    router = create_router(handler, limiter, rate_limit_string(config))
    app.include_router(router, prefix="/api", tags=["api"])

    return app


def run_server(config: ServiceConfig) -> None:
    """Serve the application with uvicorn until interrupted."""
    logger.info(f"Starting HTML to text service on http://{config.host}:{config.port}")
    if config.rate_limit_enabled:
        logger.info(f"Rate limit: {rate_limit_string(config)} per client")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
