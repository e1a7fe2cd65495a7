"""Structured logging and request metrics."""

import logging
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request
from prometheus_client import CollectorRegistry, Counter
from starlette.middleware.base import BaseHTTPMiddleware

# Registry for isolated metric collection
CUSTOM_REGISTRY = CollectorRegistry()

REQUESTS = Counter(
    "requests_total", "Total requests by endpoint", ["path"], registry=CUSTOM_REGISTRY
)
ERRORS = Counter(
    "errors_total", "Total errors by endpoint", ["path"], registry=CUSTOM_REGISTRY
)
PROCESSING_TIME = Counter(
    "processing_time_seconds",
    "Total processing time by endpoint",
    ["path"],
    registry=CUSTOM_REGISTRY,
)

logger = structlog.get_logger()


def configure_logging(level: str = "INFO") -> None:
    """Set up structlog for JSON output at the given level."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with a trace_id, logs it and records metrics."""

    async def dispatch(self, request: Request, call_next: Callable):
        trace_id = str(uuid.uuid4())
        request.state.trace_id = trace_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)

        logger.info("request_started", method=request.method, path=request.url.path)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.time() - start_time
            label = _route_label(request)
            REQUESTS.labels(path=label).inc()
            ERRORS.labels(path=label).inc()
            PROCESSING_TIME.labels(path=label).inc(elapsed)
            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=int(elapsed * 1000),
            )
            raise

        elapsed = time.time() - start_time
        label = _route_label(request)
        REQUESTS.labels(path=label).inc()
        PROCESSING_TIME.labels(path=label).inc(elapsed)
        if response.status_code >= 500:
            ERRORS.labels(path=label).inc()

        logger.info(
            "request_completed",
            status_code=response.status_code,
            latency_ms=int(elapsed * 1000),
        )
        response.headers["X-Trace-ID"] = trace_id
        return response
