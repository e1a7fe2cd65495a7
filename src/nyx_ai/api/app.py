"""
FastAPI Application Module

Backend for the Nyx AI study assistant. Proxies conversations and text tools
to a hosted language model, reads uploaded files and web pages into prompts,
and records waitlist and contact submissions.

Key Features:
- Multi-turn chat with in-memory conversation history
- Thirty-odd prompt tools (summarize, flashcards, tutor, ...)
- PDF/TXT upload and web page text extraction
- Waitlist/contact capture with email notifications
- Structured logging, Prometheus metrics and OpenTelemetry tracing

Every service lives on ``app.state`` and is reached through FastAPI
dependencies, so tests can build an isolated app with fakes injected.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from prometheus_client import generate_latest
from structlog import get_logger

from ..config import Settings, get_settings
from ..domain.errors import InvalidRequestError, NyxError
from ..repositories.base import Repository
from ..repositories.memory import InMemoryRepository
from ..services.chat import ChatService
from ..services.email import Mailer
from ..services.extraction import TextExtractor
from ..services.llm import LLMService, build_llm_service
from ..services.submissions import SubmissionStore
from ..services.summarize import SummarizeService
from . import chat, submissions, summarize
from .middleware import CUSTOM_REGISTRY, LoggingMiddleware, configure_logging

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles app startup/shutdown and resource management"""
    logger.info(
        "application_startup_complete",
        llm_provider=app.state.llm_service.name,
        email_enabled=app.state.mailer.configured,
    )

    yield

    await app.state.mailer.drain()
    logger.info("application_shutdown_complete")


async def nyx_error_handler(request: Request, exc: NyxError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_error",
        path=request.url.path,
        error=exc.message,
        details=exc.details,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and form fields get the same 400 shape as service errors"""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return await nyx_error_handler(request, InvalidRequestError("Invalid request", details=details))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[Repository] = None,
    llm_service: Optional[LLMService] = None,
    mailer: Optional[Mailer] = None,
    extractor: Optional[TextExtractor] = None,
) -> FastAPI:
    """Build the application, wiring default services where none are given."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    repository = repository or InMemoryRepository()
    llm_service = llm_service or build_llm_service(settings)
    mailer = mailer or Mailer(settings)
    extractor = extractor or TextExtractor(
        upload_dir=settings.upload_dir, timeout=settings.fetch_timeout_seconds
    )

    app = FastAPI(
        title=settings.app_name,
        description="Chat, text tools and signups for the Nyx AI study assistant",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.repository = repository
    app.state.llm_service = llm_service
    app.state.mailer = mailer
    app.state.extractor = extractor
    app.state.chat_service = ChatService(repository, llm_service, extractor)
    app.state.summarize_service = SummarizeService(llm_service, extractor)
    app.state.submissions = SubmissionStore(settings.data_dir, mailer, settings.operator_email)

    # Enable cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(NyxError, nyx_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(chat.router, prefix=settings.api_prefix, tags=["chat"])
    app.include_router(summarize.router, prefix=settings.api_prefix, tags=["tools"])
    app.include_router(submissions.router, prefix=settings.api_prefix, tags=["submissions"])

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return "OK"

    @app.get("/")
    async def root() -> dict:
        return {"message": "Nyx AI Backend is running"}

    @app.get("/metrics")
    async def metrics():
        """Provides Prometheus metrics for system monitoring"""
        return Response(generate_latest(CUSTOM_REGISTRY), media_type="text/plain")

    # Set up request tracing
    FastAPIInstrumentor.instrument_app(app)

    return app


app = create_app()
