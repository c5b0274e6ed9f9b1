"""
Exam Grader HTTP API

Serves the AnswerEvaluator over HTTP for the exam portal.

Responsibility:
    - Build the FastAPI app around one explicitly constructed AnswerEvaluator
    - Load the embedding model at startup, release it at shutdown (lifespan)
    - Translate domain exceptions into ErrorResponse payloads
    - Log every request with its status and latency
    - Report liveness and the current evaluation mode on GET /health

Architecture Notes:
    - Presentation layer only; grading rules live in the domain package
    - The evaluator is stored on app.state and injected into routers
    - A server started while the model cannot load is still healthy:
      it grades in Manual mode until POST /api/grading/reinitialize succeeds

Run:
    uvicorn exam_grader.api.main:app --reload
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from exam_grader import __version__
from exam_grader.api.routers import grading_router
from exam_grader.api.schemas.common import ErrorResponse
from exam_grader.application.services import AnswerEvaluator, EvaluatorSettings
from exam_grader.domain.shared.exceptions import (
    DomainException,
    EmbeddingBackendError,
    InvalidInputError,
    InvalidThresholdsError,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Checked in order; the first matching class decides status and code.
DOMAIN_ERROR_STATUS: tuple[tuple[type[DomainException], int, str], ...] = (
    (InvalidThresholdsError, status.HTTP_400_BAD_REQUEST, "INVALID_THRESHOLDS"),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, "INVALID_INPUT"),
    (EmbeddingBackendError, status.HTTP_503_SERVICE_UNAVAILABLE, "EMBEDDING_BACKEND_UNAVAILABLE"),
)


class HealthCheckResponse(BaseModel):
    """
    Liveness payload.

    Attributes:
        status: "ok" whenever the process answers
        version: Package version
        evaluation_mode: "AI" when the embedding model is serving, else "Manual"
        timestamp: Server time (Unix seconds)
    """

    status: str = "ok"
    version: str = __version__
    evaluation_mode: str = Field(description="AI or Manual")
    timestamp: float


# ============================================================================
# MIDDLEWARE & ERROR TRANSLATION
# ============================================================================


async def log_requests(request: Request, call_next):
    """Log method, path, status and latency of every request."""
    route = f"{request.method} {request.url.path}"
    logger.info(f"Request started: {route}")

    started = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - started

    logger.info(f"Request finished: {route} -> {response.status_code} in {elapsed:.3f}s")
    return response


def _status_for(exc: DomainException) -> tuple[int, str]:
    for exc_class, status_code, code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_class):
            return status_code, code
    # e.g. EvaluationError -> "EVALUATION"
    return status.HTTP_400_BAD_REQUEST, exc.__class__.__name__.replace("Error", "").upper()


async def handle_domain_error(request: Request, exc: DomainException) -> JSONResponse:
    """
    Map a domain exception to an ErrorResponse.

    InvalidThresholdsError carries its individual violations in details.errors
    so the admin UI can show each broken cut point.
    """
    status_code, code = _status_for(exc)
    details: dict = {"exception_type": exc.__class__.__name__}
    if isinstance(exc, InvalidThresholdsError):
        details["errors"] = exc.errors

    logger.warning(f"{request.method} {request.url.path} rejected ({code}): {exc}")

    body = ErrorResponse(code=code, message=str(exc), details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: 500 with the exception type, full traceback in the log."""
    logger.error(
        f"{request.method} {request.url.path} failed with {exc.__class__.__name__}: {exc}",
        exc_info=True,
    )

    body = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())


# ============================================================================
# APPLICATION FACTORY
# ============================================================================


def create_app(evaluator: Optional[AnswerEvaluator] = None) -> FastAPI:
    """
    Build the grading API.

    Args:
        evaluator: Evaluator to serve. When omitted, GRADER_* settings are read
            from the environment (after loading .env) and the default
            sentence-transformers backend is used.

    Returns:
        FastAPI app whose lifespan initializes and disposes the evaluator

    Examples:
        >>> from fastapi.testclient import TestClient
        >>> with TestClient(create_app(evaluator=my_evaluator)) as client:
        ...     client.get("/health").json()["evaluation_mode"]
        'AI'
    """
    if evaluator is None:
        load_dotenv()
        evaluator = AnswerEvaluator(settings=EvaluatorSettings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await evaluator.initialize()
        logger.info(
            f"Grading in {evaluator.evaluation_mode} mode (evaluator {evaluator.state.value})"
        )
        try:
            yield
        finally:
            evaluator.dispose()
            logger.info("Evaluator disposed")

    app = FastAPI(
        title="Exam Grader API",
        version=__version__,
        description=(
            "Grades descriptive engineering exam answers by sentence-embedding "
            "similarity, falling back to a deterministic keyword/structure scorer."
        ),
        lifespan=lifespan,
    )
    app.state.evaluator = evaluator

    # The exam portal is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(DomainException, handle_domain_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(grading_router, prefix="/api")

    @app.get("/health", response_model=HealthCheckResponse, tags=["health"])
    async def health() -> HealthCheckResponse:
        """Liveness probe. Manual mode is reported, not treated as unhealthy."""
        return HealthCheckResponse(
            evaluation_mode=evaluator.evaluation_mode, timestamp=time.time()
        )

    logger.info("Exam grader API ready, grading routes under /api/grading")
    return app


app = create_app()
