"""
API Router for Answer Grading

Responsibility:
    HTTP interface for grading descriptive answers and administering the
    evaluator (status, thresholds, restart of the AI system).
    Thin layer that delegates to the AnswerEvaluator held on app.state.

Contains:
    - GET  /grading/status          - Evaluator status snapshot
    - POST /grading/evaluate        - Grade one answer pair
    - POST /grading/evaluate/batch  - Grade a list of pairs + summary
    - PUT  /grading/thresholds      - Update similarity cut points
    - POST /grading/reinitialize    - Dispose and reload the embedding model

Does NOT contain:
    - Scoring rules (delegated to Domain Layer)
    - Model lifecycle logic (delegated to Application Layer)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from exam_grader.api.schemas.common import ErrorResponse
from exam_grader.application.models import EvaluatorStatus
from exam_grader.application.services import AnswerEvaluator
from exam_grader.domain.grading.grading_config import ThresholdConfig
from exam_grader.domain.grading.value_objects import (
    AnswerPair,
    EvaluationResult,
    EvaluationSummary,
)

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================


class BatchEvaluationRequest(BaseModel):
    """All descriptive answers of one submission."""

    pairs: list[AnswerPair] = Field(
        default_factory=list, description="Answer pairs, graded in this order"
    )


class BatchEvaluationResponse(BaseModel):
    """
    Graded batch.

    Attributes:
        results: One result per input pair, same order
        summary: Totals (marks, AI vs manual counts, review flags)
    """

    results: list[EvaluationResult]
    summary: EvaluationSummary


class ThresholdUpdateRequest(BaseModel):
    """
    Partial threshold update.

    Omitted cut points keep their current value. Range and ordering are
    checked by the threshold store so that violations surface as 400.
    """

    excellent: Optional[float] = None
    good: Optional[float] = None
    average: Optional[float] = None
    poor: Optional[float] = None
    fail: Optional[float] = None

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {"example": {"excellent": 0.9, "good": 0.78}},
    }


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================


router = APIRouter(
    prefix="/grading",
    tags=["grading"],
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Bad Request - Invalid input parameters",
        },
        422: {
            "model": ErrorResponse,
            "description": "Unprocessable Entity - Validation error",
        },
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def get_evaluator(request: Request) -> AnswerEvaluator:
    """AnswerEvaluator created by create_app() and stored on app.state."""
    return request.app.state.evaluator


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.get(
    "/status",
    response_model=EvaluatorStatus,
    summary="Evaluator status",
    description="Lifecycle state, evaluation mode (AI/Manual), model and thresholds",
)
async def get_status(
    evaluator: AnswerEvaluator = Depends(get_evaluator),
) -> EvaluatorStatus:
    return evaluator.get_status()


@router.post(
    "/evaluate",
    response_model=EvaluationResult,
    status_code=status.HTTP_200_OK,
    summary="Grade one answer",
    description=(
        "Grades a student answer against the model answer. Uses the embedding "
        "model when loaded, otherwise the manual scorer. Never fails on content: "
        "unscorable answers come back as 'No Answer' or 'Error' results."
    ),
)
async def evaluate_answer(
    pair: AnswerPair,
    evaluator: AnswerEvaluator = Depends(get_evaluator),
) -> EvaluationResult:
    return await evaluator.evaluate(pair)


@router.post(
    "/evaluate/batch",
    response_model=BatchEvaluationResponse,
    status_code=status.HTTP_200_OK,
    summary="Grade a submission",
    description="Grades all pairs (order preserved) and returns per-answer results plus totals",
)
async def evaluate_batch(
    request: BatchEvaluationRequest,
    evaluator: AnswerEvaluator = Depends(get_evaluator),
) -> BatchEvaluationResponse:
    results = await evaluator.evaluate_batch(request.pairs)
    summary = EvaluationSummary.from_results(results)
    logger.info(
        f"Graded submission: {summary.total_marks}/{summary.total_max_marks} "
        f"({summary.evaluation_type})"
    )
    return BatchEvaluationResponse(results=results, summary=summary)


@router.put(
    "/thresholds",
    response_model=ThresholdConfig,
    summary="Update similarity thresholds",
    description=(
        "Replaces some or all embedding-path cut points. The whole update is "
        "rejected (400) if any value is outside [0, 1] or the order "
        "excellent >= good >= average >= poor >= fail is broken."
    ),
)
async def update_thresholds(
    request: ThresholdUpdateRequest,
    evaluator: AnswerEvaluator = Depends(get_evaluator),
) -> ThresholdConfig:
    # InvalidThresholdsError is mapped to 400 by the global domain handler
    return evaluator.update_thresholds(request.model_dump(exclude_none=True))


@router.post(
    "/reinitialize",
    response_model=EvaluatorStatus,
    summary="Restart the AI system",
    description="Disposes the embedding model and initializes it again",
)
async def reinitialize(
    evaluator: AnswerEvaluator = Depends(get_evaluator),
) -> EvaluatorStatus:
    logger.info("Reinitializing evaluator on request")
    evaluator.dispose()
    await evaluator.initialize()
    return evaluator.get_status()
