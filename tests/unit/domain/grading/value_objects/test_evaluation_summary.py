"""
Tests for EvaluationSummary.
Covers: totals, AI/Manual/Mixed labelling, review and failure counts.
"""

from exam_grader.domain.grading.value_objects import (
    Classification,
    Confidence,
    EvaluationMethod,
    EvaluationResult,
    EvaluationSummary,
    Grade,
)


def _embedding_result(marks: float, max_marks: float = 10.0) -> EvaluationResult:
    return EvaluationResult(
        similarity=0.9,
        percentage=90,
        classification=Classification.EXCELLENT,
        classification_label="Excellent",
        grade=Grade.A_PLUS,
        marks=marks,
        max_marks=max_marks,
        evaluation_method=EvaluationMethod.EMBEDDING,
        confidence=Confidence.HIGH,
    )


def test_empty_results():
    summary = EvaluationSummary.from_results([])

    assert summary.total_marks == 0.0
    assert summary.percentage == 0.0
    assert summary.evaluation_type == "Manual"


def test_all_embedding_results_are_ai():
    summary = EvaluationSummary.from_results([_embedding_result(9.5), _embedding_result(4.0, 5.0)])

    assert summary.total_marks == 13.5
    assert summary.total_max_marks == 15.0
    assert summary.percentage == 90.0
    assert summary.ai_evaluated == 2
    assert summary.evaluation_type == "AI"


def test_mixed_results():
    results = [
        _embedding_result(9.5),
        EvaluationResult.no_answer(max_marks=10),
        EvaluationResult.failed(max_marks=10, error="boom"),
    ]

    summary = EvaluationSummary.from_results(results)

    assert summary.evaluation_type == "Mixed"
    assert summary.ai_evaluated == 1
    assert summary.manual_evaluated == 1
    assert summary.failed == 1
    assert summary.requires_review == 1
    assert summary.percentage == 31.7


def test_manual_only_results():
    summary = EvaluationSummary.from_results([EvaluationResult.no_answer(max_marks=10)])

    assert summary.evaluation_type == "Manual"
    assert summary.model_dump(by_alias=True)["manualEvaluated"] == 1
