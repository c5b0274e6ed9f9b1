"""
Tests for the domain exception hierarchy.
Covers: inheritance, messages, extra attributes.
"""

import pytest

from exam_grader.domain.shared import (
    BackendUnavailableError,
    DomainException,
    EmbeddingBackendError,
    EvaluationError,
    InvalidInputError,
    InvalidThresholdsError,
    ModelNotLoadedError,
)


@pytest.mark.parametrize(
    "exc_class",
    [InvalidInputError, InvalidThresholdsError, EvaluationError, EmbeddingBackendError],
)
def test_all_inherit_from_domain_exception(exc_class):
    assert issubclass(exc_class, DomainException)


def test_backend_errors_share_base():
    assert issubclass(BackendUnavailableError, EmbeddingBackendError)
    assert issubclass(ModelNotLoadedError, EmbeddingBackendError)


def test_str_includes_class_name():
    exc = DomainException("Business rule violation")

    assert str(exc) == "DomainException: Business rule violation"
    assert repr(exc) == "DomainException(message='Business rule violation')"


def test_invalid_input_keeps_field_name():
    exc = InvalidInputError("Student answer is empty", field_name="student_answer")

    assert exc.field_name == "student_answer"
    assert exc.message == "Student answer is empty"


def test_invalid_thresholds_joins_errors_into_message():
    exc = InvalidThresholdsError(
        "Invalid thresholds",
        errors=["good (0.9) must be <= excellent (0.85)", "fail (-0.1) must be in [0, 1]"],
    )

    assert len(exc.errors) == 2
    assert exc.message == (
        "Invalid thresholds: good (0.9) must be <= excellent (0.85); "
        "fail (-0.1) must be in [0, 1]"
    )


def test_invalid_thresholds_without_errors():
    exc = InvalidThresholdsError("Invalid thresholds")

    assert exc.errors == []
    assert exc.message == "Invalid thresholds"


def test_evaluation_error_keeps_cause():
    cause = ValueError("nan similarity")
    exc = EvaluationError("Model self-test failed", cause=cause)

    assert exc.cause is cause


def test_backend_unavailable_keeps_model_name():
    exc = BackendUnavailableError("Model load timed out", model_name="all-MiniLM-L6-v2")

    assert exc.model_name == "all-MiniLM-L6-v2"
