"""
Tests for the FastAPI app (exam_grader/api/main.py) and grading router.

Covers:
- Lifespan: evaluator initialized on startup, disposed on shutdown
- Health check endpoint and evaluation mode
- GET /api/grading/status
- POST /api/grading/evaluate and /evaluate/batch (camelCase in and out)
- PUT /api/grading/thresholds (400 on invalid cut points)
- POST /api/grading/reinitialize
- Global exception handling and CORS
"""

from unittest.mock import patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from exam_grader.api.main import create_app
from exam_grader.application.models import EvaluatorState
from exam_grader.application.services import AnswerEvaluator, EvaluatorSettings

STACK_ANSWER = "A stack is a LIFO data structure supporting push and pop."


@pytest.fixture
def api_evaluator(fake_embedding_service) -> AnswerEvaluator:
    return AnswerEvaluator(
        embedding_service=fake_embedding_service,
        settings=EvaluatorSettings.for_testing(),
    )


@pytest.fixture
def client(api_evaluator):
    """TestClient with lifespan events (evaluator initialize/dispose)."""
    with TestClient(create_app(evaluator=api_evaluator)) as test_client:
        yield test_client


@pytest.fixture
def manual_client(fake_embedding_service):
    """TestClient whose evaluator runs with AI disabled."""
    evaluator = AnswerEvaluator(
        embedding_service=fake_embedding_service,
        settings=EvaluatorSettings.for_testing(enable_ai=False),
    )
    with TestClient(create_app(evaluator=evaluator)) as test_client:
        yield test_client


# ============================================================================
# LIFESPAN & HEALTH
# ============================================================================


def test_lifespan_initializes_and_disposes(api_evaluator, fake_embedding_service):
    with TestClient(create_app(evaluator=api_evaluator)):
        assert api_evaluator.state == EvaluatorState.READY

    assert api_evaluator.state == EvaluatorState.UNINITIALIZED
    assert fake_embedding_service.unload_calls == 1


def test_health_check_reports_ai_mode(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"
    assert data["evaluation_mode"] == "AI"
    assert isinstance(data["timestamp"], float)


def test_health_check_in_manual_mode_is_still_ok(manual_client):
    response = manual_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["evaluation_mode"] == "Manual"


def test_cors_headers_present(client):
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert "access-control-allow-origin" in response.headers


# ============================================================================
# STATUS
# ============================================================================


def test_status_endpoint_uses_camel_case(client):
    response = client.get("/api/grading/status")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["state"] == "ready"
    assert data["isLoaded"] is True
    assert data["isInitializing"] is False
    assert data["evaluationMode"] == "AI"
    assert data["modelName"] == "fake-minilm"
    assert data["supportedDomains"] == ["CSE", "EEE", "ECE", "CIVIL", "MECHANICAL"]
    assert data["thresholds"]["excellent"] == 0.85


# ============================================================================
# EVALUATE
# ============================================================================


def test_evaluate_single_answer(client):
    response = client.post(
        "/api/grading/evaluate",
        json={
            "studentAnswer": STACK_ANSWER,
            "modelAnswer": STACK_ANSWER,
            "maxMarks": 10,
            "stream": "CSE",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["classification"] == "Excellent"
    assert data["classificationLabel"] == "Excellent"
    assert data["grade"] == "A+"
    assert data["marks"] == 9.5
    assert data["maxMarks"] == 10.0
    assert data["evaluationMethod"] == "EMBEDDING"
    assert data["autoEvaluated"] is True


def test_evaluate_in_manual_mode(manual_client):
    response = manual_client.post(
        "/api/grading/evaluate",
        json={"studentAnswer": STACK_ANSWER, "modelAnswer": STACK_ANSWER},
    )

    data = response.json()
    assert data["evaluationMethod"] == "MANUAL"
    assert data["classificationLabel"].endswith("(Manual)")
    assert data["breakdown"] is not None


def test_evaluate_empty_answer_returns_no_answer(client):
    response = client.post(
        "/api/grading/evaluate",
        json={"studentAnswer": "   ", "modelAnswer": STACK_ANSWER},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["classificationLabel"] == "No Answer (Manual)"
    assert data["marks"] == 0.0


def test_evaluate_rejects_non_positive_max_marks(client):
    response = client.post(
        "/api/grading/evaluate",
        json={"studentAnswer": "x", "modelAnswer": "y", "maxMarks": 0},
    )

    assert response.status_code == 422


def test_evaluate_batch_returns_results_and_summary(client):
    response = client.post(
        "/api/grading/evaluate/batch",
        json={
            "pairs": [
                {"studentAnswer": STACK_ANSWER, "modelAnswer": STACK_ANSWER, "maxMarks": 10},
                {"studentAnswer": "", "modelAnswer": STACK_ANSWER, "maxMarks": 5},
            ]
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [result["maxMarks"] for result in data["results"]] == [10.0, 5.0]
    assert data["summary"]["totalMarks"] == 9.5
    assert data["summary"]["totalMaxMarks"] == 15.0
    assert data["summary"]["aiEvaluated"] == 1
    assert data["summary"]["manualEvaluated"] == 1
    assert data["summary"]["evaluationType"] == "Mixed"


def test_evaluate_empty_batch(client):
    response = client.post("/api/grading/evaluate/batch", json={"pairs": []})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["results"] == []


# ============================================================================
# THRESHOLDS
# ============================================================================


def test_update_thresholds(client):
    response = client.put("/api/grading/thresholds", json={"excellent": 0.9, "good": 0.8})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "excellent": 0.9,
        "good": 0.8,
        "average": 0.6,
        "poor": 0.45,
        "fail": 0.0,
    }
    assert client.get("/api/grading/status").json()["thresholds"]["good"] == 0.8


def test_invalid_thresholds_return_400(client):
    response = client.put("/api/grading/thresholds", json={"good": 0.95})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["code"] == "INVALID_THRESHOLDS"
    assert data["details"]["errors"]
    assert client.get("/api/grading/status").json()["thresholds"]["good"] == 0.75


def test_unknown_threshold_field_rejected(client):
    response = client.put("/api/grading/thresholds", json={"perfect": 0.99})

    assert response.status_code == 422


# ============================================================================
# REINITIALIZE & ERRORS
# ============================================================================


def test_reinitialize_reloads_model(client, fake_embedding_service):
    response = client.post("/api/grading/reinitialize")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["state"] == "ready"
    assert fake_embedding_service.load_calls == 2
    assert fake_embedding_service.unload_calls == 1


def test_unexpected_error_returns_500(api_evaluator):
    app = create_app(evaluator=api_evaluator)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        with patch.object(api_evaluator, "get_status", side_effect=RuntimeError("boom")):
            response = test_client.get("/api/grading/status")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["code"] == "INTERNAL_SERVER_ERROR"
    assert data["details"]["type"] == "RuntimeError"
