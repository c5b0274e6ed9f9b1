"""
Tests for ManualScorer.
Covers: TCP scenario, component scores, bands, empty input, determinism,
monotonicity, bounds, confidence and stream multipliers.
"""

import pytest

from exam_grader.domain.grading.grading_config import ManualScorerConfig
from exam_grader.domain.grading.services.manual_scorer import (
    ManualScorer,
    extract_keywords,
    find_technical_terms,
)
from exam_grader.domain.grading.services.threshold_store import ThresholdStore
from exam_grader.domain.grading.value_objects import (
    Classification,
    Confidence,
    Domain,
    EvaluationMethod,
    Grade,
)

TCP_STUDENT = (
    "TCP ensures reliable communication through acknowledgments and "
    "retransmission of lost packets."
)
TCP_MODEL = (
    "TCP provides reliable data transmission by using acknowledgment messages "
    "and automatic retransmission of lost data packets."
)


@pytest.fixture
def scorer():
    return ManualScorer(ThresholdStore())


# ============================================================================
# SCENARIO TESTS
# ============================================================================


def test_tcp_answer_scores_high(scorer):
    """Paraphrased answer with high keyword overlap lands in a top band."""
    result = scorer.score(TCP_STUDENT, TCP_MODEL, Domain.CSE, max_marks=10)

    assert result.grade in {Grade.A_PLUS, Grade.B_PLUS}
    assert result.marks >= 6
    assert result.evaluation_method == EvaluationMethod.MANUAL


def test_tcp_answer_exact_outcome(scorer):
    """keywords 0.57, length 94/123, structure 0.5, technical 1.0, x1.05 -> 0.7025."""
    result = scorer.score(TCP_STUDENT, TCP_MODEL, Domain.CSE, max_marks=10)

    assert result.similarity == pytest.approx(0.7025, abs=1e-3)
    assert result.percentage == 70
    assert result.classification == Classification.GOOD
    assert result.classification_label == "Good (Manual)"
    assert result.grade == Grade.B_PLUS
    assert result.marks == 8.0
    assert result.confidence == Confidence.MEDIUM
    assert result.requires_review is False
    assert result.breakdown.keywords == 57
    assert result.breakdown.length == 76
    assert result.breakdown.structure == 50
    assert result.breakdown.technical == 100


def test_identical_answers_are_excellent(scorer):
    answer = "A stack is a LIFO data structure, supporting push and pop operations."

    result = scorer.score(answer, answer, Domain.CSE, max_marks=5)

    assert result.classification == Classification.EXCELLENT
    assert result.grade == Grade.A_PLUS
    assert result.marks == 4.5
    assert result.confidence == Confidence.HIGH


def test_unrelated_answer_scores_low(scorer):
    result = scorer.score(
        "bananas",
        "Ohm's law states that voltage equals current multiplied by resistance.",
        Domain.EEE,
    )

    assert result.classification == Classification.VERY_POOR
    assert result.grade == Grade.F
    assert result.marks == 1.5
    assert result.confidence == Confidence.LOW
    assert result.requires_review is True


# ============================================================================
# EMPTY INPUT
# ============================================================================


@pytest.mark.parametrize(
    "student, model",
    [("", "TCP is reliable"), ("   ", "TCP is reliable"), ("TCP is reliable", ""), (None, "x")],
)
def test_empty_input_returns_no_answer(scorer, student, model):
    result = scorer.score(student, model, Domain.CSE, max_marks=10)

    assert result.classification == Classification.NO_ANSWER
    assert result.marks == 0.0
    assert result.similarity == 0.0
    assert result.grade == Grade.F
    assert result.confidence == Confidence.HIGH


# ============================================================================
# PROPERTIES
# ============================================================================


def test_scoring_is_deterministic(scorer):
    first = scorer.score(TCP_STUDENT, TCP_MODEL, Domain.CSE)
    second = scorer.score(TCP_STUDENT, TCP_MODEL, Domain.CSE)

    assert first == second


def test_more_matching_keywords_never_score_lower(scorer):
    model = "alpha beta gamma delta epsilon."

    more = scorer.score("alpha beta gamma delta.", model)
    fewer = scorer.score("alpha beta gamma zzzzz.", model)

    assert more.similarity >= fewer.similarity


@pytest.mark.parametrize(
    "student, model, max_marks",
    [
        ("x", "y", 1),
        ("Deadlock needs mutual exclusion, hold and wait.", "Deadlock: four conditions.", 7),
        ("A" * 2000, "a" * 10, 3),
        ("Beam. Column. Footing, slab.", "Reinforced concrete beam design.", 12.5),
    ],
)
def test_results_stay_in_bounds(scorer, student, model, max_marks):
    result = scorer.score(student, model, Domain.CIVIL, max_marks=max_marks)

    assert 0.0 <= result.similarity <= 1.0
    assert 0 <= result.percentage <= 100
    assert 0.0 <= result.marks <= max_marks


def test_stream_multiplier_is_applied():
    store = ThresholdStore(
        domain_adjustments={"CSE": {"technical": 1.0, "conceptual": 0.5}}
    )
    halved = ManualScorer(store).score(TCP_STUDENT, TCP_MODEL, Domain.CSE)
    neutral = ManualScorer(
        ThresholdStore(domain_adjustments={"CSE": {"technical": 1.0, "conceptual": 1.0}})
    ).score(TCP_STUDENT, TCP_MODEL, Domain.CSE)

    assert halved.similarity == pytest.approx(neutral.similarity * 0.5, abs=1e-9)


# ============================================================================
# COMPONENT SCORES
# ============================================================================


def test_extract_keywords_drops_stop_words_and_short_tokens():
    assert extract_keywords("tcp is a reliable, connection-oriented protocol.") == [
        "tcp",
        "reliable",
        "connectionoriented",
        "protocol",
    ]


def test_extract_keywords_keeps_first_occurrence_order():
    assert extract_keywords("data packets carry data") == ["data", "packets", "carry"]


def test_keyword_score_is_neutral_without_model_keywords(scorer):
    assert scorer.calculate_keyword_score("anything here", "a an of") == 0.5


def test_keyword_score_credits_similar_words(scorer):
    # "packet" is contained in "packets"
    assert scorer.calculate_keyword_score("packet", "packets") == pytest.approx(0.7)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("acknowledgment", "acknowledgments", True),
        ("transmision", "transmission", True),
        ("voltage", "current", False),
        ("cat", "cut", True),
        ("cat", "dog", False),
    ],
)
def test_are_similar(scorer, first, second, expected):
    assert scorer.are_similar(first, second) is expected


def test_length_score_caps_very_short_answers(scorer):
    student = "tcp."
    model = "tcp " * 10 + "is reliable."

    assert scorer.calculate_length_score(student, model) <= 0.3


def test_length_score_is_symmetric_ratio(scorer):
    assert scorer.calculate_length_score("a" * 50, "b" * 100) == pytest.approx(0.5)
    assert scorer.calculate_length_score("a" * 100, "b" * 50) == pytest.approx(0.5)


@pytest.mark.parametrize(
    "answer, expected",
    [
        ("", 0.0),
        ("plain words", 0.0),
        ("Plain words", 0.2),
        ("plain words.", 0.3),
        ("First point, second point. Third point.", 1.0),
        ("one. two.", 0.6),
    ],
)
def test_structure_score(scorer, answer, expected):
    assert scorer.calculate_structure_score(answer) == pytest.approx(expected)


def test_technical_score_is_neutral_without_stream_terms(scorer):
    assert scorer.calculate_technical_score("anything", "no vocabulary here", Domain.CSE) == 0.7


def test_technical_score_is_share_of_model_terms(scorer):
    score = scorer.calculate_technical_score(
        "a stack of frames", "stack and queue", Domain.CSE
    )

    assert score == pytest.approx(0.5)


def test_find_technical_terms_allows_plural_suffix():
    assert find_technical_terms("tcp retransmits lost packets.", Domain.CSE) == {
        "packet",
        "tcp",
    }


def test_find_technical_terms_respects_word_boundaries():
    # "stacked" is not "stack"
    assert "stack" not in find_technical_terms("stacked boxes", Domain.CSE)


@pytest.mark.parametrize(
    "keyword, structure, expected",
    [
        (1.0, 0.5, Confidence.HIGH),
        (0.57, 0.5, Confidence.MEDIUM),
        (0.2, 0.2, Confidence.LOW),
    ],
)
def test_confidence_levels(scorer, keyword, structure, expected):
    assert scorer.calculate_confidence(keyword, structure) == expected


def test_custom_config_changes_similar_keyword_credit():
    scorer = ManualScorer(ThresholdStore(), ManualScorerConfig.for_testing(similar_keyword_score=0.5))

    assert scorer.calculate_keyword_score("packet", "packets") == pytest.approx(0.5)
