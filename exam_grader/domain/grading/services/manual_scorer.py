"""
ManualScorer - Heuristic Descriptive Answer Scorer

Deterministic fallback used whenever the sentence-embedding model is not
available (or fails for a particular answer). Approximates semantic
similarity from four cheap signals.

Architecture Notes:
    - Pure domain service (no infrastructure dependencies)
    - Stateless and deterministic: identical inputs give identical results,
      which keeps grading audits reproducible
    - Weights and band table injected via ManualScorerConfig

Algorithm:
    1. Empty answer (after normalization) -> "No Answer", zero marks
    2. Keyword score: student keywords vs model keywords (exact 1.0, similar 0.7)
    3. Length score: min/max length ratio, capped at 0.3 for very short answers
    4. Structure score: sentences, commas, capital letter, period
    5. Technical score: stream vocabulary shared with the model answer
    6. Weighted sum x stream "conceptual" multiplier, clamped to 1.0
    7. Band table -> classification / grade / marks
    8. Confidence from (keyword + structure) / 2
"""

import logging
import re
from dataclasses import dataclass, field

import Levenshtein

from exam_grader.domain.grading.constants import (
    FEEDBACK_MESSAGES,
    MIN_KEYWORD_LENGTH,
    STOP_WORDS,
    TECHNICAL_TERMS,
)
from exam_grader.domain.grading.grading_config import (
    KEYWORD_EXACT_SCORE,
    KEYWORD_NEUTRAL_SCORE,
    STRUCTURE_CAPITAL,
    STRUCTURE_COMMA,
    STRUCTURE_MULTI_SENTENCE,
    STRUCTURE_PERIOD,
    TECHNICAL_NEUTRAL_SCORE,
    ManualScorerConfig,
    manual_band_for,
)
from exam_grader.domain.grading.services.text_normalizer import normalize_text
from exam_grader.domain.grading.services.threshold_store import ThresholdStore
from exam_grader.domain.grading.value_objects import (
    Breakdown,
    Confidence,
    Domain,
    EvaluationMethod,
    EvaluationResult,
)
from exam_grader.shared.utils import round_half_up

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_CAPITAL_LETTER = re.compile(r"[A-Z]")


def extract_keywords(normalized_text: str) -> list[str]:
    """
    Split normalized text into unique keywords, preserving first occurrence order.

    Tokens are whitespace-split, stripped of non-alphanumerics and dropped if
    they are stop words or shorter than MIN_KEYWORD_LENGTH.

    Examples:
        >>> extract_keywords("tcp is a reliable, connection-oriented protocol.")
        ['tcp', 'reliable', 'connectionoriented', 'protocol']
    """
    keywords: list[str] = []
    seen: set[str] = set()
    for token in normalized_text.split():
        word = _NON_ALPHANUMERIC.sub("", token)
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
    return keywords


def term_pattern(term: str) -> re.Pattern[str]:
    """Word-boundary pattern for a vocabulary term, allowing a plural suffix."""
    return re.compile(r"\b" + re.escape(term) + r"(?:s|es)?\b")


# Compiled once per stream
_TERM_PATTERNS: dict[str, list[tuple[str, re.Pattern[str]]]] = {
    domain: [(term, term_pattern(term)) for term in terms]
    for domain, terms in TECHNICAL_TERMS.items()
}


def find_technical_terms(normalized_text: str, domain: Domain) -> set[str]:
    """
    Return the stream vocabulary terms present in the text.

    Examples:
        >>> sorted(find_technical_terms("tcp retransmits lost packets.", Domain.CSE))
        ['packet', 'tcp']
    """
    return {
        term
        for term, pattern in _TERM_PATTERNS[domain.value]
        if pattern.search(normalized_text)
    }


@dataclass
class ManualScorer:
    """
    Domain service grading a student answer against a model answer heuristically.

    Attributes:
        threshold_store: Source of the per-stream conceptual multipliers
        config: Weights, keyword/length rules and confidence thresholds

    Usage Example:
        >>> scorer = ManualScorer(ThresholdStore())
        >>> result = scorer.score(
        ...     "A stack is LIFO.",
        ...     "A stack is a LIFO data structure.",
        ...     Domain.CSE,
        ... )
        >>> result.evaluation_method
        <EvaluationMethod.MANUAL: 'MANUAL'>
    """

    threshold_store: ThresholdStore = field(default_factory=ThresholdStore)
    config: ManualScorerConfig = field(default_factory=ManualScorerConfig.default)

    def score(
        self,
        student_answer: str,
        model_answer: str,
        domain: Domain = Domain.CSE,
        max_marks: float = 10.0,
    ) -> EvaluationResult:
        """
        Grade one answer.

        Args:
            student_answer: Raw student answer (structure is judged on raw text)
            model_answer: Raw model answer
            domain: Engineering stream (vocabulary + conceptual multiplier)
            max_marks: Marks available

        Returns:
            EvaluationResult with evaluation_method=MANUAL and a breakdown.
            Empty input gives a "No Answer" result with zero marks.
        """
        student = normalize_text(student_answer)
        model = normalize_text(model_answer)

        if not student or not model:
            return EvaluationResult.no_answer(max_marks=max_marks)

        keyword = self.calculate_keyword_score(student, model)
        length = self.calculate_length_score(student, model)
        structure = self.calculate_structure_score(student_answer)
        technical = self.calculate_technical_score(student, model, domain)

        weights = self.config.weights
        combined = (
            weights.keywords * keyword
            + weights.length * length
            + weights.structure * structure
            + weights.technical * technical
        )
        multiplier = self.threshold_store.multiplier_for(domain, technical=False)
        final_score = max(0.0, min(1.0, combined * multiplier))

        band = manual_band_for(final_score)
        confidence = self.calculate_confidence(keyword, structure)
        marks = min(max_marks, round_half_up(max_marks * band.marks_multiplier, 1))

        logger.debug(
            f"Manual score {final_score:.3f} (keywords={keyword:.2f}, length={length:.2f}, "
            f"structure={structure:.2f}, technical={technical:.2f}, "
            f"multiplier={multiplier}) -> {band.classification.value}/{band.grade.value}"
        )

        return EvaluationResult(
            similarity=final_score,
            percentage=int(round_half_up(final_score * 100)),
            classification=band.classification,
            classification_label=EvaluationResult.label_for(
                band.classification, EvaluationMethod.MANUAL
            ),
            grade=band.grade,
            marks=marks,
            max_marks=max_marks,
            evaluation_method=EvaluationMethod.MANUAL,
            confidence=confidence,
            breakdown=Breakdown.from_scores(keyword, length, structure, technical),
            requires_review=confidence == Confidence.LOW,
            feedback=FEEDBACK_MESSAGES[band.classification.value],
        )

    def calculate_keyword_score(self, student: str, model: str) -> float:
        """
        Keyword overlap between normalized answers (0-1).

        Each student keyword earns 1.0 for an exact match with a model keyword,
        or `similar_keyword_score` if it is similar to one. The sum is divided
        by the number of model keywords.

        Returns:
            0.5 (neutral) when the model answer has no keywords.
        """
        model_keywords = extract_keywords(model)
        if not model_keywords:
            return KEYWORD_NEUTRAL_SCORE

        model_set = set(model_keywords)
        total = 0.0
        for word in extract_keywords(student):
            if word in model_set:
                total += KEYWORD_EXACT_SCORE
            elif any(self.are_similar(word, candidate) for candidate in model_keywords):
                total += self.config.similar_keyword_score

        return min(1.0, total / len(model_keywords))

    def are_similar(self, first: str, second: str) -> bool:
        """
        Near-miss test for two keywords.

        Similar when one contains the other, or when their Levenshtein
        distance is at most max(1, floor(0.3 * shorter length)).

        Examples:
            >>> ManualScorer().are_similar("acknowledgment", "acknowledgments")
            True
            >>> ManualScorer().are_similar("voltage", "current")
            False
        """
        if first in second or second in first:
            return True
        allowed = max(1, int(self.config.edit_distance_ratio * min(len(first), len(second))))
        return Levenshtein.distance(first, second) <= allowed

    def calculate_length_score(self, student: str, model: str) -> float:
        """
        Length ratio of the normalized answers (0-1).

        Answers under 20% of the model answer's length are capped at 0.3,
        whatever their keyword overlap.
        """
        shorter, longer = sorted((len(student), len(model)))
        if longer == 0:
            return 0.0

        ratio = shorter / longer
        if len(student) < self.config.short_answer_ratio * len(model):
            ratio = min(ratio, self.config.short_answer_length_cap)
        return ratio

    def calculate_structure_score(self, raw_answer: str) -> float:
        """
        Additive writing-structure signal on the raw answer (0-1).

        +0.3 for two or more sentences, +0.2 for a comma,
        +0.2 for a capital letter, +0.3 for a period.
        """
        text = raw_answer.strip() if isinstance(raw_answer, str) else ""

        sentences = [part for part in _SENTENCE_SPLIT.split(text) if part.strip()]
        score = 0.0
        if len(sentences) >= 2:
            score += STRUCTURE_MULTI_SENTENCE
        if "," in text:
            score += STRUCTURE_COMMA
        if _CAPITAL_LETTER.search(text):
            score += STRUCTURE_CAPITAL
        if "." in text:
            score += STRUCTURE_PERIOD
        return min(1.0, score)

    def calculate_technical_score(self, student: str, model: str, domain: Domain) -> float:
        """
        Share of the model answer's stream terms that the student also used.

        Returns:
            0.7 (neutral) when the model answer contains no stream terms.
        """
        model_terms = find_technical_terms(model, domain)
        if not model_terms:
            return TECHNICAL_NEUTRAL_SCORE

        shared = model_terms & find_technical_terms(student, domain)
        return len(shared) / len(model_terms)

    def calculate_confidence(self, keyword: float, structure: float) -> Confidence:
        """high >= 0.7, medium >= 0.4, else low - on (keyword + structure) / 2."""
        signal = (keyword + structure) / 2
        if signal >= self.config.high_confidence_threshold:
            return Confidence.HIGH
        if signal >= self.config.medium_confidence_threshold:
            return Confidence.MEDIUM
        return Confidence.LOW
