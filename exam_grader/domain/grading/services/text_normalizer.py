"""
Text normalization for answer comparison.

Canonicalizes free-text answers before any scoring so that case,
spacing, contractions and repeated punctuation never affect similarity.
"""

import re
from typing import Any

from exam_grader.domain.grading.constants import CONTRACTIONS, MAX_NORMALIZED_LENGTH

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_TERMINATORS = re.compile(r"[.!?]+")
_CLAUSE_SEPARATORS = re.compile(r"[,;:]+")


def normalize_text(text: Any) -> str:
    """
    Normalize an answer string.

    Steps (in order):
        1. Non-string input -> ""
        2. Lower-case
        3. Collapse whitespace runs to one space, trim
        4. Expand contractions ("don't" -> "do not")
        5. Collapse repeated .!? to "." and repeated ,;: to ","
        6. Truncate to 1000 characters

    Pure and idempotent: normalize_text(normalize_text(x)) == normalize_text(x).

    Examples:
        >>> normalize_text("  It DOESN'T   work!!! ")
        'it does not work.'
        >>> normalize_text(None)
        ''
    """
    if not isinstance(text, str):
        return ""

    processed = text.lower()
    processed = _WHITESPACE.sub(" ", processed).strip()

    for contraction, expansion in CONTRACTIONS.items():
        processed = processed.replace(contraction, expansion)

    processed = _SENTENCE_TERMINATORS.sub(".", processed)
    processed = _CLAUSE_SEPARATORS.sub(",", processed)

    # Cut may land on a space; strip keeps the result a fixed point
    return processed[:MAX_NORMALIZED_LENGTH].rstrip()
