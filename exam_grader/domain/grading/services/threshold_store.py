"""
ThresholdStore - Mutable holder of grading thresholds and stream adjustments.

Read by both scorers on every call, so updates take effect for all
subsequent evaluations (no retroactive rescoring).

Concurrency:
    No locking. A single writer at a time (the admin UI) is assumed;
    last write wins. Each update swaps in a new immutable ThresholdConfig,
    so readers never observe a half-applied update.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from exam_grader.domain.grading.constants import DOMAIN_ADJUSTMENTS
from exam_grader.domain.grading.grading_config import (
    THRESHOLD_ORDER,
    ThresholdConfig,
)
from exam_grader.domain.grading.value_objects import Domain
from exam_grader.domain.shared.exceptions import InvalidThresholdsError

logger = logging.getLogger(__name__)


class ThresholdStore:
    """
    Process-wide threshold/configuration store.

    Examples:
        >>> store = ThresholdStore()
        >>> store.update({"excellent": 0.9})
        >>> store.thresholds.excellent
        0.9
        >>> store.multiplier_for(Domain.EEE, technical=False)
        0.95
    """

    def __init__(
        self,
        thresholds: Optional[ThresholdConfig] = None,
        domain_adjustments: Optional[Mapping[str, Mapping[str, float]]] = None,
    ) -> None:
        self._thresholds = thresholds or ThresholdConfig()
        self._domain_adjustments = {
            domain: dict(values)
            for domain, values in (domain_adjustments or DOMAIN_ADJUSTMENTS).items()
        }

    @property
    def thresholds(self) -> ThresholdConfig:
        """Current immutable snapshot."""
        return self._thresholds

    @property
    def domain_adjustments(self) -> dict[str, dict[str, float]]:
        """Copy of the per-stream multiplier table."""
        return {domain: dict(values) for domain, values in self._domain_adjustments.items()}

    def update(self, partial: Mapping[str, Any]) -> ThresholdConfig:
        """
        Merge the given cut points into the current thresholds.

        Unknown keys and out-of-range or mis-ordered values reject the whole
        update; the previous snapshot stays active.

        Args:
            partial: Any subset of excellent/good/average/poor/fail

        Returns:
            The new ThresholdConfig

        Raises:
            InvalidThresholdsError: If the merged thresholds are invalid
        """
        unknown = sorted(set(partial) - set(THRESHOLD_ORDER))
        if unknown:
            raise InvalidThresholdsError(
                "Invalid thresholds", errors=[f"unknown cut point '{key}'" for key in unknown]
            )

        merged = {**self._thresholds.to_dict(), **dict(partial)}
        try:
            updated = ThresholdConfig(**merged)
        except ValidationError as e:
            errors = [error["msg"] for error in e.errors()]
            logger.warning(f"Rejected threshold update {dict(partial)}: {errors}")
            raise InvalidThresholdsError("Invalid thresholds", errors=errors) from e

        self._thresholds = updated
        logger.info(f"Updated similarity thresholds: {updated.to_dict()}")
        return updated

    def reset(self) -> ThresholdConfig:
        """Restore the default thresholds."""
        self._thresholds = ThresholdConfig()
        return self._thresholds

    def multiplier_for(self, domain: Domain, technical: bool) -> float:
        """
        Similarity multiplier for a stream.

        Args:
            domain: Engineering stream
            technical: True when the question uses stream vocabulary

        Returns:
            The stream's "technical" or "conceptual" multiplier (1.0 if unknown)
        """
        adjustments = self._domain_adjustments.get(domain.value, {})
        return adjustments.get("technical" if technical else "conceptual", 1.0)
