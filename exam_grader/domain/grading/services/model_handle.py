"""
ModelHandle - Exclusive owner of a loaded embedding model.

Wraps an EmbeddingServiceProtocol with an explicit lifecycle so that the
evaluator always knows whether the AI path may be used.

States:
    UNLOADED -> LOADING -> LOADED | FAILED
    dispose() returns to UNLOADED from any state.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from exam_grader.domain.grading.services.embedding_service import EmbeddingServiceProtocol
from exam_grader.domain.shared.exceptions import (
    BackendUnavailableError,
    ModelNotLoadedError,
)

logger = logging.getLogger(__name__)


class ModelState(str, Enum):
    """Lifecycle state of the embedding model."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ModelHandle:
    """
    Lifecycle wrapper around an embedding service.

    Only AnswerEvaluator creates and holds a ModelHandle; it is never
    shared outside the evaluator.

    Examples:
        >>> handle = ModelHandle(service)
        >>> await handle.load()
        >>> handle.is_loaded
        True
        >>> vectors = await handle.embed(["first", "second"])
        >>> handle.dispose()
        >>> handle.state
        <ModelState.UNLOADED: 'unloaded'>
    """

    def __init__(self, service: EmbeddingServiceProtocol) -> None:
        self._service = service
        self._state = ModelState.UNLOADED
        self.last_error: Optional[str] = None

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state == ModelState.LOADED

    @property
    def model_name(self) -> str:
        return self._service.model_name

    def is_backend_available(self) -> bool:
        """True if the embedding library is installed."""
        return self._service.is_available()

    async def load(self) -> None:
        """
        Load the model in a worker thread.

        If the awaiting task is cancelled (e.g. by a timeout), the thread is
        abandoned, not killed, and the handle is marked FAILED.

        Raises:
            BackendUnavailableError: If the backend is missing or loading fails
        """
        if self._state == ModelState.LOADED:
            return

        if not self._service.is_available():
            self._state = ModelState.FAILED
            self.last_error = "Embedding backend is not installed"
            raise BackendUnavailableError(self.last_error, model_name=self.model_name)

        self._state = ModelState.LOADING
        logger.info(f"Loading embedding model: {self.model_name}")
        try:
            await asyncio.to_thread(self._service.load)
        except asyncio.CancelledError:
            self._state = ModelState.FAILED
            self.last_error = "Model load was cancelled"
            raise
        except Exception as e:
            self._state = ModelState.FAILED
            self.last_error = str(e)
            raise BackendUnavailableError(
                f"Failed to load embedding model '{self.model_name}': {e}",
                model_name=self.model_name,
            ) from e

        self._state = ModelState.LOADED
        self.last_error = None
        logger.info(f"Embedding model loaded: {self.model_name}")

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts with the loaded model (in a worker thread).

        Raises:
            ModelNotLoadedError: If the handle is not LOADED
        """
        if self._state != ModelState.LOADED:
            raise ModelNotLoadedError(
                f"Embedding model is not loaded (state: {self._state.value})"
            )
        return await asyncio.to_thread(self._service.embed, texts)

    def mark_failed(self, reason: str) -> None:
        """Flag a loaded model as unusable (e.g. after a failed self-test)."""
        self._state = ModelState.FAILED
        self.last_error = reason

    def dispose(self) -> None:
        """Release the model and return to UNLOADED."""
        try:
            self._service.unload()
        finally:
            self._state = ModelState.UNLOADED
        logger.info(f"Embedding model disposed: {self.model_name}")
