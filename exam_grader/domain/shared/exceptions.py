"""
Domain Layer Exceptions

Exception hierarchy for the grading domain.
All domain-specific exceptions inherit from DomainException.

The evaluator uses these as typed signals to choose between the embedding
path, the manual path and an "Error" result. None of them depend on FastAPI.

Taxonomy:
    - InvalidInputError: answer empty after normalization (embedding path)
    - InvalidThresholdsError: threshold update violates ordering/range rules
    - EvaluationError: unexpected failure while scoring a single pair
    - EmbeddingBackendError: root of embedding backend failures
        * BackendUnavailableError: embedding library/runtime missing or load failed
        * ModelNotLoadedError: embedding requested while model handle not LOADED

Propagation Policy:
    AnswerEvaluator.evaluate()/evaluate_batch() never let these escape.
    Only update_thresholds() propagates InvalidThresholdsError to the caller.
"""


class DomainException(Exception):
    """
    Root of the grading error hierarchy.

    The API maps subclasses to HTTP status codes; see api.main.DOMAIN_ERROR_STATUS.

    Examples:
        >>> str(DomainException("Answer pair rejected"))
        'DomainException: Answer pair rejected'
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidInputError(DomainException):
    """
    Raised when an answer cannot be scored because it is empty.

    The embedding path raises this after normalization leaves nothing to embed.
    The evaluator converts it into a deterministic "No Answer" result.

    Examples:
        >>> raise InvalidInputError("Student answer is empty after normalization", field_name="student_answer")
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        """
        Args:
            message: Error description
            field_name: Which answer was empty (optional)
        """
        self.field_name = field_name
        super().__init__(message)


class InvalidThresholdsError(DomainException):
    """
    Raised when a threshold update breaks the cut-point invariants.

    Cut points must lie in [0, 1] and be non-increasing:
    excellent >= good >= average >= poor >= fail.
    The whole update is rejected; the previous thresholds stay active.

    Attributes:
        errors: List of individual violations

    Examples:
        >>> raise InvalidThresholdsError(
        ...     "Invalid thresholds",
        ...     errors=["good (0.9) must be <= excellent (0.85)"],
        ... )
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        if self.errors:
            message = f"{message}: {'; '.join(self.errors)}"
        super().__init__(message)


class EvaluationError(DomainException):
    """
    Raised when scoring a single answer pair fails unexpectedly.

    Caught per pair by the evaluator, which emits an "Error" result
    with zero marks so that the rest of the batch completes.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class EmbeddingBackendError(DomainException):
    """Base class for failures of the sentence-embedding backend."""


class BackendUnavailableError(EmbeddingBackendError):
    """
    Raised when the embedding library/runtime is missing or the model fails to load.

    Triggers retry-with-backoff during initialize(); after the last attempt
    the evaluator stays in manual mode until initialize() is called again.
    """

    def __init__(self, message: str, model_name: str | None = None) -> None:
        self.model_name = model_name
        super().__init__(message)


class ModelNotLoadedError(EmbeddingBackendError):
    """
    Raised when embeddings are requested while the model handle is not LOADED.

    Internal signal only - always caught by the evaluator, which then
    falls back to manual scoring.
    """
