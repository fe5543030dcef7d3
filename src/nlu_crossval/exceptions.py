"""Domain exceptions for cross-validation runs.

Collaborator failures (tokenizer, engine) are wrapped with the original
exception chained as ``__cause__`` and abort the whole run.
"""

from collections.abc import Sequence


class CrossValidationError(Exception):
    """Base exception for cross-validation errors."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or message


class InvalidDatasetError(CrossValidationError):
    """Raised when the corpus or run parameters are invalid."""


class InvalidLabelError(CrossValidationError):
    """Raised when a scorer is given an empty label."""


class TokenizationError(CrossValidationError):
    """Raised when utterances cannot be tokenized."""

    def __init__(self, message: str, language: str, detail: str | None = None) -> None:
        super().__init__(message, detail=detail)
        self.language = language


class TrainingError(CrossValidationError):
    """Raised when the engine fails to train on the split."""

    def __init__(self, message: str, language: str, detail: str | None = None) -> None:
        super().__init__(message, detail=detail)
        self.language = language


class PredictionError(CrossValidationError):
    """Raised when the engine fails to predict a test example."""

    def __init__(
        self,
        message: str,
        text: str,
        contexts: Sequence[str],
        detail: str | None = None,
    ) -> None:
        super().__init__(message, detail=detail)
        self.text = text
        self.contexts = list(contexts)
