"""Evaluation contexts."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SingleContext:
    """Predictions restricted to one named context."""

    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class AllContexts:
    """Predictions over the whole context universe."""

    @property
    def label(self) -> str:
        return "all"


ALL_CONTEXTS = AllContexts()

EvaluationContext = Union[SingleContext, AllContexts]
