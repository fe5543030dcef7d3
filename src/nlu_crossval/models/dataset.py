"""Corpus definitions and evaluation examples."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nlu_crossval.models.utterance import Label, Utterance


class IntentDefinition(BaseModel):
    """One labeled intent class with per-language utterance pools."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1, description="Intent name (the class label)")
    contexts: list[str] = Field(
        min_length=1,
        description="Contexts in which this intent is a prediction candidate",
    )
    utterances: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Raw utterances keyed by language code",
    )
    slots: list[dict[str, Any]] = Field(default_factory=list)

    def pool(self, language: str) -> list[str]:
        """Get the utterance pool for a language (empty if missing)."""
        return self.utterances.get(language, [])


class EntityDefinition(BaseModel):
    """Entity definition handed to the engine untouched."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str
    type: str = "list"


@dataclass(frozen=True)
class TestExample:
    """A held-out utterance with its gold labels."""

    __test__ = False  # not a pytest test class

    utterance: Utterance
    contexts: tuple[str, ...]
    intent: str
    slot_labels: tuple[Label, ...]

    @property
    def text(self) -> str:
        return str(self.utterance)
