"""Contracts of the collaborators driven by a cross-validation run."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from nlu_crossval.models.dataset import EntityDefinition, IntentDefinition
from nlu_crossval.models.prediction import Prediction
from nlu_crossval.models.utterance import Utterance


class Tokenizer(Protocol):
    """Builds tokenized utterances from raw text."""

    async def build_utterance_batch(
        self, texts: Sequence[str], language: str
    ) -> list[Utterance]:
        """Return exactly one utterance per input text, in input order."""
        ...


class NLUEngine(Protocol):
    """Intent classification and slot tagging engine under evaluation."""

    async def train(
        self,
        train_set: list[IntentDefinition],
        entities: list[EntityDefinition],
        language: str,
    ) -> None:
        """Fit the model. Must finish before ``predict`` is called."""
        ...

    async def predict(
        self, text: str, contexts: Sequence[str]
    ) -> Prediction | Mapping[str, Any]:
        """Predict the intent and slots of ``text`` among ``contexts``."""
        ...
