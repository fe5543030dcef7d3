"""Pytest configuration and fixtures."""

import os
import re
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Keep test runs independent of a developer's .env
os.environ.setdefault("NLU_CROSSVAL_SEED", "confusion")

from nlu_crossval.config import Settings  # noqa: E402
from nlu_crossval.models import (  # noqa: E402
    IntentDefinition,
    PredictedSlot,
    Prediction,
    SlotAnnotation,
    Token,
    Utterance,
)

_SLOT_MARKUP = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


class WhitespaceTokenizer:
    """
    Splits on whitespace. ``[value](slot)`` markup becomes a slot annotation
    on the tokens of ``value`` and is stripped from the text.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], str]] = []

    async def build_utterance_batch(self, texts: Sequence[str], language: str) -> list[Utterance]:
        self.calls.append((list(texts), language))
        return [self.build(text) for text in texts]

    @staticmethod
    def build(raw: str) -> Utterance:
        text = ""
        spans: list[SlotAnnotation] = []
        pos = 0
        for match in _SLOT_MARKUP.finditer(raw):
            text += raw[pos:match.start()]
            start = len(text)
            text += match.group(1)
            spans.append(SlotAnnotation(name=match.group(2), start=start, end=len(text)))
            pos = match.end()
        text += raw[pos:]

        tokens = []
        for match in re.finditer(r"\S+", text):
            slots = tuple(s for s in spans if s.start <= match.start() and match.end() <= s.end)
            tokens.append(Token(offset=match.start(), value=match.group(), slots=slots))
        return Utterance(text=text, tokens=tuple(tokens))


class FirstWordEngine:
    """
    Predicts the first word of the text as the intent name.

    ``slots`` optionally maps a text to the slots to return for it.
    """

    def __init__(
        self,
        slots: Callable[[str], dict[str, PredictedSlot]] | None = None,
    ) -> None:
        self.slots = slots or (lambda text: {})
        self.trained_with: list[Any] | None = None
        self.train_calls = 0
        self.predict_calls: list[tuple[str, list[str]]] = []

    async def train(self, train_set, entities, language) -> None:
        self.train_calls += 1
        self.trained_with = train_set

    async def predict(self, text: str, contexts: Sequence[str]) -> Prediction:
        self.predict_calls.append((text, list(contexts)))
        return Prediction(intent={"name": text.split()[0]}, slots=self.slots(text))


def make_intent(
    name: str,
    count: int,
    contexts: list[str] | None = None,
    language: str = "en",
) -> IntentDefinition:
    """Helper to create an intent whose utterances start with its name."""
    return IntentDefinition(
        name=name,
        contexts=contexts or ["global"],
        utterances={language: [f"{name} utterance number {i}" for i in range(count)]},
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    """Settings with sequential evaluation."""
    return Settings(concurrency=1, _env_file=None)


@pytest.fixture
def tokenizer() -> WhitespaceTokenizer:
    return WhitespaceTokenizer()


@pytest.fixture
def engine() -> FirstWordEngine:
    return FirstWordEngine()


@pytest.fixture
def intent_factory() -> Callable[..., IntentDefinition]:
    return make_intent


@pytest.fixture
def engine_factory() -> type[FirstWordEngine]:
    return FirstWordEngine
