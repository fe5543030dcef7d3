"""Seeded, stratified train/test split of an intent corpus."""

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from nlu_crossval.evaluation_set import build_test_set
from nlu_crossval.exceptions import InvalidDatasetError
from nlu_crossval.interfaces import Tokenizer
from nlu_crossval.models.dataset import IntentDefinition, TestExample

logger = logging.getLogger(__name__)

TRAIN_SET_SIZE = 0.8
MIN_TRAIN_UTTERANCES = 3


@dataclass
class DatasetSplit:
    """Outcome of splitting a corpus for one language."""

    train_set: list[IntentDefinition] = field(default_factory=list)
    test_set: list[TestExample] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)

    @property
    def train_size(self) -> int:
        """Number of training utterances across intents."""
        return sum(
            len(utterances)
            for intent in self.train_set
            for utterances in intent.utterances.values()
        )


async def split_dataset(
    language: str,
    intents: Sequence[IntentDefinition],
    tokenizer: Tokenizer,
    *,
    seed: str | int | None = None,
    rng: random.Random | None = None,
    train_fraction: float = TRAIN_SET_SIZE,
    min_train_utterances: int = MIN_TRAIN_UTTERANCES,
) -> DatasetSplit:
    """
    Split each intent's utterances into training and held-out test examples.

    Every intent is split on its own so class proportions are preserved.
    Intents that would keep fewer than ``min_train_utterances`` training
    utterances are excluded from both sets.

    Args:
        language: Language whose utterance pools are split.
        intents: Corpus intents.
        tokenizer: Utterance builder for the held-out texts.
        seed: Seed for a fresh shuffle source (ignored when ``rng`` is given).
        rng: Run-scoped shuffle source.
        train_fraction: Share of each pool used for training.
        min_train_utterances: Minimum training utterances to keep an intent.

    Returns:
        DatasetSplit with the truncated intents, test examples and the
        names of excluded intents.
    """
    if not 0.0 < train_fraction <= 1.0:
        raise InvalidDatasetError(
            f"train_fraction must be in (0, 1], got {train_fraction}"
        )

    if rng is None:
        rng = random.Random(seed)

    split = DatasetSplit()

    for intent in intents:
        pool = intent.pool(language)
        n_train = math.floor(train_fraction * len(pool))

        if n_train < min_train_utterances:
            logger.info(
                f"Excluding intent '{intent.name}': {n_train} training utterances "
                f"out of {len(pool)} for '{language}' (minimum {min_train_utterances})"
            )
            split.excluded.append(intent.name)
            continue

        utterances = list(pool)
        rng.shuffle(utterances)
        train_utts = utterances[:n_train]
        test_utts = utterances[n_train:]

        split.test_set.extend(
            await build_test_set(test_utts, intent.contexts, intent.name, language, tokenizer)
        )
        split.train_set.append(
            intent.model_copy(update={"utterances": {language: train_utts}})
        )

    logger.info(
        f"Split {len(split.train_set)} intents: {split.train_size} train utterances, "
        f"{len(split.test_set)} test examples, {len(split.excluded)} excluded"
    )
    return split
