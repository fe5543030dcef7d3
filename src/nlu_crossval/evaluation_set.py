"""Builds held-out evaluation examples from raw utterances."""

import logging
from collections.abc import Sequence

from nlu_crossval.exceptions import TokenizationError
from nlu_crossval.interfaces import Tokenizer
from nlu_crossval.models.dataset import TestExample

logger = logging.getLogger(__name__)


async def build_test_set(
    raw_texts: Sequence[str],
    contexts: Sequence[str],
    intent_name: str,
    language: str,
    tokenizer: Tokenizer,
) -> list[TestExample]:
    """
    Tokenize held-out utterances of one intent and attach gold labels.

    Each token's gold slot label is the name of its first slot annotation,
    or ``SlotTag.OUTSIDE`` when it has none.

    Args:
        raw_texts: Held-out utterances of the intent.
        contexts: Contexts the intent belongs to.
        intent_name: Gold intent label.
        language: Language code passed to the tokenizer.
        tokenizer: Utterance builder.

    Returns:
        One TestExample per input text, in input order.

    Raises:
        TokenizationError: If the tokenizer fails or returns the wrong count.
    """
    if not raw_texts:
        return []

    try:
        utterances = await tokenizer.build_utterance_batch(list(raw_texts), language)
    except Exception as e:
        raise TokenizationError(
            f"Failed to tokenize utterances of intent '{intent_name}'",
            language=language,
            detail=str(e),
        ) from e

    if len(utterances) != len(raw_texts):
        raise TokenizationError(
            f"Tokenizer returned {len(utterances)} utterances for "
            f"{len(raw_texts)} texts of intent '{intent_name}'",
            language=language,
        )

    logger.debug(f"Built {len(utterances)} test examples for intent '{intent_name}'")

    return [
        TestExample(
            utterance=utterance,
            contexts=tuple(contexts),
            intent=intent_name,
            slot_labels=tuple(token.slot_label for token in utterance.tokens),
        )
        for utterance in utterances
    ]
