"""Tests for the seeded stratified splitter."""

import random

import pytest

from nlu_crossval.exceptions import InvalidDatasetError
from nlu_crossval.models import IntentDefinition
from nlu_crossval.splitter import split_dataset


class TestStratifiedSplit:
    """Per-intent split sizes."""

    async def test_large_pool_in_both_sets(self, tokenizer, intent_factory) -> None:
        """15 utterances under 80% give 12 train and 3 test."""
        intent = intent_factory("greet", 15)

        split = await split_dataset("en", [intent], tokenizer, seed="s")

        assert [i.name for i in split.train_set] == ["greet"]
        assert len(split.train_set[0].utterances["en"]) == 12
        assert len(split.test_set) == 3
        assert all(ex.intent == "greet" for ex in split.test_set)
        assert split.excluded == []

    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    async def test_small_pool_excluded(self, tokenizer, intent_factory, count: int) -> None:
        """Fewer than 4 utterances leave fewer than 3 for training."""
        intent = intent_factory("tiny", count)

        split = await split_dataset("en", [intent], tokenizer, seed="s")

        assert split.train_set == []
        assert split.test_set == []
        assert split.excluded == ["tiny"]
        assert tokenizer.calls == []

    async def test_four_utterances_kept(self, tokenizer, intent_factory) -> None:
        split = await split_dataset("en", [intent_factory("few", 4)], tokenizer, seed="s")

        assert len(split.train_set[0].utterances["en"]) == 3
        assert len(split.test_set) == 1

    async def test_missing_language_excluded(self, tokenizer, intent_factory) -> None:
        intent = intent_factory("greet", 10, language="fr")

        split = await split_dataset("en", [intent], tokenizer, seed="s")

        assert split.excluded == ["greet"]

    async def test_partition_covers_pool(self, tokenizer, intent_factory) -> None:
        """Train and test slices are disjoint and together form the pool."""
        intent = intent_factory("greet", 10)

        split = await split_dataset("en", [intent], tokenizer, seed="s")

        train = split.train_set[0].utterances["en"]
        test = [ex.text for ex in split.test_set]
        assert sorted(train + test) == sorted(intent.utterances["en"])
        assert not set(train) & set(test)

    async def test_other_fields_preserved(self, tokenizer) -> None:
        intent = IntentDefinition(
            name="book",
            contexts=["travel", "global"],
            utterances={"en": [f"book {i}" for i in range(10)], "fr": ["réserver"]},
            slots=[{"name": "city", "entities": ["city"]}],
        )

        split = await split_dataset("en", [intent], tokenizer, seed="s")

        trained = split.train_set[0]
        assert trained.contexts == ["travel", "global"]
        assert trained.slots == intent.slots
        assert set(trained.utterances) == {"en"}
        assert len(intent.utterances["en"]) == 10  # input untouched
        assert split.test_set[0].contexts == ("travel", "global")

    async def test_full_train_fraction(self, tokenizer, intent_factory) -> None:
        split = await split_dataset(
            "en", [intent_factory("greet", 5)], tokenizer, seed="s", train_fraction=1.0
        )

        assert len(split.train_set[0].utterances["en"]) == 5
        assert split.test_set == []

    @pytest.mark.parametrize("fraction", [0.0, -0.5, 1.5])
    async def test_invalid_fraction(self, tokenizer, intent_factory, fraction: float) -> None:
        with pytest.raises(InvalidDatasetError):
            await split_dataset(
                "en", [intent_factory("greet", 5)], tokenizer, train_fraction=fraction
            )


class TestDeterminism:
    """Seeded shuffling."""

    async def test_same_seed_same_split(self, tokenizer, intent_factory) -> None:
        intents = [intent_factory("a", 20), intent_factory("b", 12)]

        first = await split_dataset("en", intents, tokenizer, seed="confusion")
        second = await split_dataset("en", intents, tokenizer, seed="confusion")

        assert [i.utterances for i in first.train_set] == [i.utterances for i in second.train_set]
        assert [ex.text for ex in first.test_set] == [ex.text for ex in second.test_set]

    async def test_different_seed_different_split(self, tokenizer, intent_factory) -> None:
        intents = [intent_factory("a", 40)]

        first = await split_dataset("en", intents, tokenizer, seed="one")
        second = await split_dataset("en", intents, tokenizer, seed="two")

        assert {ex.text for ex in first.test_set} != {ex.text for ex in second.test_set}

    async def test_excluded_intent_does_not_consume_randomness(
        self, tokenizer, intent_factory
    ) -> None:
        big = intent_factory("big", 10)

        alone = await split_dataset("en", [big], tokenizer, seed="s")
        with_small = await split_dataset(
            "en", [intent_factory("small", 2), big], tokenizer, seed="s"
        )

        assert alone.train_set[0].utterances == with_small.train_set[0].utterances

    async def test_explicit_rng_is_used(self, tokenizer, intent_factory) -> None:
        intents = [intent_factory("a", 10)]

        from_rng = await split_dataset("en", intents, tokenizer, rng=random.Random(7))
        from_seed = await split_dataset("en", intents, tokenizer, seed=7)

        assert from_rng.train_set[0].utterances == from_seed.train_set[0].utterances

    async def test_global_random_untouched(self, tokenizer, intent_factory) -> None:
        random.seed(1234)
        expected = random.random()
        random.seed(1234)

        await split_dataset("en", [intent_factory("a", 10)], tokenizer, seed="s")

        assert random.random() == expected
