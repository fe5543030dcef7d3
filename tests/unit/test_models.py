"""Tests for data models."""

import pytest
from pydantic import ValidationError

from nlu_crossval.models import (
    ALL_CONTEXTS,
    AllContexts,
    CrossValidationResult,
    F1Summary,
    IntentDefinition,
    LabelScore,
    PredictedIntent,
    PredictedSlot,
    Prediction,
    SingleContext,
    SlotAnnotation,
    SlotTag,
    Token,
)


class TestToken:
    """Token helpers."""

    def test_slot_label_uses_first_annotation(self) -> None:
        token = Token(
            offset=0,
            value="paris",
            slots=(
                SlotAnnotation(name="city", start=0, end=5),
                SlotAnnotation(name="destination", start=0, end=5),
            ),
        )

        assert token.slot_label == "city"
        assert token.end == 5

    def test_no_annotation_is_outside(self) -> None:
        assert Token(offset=3, value="to").slot_label is SlotTag.OUTSIDE

    def test_outside_is_not_a_string(self) -> None:
        assert SlotTag.OUTSIDE != "outside"
        assert str(SlotTag.OUTSIDE) == "outside"


class TestPrediction:
    """Slot span coverage."""

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (10, 15, "city"),  # exact
            (5, 20, "city"),  # wider
            (11, 15, SlotTag.OUTSIDE),  # starts late
            (10, 14, SlotTag.OUTSIDE),  # ends early
            (20, 25, SlotTag.OUTSIDE),  # elsewhere
        ],
    )
    def test_slot_label_for(self, start: int, end: int, expected) -> None:
        prediction = Prediction(
            intent={"name": "book"},
            slots={"s": PredictedSlot(name="city", start=start, end=end)},
        )
        token = Token(offset=10, value="paris")

        assert prediction.slot_label_for(token) == expected

    def test_validated_from_mapping(self) -> None:
        prediction = Prediction.model_validate(
            {
                "intent": {"name": "book", "confidence": 0.9},
                "slots": {"abc": {"name": "city", "start": 0, "end": 4, "source": "lyon"}},
            }
        )

        assert prediction.intent.name == "book"
        assert prediction.slots["abc"].name == "city"

    def test_empty_intent_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PredictedIntent(name="")

    def test_empty_slot_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PredictedSlot(name="", start=0, end=1)


class TestIntentDefinition:
    """Corpus validation."""

    def test_contexts_required(self) -> None:
        with pytest.raises(ValidationError):
            IntentDefinition(name="a", contexts=[], utterances={})

    def test_pool_for_missing_language(self) -> None:
        intent = IntentDefinition(name="a", contexts=["c"], utterances={"en": ["hi"]})

        assert intent.pool("en") == ["hi"]
        assert intent.pool("fr") == []


class TestContexts:
    """Evaluation context variants."""

    def test_all_contexts_distinct_from_named_all(self) -> None:
        assert SingleContext("all") != ALL_CONTEXTS
        assert AllContexts() == ALL_CONTEXTS
        assert len({SingleContext("all"), ALL_CONTEXTS}) == 2
        assert ALL_CONTEXTS.label == "all"


class TestResults:
    """Result serialization."""

    def test_to_dict_shape(self) -> None:
        summary = F1Summary(
            labels={"a": LabelScore(label="a", true_positives=1, predicted_count=1, actual_count=2)},
            outside=LabelScore(label=SlotTag.OUTSIDE, true_positives=3, predicted_count=3, actual_count=3),
        )
        result = CrossValidationResult(
            intents={SingleContext("billing"): summary, ALL_CONTEXTS: summary},
            slots=summary,
            seed="s",
            language="en",
        )

        data = result.to_dict()

        assert set(data["intents"]) == {"billing"}
        assert data["all_contexts"]["macro_f1"] == round(2 / 3, 4)
        assert data["slots"]["labels"]["a"]["recall"] == 0.5
        assert data["slots"]["outside"]["f1"] == 1.0
        assert result.context_names == ["billing"]

    def test_print_report(self, capsys) -> None:
        summary = F1Summary(
            labels={"a": LabelScore(label="a", true_positives=1, predicted_count=1, actual_count=1)}
        )
        result = CrossValidationResult(
            intents={SingleContext("billing"): summary},
            slots=F1Summary(),
            excluded_intents=("tiny",),
        )

        result.print_report()

        out = capsys.readouterr().out
        assert "Intents [billing]" in out
        assert "tiny" in out
