"""Data models for cross-validation."""

from nlu_crossval.models.context import (
    ALL_CONTEXTS,
    AllContexts,
    EvaluationContext,
    SingleContext,
)
from nlu_crossval.models.dataset import EntityDefinition, IntentDefinition, TestExample
from nlu_crossval.models.prediction import PredictedIntent, PredictedSlot, Prediction
from nlu_crossval.models.results import (
    CrossValidationResult,
    F1Summary,
    LabelScore,
    RepeatedCrossValidationResult,
)
from nlu_crossval.models.utterance import Label, SlotAnnotation, SlotTag, Token, Utterance

__all__ = [
    "ALL_CONTEXTS",
    "AllContexts",
    "CrossValidationResult",
    "EntityDefinition",
    "EvaluationContext",
    "F1Summary",
    "IntentDefinition",
    "Label",
    "LabelScore",
    "PredictedIntent",
    "PredictedSlot",
    "Prediction",
    "RepeatedCrossValidationResult",
    "SingleContext",
    "SlotAnnotation",
    "SlotTag",
    "Token",
    "TestExample",
    "Utterance",
]
