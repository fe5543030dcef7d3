"""Cross-validation harness for intent classification and slot tagging engines."""

from nlu_crossval.cross_validation import CrossValidator, cross_validate
from nlu_crossval.evaluation_set import build_test_set
from nlu_crossval.exceptions import (
    CrossValidationError,
    InvalidDatasetError,
    InvalidLabelError,
    PredictionError,
    TokenizationError,
    TrainingError,
)
from nlu_crossval.interfaces import NLUEngine, Tokenizer
from nlu_crossval.scoring import MultiClassF1Scorer
from nlu_crossval.splitter import DatasetSplit, split_dataset

__version__ = "0.1.0"

__all__ = [
    "CrossValidationError",
    "CrossValidator",
    "DatasetSplit",
    "InvalidDatasetError",
    "InvalidLabelError",
    "MultiClassF1Scorer",
    "NLUEngine",
    "PredictionError",
    "TokenizationError",
    "Tokenizer",
    "TrainingError",
    "build_test_set",
    "cross_validate",
    "split_dataset",
]
