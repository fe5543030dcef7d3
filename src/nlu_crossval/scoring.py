"""Multi-class precision/recall/F1 scoring."""

from collections import Counter

from nlu_crossval.exceptions import InvalidLabelError
from nlu_crossval.models.results import F1Summary, LabelScore
from nlu_crossval.models.utterance import Label, SlotTag


class MultiClassF1Scorer:
    """
    Accumulates (predicted, actual) label pairs and computes F1 per label.

    Labels are discovered as they are recorded, so neither intents nor
    slot names need to be declared up front. ``SlotTag.OUTSIDE`` is scored
    like any other label but left out of the macro averages.
    """

    def __init__(self) -> None:
        self._confusion: Counter[tuple[Label, Label]] = Counter()

    def record(self, predicted: Label, actual: Label) -> None:
        """Count one prediction against its gold label."""
        _check_label(predicted)
        _check_label(actual)
        self._confusion[(predicted, actual)] += 1

    @property
    def total(self) -> int:
        """Number of recorded pairs."""
        return sum(self._confusion.values())

    @property
    def accuracy(self) -> float:
        """Share of recorded pairs where prediction equals gold."""
        total = self.total
        if total == 0:
            return 0.0
        correct = sum(n for (p, a), n in self._confusion.items() if p == a)
        return correct / total

    def confusion_matrix(self) -> dict[tuple[Label, Label], int]:
        """Copy of the (predicted, actual) -> count accumulator."""
        return dict(self._confusion)

    def get_results(self) -> F1Summary:
        """Compute per-label and macro scores. Safe to call repeatedly."""
        true_positives: Counter[Label] = Counter()
        predicted: Counter[Label] = Counter()
        actual: Counter[Label] = Counter()

        for (p, a), n in self._confusion.items():
            predicted[p] += n
            actual[a] += n
            if p == a:
                true_positives[p] += n

        labels: dict[str, LabelScore] = {}
        outside: LabelScore | None = None
        for label in dict.fromkeys([*actual, *predicted]):
            score = LabelScore(
                label=label,
                true_positives=true_positives[label],
                predicted_count=predicted[label],
                actual_count=actual[label],
            )
            if label is SlotTag.OUTSIDE:
                outside = score
            else:
                labels[label] = score

        return F1Summary(labels=labels, outside=outside)


def _check_label(label: Label) -> None:
    if isinstance(label, SlotTag):
        return
    if not isinstance(label, str) or not label:
        raise InvalidLabelError(f"Invalid label: {label!r}")
