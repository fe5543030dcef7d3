"""Cross-validation scores and results."""

from dataclasses import dataclass, field
from typing import Any

from nlu_crossval.models.context import AllContexts, EvaluationContext, SingleContext
from nlu_crossval.models.utterance import Label


@dataclass(frozen=True)
class LabelScore:
    """Precision, recall and F1 for a single label."""

    label: Label
    true_positives: int = 0
    predicted_count: int = 0
    actual_count: int = 0

    @property
    def precision(self) -> float:
        """Calculate precision: TP / predicted."""
        if self.predicted_count == 0:
            return 0.0
        return self.true_positives / self.predicted_count

    @property
    def recall(self) -> float:
        """Calculate recall: TP / actual."""
        if self.actual_count == 0:
            return 0.0
        return self.true_positives / self.actual_count

    @property
    def f1(self) -> float:
        """Calculate F1 score: 2 * (P * R) / (P + R)."""
        p = self.precision
        r = self.recall
        if p + r == 0:
            return 0.0
        return 2 * (p * r) / (p + r)

    @property
    def support(self) -> int:
        """Number of actual instances of this label."""
        return self.actual_count

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "precision": round(self.precision, 4),
            "recall": round(self.recall, 4),
            "f1": round(self.f1, 4),
            "support": self.support,
            "true_positives": self.true_positives,
            "false_positives": self.predicted_count - self.true_positives,
            "false_negatives": self.actual_count - self.true_positives,
        }


@dataclass(frozen=True)
class F1Summary:
    """
    Per-label and macro-averaged scores of one scorer.

    User labels live in ``labels``; the OUTSIDE sentinel, when it was seen,
    is kept apart in ``outside`` and does not take part in the macro averages.
    """

    labels: dict[str, LabelScore] = field(default_factory=dict)
    outside: LabelScore | None = None

    @property
    def macro_precision(self) -> float:
        """Macro-averaged precision across labels."""
        if not self.labels:
            return 0.0
        return sum(s.precision for s in self.labels.values()) / len(self.labels)

    @property
    def macro_recall(self) -> float:
        """Macro-averaged recall across labels."""
        if not self.labels:
            return 0.0
        return sum(s.recall for s in self.labels.values()) / len(self.labels)

    @property
    def macro_f1(self) -> float:
        """Macro-averaged F1 across labels."""
        if not self.labels:
            return 0.0
        return sum(s.f1 for s in self.labels.values()) / len(self.labels)

    def __getitem__(self, label: str) -> LabelScore:
        return self.labels[label]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "labels": {
                label: score.to_dict() for label, score in sorted(self.labels.items())
            },
            "outside": self.outside.to_dict() if self.outside else None,
            "macro_precision": round(self.macro_precision, 4),
            "macro_recall": round(self.macro_recall, 4),
            "macro_f1": round(self.macro_f1, 4),
        }


@dataclass(frozen=True)
class CrossValidationResult:
    """Final output of one cross-validation run."""

    intents: dict[EvaluationContext, F1Summary]
    slots: F1Summary
    seed: str = ""
    language: str = ""
    train_size: int = 0
    test_size: int = 0
    excluded_intents: tuple[str, ...] = ()

    def for_context(self, name: str) -> F1Summary:
        """Get the intent summary of a named context."""
        return self.intents[SingleContext(name)]

    @property
    def all_contexts(self) -> F1Summary | None:
        """Intent summary over the whole context universe, if evaluated."""
        for ctx, summary in self.intents.items():
            if isinstance(ctx, AllContexts):
                return summary
        return None

    @property
    def context_names(self) -> list[str]:
        """Names of the single contexts that were evaluated."""
        return [ctx.name for ctx in self.intents if isinstance(ctx, SingleContext)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        all_contexts = self.all_contexts
        return {
            "seed": self.seed,
            "language": self.language,
            "train_size": self.train_size,
            "test_size": self.test_size,
            "excluded_intents": list(self.excluded_intents),
            "intents": {
                ctx.name: summary.to_dict()
                for ctx, summary in self.intents.items()
                if isinstance(ctx, SingleContext)
            },
            "all_contexts": all_contexts.to_dict() if all_contexts else None,
            "slots": self.slots.to_dict(),
        }

    def print_report(self) -> None:
        """Print a formatted cross-validation report."""
        print("\n" + "=" * 60)
        print("NLU CROSS-VALIDATION REPORT")
        print("=" * 60)

        print(f"\nLanguage: {self.language}  Seed: {self.seed}")
        print(f"Train utterances: {self.train_size}  Test examples: {self.test_size}")
        if self.excluded_intents:
            print(f"Excluded (not enough data): {', '.join(self.excluded_intents)}")

        for ctx, summary in self.intents.items():
            print(f"\n--- Intents [{ctx.label}] macro F1: {summary.macro_f1:.2%} ---")
            _print_labels(summary)

        print(f"\n--- Slots macro F1: {self.slots.macro_f1:.2%} ---")
        _print_labels(self.slots)

        print("\n" + "=" * 60)


@dataclass(frozen=True)
class RepeatedCrossValidationResult:
    """Cross-validation repeated over several seeds."""

    runs: list[CrossValidationResult]

    @property
    def mean_intent_macro_f1(self) -> dict[EvaluationContext, float]:
        """Mean macro F1 per evaluation context across runs."""
        if not self.runs:
            return {}
        return {
            ctx: sum(run.intents[ctx].macro_f1 for run in self.runs) / len(self.runs)
            for ctx in self.runs[0].intents
        }

    @property
    def mean_slot_macro_f1(self) -> float:
        """Mean slot macro F1 across runs."""
        if not self.runs:
            return 0.0
        return sum(run.slots.macro_f1 for run in self.runs) / len(self.runs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        means = self.mean_intent_macro_f1
        return {
            "runs": [run.to_dict() for run in self.runs],
            "mean_intent_macro_f1": {
                ctx.name: round(value, 4)
                for ctx, value in means.items()
                if isinstance(ctx, SingleContext)
            },
            "mean_all_contexts_macro_f1": next(
                (round(v, 4) for c, v in means.items() if isinstance(c, AllContexts)),
                None,
            ),
            "mean_slot_macro_f1": round(self.mean_slot_macro_f1, 4),
        }

    def print_report(self) -> None:
        """Print each run followed by the averages."""
        for run in self.runs:
            run.print_report()

        print(f"\n--- Mean over {len(self.runs)} seeds ---")
        for ctx, value in self.mean_intent_macro_f1.items():
            print(f"Intents [{ctx.label}] macro F1: {value:.2%}")
        print(f"Slots macro F1: {self.mean_slot_macro_f1:.2%}")


def _print_labels(summary: F1Summary) -> None:
    print(f"{'Label':<40} {'P':>8} {'R':>8} {'F1':>8} {'Support':>8}")
    print("-" * 72)
    rows = sorted(summary.labels.items())
    if summary.outside is not None:
        rows.append((str(summary.outside.label), summary.outside))
    for label, score in rows:
        print(
            f"{label:<40} {score.precision:>8.2%} {score.recall:>8.2%} "
            f"{score.f1:>8.2%} {score.support:>8}"
        )
