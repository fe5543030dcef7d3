"""Cross-validation of an NLU engine on a held-out split of its corpus."""

import asyncio
import logging
import random
import time
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from nlu_crossval.config import Settings, get_settings
from nlu_crossval.exceptions import InvalidDatasetError, PredictionError, TrainingError
from nlu_crossval.interfaces import NLUEngine, Tokenizer
from nlu_crossval.models.context import ALL_CONTEXTS, EvaluationContext, SingleContext
from nlu_crossval.models.dataset import EntityDefinition, IntentDefinition, TestExample
from nlu_crossval.models.prediction import Prediction
from nlu_crossval.models.results import CrossValidationResult, RepeatedCrossValidationResult
from nlu_crossval.models.utterance import Label
from nlu_crossval.observability.logging import run_context
from nlu_crossval.observability.metrics import MetricsRegistry, get_metrics_registry
from nlu_crossval.observability.tracing import pipeline_span
from nlu_crossval.scoring import MultiClassF1Scorer
from nlu_crossval.splitter import split_dataset

logger = logging.getLogger(__name__)


@dataclass
class _ExampleOutcome:
    """Predictions made for one test example."""

    by_context: list[tuple[str, str]]
    all_contexts_intent: str
    slot_labels: list[Label]


class CrossValidator:
    """
    Cross-validation runner for an NLU engine.

    Splits the corpus per intent with a seeded shuffle, trains the engine
    on the training slice, then scores intent predictions per context (and
    across all contexts) and slot predictions per token on the held-out
    examples.
    """

    def __init__(
        self,
        engine: NLUEngine,
        tokenizer: Tokenizer,
        settings: Settings | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """
        Initialize the cross-validator.

        Args:
            engine: The engine to train and evaluate.
            tokenizer: Builds utterances for the held-out texts.
            settings: Run settings (defaults to environment settings).
            metrics: Metrics registry (defaults to the global one).
        """
        self.engine = engine
        self.tokenizer = tokenizer
        self.settings = settings or get_settings()
        self.metrics = metrics or get_metrics_registry()

    async def cross_validate(
        self,
        intents: Sequence[IntentDefinition | Mapping[str, Any]],
        entities: Sequence[EntityDefinition | Mapping[str, Any]],
        language: str,
        *,
        seed: str | int | None = None,
    ) -> CrossValidationResult:
        """
        Run one cross-validation.

        Any tokenizer or engine failure aborts the run; no partial result
        is returned.

        Args:
            intents: Corpus intents.
            entities: Entity definitions passed to the engine.
            language: Language to evaluate.
            seed: Shuffle seed (defaults to ``settings.seed``).

        Returns:
            CrossValidationResult with intent scores per context and slot scores.
        """
        seed = self.settings.seed if seed is None else seed
        intent_defs = _coerce(IntentDefinition, intents)
        entity_defs = _coerce(EntityDefinition, entities)

        run_id = f"cv-{uuid.uuid4().hex[:12]}"
        started = time.perf_counter()

        with run_context(run_id):
            logger.info(
                f"Starting cross-validation: language={language}, seed={seed}, "
                f"intents={len(intent_defs)}"
            )
            try:
                result = await self._run(intent_defs, entity_defs, language, seed, run_id)
            except Exception as e:
                self.metrics.record_run(language, time.perf_counter() - started, "error")
                logger.error(f"Cross-validation failed: {e}")
                raise

            self.metrics.record_run(language, time.perf_counter() - started)
            logger.info(
                "Cross-validation finished: "
                + ", ".join(
                    f"{ctx.label}={summary.macro_f1:.3f}"
                    for ctx, summary in result.intents.items()
                )
                + f", slots={result.slots.macro_f1:.3f}"
            )
            return result

    async def cross_validate_repeated(
        self,
        intents: Sequence[IntentDefinition | Mapping[str, Any]],
        entities: Sequence[EntityDefinition | Mapping[str, Any]],
        language: str,
        seeds: Iterable[str | int],
    ) -> RepeatedCrossValidationResult:
        """
        Run one cross-validation per seed, one after the other.

        Useful when a single split is too small for the scores to be
        significant.
        """
        seeds = list(seeds)
        if not seeds:
            raise InvalidDatasetError("At least one seed is required")

        runs = [
            await self.cross_validate(intents, entities, language, seed=seed)
            for seed in seeds
        ]
        return RepeatedCrossValidationResult(runs=runs)

    async def _run(
        self,
        intents: list[IntentDefinition],
        entities: list[EntityDefinition],
        language: str,
        seed: str | int,
        run_id: str,
    ) -> CrossValidationResult:
        rng = random.Random(seed)

        with pipeline_span("split", run_id=run_id, language=language):
            split = await split_dataset(
                language,
                intents,
                self.tokenizer,
                rng=rng,
                train_fraction=self.settings.train_fraction,
                min_train_utterances=self.settings.min_train_utterances,
            )
        self.metrics.record_excluded_intents(language, len(split.excluded))

        with pipeline_span("train", run_id=run_id, language=language):
            try:
                await self.engine.train(split.train_set, entities, language)
            except Exception as e:
                raise TrainingError(
                    f"Engine training failed for '{language}'",
                    language=language,
                    detail=str(e),
                ) from e

        all_contexts = _context_universe(intents)
        scorers: dict[EvaluationContext, MultiClassF1Scorer] = {}
        if len(all_contexts) > 1:
            scorers[ALL_CONTEXTS] = MultiClassF1Scorer()
        for ctx in all_contexts:
            scorers[SingleContext(ctx)] = MultiClassF1Scorer()
        slot_scorer = MultiClassF1Scorer()

        with pipeline_span(
            "evaluate",
            run_id=run_id,
            language=language,
            examples=len(split.test_set),
        ):
            await self._evaluate(split.test_set, all_contexts, scorers, slot_scorer, language)

        return CrossValidationResult(
            intents={ctx: scorer.get_results() for ctx, scorer in scorers.items()},
            slots=slot_scorer.get_results(),
            seed=str(seed),
            language=language,
            train_size=split.train_size,
            test_size=len(split.test_set),
            excluded_intents=tuple(split.excluded),
        )

    async def _evaluate(
        self,
        test_set: list[TestExample],
        all_contexts: list[str],
        scorers: dict[EvaluationContext, MultiClassF1Scorer],
        slot_scorer: MultiClassF1Scorer,
        language: str,
    ) -> None:
        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def run_with_semaphore(example: TestExample) -> None:
            async with semaphore:
                outcome = await self._evaluate_example(example, all_contexts)

            # No awaits below: scorer updates of one example are atomic.
            for ctx, predicted in outcome.by_context:
                scorers[SingleContext(ctx)].record(predicted, example.intent)
            if ALL_CONTEXTS in scorers:
                scorers[ALL_CONTEXTS].record(outcome.all_contexts_intent, example.intent)
            for predicted_slot, gold_slot in zip(outcome.slot_labels, example.slot_labels):
                slot_scorer.record(predicted_slot, gold_slot)

            self.metrics.record_predictions(language, len(outcome.by_context) + 1)

        tasks = [asyncio.ensure_future(run_with_semaphore(ex)) for ex in test_set]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _evaluate_example(
        self, example: TestExample, all_contexts: list[str]
    ) -> _ExampleOutcome:
        by_context: list[tuple[str, str]] = []
        for ctx in example.contexts:
            prediction = await self._predict(example.text, [ctx])
            by_context.append((ctx, prediction.intent.name))

        # The full-universe prediction also provides the slots.
        prediction = await self._predict(example.text, all_contexts)
        slot_labels = [
            prediction.slot_label_for(token) for token in example.utterance.tokens
        ]
        return _ExampleOutcome(
            by_context=by_context,
            all_contexts_intent=prediction.intent.name,
            slot_labels=slot_labels,
        )

    async def _predict(self, text: str, contexts: list[str]) -> Prediction:
        try:
            raw = await self.engine.predict(text, list(contexts))
        except Exception as e:
            raise PredictionError(
                "Engine prediction failed",
                text=text,
                contexts=contexts,
                detail=str(e),
            ) from e

        if isinstance(raw, Prediction):
            return raw
        try:
            return Prediction.model_validate(raw)
        except ValidationError as e:
            raise PredictionError(
                "Engine returned a malformed prediction",
                text=text,
                contexts=contexts,
                detail=str(e),
            ) from e


async def cross_validate(
    engine: NLUEngine,
    tokenizer: Tokenizer,
    intents: Sequence[IntentDefinition | Mapping[str, Any]],
    entities: Sequence[EntityDefinition | Mapping[str, Any]],
    language: str,
    *,
    seed: str | int | None = None,
    settings: Settings | None = None,
) -> CrossValidationResult:
    """Run one cross-validation with a throwaway CrossValidator."""
    validator = CrossValidator(engine, tokenizer, settings=settings)
    return await validator.cross_validate(intents, entities, language, seed=seed)


def _context_universe(intents: Iterable[IntentDefinition]) -> list[str]:
    """Unique contexts of all intents, in first-seen order."""
    return list(dict.fromkeys(ctx for intent in intents for ctx in intent.contexts))


def _coerce(model: type, items: Sequence[Any]) -> list[Any]:
    try:
        return [item if isinstance(item, model) else model.model_validate(item) for item in items]
    except ValidationError as e:
        raise InvalidDatasetError(
            f"Invalid {model.__name__} in corpus",
            detail=str(e),
        ) from e
