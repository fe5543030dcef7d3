"""Command-line entry point: cross-validate an engine on a JSON corpus."""

import argparse
import asyncio
import importlib
import json
import sys
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from nlu_crossval.config import Settings, get_settings
from nlu_crossval.cross_validation import CrossValidator
from nlu_crossval.exceptions import CrossValidationError, InvalidDatasetError
from nlu_crossval.interfaces import NLUEngine, Tokenizer
from nlu_crossval.models.results import CrossValidationResult, RepeatedCrossValidationResult
from nlu_crossval.observability.logging import configure_logging


def load_corpus(filepath: str | Path) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Load intents and entities from a JSON corpus file.

    Expected format:
    {
        "intents": [
            {
                "name": "check_balance",
                "contexts": ["billing"],
                "utterances": {"en": ["what is my balance", ...]}
            },
            ...
        ],
        "entities": [...]
    }
    """
    filepath = Path(filepath)
    try:
        with open(filepath) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidDatasetError(f"Cannot read corpus {filepath}", detail=str(e)) from e

    if not isinstance(data, dict) or "intents" not in data:
        raise InvalidDatasetError(f"Corpus {filepath} has no 'intents' list")
    return data["intents"], data.get("entities", [])


def load_factory(path: str) -> Callable[[], tuple[NLUEngine, Tokenizer]]:
    """Resolve a ``module:attribute`` path to an engine/tokenizer factory."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise InvalidDatasetError(f"Engine factory must look like 'module:factory', got '{path}'")
    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise InvalidDatasetError(f"Cannot load engine factory '{path}'", detail=str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nlu-crossval",
        description="Cross-validate an intent classification and slot tagging engine",
    )
    parser.add_argument("--corpus", required=True, help="Path to the JSON corpus")
    parser.add_argument(
        "--engine",
        required=True,
        help="Factory returning (engine, tokenizer), as 'module:factory'",
    )
    parser.add_argument("--language", default="en", help="Language to evaluate")
    parser.add_argument("--seed", default=None, help="Shuffle seed")
    parser.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="Number of runs with different seeds",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of concurrent test examples",
    )
    parser.add_argument("--output", default=None, help="Path to save results JSON")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Minimum macro F1 for every context",
    )
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Run cross-validation and report. Returns the process exit code."""
    intents, entities = load_corpus(args.corpus)
    engine, tokenizer = load_factory(args.engine)()
    validator = CrossValidator(engine, tokenizer, settings=settings)

    base_seed = args.seed if args.seed is not None else settings.seed
    result: CrossValidationResult | RepeatedCrossValidationResult
    if args.repeat > 1:
        seeds = [f"{base_seed}-{i}" for i in range(args.repeat)]
        result = await validator.cross_validate_repeated(intents, entities, args.language, seeds)
        scores = list(result.mean_intent_macro_f1.values())
    else:
        result = await validator.cross_validate(intents, entities, args.language, seed=base_seed)
        scores = [summary.macro_f1 for summary in result.intents.values()]

    result.print_report()

    if args.output:
        with open(args.output, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"\nResults saved to: {args.output}")

    threshold = args.threshold if args.threshold is not None else settings.macro_f1_threshold
    passed = all(score >= threshold for score in scores)
    print(f"\nMacro F1 >= {threshold:.0%}: {'PASS' if passed else 'FAIL'}")
    return 0 if passed else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    updates: dict[str, Any] = {}
    if args.concurrency is not None:
        updates["concurrency"] = args.concurrency
    try:
        settings = Settings.model_validate({**get_settings().model_dump(), **updates})
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    configure_logging(level=settings.log_level, json_format=settings.log_json)

    try:
        return asyncio.run(run(args, settings))
    except InvalidDatasetError as e:
        print(f"Invalid input: {e.detail}", file=sys.stderr)
        return 2
    except CrossValidationError as e:
        print(f"Cross-validation failed: {e.message} ({e.detail})", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
