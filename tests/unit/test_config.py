"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from nlu_crossval.config import Settings


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.seed == "confusion"
        assert settings.concurrency == 5
        assert set(Settings.model_fields) == {
            "seed",
            "train_fraction",
            "min_train_utterances",
            "concurrency",
            "macro_f1_threshold",
            "log_level",
            "log_json",
        }

    def test_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("NLU_CROSSVAL_SEED", "other")
        monkeypatch.setenv("NLU_CROSSVAL_CONCURRENCY", "2")

        settings = Settings(_env_file=None)

        assert settings.seed == "other"
        assert settings.concurrency == 2

    @pytest.mark.parametrize("concurrency", [0, -1])
    def test_concurrency_must_be_positive(self, concurrency: int) -> None:
        with pytest.raises(ValidationError):
            Settings(concurrency=concurrency, _env_file=None)
