"""Tests for habitloop/config_models.py"""

from unittest.mock import patch

import pytest

from habitloop.config_models import (
    AnalysisConfig,
    HabitLoopConfig,
    ProgramConfig,
    load_and_validate,
    load_config,
)


class TestHabitLoopConfig:
    def test_defaults(self):
        config = HabitLoopConfig()
        assert config.analysis.min_text_length == 20
        assert config.analysis.max_confidence == 95
        assert config.analysis.density_scale == 1000.0
        assert config.analysis.snippet_length == 100
        assert config.insights.allowed_windows == [7, 30]
        assert config.program.length_days == 30
        assert config.program.reflection_every == 3
        assert config.program.signature_boost == 50
        assert config.program.pattern_count_delta == 5
        assert config.program.shortfall_policy == "skip"
        assert config.storage.db_path == "data/habitloop.db"

    def test_valid_overrides(self):
        config = HabitLoopConfig(
            analysis={"min_text_length": 10},
            program={"shortfall_policy": "error"},
        )
        assert config.analysis.min_text_length == 10
        assert config.program.shortfall_policy == "error"

    def test_extra_keys_allowed(self):
        config = HabitLoopConfig(analysis={"min_text_length": 20, "unknown_field": "value"})
        assert config.analysis.min_text_length == 20

    def test_invalid_shortfall_policy(self):
        with pytest.raises(ValueError):
            ProgramConfig(shortfall_policy="ignore")

    def test_invalid_confidence_cap(self):
        with pytest.raises(ValueError):
            AnalysisConfig(max_confidence=150)


class TestLoadAndValidate:
    def test_unknown_config_raises(self):
        with pytest.raises(ValueError, match="Unknown config"):
            load_and_validate("nonexistent_config")

    def test_missing_file_returns_defaults(self, tmp_path):
        with patch("habitloop.config_models.ARGS_DIR", tmp_path):
            config = load_and_validate("habitloop")
            assert isinstance(config, HabitLoopConfig)
            assert config.program.length_days == 30

    def test_explicit_model_class(self, tmp_path):
        with patch("habitloop.config_models.ARGS_DIR", tmp_path):
            config = load_and_validate("custom", HabitLoopConfig)
            assert isinstance(config, HabitLoopConfig)

    def test_valid_yaml_loads(self, tmp_path):
        yaml_file = tmp_path / "habitloop.yaml"
        yaml_file.write_text("analysis:\n  min_text_length: 12\nprogram:\n  shortfall_policy: error\n")

        with patch("habitloop.config_models.ARGS_DIR", tmp_path):
            config = load_and_validate("habitloop")

        assert config.analysis.min_text_length == 12
        assert config.program.shortfall_policy == "error"
        assert config.analysis.max_confidence == 95

    def test_invalid_yaml_values_fall_back_to_defaults(self, tmp_path):
        yaml_file = tmp_path / "habitloop.yaml"
        yaml_file.write_text("program:\n  shortfall_policy: sometimes\n")

        with patch("habitloop.config_models.ARGS_DIR", tmp_path):
            config = load_and_validate("habitloop")

        assert config.program.shortfall_policy == "skip"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        (tmp_path / "habitloop.yaml").write_text("")

        with patch("habitloop.config_models.ARGS_DIR", tmp_path):
            config = load_and_validate("habitloop")

        assert config == HabitLoopConfig()

    def test_shipped_config_matches_defaults(self):
        """args/habitloop.yaml mirrors the model defaults."""
        assert load_config() == HabitLoopConfig()
