"""
Unit tests for progression settings loading and validation.
"""

import pytest

from mathsprint.config import ProgressionSettings, get_settings, load_settings
from mathsprint.core.errors import ConfigurationError, MathSprintError


class TestDefaults:
    def test_default_values(self, settings):
        assert settings.min_questions_for_valid == 8
        assert settings.min_duration_seconds == 20
        assert settings.target_time_ms == 1600
        assert settings.target_qps == pytest.approx(0.28)
        assert settings.base_xp == 10
        assert settings.bonus_multiplier == 1.25
        assert settings.elite_bonus_multiplier == 1.35
        assert settings.bonus_thresholds.speed_score == 0.95
        assert settings.invalid_session_xp_fraction == 0.25
        assert settings.placement.min_answers == 12

    def test_weights_sum_to_one(self, settings):
        w = settings.weights
        assert w.accuracy + w.speed + w.throughput + w.consistency == pytest.approx(1.0)

    def test_settings_are_immutable(self, settings):
        with pytest.raises(Exception):
            settings.base_xp = 50

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestValidation:
    def test_weights_not_summing_to_one(self):
        with pytest.raises(ConfigurationError):
            load_settings(
                _env_file=None,
                weights={"accuracy": 0.5, "speed": 0.25, "throughput": 0.25, "consistency": 0.15},
            )

    def test_threshold_outside_unit_interval(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, bonus_thresholds={"accuracy": 1.2})

    def test_elite_multiplier_below_standard(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, bonus_multiplier=1.5, elite_bonus_multiplier=1.2)

    def test_negative_mode_multiplier(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, mode_multipliers={"daily": -1.0})

    def test_placement_bands_must_ascend(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, placement={"cpm_bands": (4, 6, 5, 10, 12, 14, 16, 18, 20)})

    def test_configuration_error_is_mathsprint_error(self):
        assert issubclass(ConfigurationError, MathSprintError)


class TestEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MATHSPRINT_TARGET_TIME_MS", "1400")
        assert load_settings(_env_file=None).target_time_ms == 1400

    def test_nested_env_override_is_validated(self, monkeypatch):
        # Raising one weight alone breaks the sum
        monkeypatch.setenv("MATHSPRINT_WEIGHTS__ACCURACY", "0.5")
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None)

    def test_direct_construction(self):
        settings = ProgressionSettings(_env_file=None, min_questions_for_valid=12)
        assert settings.min_questions_for_valid == 12
