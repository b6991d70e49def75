"""
Progression settings for the fluency scorer.

Uses Pydantic Settings for environment variable management with .env file support.
Values are validated once when loaded; a bad bundle is a startup failure,
not something the scorer checks per call.

Override any value with MATHSPRINT_* variables, nested keys joined by "__":
    MATHSPRINT_TARGET_TIME_MS=1400
    MATHSPRINT_WEIGHTS__ACCURACY=0.4
"""
from __future__ import annotations

from functools import lru_cache

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mathsprint.core.errors import ConfigurationError

ELITE_ACCURACY = 0.95


class FluencyWeights(BaseModel):
    """Per-dimension weights of the fluency composite. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(default=0.35, ge=0.0, le=1.0)
    speed: float = Field(default=0.25, ge=0.0, le=1.0)
    throughput: float = Field(default=0.25, ge=0.0, le=1.0)
    consistency: float = Field(default=0.15, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_total(self) -> FluencyWeights:
        total = self.accuracy + self.speed + self.throughput + self.consistency
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"fluency weights must sum to 1.0, got {total:.4f}")
        return self


class BonusThresholds(BaseModel):
    """Excellence bonus thresholds. A session must clear all four."""

    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(default=0.90, ge=0.0, le=1.0)
    speed_score: float = Field(default=0.95, ge=0.0, le=1.0)
    consistency: float = Field(default=0.75, ge=0.0, le=1.0)
    throughput: float = Field(default=0.85, ge=0.0, le=1.0)


class AccuracyCaps(BaseModel):
    """Highest competence group reachable below each accuracy band."""

    model_config = ConfigDict(frozen=True)

    below_55: int = Field(default=3, ge=1, le=10)
    below_65: int = Field(default=5, ge=1, le=10)
    below_75: int = Field(default=7, ge=1, le=10)
    default: int = Field(default=10, ge=1, le=10)


class PlacementSettings(BaseModel):
    """
    Assessment placement: CPM bands, accuracy caps and speed nudges.

    Nine ascending CPM (correct answers per minute) bounds split players
    into competence groups 1-10; each group maps to a starting level.
    """

    model_config = ConfigDict(frozen=True)

    min_answers: int = Field(default=12, ge=0)
    max_start_level: int = Field(default=30, ge=1)
    cpm_bands: tuple[float, ...] = (4, 6, 8, 10, 12, 14, 16, 18, 20)
    accuracy_caps: AccuracyCaps = Field(default_factory=AccuracyCaps)

    # Speed nudges move the group one step up or down
    fast_threshold_ms: float = Field(default=1300.0, gt=0.0)
    fast_accuracy_min: float = Field(default=0.80, ge=0.0, le=1.0)
    slow_threshold_ms: float = Field(default=2600.0, gt=0.0)

    group_to_level: dict[int, int] = Field(
        default_factory=lambda: {1: 1, 2: 2, 3: 4, 4: 6, 5: 8, 6: 10, 7: 12, 8: 16, 9: 22, 10: 30}
    )

    @model_validator(mode="after")
    def _check_tables(self) -> PlacementSettings:
        if len(self.cpm_bands) != 9 or list(self.cpm_bands) != sorted(self.cpm_bands):
            raise ValueError("cpm_bands must hold 9 ascending bounds")
        missing = [g for g in range(1, 11) if g not in self.group_to_level]
        if missing:
            raise ValueError(f"group_to_level is missing groups: {missing}")
        if self.fast_threshold_ms >= self.slow_threshold_ms:
            raise ValueError("fast_threshold_ms must be below slow_threshold_ms")
        return self


class ProgressionSettings(BaseSettings):
    """Scoring and XP configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MATHSPRINT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ========================================
    # Session validity (anti-cheese)
    # ========================================
    min_questions_for_valid: int = Field(default=8, ge=0)
    min_duration_seconds: float = Field(default=20.0, ge=0.0)

    # ========================================
    # Fluency normalization
    # ========================================
    target_time_ms: float = Field(default=1600.0, gt=0.0)
    reference_variability_ms: float = Field(default=600.0, gt=0.0)
    target_qps: float = Field(default=0.28, gt=0.0)
    weights: FluencyWeights = Field(default_factory=FluencyWeights)

    # Fluency is capped when accuracy falls below the floor
    accuracy_floor: float = Field(default=0.55, ge=0.0, le=1.0)
    fluency_cap_below_accuracy_floor: float = Field(default=0.45, ge=0.0, le=1.0)

    # ========================================
    # XP
    # ========================================
    base_xp: int = Field(default=10, ge=0)
    max_performance_xp: int = Field(default=220, ge=0)
    max_effort_xp: int = Field(default=80, ge=0)
    effort_target_questions: int = Field(default=35, gt=0)

    # Invalid sessions keep only this share of performance and effort XP
    invalid_session_xp_fraction: float = Field(default=0.25, ge=0.0, le=1.0)

    bonus_thresholds: BonusThresholds = Field(default_factory=BonusThresholds)
    bonus_multiplier: float = Field(default=1.25, ge=1.0)
    elite_bonus_multiplier: float = Field(default=1.35, ge=1.0)
    elite_accuracy: float = Field(default=ELITE_ACCURACY, ge=0.0, le=1.0)

    # Session-type multipliers; assessments award nothing
    mode_multipliers: dict[str, float] = Field(
        default_factory=lambda: {
            "daily": 1.0,
            "quick_fire": 0.55,
            "practice": 0.7,
            "unlimited": 0.4,
            "assessment": 0.0,
        }
    )

    # ========================================
    # Assessment placement
    # ========================================
    placement: PlacementSettings = Field(default_factory=PlacementSettings)

    @model_validator(mode="after")
    def _check_multipliers(self) -> ProgressionSettings:
        if self.elite_bonus_multiplier < self.bonus_multiplier:
            raise ValueError("elite_bonus_multiplier must not be below bonus_multiplier")
        negative = [k for k, v in self.mode_multipliers.items() if v < 0]
        if negative:
            raise ValueError(f"mode multipliers must be non-negative: {', '.join(negative)}")
        return self

    @property
    def max_session_xp(self) -> int:
        """Upper bound of a single session award before mode multipliers."""
        ceiling = self.base_xp + self.max_performance_xp + self.max_effort_xp
        return round(ceiling * max(self.bonus_multiplier, self.elite_bonus_multiplier))


def load_settings(**overrides) -> ProgressionSettings:
    """
    Load and validate progression settings.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Validated ProgressionSettings

    Raises:
        ConfigurationError: If any value fails validation
    """
    try:
        settings = ProgressionSettings(**overrides)
    except ValidationError as e:
        logger.error(f"Invalid progression settings: {e}")
        raise ConfigurationError(str(e)) from e
    logger.debug(
        f"Loaded progression settings (target {settings.target_time_ms:.0f}ms, "
        f"{settings.target_qps} q/s, min {settings.min_questions_for_valid} questions)"
    )
    return settings


@lru_cache(maxsize=1)
def get_settings() -> ProgressionSettings:
    """Get cached settings instance."""
    return load_settings()
