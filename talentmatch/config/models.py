"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ScoringWeights(BaseModel):
    """Point value of each scoring dimension.

    A dimension adds its weight to the maximum possible score only when its
    criterion is active, so the weights need not sum to 100; the defaults do.
    """

    skills: int = Field(30, ge=0, le=100, description="Skills overlap (fractional credit)")
    experience: int = Field(20, ge=0, le=100, description="Experience level band")
    work_type: int = Field(15, ge=0, le=100, description="Remote / hybrid / office")
    job_type: int = Field(15, ge=0, le=100, description="Full-time, part-time, contract, internship")
    location: int = Field(5, ge=0, le=100, description="Current or preferred location")
    education: int = Field(5, ge=0, le=100, description="Highest education level")
    availability: int = Field(5, ge=0, le=100, description="Notice period / availability token")
    salary: int = Field(5, ge=0, le=100, description="Expected annual CTC within range")

    model_config = {"frozen": True}

    def as_dict(self) -> Dict[str, int]:
        """Return weights keyed by dimension name."""
        return self.model_dump()

    @property
    def total(self) -> int:
        """Sum of all weights."""
        return sum(self.as_dict().values())


class ScoringConfig(BaseModel):
    """Settings for candidate scoring and ranking."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    default_salary_range: Tuple[float, float] = Field(
        (0, 100000),
        description="Salary range treated as 'unconstrained' when a search leaves it unchanged",
    )
    max_workers: int = Field(
        1, ge=1, le=32, description="Threads used to score a candidate pool (1 = sequential)"
    )
    default_limit: int = Field(
        0, ge=0, description="Maximum results returned when the caller gives no limit (0 = all)"
    )
    only_active_candidates: bool = Field(
        True, description="Only score active listings whose expiry lies in the future"
    )

    @field_validator("default_salary_range")
    @classmethod
    def validate_salary_range(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """Require a non-empty, non-negative range."""
        low, high = v
        if low < 0 or high <= 0:
            raise ValueError("default_salary_range bounds must be non-negative with max > 0")
        if low > high:
            raise ValueError(f"default_salary_range min ({low}) exceeds max ({high})")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for talentmatch."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig, description="Scoring settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @model_validator(mode="after")
    def validate_weights_present(self):
        """Reject a weight table that can never produce a score."""
        if self.scoring.weights.total == 0:
            raise ValueError("At least one scoring weight must be greater than zero")
        return self
