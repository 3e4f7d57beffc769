"""Centralized constants for PhishScore.

This module contains the risk-level enum and the fixed scoring policy
shared by the engine, the result model, and the CLI.
"""

from enum import IntEnum


class RiskLevel(IntEnum):
    """Risk levels with ranking for comparison."""

    SAFE = 0
    SUSPICIOUS = 1
    HIGH_RISK = 2

    @classmethod
    def from_string(cls, value: str | None) -> "RiskLevel":
        """Convert a risk level string to the enum (ValueError if unknown)."""
        if not value:
            raise ValueError("Empty risk level")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown risk level: {value!r}") from None

    def __str__(self) -> str:
        return self.name


# Classification thresholds on the final score
HIGH_RISK_THRESHOLD = 70
SUSPICIOUS_THRESHOLD = 40

# Hybrid blend: 40% rules + 60% linear model
RULE_WEIGHT = 0.4
ML_WEIGHT = 0.6

# Low-signal HTTPS dampener
LOW_SIGNAL_RULE_SCORE = 5
LOW_SIGNAL_HTTPS_CAP = 25

# Trusted domain over HTTPS short-circuit
TRUSTED_ML_SCORE = 5.0
TRUSTED_FINAL_SCORE = 5
TRUSTED_REASON = "Trusted domain with valid HTTPS connection"

# Default warning threshold used by collaborators deciding whether to alert
DEFAULT_WARNING_THRESHOLD = 70

MIN_SCORE = 0
MAX_SCORE = 100
