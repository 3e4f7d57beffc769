"""Fixed linear model parameters for the hybrid score."""

from __future__ import annotations

from dataclasses import dataclass

FEATURE_COUNT = 128

# Feature indices (see analyzer.features.extract_features)
DOMAIN_LENGTH = 0
DIGIT_COUNT = 1
HYPHEN_COUNT = 2
IS_HTTPS = 3
FORM_COUNT = 4
PASSWORD_INPUTS = 5
LINK_COUNT = 6
KEYWORD_COUNT = 7
SEMANTIC_FEATURES = 8


@dataclass(frozen=True)
class LinearModel:
    """Weight vector and bias of the logistic scorer."""

    weights: tuple[float, ...]
    bias: float

    @classmethod
    def from_semantic_weights(cls, semantic: list[float] | tuple[float, ...], bias: float) -> "LinearModel":
        """Build a full-length model from the leading weights; the rest are zero."""
        if len(semantic) > FEATURE_COUNT:
            raise ValueError(f"At most {FEATURE_COUNT} weights allowed, got {len(semantic)}")
        weights = tuple(float(w) for w in semantic) + (0.0,) * (FEATURE_COUNT - len(semantic))
        return cls(weights=weights, bias=float(bias))


DEFAULT_MODEL = LinearModel.from_semantic_weights(
    [
        0.01,  # longer domain, slightly riskier
        0.35,  # digits in domain
        0.30,  # hyphens in domain
        -1.2,  # https lowers risk
        0.25,  # forms
        0.7,  # password inputs
        0.01,  # links
        0.6,  # phishing words in text
    ],
    bias=-2.0,
)
