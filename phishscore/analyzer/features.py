"""Feature extraction and the fixed linear scorer."""

from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import TYPE_CHECKING, Sequence

from ..model import (
    DIGIT_COUNT,
    DOMAIN_LENGTH,
    FEATURE_COUNT,
    FORM_COUNT,
    HYPHEN_COUNT,
    IS_HTTPS,
    KEYWORD_COUNT,
    LINK_COUNT,
    PASSWORD_INPUTS,
    LinearModel,
)
from ..utils.allowlist import is_trusted
from ..utils.domains import base_domain
from .signals import PageSignals

if TYPE_CHECKING:
    from ..config import EngineConfig

FeatureVector = tuple[float, ...]


@lru_cache(maxsize=32)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern:
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


def count_keywords(text: str, keywords: tuple[str, ...]) -> int:
    """Count non-overlapping occurrences of any keyword in text."""
    if not text or not keywords:
        return 0
    return len(_keyword_pattern(keywords).findall(text))


def extract_features(
    signals: PageSignals,
    hostname: str,
    is_https: bool,
    config: "EngineConfig",
) -> FeatureVector:
    """Build the fixed-length feature vector for the linear scorer.

    Only the first eight positions carry features; the rest are zero padding.
    """
    base = base_domain(hostname)

    keyword_count = count_keywords(signals.page_text_lower, config.feature_keywords)
    if is_https and is_trusted(hostname, config.trusted_domains):
        keyword_count = math.floor(keyword_count * config.trusted_keyword_factor)

    features = [0.0] * FEATURE_COUNT
    features[DOMAIN_LENGTH] = len(base)
    features[DIGIT_COUNT] = sum(1 for ch in base if ch in "0123456789")
    features[HYPHEN_COUNT] = base.count("-")
    features[IS_HTTPS] = 1 if is_https else 0
    features[FORM_COUNT] = signals.form_count
    features[PASSWORD_INPUTS] = signals.password_input_count
    features[LINK_COUNT] = signals.link_count
    features[KEYWORD_COUNT] = keyword_count
    return tuple(features)


def sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def predict(features: Sequence[float], model: LinearModel) -> float:
    """Score features with the logistic model, 0-100 rounded to one decimal."""
    output = model.bias
    for value, weight in zip(features, model.weights):
        if weight:
            output += (value or 0) * weight
    return round(sigmoid(output) * 100, 1)
