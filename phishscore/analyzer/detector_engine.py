"""Phishing detector engine."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from ..config import DEFAULT_CONFIG, EngineConfig
from ..constants import (
    HIGH_RISK_THRESHOLD,
    LOW_SIGNAL_HTTPS_CAP,
    LOW_SIGNAL_RULE_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    ML_WEIGHT,
    RULE_WEIGHT,
    SUSPICIOUS_THRESHOLD,
    TRUSTED_FINAL_SCORE,
    TRUSTED_ML_SCORE,
    TRUSTED_REASON,
    RiskLevel,
)
from ..utils.allowlist import is_trusted
from ..utils.domains import base_domain, canonicalize_domain, is_https_protocol
from .detector_models import AnalysisResult
from .detector_rules import default_rules
from .features import extract_features, predict
from .rules import DetectionContext, DetectionRule, HeuristicFinding
from .signals import PageSignals

logger = logging.getLogger(__name__)


def combine_scores(rule_score: int, ml_score: float, is_https: bool) -> int:
    """Blend rule and model scores into the final 0-100 score."""
    blended = rule_score * RULE_WEIGHT + ml_score * ML_WEIGHT
    final_score = math.floor(blended + 0.5)
    final_score = max(MIN_SCORE, min(MAX_SCORE, final_score))

    # Little rule evidence on an HTTPS page: never report more than mild risk
    if rule_score <= LOW_SIGNAL_RULE_SCORE and is_https:
        final_score = min(final_score, LOW_SIGNAL_HTTPS_CAP)

    return final_score


def classify(final_score: int) -> RiskLevel:
    if final_score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH_RISK
    if final_score >= SUSPICIOUS_THRESHOLD:
        return RiskLevel.SUSPICIOUS
    return RiskLevel.SAFE


class PhishingDetector:
    """Scores pages with heuristic rules blended with the fixed linear model.

    The detector holds only immutable configuration; every call to
    ``analyze`` is independent, so one instance can be shared across threads.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        rules: Optional[Sequence[DetectionRule]] = None,
    ):
        self.config = config
        self._rules: tuple[DetectionRule, ...] = tuple(rules) if rules is not None else tuple(default_rules())

    def run_rules(self, context: DetectionContext) -> tuple[HeuristicFinding, ...]:
        """Evaluate every rule in order."""
        return tuple(rule.apply(self.config, context) for rule in self._rules)

    def analyze(
        self,
        signals: PageSignals,
        hostname: Optional[str] = None,
        protocol: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze collected page signals and return the hybrid verdict.

        ``hostname`` and ``protocol`` default to the values carried by
        ``signals``.
        """
        host = canonicalize_domain(hostname if hostname is not None else signals.hostname)
        is_https = is_https_protocol(protocol) if protocol is not None else signals.is_https

        if is_https and is_trusted(host, self.config.trusted_domains):
            logger.debug("Trusted domain over HTTPS, skipping rules: %s", host)
            return AnalysisResult(
                url=signals.url,
                domain=host,
                rule_score=0,
                ml_score=TRUSTED_ML_SCORE,
                final_score=TRUSTED_FINAL_SCORE,
                risk_level=RiskLevel.SAFE,
                reasons=(TRUSTED_REASON,),
            )

        context = DetectionContext(
            signals=signals,
            hostname=host,
            base_domain=base_domain(host),
            is_https=is_https,
        )
        findings = self.run_rules(context)

        # Each rule caps its own score; the sum has no ceiling
        rule_score = sum(finding.score for finding in findings)
        reasons = tuple(finding.reason for finding in findings if finding.reportable)

        features = extract_features(signals, host, is_https, self.config)
        ml_score = predict(features, self.config.model)

        final_score = combine_scores(rule_score, ml_score, is_https)
        risk_level = classify(final_score)

        logger.debug(
            "Analyzed %s: rules=%s ml=%.1f final=%s level=%s",
            host,
            rule_score,
            ml_score,
            final_score,
            risk_level,
        )

        return AnalysisResult(
            url=signals.url,
            domain=host,
            rule_score=rule_score,
            ml_score=ml_score,
            final_score=final_score,
            risk_level=risk_level,
            reasons=reasons,
            findings=findings,
        )


def analyze_page(
    signals: PageSignals,
    hostname: Optional[str] = None,
    protocol: Optional[str] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> AnalysisResult:
    """Convenience wrapper: analyze with a one-off detector."""
    return PhishingDetector(config).analyze(signals, hostname=hostname, protocol=protocol)
