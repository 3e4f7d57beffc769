"""Detector rule implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import idna

from ..utils.domain_similarity import closest_brand, first_label
from ..utils.domains import top_level_label
from .rules import DetectionContext, HeuristicFinding

if TYPE_CHECKING:
    from ..config import EngineConfig

logger = logging.getLogger(__name__)


class TypoSquattingRule:
    name = "typo_squatting"
    points = 25

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        label = first_label(context.base_domain) or context.hostname
        brand = closest_brand(label, config.brands)
        if brand is None:
            return HeuristicFinding(self.name)
        return HeuristicFinding(
            self.name,
            score=self.points,
            detected=True,
            reason=f"Typo-squatting: Similar to '{brand}'",
        )


class HomoglyphRule:
    name = "homoglyph"
    points = 30

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        candidates = [context.hostname]
        decoded = _decode_punycode(context.hostname)
        if decoded and decoded != context.hostname:
            candidates.append(decoded)

        for char in config.homoglyph_characters:
            if any(char in candidate for candidate in candidates):
                return HeuristicFinding(
                    self.name,
                    score=self.points,
                    detected=True,
                    reason="Homoglyph attack detected",
                )
        return HeuristicFinding(self.name)


def _decode_punycode(hostname: str) -> str:
    """Best-effort Unicode form of an IDN host ("" when not applicable)."""
    if "xn--" not in hostname:
        return ""
    try:
        return idna.decode(hostname)
    except (idna.IDNAError, UnicodeError) as exc:
        logger.debug("Could not decode punycode host %s: %s", hostname, exc)
        return ""


class SubdomainRule:
    name = "subdomain"
    points = 20
    max_labels = 3
    max_prefix_length = 15

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        parts = context.hostname.split(".")
        if len(parts) > self.max_labels:
            prefix = ".".join(parts[:-2])
            if len(prefix) > self.max_prefix_length:
                return HeuristicFinding(
                    self.name,
                    score=self.points,
                    detected=True,
                    reason="Suspicious subdomain structure",
                )
        return HeuristicFinding(self.name)


class SuspiciousTLDRule:
    name = "suspicious_tld"
    points = 15

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        tld = top_level_label(context.hostname)
        if tld in config.suspicious_tlds:
            return HeuristicFinding(
                self.name,
                score=self.points,
                detected=True,
                reason=f"Suspicious TLD: .{tld}",
            )
        return HeuristicFinding(self.name)


class SuspiciousFormRule:
    name = "suspicious_forms"
    unsafe_action_points = 15
    get_method_points = 10
    cap = 25

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        score = 0
        for form in context.signals.forms:
            if not form.collects_credentials:
                continue
            if form.has_unsafe_action:
                score += self.unsafe_action_points
            if form.uses_get:
                score += self.get_method_points

        if score <= 0:
            return HeuristicFinding(self.name)
        return HeuristicFinding(
            self.name,
            score=min(score, self.cap),
            detected=True,
            reason="Suspicious form detected",
        )


class SuspiciousContentRule:
    name = "suspicious_content"
    points_per_phrase = 4
    cap = 25

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        text = context.signals.page_text_lower or ""
        matches = sum(1 for phrase in config.content_phrases if phrase in text)
        score = min(matches * self.points_per_phrase, self.cap)
        if score <= 0:
            return HeuristicFinding(self.name)
        return HeuristicFinding(
            self.name,
            score=score,
            detected=True,
            reason=f"Suspicious content keywords found ({matches})",
        )


class NewDomainRule:
    """Lexical stand-in for domain age: suspicious TLD on a long base domain."""

    name = "new_domain"
    points = 10
    min_length = 15

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        base = context.base_domain
        tld = top_level_label(base)
        if tld in config.suspicious_tlds and len(base) > self.min_length:
            return HeuristicFinding(
                self.name,
                score=self.points,
                detected=True,
                reason="Domain appears newly registered / low reputation",
            )
        return HeuristicFinding(self.name)


class SecurityFeaturesRule:
    name = "security_features"
    points = 20

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        if context.is_https:
            return HeuristicFinding(self.name, reason="HTTPS enabled")
        return HeuristicFinding(
            self.name,
            score=self.points,
            detected=True,
            reason="No HTTPS detected",
        )


class SuspiciousLinkRule:
    name = "suspicious_links"
    points_per_link = 2
    cap = 20

    def apply(self, config: "EngineConfig", context: DetectionContext) -> HeuristicFinding:
        count = max(context.signals.suspicious_href_link_count, 0)
        score = min(count * self.points_per_link, self.cap)
        if score <= 0:
            return HeuristicFinding(self.name)
        return HeuristicFinding(
            self.name,
            score=score,
            detected=True,
            reason=f"{count} suspicious links found",
        )


def default_rules() -> list:
    """The nine rules in evaluation order."""
    return [
        TypoSquattingRule(),
        HomoglyphRule(),
        SubdomainRule(),
        SuspiciousTLDRule(),
        SuspiciousFormRule(),
        SuspiciousContentRule(),
        NewDomainRule(),
        SecurityFeaturesRule(),
        SuspiciousLinkRule(),
    ]


__all__ = [
    "TypoSquattingRule",
    "HomoglyphRule",
    "SubdomainRule",
    "SuspiciousTLDRule",
    "SuspiciousFormRule",
    "SuspiciousContentRule",
    "NewDomainRule",
    "SecurityFeaturesRule",
    "SuspiciousLinkRule",
    "default_rules",
]
