"""Configuration management for PhishScore."""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .model import DEFAULT_MODEL, FEATURE_COUNT, LinearModel
from .utils.allowlist import normalize_allowlist_domain, read_allowlist

logger = logging.getLogger(__name__)


DEFAULT_TRUSTED_DOMAINS: frozenset[str] = frozenset(
    {
        "google.com",
        "gmail.com",
        "youtube.com",
        # Multi-label entries never equal a base domain; kept as data.
        "ogs.google.com",
        "accounts.google.com",
        "facebook.com",
        "meta.com",
        "microsoft.com",
        "live.com",
        "outlook.com",
        "office.com",
        "apple.com",
        "icloud.com",
        "amazon.com",
        "amazon.in",
        "flipkart.com",
        "paytm.com",
        "phonepe.com",
        "whatsapp.com",
        "instagram.com",
        "linkedin.com",
    }
)

DEFAULT_BRANDS: tuple[str, ...] = (
    "google",
    "amazon",
    "apple",
    "facebook",
    "microsoft",
    "paypal",
    "ebay",
    "bank",
)

DEFAULT_SUSPICIOUS_TLDS: frozenset[str] = frozenset(
    {"tk", "ml", "ga", "cf", "info", "xyz", "pw", "cc"}
)

# Latin letter -> lookalike substitutes (Cyrillic, Greek, digits)
DEFAULT_HOMOGLYPHS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("a", ("а", "ɑ", "α")),
    ("e", ("е", "ε")),
    ("o", ("о", "0", "ο")),
    ("i", ("і", "ı", "ι")),
    ("s", ("ѕ",)),
    ("l", ("1", "І")),
)

DEFAULT_CONTENT_PHRASES: tuple[str, ...] = (
    "verify account",
    "confirm password",
    "update payment",
    "urgent action required",
    "click here",
    "confirm identity",
    "unusual activity",
    "re-enter password",
)

DEFAULT_FEATURE_KEYWORDS: tuple[str, ...] = (
    "verify",
    "confirm",
    "urgent",
    "password",
    "bank",
    "login",
    "update",
)

DEFAULT_TRUSTED_KEYWORD_FACTOR = 0.2


@dataclass(frozen=True)
class EngineConfig:
    """Immutable scoring configuration shared by every analysis."""

    trusted_domains: frozenset[str] = DEFAULT_TRUSTED_DOMAINS
    brands: tuple[str, ...] = DEFAULT_BRANDS
    suspicious_tlds: frozenset[str] = DEFAULT_SUSPICIOUS_TLDS
    homoglyphs: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_HOMOGLYPHS
    content_phrases: tuple[str, ...] = DEFAULT_CONTENT_PHRASES
    feature_keywords: tuple[str, ...] = DEFAULT_FEATURE_KEYWORDS
    model: LinearModel = DEFAULT_MODEL
    trusted_keyword_factor: float = DEFAULT_TRUSTED_KEYWORD_FACTOR
    config_dir: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Callers may pass lists or sets; keep every field hashable
        object.__setattr__(self, "trusted_domains", frozenset(self.trusted_domains))
        object.__setattr__(self, "brands", tuple(self.brands))
        object.__setattr__(self, "suspicious_tlds", frozenset(self.suspicious_tlds))
        object.__setattr__(
            self,
            "homoglyphs",
            tuple((letter, tuple(substitutes)) for letter, substitutes in self.homoglyphs),
        )
        object.__setattr__(self, "content_phrases", tuple(self.content_phrases))
        object.__setattr__(self, "feature_keywords", tuple(self.feature_keywords))

    @property
    def homoglyph_characters(self) -> tuple[str, ...]:
        """All substitute characters in table order."""
        return tuple(char for _, substitutes in self.homoglyphs for char in substitutes)

    def with_trusted_domains(self, domains) -> "EngineConfig":
        """Return a copy with the given trusted domains added."""
        extra = {normalize_allowlist_domain(d) for d in domains}
        extra.discard("")
        return replace(self, trusted_domains=self.trusted_domains | frozenset(extra))


DEFAULT_CONFIG = EngineConfig()


def _load_heuristics(config_dir: Path) -> dict:
    """Load heuristic overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring heuristics.yaml: expected a mapping, got %s", type(data).__name__)
        return {}

    def _coerce_strings(raw) -> tuple[str, ...]:
        if not isinstance(raw, (list, tuple, set)):
            return ()
        items: list[str] = []
        for entry in raw:
            value = str(entry or "").strip().lower()
            if value and value not in items:
                items.append(value)
        return tuple(items)

    def _coerce_homoglyphs(raw) -> tuple[tuple[str, tuple[str, ...]], ...]:
        if not isinstance(raw, dict):
            return ()
        table: list[tuple[str, tuple[str, ...]]] = []
        for letter, substitutes in raw.items():
            letter = str(letter or "").strip().lower()
            if isinstance(substitutes, str):
                substitutes = list(substitutes)
            chars = tuple(str(c) for c in substitutes or [] if str(c))
            if letter and chars:
                table.append((letter, chars))
        return tuple(table)

    trust_cfg = data.get("trust") or {}
    domain_cfg = data.get("domain") or {}
    content_cfg = data.get("content") or {}
    if not isinstance(trust_cfg, dict):
        trust_cfg = {}
    if not isinstance(domain_cfg, dict):
        domain_cfg = {}
    if not isinstance(content_cfg, dict):
        content_cfg = {}

    overrides: dict = {}
    trusted = _coerce_strings(trust_cfg.get("domains"))
    if trusted:
        overrides["trusted_domains"] = frozenset(
            d for d in (normalize_allowlist_domain(t) for t in trusted) if d
        )
    brands = _coerce_strings(domain_cfg.get("brands"))
    if brands:
        overrides["brands"] = brands
    tlds = _coerce_strings(domain_cfg.get("suspicious_tlds"))
    if tlds:
        overrides["suspicious_tlds"] = frozenset(t.lstrip(".") for t in tlds)
    homoglyphs = _coerce_homoglyphs(domain_cfg.get("homoglyphs"))
    if homoglyphs:
        overrides["homoglyphs"] = homoglyphs
    phrases = _coerce_strings(content_cfg.get("phrases"))
    if phrases:
        overrides["content_phrases"] = phrases
    keywords = _coerce_strings(content_cfg.get("feature_keywords"))
    if keywords:
        overrides["feature_keywords"] = keywords

    return overrides


def load_config(config_dir: Optional[Path] = None) -> EngineConfig:
    """Load engine configuration from defaults, heuristics.yaml and the trusted list."""
    load_dotenv()

    if config_dir is None:
        config_dir = Path(os.getenv("PHISHSCORE_CONFIG_DIR", "./config"))
    config_dir = Path(config_dir)

    overrides = _load_heuristics(config_dir)
    config = replace(DEFAULT_CONFIG, config_dir=config_dir, **overrides)

    trusted_file = config_dir / "trusted_domains.txt"
    extra_trusted = read_allowlist(trusted_file)
    if extra_trusted:
        config = config.with_trusted_domains(extra_trusted)
        logger.info("Loaded %s trusted domains from %s", len(extra_trusted), trusted_file)

    if overrides:
        logger.info("Applied heuristic overrides: %s", sorted(overrides))

    return config


def validate_config(config: EngineConfig) -> list[str]:
    """Validate engine configuration and return list of error messages."""
    errors: list[str] = []
    if len(config.model.weights) != FEATURE_COUNT:
        errors.append(
            f"Model must have {FEATURE_COUNT} weights, got {len(config.model.weights)}"
        )
    if not config.brands:
        errors.append("Brand list for typo-squatting is empty")
    if config.trusted_keyword_factor <= 0:
        errors.append("trusted_keyword_factor must be positive")
    if not config.suspicious_tlds:
        logger.info("No suspicious TLDs configured; TLD and new-domain rules will never fire")
    return errors
