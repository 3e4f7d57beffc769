"""PhishScore: hybrid rule and linear-model phishing risk scoring for web pages."""

from .analyzer import (
    AnalysisResult,
    FormSignal,
    PageSignals,
    PhishingDetector,
    analyze_page,
    collect_signals,
)
from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .constants import RiskLevel

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "FormSignal",
    "PageSignals",
    "PhishingDetector",
    "RiskLevel",
    "analyze_page",
    "collect_signals",
    "load_config",
]
