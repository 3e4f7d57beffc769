"""Analyzer modules for PhishScore."""

from .detector_engine import PhishingDetector, analyze_page, classify, combine_scores
from .detector_models import AnalysisResult
from .features import extract_features, predict
from .page_signals import collect_signals
from .rules import DetectionContext, HeuristicFinding
from .signals import FormSignal, PageSignals

__all__ = [
    "AnalysisResult",
    "DetectionContext",
    "FormSignal",
    "HeuristicFinding",
    "PageSignals",
    "PhishingDetector",
    "analyze_page",
    "classify",
    "collect_signals",
    "combine_scores",
    "extract_features",
    "predict",
]
