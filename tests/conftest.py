"""Global pytest configuration."""

from __future__ import annotations

import pytest

from phishscore.analyzer import FormSignal, PageSignals, PhishingDetector
from phishscore.config import DEFAULT_CONFIG


@pytest.fixture
def detector() -> PhishingDetector:
    """Detector with the built-in configuration."""
    return PhishingDetector(DEFAULT_CONFIG)


@pytest.fixture
def phishing_signals() -> PageSignals:
    """Signals of a typical credential-harvesting page served over HTTP."""
    return PageSignals(
        url="http://paypa1-login.tk/signin",
        hostname="paypa1-login.tk",
        is_https=False,
        form_count=1,
        password_input_count=1,
        forms=(FormSignal(action="", method="GET", has_password_input=True),),
        page_text_lower="please verify account and confirm password",
    )
