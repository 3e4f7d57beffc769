"""Tests for the individual detection rules."""

import pytest

from phishscore.analyzer.detector_rules import (
    HomoglyphRule,
    NewDomainRule,
    SecurityFeaturesRule,
    SubdomainRule,
    SuspiciousContentRule,
    SuspiciousFormRule,
    SuspiciousLinkRule,
    SuspiciousTLDRule,
    TypoSquattingRule,
    _decode_punycode,
    default_rules,
)
from phishscore.analyzer.rules import DetectionContext
from phishscore.analyzer.signals import FormSignal, PageSignals
from phishscore.config import DEFAULT_CONFIG, EngineConfig
from phishscore.utils.domains import base_domain


def make_context(
    hostname: str = "example.com",
    is_https: bool = True,
    **signal_fields,
) -> DetectionContext:
    """Create a DetectionContext for testing."""
    signals = PageSignals(hostname=hostname, is_https=is_https, **signal_fields)
    return DetectionContext(
        signals=signals,
        hostname=hostname,
        base_domain=base_domain(hostname),
        is_https=is_https,
    )


def apply(rule, config=DEFAULT_CONFIG, **context_fields):
    return rule.apply(config, make_context(**context_fields))


class TestTypoSquatting:
    """Test brand typo-squatting detection."""

    def test_one_edit_from_brand(self):
        """One edit away from a brand is typo-squatting."""
        finding = apply(TypoSquattingRule(), hostname="go0gle.com")
        assert finding.score == 25
        assert finding.detected
        assert "google" in finding.reason

    def test_exact_brand_exempt(self):
        """The brand itself is not flagged."""
        finding = apply(TypoSquattingRule(), hostname="google.com")
        assert finding.score == 0
        assert not finding.detected
        assert finding.reason == ""

    def test_uses_base_domain_label(self):
        """Only the base domain's first label is compared."""
        finding = apply(TypoSquattingRule(), hostname="login.paypa1.com")
        assert finding.detected
        assert finding.reason == "Typo-squatting: Similar to 'paypal'"

    def test_unrelated_domain(self):
        """Distant names are not flagged."""
        assert not apply(TypoSquattingRule(), hostname="example.com").detected

    def test_brand_order_decides(self):
        """The first matching brand is named in the reason."""
        config = EngineConfig(brands=("aaaa", "aaab"))
        finding = apply(TypoSquattingRule(), config=config, hostname="aaac.com")
        assert finding.reason == "Typo-squatting: Similar to 'aaaa'"

    def test_empty_hostname(self):
        """An empty hostname is not flagged."""
        assert not apply(TypoSquattingRule(), hostname="").detected


class TestHomoglyph:
    """Test lookalike character detection."""

    def test_cyrillic_o(self):
        """A Cyrillic letter in the hostname is flagged."""
        finding = apply(HomoglyphRule(), hostname="gооgle.com")  # Cyrillic о
        assert finding.score == 30
        assert finding.detected

    def test_digit_substitute(self):
        """Digit lookalikes are flagged."""
        assert apply(HomoglyphRule(), hostname="paypa1.com").score == 30

    def test_multiple_homoglyphs_do_not_accumulate(self):
        """Several lookalikes still score once."""
        assert apply(HomoglyphRule(), hostname="g00gle1.com").score == 30

    def test_plain_ascii(self):
        """Plain ASCII names are not flagged."""
        finding = apply(HomoglyphRule(), hostname="example.com")
        assert finding.score == 0
        assert not finding.detected

    def test_punycode_decoded(self):
        """IDN hosts arrive as punycode; the Unicode form is inspected too."""
        config = EngineConfig(homoglyphs=(("a", ("а",)),))  # Cyrillic а only
        finding = apply(HomoglyphRule(), config=config, hostname="xn--80ak6aa92e.com")
        assert finding.detected

    def test_decode_punycode(self):
        """Punycode labels decode and plain names decode to nothing."""
        assert _decode_punycode("xn--80ak6aa92e.com") == "аррӏе.com"
        assert _decode_punycode("example.com") == ""


class TestSubdomain:
    """Test long subdomain prefix detection."""

    def test_long_prefix(self):
        """A long subdomain chain is flagged."""
        finding = apply(SubdomainRule(), hostname="secure-login.accounts.paypal.com.evil.com")
        assert finding.score == 20
        assert finding.reason == "Suspicious subdomain structure"

    def test_short_prefix(self):
        """A short subdomain chain is not flagged."""
        assert apply(SubdomainRule(), hostname="a.b.example.com").score == 0

    def test_three_labels_never_fire(self):
        """Three-label hosts are never flagged."""
        assert apply(SubdomainRule(), hostname="averyveryverylongsubdomain.example.com").score == 0

    def test_prefix_boundary(self):
        """The prefix must be longer than 15 characters."""
        assert apply(SubdomainRule(), hostname="abcdefg.hijklmn.example.com").score == 0
        assert apply(SubdomainRule(), hostname="abcdefgh.hijklmn.example.com").score == 20


class TestSuspiciousTLD:
    """Test low-trust TLD detection."""

    def test_tk(self):
        """.tk is a suspicious TLD."""
        finding = apply(SuspiciousTLDRule(), hostname="example.tk")
        assert finding.score == 15
        assert finding.detected
        assert finding.reason == "Suspicious TLD: .tk"

    def test_com(self):
        """.com is not suspicious."""
        assert apply(SuspiciousTLDRule(), hostname="example.com").score == 0

    def test_no_dot(self):
        """A single-label host has no suspicious TLD."""
        assert apply(SuspiciousTLDRule(), hostname="localhost").score == 0

    def test_custom_tlds(self):
        """A configured TLD list replaces the default."""
        config = EngineConfig(suspicious_tlds=frozenset({"zip"}))
        assert apply(SuspiciousTLDRule(), config=config, hostname="invoice.zip").detected
        assert not apply(SuspiciousTLDRule(), config=config, hostname="example.tk").detected


class TestSuspiciousForms:
    """Test credential form detection."""

    def test_get_form_with_empty_action(self):
        """A GET credential form with no action scores the cap."""
        forms = (FormSignal(action="", method="get", has_password_input=True),)
        finding = apply(SuspiciousFormRule(), forms=forms)
        assert finding.score == 25
        assert finding.reason == "Suspicious form detected"

    def test_javascript_action_post(self):
        """A javascript: action scores 15."""
        forms = (FormSignal(action="javascript:void(0)", method="post", has_email_input=True),)
        assert apply(SuspiciousFormRule(), forms=forms).score == 15

    def test_get_method_is_case_insensitive(self):
        """GET is recognized in any case."""
        forms = (FormSignal(action="/login", method="GET", has_email_input=True),)
        assert apply(SuspiciousFormRule(), forms=forms).score == 10

    def test_sum_is_capped(self):
        """Several bad forms still stop at 25."""
        forms = (
            FormSignal(action="", method="post", has_password_input=True),
            FormSignal(action="", method="post", has_password_input=True),
        )
        assert apply(SuspiciousFormRule(), forms=forms).score == 25

    def test_safe_post_form(self):
        """A POST form with a real action is not flagged."""
        forms = (FormSignal(action="https://example.com/login", method="post", has_password_input=True),)
        finding = apply(SuspiciousFormRule(), forms=forms)
        assert finding.score == 0
        assert not finding.detected

    def test_form_without_credentials_ignored(self):
        """Forms without credential inputs are ignored."""
        forms = (FormSignal(action="", method="get"),)
        assert apply(SuspiciousFormRule(), forms=forms).score == 0


class TestSuspiciousContent:
    """Test phishing phrase detection."""

    def test_two_phrases(self):
        """Each matched phrase adds 4."""
        finding = apply(
            SuspiciousContentRule(),
            page_text_lower="please verify account and confirm password",
        )
        assert finding.score == 8
        assert finding.reason == "Suspicious content keywords found (2)"

    def test_capped(self):
        """The score stops at the rule's cap."""
        text = " ".join(DEFAULT_CONFIG.content_phrases)
        assert apply(SuspiciousContentRule(), page_text_lower=text).score == 25

    def test_empty_text(self):
        """No text means no finding."""
        finding = apply(SuspiciousContentRule(), page_text_lower="")
        assert finding.score == 0
        assert not finding.detected


class TestNewDomain:
    """Test the lexical new-domain heuristic."""

    def test_long_domain_on_suspicious_tld(self):
        """A long name on a suspicious TLD looks newly registered."""
        finding = apply(NewDomainRule(), hostname="free-gift-cards-now.tk")
        assert finding.score == 10
        assert finding.detected

    def test_uses_base_domain(self):
        """Length is measured on the base domain."""
        assert apply(NewDomainRule(), hostname="www.free-gift-cards-now.tk").score == 10

    def test_length_boundary(self):
        """The base domain must be longer than 15 characters."""
        # Exactly 15 characters is not enough
        assert apply(NewDomainRule(), hostname="paypa1-login.tk").score == 0

    def test_long_domain_on_common_tld(self):
        """Long names on common TLDs are not flagged."""
        assert apply(NewDomainRule(), hostname="very-long-domain-name.com").score == 0


class TestSecurityFeatures:
    """Test HTTPS detection."""

    def test_http(self):
        """Plain HTTP is flagged."""
        finding = apply(SecurityFeaturesRule(), is_https=False)
        assert finding.score == 20
        assert finding.detected
        assert finding.reason == "No HTTPS detected"

    def test_https(self):
        """HTTPS is not reported."""
        finding = apply(SecurityFeaturesRule(), is_https=True)
        assert finding.score == 0
        assert not finding.detected
        assert not finding.reportable


class TestSuspiciousLinks:
    """Test javascript:/data: link detection."""

    def test_some_links(self):
        """Each unsafe link adds 2."""
        finding = apply(SuspiciousLinkRule(), suspicious_href_link_count=3)
        assert finding.score == 6
        assert finding.reason == "3 suspicious links found"

    def test_capped(self):
        """The score stops at the rule's cap."""
        assert apply(SuspiciousLinkRule(), suspicious_href_link_count=15).score == 20

    def test_none(self):
        """No unsafe links means no finding."""
        assert not apply(SuspiciousLinkRule(), suspicious_href_link_count=0).detected


def test_default_rule_order():
    """Rules run in a fixed order."""
    names = [rule.name for rule in default_rules()]
    assert names == [
        "typo_squatting",
        "homoglyph",
        "subdomain",
        "suspicious_tld",
        "suspicious_forms",
        "suspicious_content",
        "new_domain",
        "security_features",
        "suspicious_links",
    ]


@pytest.mark.parametrize("rule", default_rules(), ids=lambda r: r.name)
def test_findings_stay_within_bounds(rule):
    """No single rule scores above 30."""
    context = make_context(
        hostname="xn--80ak6aa92e.very-long-subdomain-chain.paypa1-secure-login.tk",
        is_https=False,
        forms=tuple(FormSignal(has_password_input=True) for _ in range(50)),
        suspicious_href_link_count=1000,
        page_text_lower=" ".join(DEFAULT_CONFIG.content_phrases) * 10,
    )
    finding = rule.apply(DEFAULT_CONFIG, context)
    assert 0 <= finding.score <= 30
    assert finding.name == rule.name
