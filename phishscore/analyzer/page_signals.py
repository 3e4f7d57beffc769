"""Collect page signals from a saved HTML document."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from typing import Optional

from ..utils.domains import extract_hostname, protocol_of
from .signals import FormSignal, PageSignals, is_unsafe_href

logger = logging.getLogger(__name__)

_SKIP_TAGS = {"script", "style", "noscript", "template", "title"}
# Tags whose boundaries separate words in rendered text
_BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
}
# Head content; any other start tag begins the body
_HEAD_TAGS = {"head", "base", "link", "meta"}
_WHITESPACE = re.compile(r"\s+")


class _FormState:
    def __init__(self, action: str, method: str) -> None:
        self.action = action
        self.method = method
        self.has_password_input = False
        self.has_email_input = False

    def freeze(self) -> FormSignal:
        return FormSignal(
            action=self.action,
            method=self.method,
            has_password_input=self.has_password_input,
            has_email_input=self.has_email_input,
        )


class _SignalParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.forms: list[FormSignal] = []
        self.form_count = 0
        self.password_input_count = 0
        self.link_count = 0
        self.suspicious_link_count = 0
        self._chunks: list[str] = []
        self._skip_depth = 0
        self._in_head = False
        self._open_form: Optional[_FormState] = None

    def handle_starttag(self, tag: str, attrs) -> None:  # type: ignore[override]
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
            return
        if self._skip_depth:
            return

        if tag == "head":
            self._in_head = True
        elif tag not in _HEAD_TAGS:
            self._in_head = False
        if tag in _BLOCK_TAGS:
            self._chunks.append(" ")

        attributes = {name.lower(): (value or "") for name, value in attrs}
        if tag == "form":
            # Nested form tags are dropped by HTML parsers
            if self._open_form is not None:
                return
            self.form_count += 1
            self._open_form = _FormState(
                action=attributes.get("action", "").strip(),
                method=attributes.get("method", "").strip().lower() or "get",
            )
        elif tag == "input":
            input_type = attributes.get("type", "").strip().lower()
            if input_type == "password":
                self.password_input_count += 1
                if self._open_form is not None:
                    self._open_form.has_password_input = True
            elif input_type == "email" and self._open_form is not None:
                self._open_form.has_email_input = True
        elif tag == "a":
            self.link_count += 1
            if is_unsafe_href(attributes.get("href")):
                self.suspicious_link_count += 1

    def handle_startendtag(self, tag: str, attrs) -> None:  # type: ignore[override]
        # Self-closing forms/skip tags have no content to track
        if tag in _SKIP_TAGS:
            return
        self.handle_starttag(tag, attrs)
        if tag == "form":
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:  # type: ignore[override]
        if tag in _SKIP_TAGS:
            if self._skip_depth:
                self._skip_depth -= 1
            return
        if self._skip_depth:
            return

        if tag == "head":
            self._in_head = False
        if tag in _BLOCK_TAGS:
            self._chunks.append(" ")
        if tag == "form" and self._open_form is not None:
            self.forms.append(self._open_form.freeze())
            self._open_form = None

    def handle_data(self, data: str) -> None:  # type: ignore[override]
        if self._skip_depth or self._in_head:
            return
        self._chunks.append(data)

    def finish(self) -> None:
        self.close()
        # Unclosed forms still count
        if self._open_form is not None:
            self.forms.append(self._open_form.freeze())
            self._open_form = None

    def text(self) -> str:
        return _WHITESPACE.sub(" ", "".join(self._chunks)).strip()


def collect_signals(url: str, html: Optional[str] = None) -> PageSignals:
    """Parse HTML into the signals the detector consumes.

    With no HTML only the URL-derived signals are filled in.
    """
    hostname = extract_hostname(url)
    is_https = protocol_of(url) == "https"

    if not html:
        return PageSignals(url=url or "", hostname=hostname, is_https=is_https)

    parser = _SignalParser()
    parser.feed(html)
    parser.finish()

    signals = PageSignals(
        url=url or "",
        hostname=hostname,
        is_https=is_https,
        form_count=parser.form_count,
        password_input_count=parser.password_input_count,
        forms=tuple(parser.forms),
        link_count=parser.link_count,
        suspicious_href_link_count=parser.suspicious_link_count,
        page_text_lower=parser.text().lower(),
    )
    logger.debug(
        "Collected signals for %s: forms=%s passwords=%s links=%s suspicious_links=%s",
        hostname,
        signals.form_count,
        signals.password_input_count,
        signals.link_count,
        signals.suspicious_href_link_count,
    )
    return signals
