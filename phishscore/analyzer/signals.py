"""Page signal data models."""

from __future__ import annotations

from dataclasses import dataclass, field

UNSAFE_HREF_PREFIXES = ("javascript:", "data:")


@dataclass(frozen=True)
class FormSignal:
    """A single form as seen on the page."""

    action: str = ""
    method: str = "get"
    has_password_input: bool = False
    has_email_input: bool = False

    @property
    def collects_credentials(self) -> bool:
        return self.has_password_input or self.has_email_input

    @property
    def has_unsafe_action(self) -> bool:
        action = (self.action or "").strip()
        return not action or action.lower().startswith("javascript:")

    @property
    def uses_get(self) -> bool:
        return (self.method or "get").strip().lower() == "get"


@dataclass(frozen=True)
class PageSignals:
    """Signals collected from a visited page.

    Collaborators fill missing values with their zero/empty default before
    handing the signals to the detector.
    """

    url: str = ""
    hostname: str = ""
    is_https: bool = False
    form_count: int = 0
    password_input_count: int = 0
    forms: tuple[FormSignal, ...] = field(default_factory=tuple)
    link_count: int = 0
    suspicious_href_link_count: int = 0
    page_text_lower: str = ""

    @property
    def forms_without_safe_action(self) -> int:
        """Credential forms with an empty/javascript: action or a GET method."""
        return sum(
            1
            for form in self.forms
            if form.collects_credentials and (form.has_unsafe_action or form.uses_get)
        )


def is_unsafe_href(href: str | None) -> bool:
    """Whether an anchor href uses a javascript: or data: scheme."""
    return (href or "").strip().lower().startswith(UNSAFE_HREF_PREFIXES)
