"""Domain normalization utilities."""

from __future__ import annotations

from urllib.parse import urlparse


def base_domain(hostname: str) -> str:
    """
    Return the base domain used for trust, typo and TLD comparisons.

    - Lowercase
    - Last two dot-separated labels, or the whole host if it has two or fewer
    - Empty input yields ""
    """
    if not hostname:
        return ""
    host = hostname.lower()
    parts = host.split(".")
    if len(parts) <= 2:
        return host
    return ".".join(parts[-2:])


def top_level_label(domain: str) -> str:
    """Return the last dot-separated label (the whole string when there is no dot)."""
    return (domain or "").split(".")[-1]


def canonicalize_domain(value: str) -> str:
    """
    Normalize a domain/URL to the hostname the detectors inspect.

    - Lowercase
    - Strip surrounding whitespace and trailing dots
    - Ignore scheme, port, path/query/fragment
    """
    raw = (value or "").strip()
    if not raw:
        return ""

    candidate = raw if "://" in raw else f"https://{raw}"
    try:
        parsed = urlparse(candidate)
        host = parsed.hostname or ""
    except ValueError:
        host = ""
    if not host:
        host = raw.split("/")[0].split(":")[0]
    return host.strip().lower().strip(".")


def extract_hostname(url: str) -> str:
    """Return the hostname of a URL ("" when it has none)."""
    return canonicalize_domain(url)


def is_https_protocol(protocol: str | None) -> bool:
    """Whether a protocol string ("https", "https:", "HTTPS") denotes HTTPS."""
    return (protocol or "").strip().lower().rstrip(":") == "https"


def protocol_of(url: str) -> str:
    """Return the URL scheme, lower-cased ("" when absent)."""
    raw = (url or "").strip()
    if "://" not in raw:
        return ""
    return raw.split("://", 1)[0].lower()
