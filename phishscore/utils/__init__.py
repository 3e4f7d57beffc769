"""Shared helpers for PhishScore."""

from .allowlist import is_trusted, read_allowlist, write_allowlist
from .domains import base_domain, canonicalize_domain, extract_hostname

__all__ = [
    "base_domain",
    "canonicalize_domain",
    "extract_hostname",
    "is_trusted",
    "read_allowlist",
    "write_allowlist",
]
