"""Trusted-domain allowlist helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .domains import base_domain, canonicalize_domain


def normalize_allowlist_domain(value: str) -> str:
    """Normalize allowlist entries to their base domain (covers all subdomains)."""
    return base_domain(canonicalize_domain(value))


def is_trusted(hostname: str, trusted_domains: Iterable[str]) -> bool:
    """Check whether the base domain of a hostname is in the trusted set."""
    base = base_domain(hostname)
    if not base:
        return False
    return base in trusted_domains


def read_allowlist(path: Path) -> set[str]:
    """Read allowlist entries from disk (normalized)."""
    if not path.exists():
        return set()

    entries: set[str] = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        normalized = normalize_allowlist_domain(value)
        if normalized:
            entries.add(normalized)
    return entries


def write_allowlist(path: Path, entries: Iterable[str]) -> None:
    """Write allowlist entries to disk (sorted, atomic)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    header = [
        "# Trusted domains (one per line)",
        "# Pages on these domains served over HTTPS are always scored SAFE",
    ]
    normalized = {normalize_allowlist_domain(entry) for entry in entries}
    normalized.discard("")
    content = "\n".join(header + sorted(normalized) + [""])
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)
