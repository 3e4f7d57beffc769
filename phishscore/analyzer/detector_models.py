"""Detector data models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..constants import DEFAULT_WARNING_THRESHOLD, RiskLevel
from .rules import HeuristicFinding


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AnalysisResult:
    """Result of a hybrid phishing analysis."""

    url: str
    domain: str
    rule_score: int
    ml_score: float
    final_score: int
    risk_level: RiskLevel
    reasons: tuple[str, ...] = field(default_factory=tuple)
    timestamp: datetime = field(default_factory=_utcnow)

    # Per-rule breakdown; empty for the trusted-domain short-circuit
    findings: tuple[HeuristicFinding, ...] = field(default_factory=tuple)

    def should_warn(self, threshold: int = DEFAULT_WARNING_THRESHOLD) -> bool:
        """Whether the final score reaches a caller's warning threshold."""
        return self.final_score >= threshold

    def to_dict(self, include_findings: bool = False) -> dict:
        """Flat JSON-compatible record consumed by history, badge and overlay layers."""
        record = {
            "url": self.url,
            "domain": self.domain,
            "ruleScore": self.rule_score,
            "mlScore": self.ml_score,
            "finalScore": self.final_score,
            "riskLevel": str(self.risk_level),
            "reasons": list(self.reasons),
            "timestamp": self.timestamp.isoformat(),
        }
        if include_findings:
            record["findings"] = [finding.to_dict() for finding in self.findings]
        return record

    def to_json(self, include_findings: bool = False, **kwargs) -> str:
        return json.dumps(self.to_dict(include_findings=include_findings), **kwargs)

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """Rebuild a result from a record produced by ``to_dict``."""
        raw_ts = data.get("timestamp")
        if raw_ts:
            timestamp = datetime.fromisoformat(str(raw_ts).replace("Z", "+00:00"))
        else:
            timestamp = _utcnow()

        findings = tuple(
            HeuristicFinding(
                name=str(item.get("name", "")),
                score=int(item.get("score", 0) or 0),
                detected=bool(item.get("detected", False)),
                reason=str(item.get("reason") or ""),
            )
            for item in data.get("findings") or []
        )

        return cls(
            url=str(data.get("url") or ""),
            domain=str(data.get("domain") or ""),
            rule_score=int(data.get("ruleScore", 0) or 0),
            ml_score=float(data.get("mlScore", 0) or 0),
            final_score=int(data.get("finalScore", 0) or 0),
            risk_level=RiskLevel.from_string(data.get("riskLevel")),
            reasons=tuple(str(r) for r in data.get("reasons") or []),
            timestamp=timestamp,
            findings=findings,
        )
