# npminspector/scoring.py

"""
Risk aggregation: folds a package's findings into a score, a risk level and
a confidence value.

All functions are pure over the finding list. They depend only on the
multiset of (severity, risk_contribution) pairs, so they are idempotent and
independent of finding order; per-file results can be concatenated in any
order before aggregation.
"""

from collections import Counter
from typing import Iterable, NamedTuple

from npminspector.utils.metadata import Finding, Severity
from npminspector.utils.settings import CONFIDENCE_WEIGHTS, RISK_LEVEL_THRESHOLDS


class RiskSummary(NamedTuple):
    risk_score: int
    risk_level: Severity
    confidence: float


def risk_score(findings: Iterable[Finding]) -> int:
    return sum(f.risk_contribution for f in findings)


def risk_level(score: int) -> Severity:
    """
    Map a cumulative score to a level: >=20 CRITICAL, >=10 HIGH, >=5 MEDIUM, else LOW.
    """
    for threshold, level in RISK_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return Severity.LOW


def confidence(findings: Iterable[Finding]) -> float:
    """
    0.3 per CRITICAL, 0.2 per HIGH and 0.1 per MEDIUM finding, capped at 1.0.
    """
    counts = Counter(f.severity for f in findings)
    raw = sum(weight * counts[sev] for sev, weight in CONFIDENCE_WEIGHTS.items())
    return round(min(max(raw, 0.0), 1.0), 4)


def aggregate(findings: Iterable[Finding]) -> RiskSummary:
    findings = list(findings)
    score = risk_score(findings)
    return RiskSummary(score, risk_level(score), confidence(findings))
