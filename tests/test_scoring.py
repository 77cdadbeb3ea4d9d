import itertools
import random

import pytest

from conftest import make_finding
from npminspector.scoring import aggregate, confidence, risk_level, risk_score
from npminspector.utils.metadata import Finding, FindingKind, PackageAssessment, Severity


def mixed_findings():
    return [
        make_finding(Severity.CRITICAL, 10),
        make_finding(Severity.HIGH, 4, FindingKind.SUSPICIOUS_PATTERN),
        make_finding(Severity.MEDIUM, 3),
        make_finding(Severity.MEDIUM, 2),
        make_finding(Severity.LOW, 1),
    ]


@pytest.mark.parametrize("score,level", [
    (0, Severity.LOW),
    (4, Severity.LOW),
    (5, Severity.MEDIUM),
    (9, Severity.MEDIUM),
    (10, Severity.HIGH),
    (19, Severity.HIGH),
    (20, Severity.CRITICAL),
    (250, Severity.CRITICAL),
])
def test_risk_level_thresholds(score, level):
    assert risk_level(score) is level


def test_empty_package_assessment():
    a = PackageAssessment(package_name="empty").finalize()
    assert a.risk_score == 0
    assert a.risk_level is Severity.LOW
    assert a.suspicious is False
    assert a.confidence == 0.0


def test_confidence_weights():
    assert confidence(mixed_findings()) == pytest.approx(0.3 + 0.2 + 0.1 + 0.1)
    assert confidence([make_finding(Severity.LOW, 1)] * 20) == 0.0


def test_confidence_is_clamped():
    assert confidence([make_finding(Severity.CRITICAL, 10)] * 10) == 1.0
    assert confidence([make_finding(Severity.MEDIUM, 2)] * 50) == 1.0
    for n in range(0, 30):
        value = confidence([make_finding(Severity.HIGH, 4)] * n)
        assert 0.0 <= value <= 1.0


def test_aggregate_is_order_independent():
    findings = mixed_findings()
    expected = aggregate(findings)
    assert expected.risk_score == 20
    assert expected.risk_level is Severity.CRITICAL
    for perm in itertools.permutations(findings):
        assert aggregate(perm) == expected


def test_aggregate_is_idempotent():
    findings = mixed_findings()
    assert aggregate(findings) == aggregate(findings) == aggregate(list(findings))


def test_score_is_monotonic_as_findings_are_added():
    rng = random.Random(7)
    findings = [make_finding(rng.choice(list(Severity)), rng.randint(0, 10)) for _ in range(40)]
    a = PackageAssessment(package_name="grow")
    previous = 0
    for f in findings:
        a.add_finding(f)
        assert a.risk_score >= previous
        assert a.risk_score == risk_score(a.findings)
        previous = a.risk_score


def test_finalize_matches_running_score_and_is_repeatable():
    a = PackageAssessment(package_name="pkg")
    a.extend(mixed_findings())
    running = a.risk_score
    a.finalize()
    first = (a.risk_score, a.risk_level, a.confidence)
    a.finalize()
    assert (a.risk_score, a.risk_level, a.confidence) == first
    assert a.risk_score == running
    assert a.suspicious is True


def test_finding_rejects_negative_contribution():
    with pytest.raises(ValueError):
        make_finding(Severity.LOW, -1)


def test_pattern_finding_requires_category():
    with pytest.raises(ValueError):
        Finding(file="x.js", kind=FindingKind.SUSPICIOUS_PATTERN, severity=Severity.HIGH, risk_contribution=2)


def test_severity_ordering():
    assert Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL
    assert max([Severity.MEDIUM, Severity.CRITICAL, Severity.LOW]) is Severity.CRITICAL
