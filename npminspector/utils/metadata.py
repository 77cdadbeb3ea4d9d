# npminspector/utils/metadata.py

"""
Metadata definitions for findings and package assessments.

Defines:
  - Severity: ordered LOW < MEDIUM < HIGH < CRITICAL
  - FindingKind: what kind of observation a Finding records
  - PatternCategory: the regex rule categories
  - Finding: one observation about one file (immutable)
  - PackageAssessment: the aggregate result of scanning one package
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]


class FindingKind(str, Enum):
    MALWARE_SIGNATURE = "malware_signature"
    SUSPICIOUS_PATTERN = "suspicious_pattern"
    HIGH_ENTROPY_STRING = "high_entropy_string"
    SUSPICIOUS_SCRIPT = "suspicious_script"
    SUSPICIOUS_DEPENDENCY = "suspicious_dependency"
    MALFORMED_MANIFEST = "malformed_manifest"


class PatternCategory(str, Enum):
    OBFUSCATION = "obfuscation"
    NETWORK = "network"
    SYSTEM = "system"
    CRYPTO = "crypto"
    ROOTKIT = "rootkit"


@dataclass(frozen=True)
class Finding:
    file: str
    kind: FindingKind
    severity: Severity
    risk_contribution: int
    detail: Dict[str, Any] = field(default_factory=dict)
    category: Optional[PatternCategory] = None

    def __post_init__(self):
        if self.risk_contribution < 0:
            raise ValueError("risk_contribution must be non-negative")
        if (self.kind is FindingKind.SUSPICIOUS_PATTERN) != (self.category is not None):
            raise ValueError("category is required for (and only for) pattern findings")

    @property
    def type(self) -> str:
        """
        Short label used by reporters, e.g. "suspicious_network".
        """
        if self.kind is FindingKind.SUSPICIOUS_PATTERN:
            return f"suspicious_{self.category.value}"
        if self.kind is FindingKind.MALFORMED_MANIFEST:
            return "malformed_package_json"
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": self.file,
            "type": self.type,
            "severity": self.severity.value,
            "risk_score": self.risk_contribution,
        }
        data.update(self.detail)
        return data


@dataclass
class PackageAssessment:
    """
    Result of scanning one package. Built empty, grown with `add_finding`,
    then frozen in place by `finalize()` before it is handed to reporters.
    """

    package_name: str
    path: str = ""
    risk_score: int = 0
    # Nominal ceiling for display; risk_score itself is unbounded
    max_risk_score: int = 100
    risk_level: Severity = Severity.LOW
    confidence: float = 0.0
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None
    files_scanned: int = 0
    files_skipped: int = 0

    @property
    def suspicious(self) -> bool:
        return bool(self.findings)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)
        self.risk_score += finding.risk_contribution

    def extend(self, findings: List[Finding]) -> None:
        for finding in findings:
            self.add_finding(finding)

    def finalize(self) -> "PackageAssessment":
        # Imported here: scoring depends on this module.
        from npminspector.scoring import aggregate

        summary = aggregate(self.findings)
        self.risk_score = summary.risk_score
        self.risk_level = summary.risk_level
        self.confidence = summary.confidence
        return self

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "packageName": self.package_name,
            "path": self.path,
            "riskScore": self.risk_score,
            "maxRiskScore": self.max_risk_score,
            "riskLevel": self.risk_level.value,
            "confidence": self.confidence,
            "suspicious": self.suspicious,
            "filesScanned": self.files_scanned,
            "filesSkipped": self.files_skipped,
            "findings": [f.to_dict() for f in self.findings],
        }
        if self.error:
            data["error"] = self.error
        return data
