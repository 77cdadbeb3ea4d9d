# npminspector/reporter/text_reporter.py

"""
Human-readable console report, one block per package plus a batch summary.
Colours come from colorama and can be switched off.
"""

from typing import Dict, List

from colorama import Fore, Style

from npminspector.utils.metadata import Finding, PackageAssessment, Severity

_EMOJIS = {
    Severity.CRITICAL: "🚨",
    Severity.HIGH: "⚠️",
    Severity.MEDIUM: "🔍",
    Severity.LOW: "✅",
}

_COLORS = {
    Severity.CRITICAL: Fore.RED + Style.BRIGHT,
    Severity.HIGH: Fore.RED,
    Severity.MEDIUM: Fore.YELLOW,
    Severity.LOW: Fore.GREEN,
}

_RECOMMENDATIONS = {
    Severity.CRITICAL: [
        "🚨 Remove this package IMMEDIATELY!",
        "🔒 Check the system for signs of compromise",
        "🔄 Run a full malware scan",
    ],
    Severity.HIGH: [
        "⚠️  Use with EXTREME caution",
        "🔍 Review the suspicious code manually",
        "📞 Contact the package author",
    ],
    Severity.MEDIUM: [
        "🔍 Keep this package under watch",
        "📋 Review the reported findings",
        "🔄 Consider safer alternatives",
    ],
    Severity.LOW: [
        "✅ Package looks safe",
        "🔄 Keep monitoring updates",
    ],
}

SEPARATOR = "=" * 60


class TextReporter:
    def __init__(self, color: bool = True):
        self.color = color

    def _paint(self, text: str, severity: Severity) -> str:
        if not self.color:
            return text
        return f"{_COLORS[severity]}{text}{Style.RESET_ALL}"

    def format_assessment(self, a: PackageAssessment) -> str:
        level = a.risk_level
        lines = [
            "",
            self._paint(f"{_EMOJIS[level]} ANALYSIS REPORT: {a.package_name}", level),
            f"📊 Risk level: {self._paint(level.value, level)} (Score: {a.risk_score}/{a.max_risk_score})",
            f"🎯 Confidence: {a.confidence * 100:.1f}%",
            f"🚨 Suspicious: {'YES' if a.suspicious else 'NO'}",
            f"📋 Findings: {len(a.findings)}",
        ]
        if a.error:
            lines.append(f"❌ Error: {a.error}")

        if a.findings:
            lines.append("")
            lines.append("📝 FINDING DETAILS:")
            for severity, group in self._group(a.findings).items():
                lines.append("")
                lines.append(self._paint(f"{_EMOJIS[severity]} {severity.value} ({len(group)}):", severity))
                for f in group:
                    lines.extend(self._finding_lines(f))
                    lines.append("")

        lines.append("")
        lines.append("💡 RECOMMENDATIONS:")
        lines.extend(f"  {r}" for r in _RECOMMENDATIONS[level])
        return "\n".join(lines)

    @staticmethod
    def _group(findings: List[Finding]) -> Dict[Severity, List[Finding]]:
        grouped: Dict[Severity, List[Finding]] = {}
        for f in sorted(findings, key=lambda f: f.severity.rank, reverse=True):
            grouped.setdefault(f.severity, []).append(f)
        return grouped

    @staticmethod
    def _finding_lines(f: Finding) -> List[str]:
        d = f.detail
        lines = [f"  📁 {f.file}", f"  🔍 Type: {f.type} (+{f.risk_contribution})"]
        if "signature" in d:
            lines.append(f"  🦠 Signature: {d['signature']}")
        if "pattern" in d:
            lines.append(f"  🎯 Pattern: {d['pattern'][:50]}...")
            lines.append(f"  📊 Matches: {d['matches']}")
            for sample in d.get("samples", []):
                lines.append(f"     ↳ {sample[:80]}")
        if "entropy" in d:
            lines.append(f"  📈 Entropy: {d['entropy']:.2f} (length {d['length']})")
        if "script" in d:
            lines.append(f"  📜 Script: {d['script']}")
            lines.append(f"  💾 Command: {d['content']}")
        if "dependency" in d:
            lines.append(f"  📦 Dependency: {d['dependency']}")
            if d.get("typosquat_of"):
                lines.append(f"  🪞 Imitates: {d['typosquat_of']}")
        if "error" in d:
            lines.append(f"  ❌ Parse error: {d['error']}")
        return lines

    def format(self, assessments: List[PackageAssessment]) -> str:
        blocks = [self.format_assessment(a) for a in assessments]
        if len(assessments) > 1:
            blocks.append(self.summary(assessments))
        return ("\n\n" + SEPARATOR + "\n").join(blocks)

    def summary(self, assessments: List[PackageAssessment]) -> str:
        total = len(assessments)
        critical = sum(1 for a in assessments if a.risk_level is Severity.CRITICAL)
        high = sum(1 for a in assessments if a.risk_level is Severity.HIGH)
        suspicious = sum(1 for a in assessments if a.suspicious)
        return "\n".join([
            "",
            "📊 FINAL SUMMARY:",
            f"   📦 Total analyzed: {total}",
            f"   🚨 Critical: {critical}",
            f"   ⚠️  High risk: {high}",
            f"   🔍 Suspicious: {suspicious}",
            f"   ✅ Clean: {total - suspicious}",
        ])
