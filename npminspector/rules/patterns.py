"""
Categorized regular-expression rules.

Five independent categories of suspicious source constructs:
  - obfuscation: eval of long literals, char-code arrays, escape runs, base64 blobs
  - network: raw-IP and throwaway-TLD URLs, payload downloads, XHR POSTs
  - system: child processes, writes to temp/credential dirs, secret env reads
  - crypto: wallet addresses and key/mnemonic assignments
  - rootkit: beaconing timers, clipboard/keyboard hooks, form observers

Each (category, regex) pair with at least one match yields one finding whose
score is the category weight times the match count, capped at
PATTERN_MATCH_CAP so a single noisy rule cannot dominate a package score.

The tables below are data: adding a rule or a category needs no change to
PatternCategoryRule, but every category must have a CategoryPolicy.
"""

import re
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Pattern, Tuple

from npminspector.rules import Rule
from npminspector.utils.metadata import Finding, FindingKind, PatternCategory, Severity
from npminspector.utils.settings import PATTERN_MATCH_CAP, PATTERN_SAMPLE_LIMIT


class CategoryPolicy(NamedTuple):
    weight: int
    severity: Severity


CATEGORY_POLICIES: Mapping[PatternCategory, CategoryPolicy] = MappingProxyType({
    PatternCategory.OBFUSCATION: CategoryPolicy(3, Severity.MEDIUM),
    PatternCategory.NETWORK: CategoryPolicy(2, Severity.HIGH),
    PatternCategory.SYSTEM: CategoryPolicy(4, Severity.CRITICAL),
    PatternCategory.CRYPTO: CategoryPolicy(2, Severity.HIGH),
    PatternCategory.ROOTKIT: CategoryPolicy(5, Severity.CRITICAL),
})

PATTERN_RULES: Mapping[PatternCategory, Tuple[Pattern, ...]] = MappingProxyType({
    PatternCategory.OBFUSCATION: (
        re.compile(r"\b(eval|Function|setTimeout|setInterval)\s*\(\s*['\"`][^'\"`]{50,}['\"`]\s*\)"),
        re.compile(r"String\.fromCharCode\(\s*\d+(?:\s*,\s*\d+){10,}\s*\)"),
        re.compile(r"\\x[0-9a-fA-F]{2}(?:\\x[0-9a-fA-F]{2}){20,}"),
        re.compile(r"btoa\s*\(\s*['\"`][A-Za-z0-9+/]{50,}['\"`]\s*\)"),
        re.compile(r"atob\s*\(\s*['\"`][A-Za-z0-9+/]{50,}['\"`]\s*\)"),
    ),
    PatternCategory.NETWORK: (
        re.compile(r"https?://(?:[0-9]{1,3}\.){3}[0-9]{1,3}(?::[0-9]+)?"),
        re.compile(r"https?://[a-zA-Z0-9-]+\.(?:tk|ml|cf|ga|onion|bit)"),
        re.compile(r"fetch\s*\(\s*['\"`]https?://[^'\"`]+/[^'\"`]*(?:download|payload|exec)"),
        re.compile(r"new\s+XMLHttpRequest\s*\(\s*\)[^;]*\.open\s*\(\s*['\"`]POST['\"`]"),
    ),
    PatternCategory.SYSTEM: (
        re.compile(r"require\s*\(\s*['\"`]child_process['\"`]\s*\)[^;]*\.(?:exec|spawn|fork)"),
        re.compile(
            r"fs\.(?:writeFileSync?|createWriteStream|appendFileSync?)\s*\([^)]*"
            r"(?:/tmp/|/var/tmp/|\.ssh/|\.aws/)"
        ),
        re.compile(
            r"process\.env\s*\[\s*['\"`]"
            r"(?:AWS_|GITHUB_|SSH_|API_|TOKEN_|KEY_|SECRET_|PASSWORD_)"
        ),
        re.compile(r"os\.(?:homedir|tmpdir|userInfo)\s*\(\s*\)[^;]*(?:\.ssh|\.aws|\.config)"),
    ),
    PatternCategory.CRYPTO: (
        re.compile(r"0x[a-fA-F0-9]{40}"),                    # Ethereum
        re.compile(r"[13][a-km-zA-HJ-NP-Z1-9]{25,34}"),       # Bitcoin
        re.compile(r"addr1[a-z0-9]{54}"),                     # Cardano
        re.compile(
            r"(?:wallet|address|private[_-]?key|seed|mnemonic)[^;]{0,50}(?:=|:)"
            r"[^;]{0,100}[a-zA-Z0-9]{20,}",
            re.IGNORECASE,
        ),
    ),
    PatternCategory.ROOTKIT: (
        re.compile(
            r"setInterval\s*\(\s*function[^}]*(?:fetch|XMLHttpRequest)[^}]*\}\s*,\s*\d{4,}\s*\)"
        ),
        re.compile(r"document\.addEventListener\s*\(\s*['\"`](?:copy|paste|keydown|keyup)['\"`]"),
        re.compile(r"new\s+MutationObserver\s*\([^)]*(?:input|password|credit|card)", re.IGNORECASE),
    ),
})


def _check_tables() -> None:
    categories = set(PatternCategory) | set(PATTERN_RULES)
    missing = sorted(c.value for c in categories if c not in CATEGORY_POLICIES)
    if missing:
        raise RuntimeError(f"Pattern categories without a scoring policy: {missing}")


_check_tables()


def pattern_risk(category: PatternCategory, match_count: int) -> int:
    return CATEGORY_POLICIES[category].weight * min(match_count, PATTERN_MATCH_CAP)


class PatternCategoryRule(Rule):
    @property
    def name(self) -> str:
        return "SuspiciousPattern"

    @property
    def description(self) -> str:
        return "Source construct typical of obfuscated, networked or persistent malware"

    @property
    def order(self) -> int:
        return 20

    def check(self, content: str, file_path: str) -> List[Finding]:
        findings: List[Finding] = []
        for category, patterns in PATTERN_RULES.items():
            policy = CATEGORY_POLICIES[category]
            for pattern in patterns:
                matches = [m.group(0) for m in pattern.finditer(content)]
                if not matches:
                    continue
                findings.append(Finding(
                    file=file_path,
                    kind=FindingKind.SUSPICIOUS_PATTERN,
                    category=category,
                    severity=policy.severity,
                    risk_contribution=pattern_risk(category, len(matches)),
                    detail={
                        "pattern": pattern.pattern,
                        "matches": len(matches),
                        "samples": matches[:PATTERN_SAMPLE_LIMIT],
                    },
                ))
        return findings
