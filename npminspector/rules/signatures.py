"""
Known-malware signature matching.

Flags files that mention tooling or infrastructure tied to known npm
malware: cryptominers, offensive frameworks, secret-harvesting tools and
look-alike registry domains. Matching is case-insensitive substring search;
each signature yields at most one finding per file.
"""

from typing import List, Tuple

from npminspector.rules import Rule
from npminspector.utils.metadata import Finding, FindingKind
from npminspector.utils.settings import SIGNATURE_RISK, SIGNATURE_SEVERITY

MALWARE_SIGNATURES: Tuple[str, ...] = (
    # Cryptominers
    "coinhive", "cryptoloot", "coin-hive", "authedmine",
    # Trojans / offensive frameworks
    "cobalt-strike", "metasploit", "meterpreter",
    # Secret exfiltration tools
    "trufflehog", "gitleaks", "shhgit",
    # Look-alike registry domains
    "npmjs.help", "npn-js.org", "registry-npm.org",
)


class MalwareSignatureRule(Rule):
    @property
    def name(self) -> str:
        return "MalwareSignature"

    @property
    def description(self) -> str:
        return "Reference to a known malicious tool or domain"

    @property
    def order(self) -> int:
        return 10

    def check(self, content: str, file_path: str) -> List[Finding]:
        lowered = content.lower()
        return [
            Finding(
                file=file_path,
                kind=FindingKind.MALWARE_SIGNATURE,
                severity=SIGNATURE_SEVERITY,
                risk_contribution=SIGNATURE_RISK,
                detail={"signature": signature},
            )
            for signature in MALWARE_SIGNATURES
            if signature.lower() in lowered
        ]
