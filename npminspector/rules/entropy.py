"""
Shannon-entropy analysis of long string literals.

Long quoted literals whose character distribution is close to random are a
common carrier for base64/hex payloads and packed code. A literal is any run
of at least ENTROPY_MIN_LENGTH non-quote characters between two quote
characters (', " or `); the entropy is measured over the literal including
its delimiters.
"""

import math
import re
from collections import Counter
from typing import List

from npminspector.rules import Rule
from npminspector.utils.metadata import Finding, FindingKind, Severity
from npminspector.utils.settings import (
    ENTROPY_HIGH_RISK,
    ENTROPY_HIGH_THRESHOLD,
    ENTROPY_MIN_LENGTH,
    ENTROPY_RISK,
    ENTROPY_THRESHOLD,
)

LONG_STRING_RE = re.compile(r"['\"`][^'\"`]{%d,}['\"`]" % ENTROPY_MIN_LENGTH)


def shannon_entropy(text: str) -> float:
    """
    Return H = -sum(p(c) * log2(p(c))) over the characters of `text`.
    Empty input has entropy 0.
    """
    if not text:
        return 0.0
    length = len(text)
    entropy = 0.0
    for count in Counter(text).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


class HighEntropyStringRule(Rule):
    @property
    def name(self) -> str:
        return "HighEntropyString"

    @property
    def description(self) -> str:
        return "Long string literal with near-random character distribution"

    @property
    def order(self) -> int:
        return 30

    def check(self, content: str, file_path: str) -> List[Finding]:
        findings: List[Finding] = []
        for literal in LONG_STRING_RE.findall(content):
            entropy = shannon_entropy(literal)
            if entropy <= ENTROPY_THRESHOLD:
                continue
            high = entropy > ENTROPY_HIGH_THRESHOLD
            findings.append(Finding(
                file=file_path,
                kind=FindingKind.HIGH_ENTROPY_STRING,
                severity=Severity.HIGH if high else Severity.MEDIUM,
                risk_contribution=ENTROPY_HIGH_RISK if high else ENTROPY_RISK,
                detail={"entropy": round(entropy, 2), "length": len(literal)},
            ))
        return findings
