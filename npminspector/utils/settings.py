# npminspector/utils/settings.py

"""
Default settings and constants for npminspector.

This module centralizes:
  - Scoring weights and severities for every detector
  - Risk-level thresholds and confidence weights
  - Default scan targets (extensions, skipped directories, manifest name)
  - Default output filenames and environment variable names

Detector tables live next to their rules (rules/signatures.py,
rules/patterns.py, rules/manifest.py). Nothing here is user-configurable.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

from npminspector.utils.metadata import Severity

# -----------------------------------------------------------------------------
# Per-detector scores
# -----------------------------------------------------------------------------
SIGNATURE_RISK = 10
SIGNATURE_SEVERITY = Severity.CRITICAL

# Cap on the per-rule match multiplier for pattern findings
PATTERN_MATCH_CAP = 3
PATTERN_SAMPLE_LIMIT = 3

ENTROPY_MIN_LENGTH = 50
ENTROPY_THRESHOLD = 4.5
ENTROPY_HIGH_THRESHOLD = 6.0
ENTROPY_RISK = 2
ENTROPY_HIGH_RISK = 4

SCRIPT_RISK = 5
SCRIPT_SEVERITY = Severity.HIGH
DEPENDENCY_RISK = 3
DEPENDENCY_SEVERITY = Severity.MEDIUM
MALFORMED_MANIFEST_RISK = 2
MALFORMED_MANIFEST_SEVERITY = Severity.MEDIUM

# -----------------------------------------------------------------------------
# Risk level thresholds, evaluated highest first: score >= threshold -> level
# -----------------------------------------------------------------------------
RISK_LEVEL_THRESHOLDS: Tuple[Tuple[int, Severity], ...] = (
    (20, Severity.CRITICAL),
    (10, Severity.HIGH),
    (5, Severity.MEDIUM),
)

# Confidence contribution per finding severity; LOW findings add nothing
CONFIDENCE_WEIGHTS: Mapping[Severity, float] = MappingProxyType({
    Severity.CRITICAL: 0.3,
    Severity.HIGH: 0.2,
    Severity.MEDIUM: 0.1,
    Severity.LOW: 0.0,
})

# Package levels that make the CLI exit non-zero
FAILING_LEVELS = frozenset({Severity.HIGH, Severity.CRITICAL})

# -----------------------------------------------------------------------------
# Scan targets
# -----------------------------------------------------------------------------
MANIFEST_NAME = "package.json"
DEPENDENCY_DIR = "node_modules"
DEFAULT_TARGET = "./node_modules"

DEFAULT_EXTENSIONS: List[str] = [
    ".js", ".json", ".ts", ".jsx", ".tsx", ".mjs", ".cjs",
]

# Directories never descended into (hidden directories are always skipped)
DEFAULT_SKIP_DIRS: List[str] = [
    DEPENDENCY_DIR,
]

# -----------------------------------------------------------------------------
# Default output filenames (when user omits -o)
# -----------------------------------------------------------------------------
DEFAULT_HTML_REPORT = "npminspector_report.html"

# -----------------------------------------------------------------------------
# Environment variable names for overriding behavior
# -----------------------------------------------------------------------------
ENV_LOG_LEVEL = "NPMINSPECTOR_LOG"   # e.g., set to "DEBUG", "INFO", etc.
ENV_DISABLE_COLORS = "NPMINSPECTOR_NO_COLOR"  # if set, disable terminal colors
