"""Shared test fixtures for npminspector tests."""

import json
import os
from typing import Callable, Dict, Union

import pytest

from npminspector.utils.metadata import Finding, FindingKind, PatternCategory, Severity

SAMPLES_DIR = os.path.join(os.path.dirname(__file__), "samples")


@pytest.fixture
def make_package(tmp_path) -> Callable[..., str]:
    """
    Build a package directory from {relative_path: content}. Dict content
    is written as JSON, bytes as-is, anything else as text.
    """

    def _make(files: Dict[str, Union[str, bytes, dict]], name: str = "pkg", root=None) -> str:
        base = (root or tmp_path) / name
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = base / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                target.write_text(json.dumps(content), encoding="utf-8")
            elif isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return str(base)

    return _make


@pytest.fixture
def samples_dir() -> str:
    return SAMPLES_DIR


def make_finding(severity: Severity, risk: int, kind: FindingKind = FindingKind.MALWARE_SIGNATURE) -> Finding:
    category = PatternCategory.NETWORK if kind is FindingKind.SUSPICIOUS_PATTERN else None
    return Finding(file="index.js", kind=kind, severity=severity, risk_contribution=risk, category=category)
