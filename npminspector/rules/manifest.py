"""
package.json heuristics.

Only runs on the package manifest. Checks, in order:
  1. The manifest parses as a JSON object; otherwise a single
     malformed-manifest finding is emitted and nothing else is checked.
  2. Scripts whose command contains a denylisted shell fragment
     (downloaders, destructive commands, encoders, interpreter one-liners,
     silenced output followed by cleanup). One finding per script name.
  3. Dependencies from every group that are known typosquats of popular
     packages or that resolve to a local path, a VCS URL or plain HTTP.
"""

import json
import os
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from npminspector.errors import ManifestParseError
from npminspector.rules import Rule
from npminspector.utils.logger import get_logger
from npminspector.utils.metadata import Finding, FindingKind
from npminspector.utils.settings import (
    DEPENDENCY_RISK,
    DEPENDENCY_SEVERITY,
    MALFORMED_MANIFEST_RISK,
    MALFORMED_MANIFEST_SEVERITY,
    MANIFEST_NAME,
    SCRIPT_RISK,
    SCRIPT_SEVERITY,
)

LOG = get_logger(__name__)

SUSPICIOUS_COMMANDS: Tuple[str, ...] = (
    "curl", "wget", "rm -rf", "dd if=", "chmod +x",
    "base64", "python -c", "perl -e", "ruby -e",
    "> /dev/null", "&& rm", "|| rm",
)

# Hooks npm runs on its own during install/publish
LIFECYCLE_SCRIPTS = frozenset({
    "preinstall", "install", "postinstall", "prepare",
    "prepublish", "prepublishOnly", "postpublish",
})

TYPOSQUATS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "lodash": ("lodahs", "lodas", "loda sh"),
    "express": ("expres", "expresss", "expres s"),
    "react": ("reactt", "reac t", "raect"),
    "jquery": ("jquerry", "jqeury", "jqurey"),
})

_TYPOSQUAT_TARGETS: Mapping[str, str] = MappingProxyType({
    fake: real for real, fakes in TYPOSQUATS.items() for fake in fakes
})

# Merge order: later groups win on name clashes
DEPENDENCY_GROUPS: Tuple[str, ...] = (
    "dependencies", "devDependencies", "peerDependencies", "optionalDependencies",
)

UNSAFE_VERSION_MARKERS: Tuple[str, ...] = ("file:", "git+", "http://")


def parse_manifest(content: str, file_path: str) -> Dict[str, Any]:
    try:
        data = json.loads(content)
    except ValueError as e:
        raise ManifestParseError(file_path, str(e)) from e
    if not isinstance(data, dict):
        raise ManifestParseError(file_path, f"top level is {type(data).__name__}, not an object")
    return data


def is_suspicious_script(command: str) -> bool:
    lowered = command.lower()
    return any(cmd in lowered for cmd in SUSPICIOUS_COMMANDS)


def typosquat_target(name: str) -> str:
    """
    Return the popular package `name` imitates, or "" if it is not a known typosquat.
    """
    return _TYPOSQUAT_TARGETS.get(name.lower(), "")


def is_suspicious_dependency(name: str, version: Any) -> bool:
    if typosquat_target(name):
        return True
    # Version markers only apply to string specifiers
    if not isinstance(version, str):
        return False
    return any(marker in version for marker in UNSAFE_VERSION_MARKERS)


def merge_dependencies(manifest: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for group in DEPENDENCY_GROUPS:
        deps = manifest.get(group)
        if not isinstance(deps, dict):
            continue
        merged.update(deps)
    return merged


class ManifestRule(Rule):
    @property
    def name(self) -> str:
        return "ManifestHeuristics"

    @property
    def description(self) -> str:
        return "Suspicious install scripts or dependency declarations in package.json"

    @property
    def order(self) -> int:
        return 40

    def applies_to(self, file_path: str) -> bool:
        return os.path.basename(file_path) == MANIFEST_NAME

    def check(self, content: str, file_path: str) -> List[Finding]:
        try:
            manifest = parse_manifest(content, file_path)
        except ManifestParseError as e:
            LOG.debug("Malformed manifest %s", e)
            return [Finding(
                file=file_path,
                kind=FindingKind.MALFORMED_MANIFEST,
                severity=MALFORMED_MANIFEST_SEVERITY,
                risk_contribution=MALFORMED_MANIFEST_RISK,
                detail={"error": e.reason},
            )]

        findings = self._check_scripts(manifest, file_path)
        findings.extend(self._check_dependencies(manifest, file_path))
        return findings

    def _check_scripts(self, manifest: Dict[str, Any], file_path: str) -> List[Finding]:
        scripts = manifest.get("scripts")
        if not isinstance(scripts, dict):
            return []
        findings: List[Finding] = []
        for script_name, command in scripts.items():
            if not isinstance(command, str) or not is_suspicious_script(command):
                continue
            findings.append(Finding(
                file=file_path,
                kind=FindingKind.SUSPICIOUS_SCRIPT,
                severity=SCRIPT_SEVERITY,
                risk_contribution=SCRIPT_RISK,
                detail={
                    "script": script_name,
                    "content": command,
                    "lifecycle": script_name in LIFECYCLE_SCRIPTS,
                },
            ))
        return findings

    def _check_dependencies(self, manifest: Dict[str, Any], file_path: str) -> List[Finding]:
        findings: List[Finding] = []
        for dep_name, dep_version in merge_dependencies(manifest).items():
            if not is_suspicious_dependency(dep_name, dep_version):
                continue
            detail = {"dependency": f"{dep_name}@{dep_version}"}
            imitates = typosquat_target(dep_name)
            if imitates:
                detail["typosquat_of"] = imitates
            findings.append(Finding(
                file=file_path,
                kind=FindingKind.SUSPICIOUS_DEPENDENCY,
                severity=DEPENDENCY_SEVERITY,
                risk_contribution=DEPENDENCY_RISK,
                detail=detail,
            ))
        return findings
