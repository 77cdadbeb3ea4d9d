# npminspector/analyzer.py

"""
Core Analyzer: dynamically loads all Rule subclasses from npminspector.rules,
runs them over each file of a package, and aggregates the findings into a
PackageAssessment.

Per file the pipeline is: signatures -> patterns -> entropy -> manifest
(manifest only for package.json). `analyze_file` is pure; only
`analyze_package` touches the filesystem, through the loader.
"""

import importlib
import os
import pkgutil
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from npminspector.config import Config
from npminspector.loader import iter_package_files, package_name
from npminspector.rules import Rule
from npminspector.scoring import RiskSummary
from npminspector.scoring import aggregate as _aggregate
from npminspector.utils.logger import get_logger
from npminspector.utils.metadata import Finding, PackageAssessment

LOG = get_logger(__name__)


def load_rules() -> List[Rule]:
    """
    Recursively walk the npminspector.rules package, import every module,
    and instantiate any concrete subclass of Rule, sorted by `order`.
    """
    rules: List[Rule] = []
    rules_pkg = "npminspector.rules"
    rules_path = os.path.join(os.path.dirname(__file__), "rules")

    for _, full_name, is_pkg in pkgutil.walk_packages([rules_path], prefix=rules_pkg + "."):
        if is_pkg:
            continue
        LOG.debug("Importing rules module: %s", full_name)
        module = importlib.import_module(full_name)
        for obj in vars(module).values():
            if (
                isinstance(obj, type)
                and issubclass(obj, Rule)
                and obj is not Rule
                and obj.__module__ == module.__name__
                and not getattr(obj, "__abstractmethods__", None)
            ):
                rules.append(obj())

    rules.sort(key=lambda r: (r.order, r.name))
    for rule in rules:
        LOG.debug("Loaded rule %s (order %d): %s", rule.name, rule.order, rule.description)
    return rules


class Analyzer:
    def __init__(self, config: Config = None, rules: Optional[List[Rule]] = None):
        """
        :param config: npminspector Config (walker settings, jobs)
        :param rules: Explicit rule list; defaults to every rule in npminspector.rules
        """
        self.config = config or Config()
        self.rules: List[Rule] = rules if rules is not None else load_rules()

    def analyze_file(self, file_path: str, content: str) -> List[Finding]:
        """
        Run every applicable rule against the text of one file.
        """
        findings: List[Finding] = []
        for rule in self.rules:
            if not rule.applies_to(file_path):
                continue
            rule_findings = rule.check(content, file_path)
            if rule_findings:
                LOG.debug("Rule '%s' reported %d finding(s) in %s", rule.name, len(rule_findings), file_path)
            findings.extend(rule_findings)
        return findings

    def analyze_package(self, package_path: str) -> PackageAssessment:
        """
        Scan every file of one package. A missing path yields an assessment
        with `error` set and no findings.
        """
        assessment = PackageAssessment(package_name=package_name(package_path), path=package_path)
        if not os.path.exists(package_path):
            LOG.warning("Path not found: %s", package_path)
            assessment.error = f"Path not found: {package_path}"
            return assessment.finalize()

        LOG.info("Analyzing package %s", assessment.package_name)
        skipped = []
        for file_path, content in iter_package_files(package_path, self.config, skipped):
            assessment.files_scanned += 1
            assessment.extend(self.analyze_file(file_path, content))
        assessment.files_skipped = len(skipped)
        assessment.finalize()
        LOG.info(
            "Package %s: %s (score %d, %d finding(s))",
            assessment.package_name, assessment.risk_level.value,
            assessment.risk_score, len(assessment.findings),
        )
        return assessment

    def analyze_packages(self, package_paths: Iterable[str], jobs: int = None) -> List[PackageAssessment]:
        """
        Scan several packages, optionally on `jobs` worker threads. Each
        package gets its own assessment; results keep the input order.
        """
        paths = list(package_paths)
        jobs = jobs or self.config.jobs
        if jobs <= 1 or len(paths) <= 1:
            return [self.analyze_package(p) for p in paths]
        LOG.info("Analyzing %d packages with %d workers", len(paths), jobs)
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            return list(executor.map(self.analyze_package, paths))


_default_analyzer: Optional[Analyzer] = None


def _get_default_analyzer() -> Analyzer:
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = Analyzer()
    return _default_analyzer


def analyze_file(file_path: str, content: str) -> List[Finding]:
    """
    Return all findings for one file's text. Pure: no disk access.
    """
    return _get_default_analyzer().analyze_file(file_path, content)


def aggregate(findings: Iterable[Finding]) -> RiskSummary:
    """
    Derive (risk_score, risk_level, confidence) from collected findings.
    """
    return _aggregate(findings)
