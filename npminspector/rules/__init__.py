# npminspector/rules/__init__.py

"""
Base class for detection rules.

Every module in this package may define Rule subclasses; the Analyzer
discovers and instantiates them, then runs them in ascending `order` on
every file offered to the engine.
"""

from abc import ABC, abstractmethod
from typing import List

from npminspector.utils.metadata import Finding


class Rule(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Unique rule identifier."""

    @property
    def description(self) -> str:
        return ""

    @property
    def order(self) -> int:
        """Position in the per-file pipeline; lower runs first."""
        return 100

    def applies_to(self, file_path: str) -> bool:
        return True

    @abstractmethod
    def check(self, content: str, file_path: str) -> List[Finding]:
        """
        Inspect the text of one file and return zero or more findings.
        Must not touch the filesystem.
        """
