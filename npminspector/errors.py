# npminspector/errors.py

"""
Exception taxonomy for npminspector.

None of these escape the engine: ManifestParseError becomes a
malformed-manifest finding, FileReadError skips the file, and PathNotFound
is recorded on the package assessment's `error` field.
"""


class InspectorError(Exception):
    """Base class for npminspector errors."""


class ManifestParseError(InspectorError):
    """The package manifest is not a well-formed JSON object."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileReadError(InspectorError):
    """A file could not be read as text (missing, unreadable, binary, too big)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PathNotFound(InspectorError):
    """The scan target does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Path not found: {path}")
        self.path = path
