# npminspector/utils/file_utils.py

"""
Utility functions for file operations in npminspector.

Provides helpers for:
  - Reading scanned files as text, rejecting binaries
  - Writing report files with proper encoding
  - Ensuring directories exist before writing
  - Deciding whether a file or directory takes part in a scan
"""

import os
from typing import Iterable

from npminspector.errors import FileReadError


def read_text_file(path: str, encoding: str = "utf-8", max_bytes: int = 0) -> str:
    """
    Read and return the entire contents of a text file.

    Raises FileReadError if the file cannot be opened, is larger than
    `max_bytes` (when non-zero), is not valid text in `encoding`, or
    contains NUL bytes.

    :param path: Path to the text file
    :param encoding: Encoding to use (default: utf-8)
    :param max_bytes: Size limit in bytes, 0 for unlimited
    :return: File contents as a single string
    """
    try:
        if max_bytes and os.path.getsize(path) > max_bytes:
            raise FileReadError(path, f"larger than {max_bytes} bytes")
        with open(path, mode="r", encoding=encoding) as f:
            content = f.read()
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise FileReadError(path, "not valid text") from e
    if "\x00" in content:
        raise FileReadError(path, "binary content")
    return content


def write_text_file(path: str, content: str, encoding: str = "utf-8") -> None:
    """
    Write the given content to a text file, creating parent directories if needed.

    :param path: Path to the output text file
    :param content: String content to write
    :param encoding: Encoding to use (default: utf-8)
    """
    directory = os.path.dirname(path)
    if directory:
        ensure_directory(directory)
    with open(path, mode="w", encoding=encoding) as f:
        f.write(content)


def ensure_directory(path: str) -> None:
    """
    Ensure that the directory `path` exists. If it does not, create it (recursively).

    :param path: Directory path to create or verify
    """
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def is_scannable_file(filename: str, extensions: Iterable[str], manifest_name: str) -> bool:
    """
    Return True for files with a scanned extension, dotfiles, and the manifest.

    :param filename: Base name of the file
    :param extensions: Lower-case extensions including the dot (e.g. ".js")
    :param manifest_name: Manifest file name (e.g. "package.json")
    """
    ext = os.path.splitext(filename)[1].lower()
    return ext in extensions or filename == manifest_name or filename.startswith(".")


def should_descend(dirname: str, skip_dirs: Iterable[str]) -> bool:
    """
    Return False for hidden directories and for any name in `skip_dirs`.
    """
    return not dirname.startswith(".") and dirname not in skip_dirs


def display_path(path: str) -> str:
    """
    Return `path` relative to the current directory when possible.
    """
    try:
        return os.path.relpath(path)
    except ValueError:
        # Different drive on Windows
        return path
