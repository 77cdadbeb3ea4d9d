# npminspector/loader.py

"""
Helpers for discovering packages and the files inside them.

`discover_packages` turns a scan target into package directories and
`iter_package_files` walks one package, yielding (path, content) pairs for
the engine. Files that cannot be read as text are skipped, never raised.
"""

import os
from typing import Iterator, List, Optional, Tuple

from npminspector.config import Config
from npminspector.errors import FileReadError, PathNotFound
from npminspector.utils.file_utils import (
    display_path,
    is_scannable_file,
    read_text_file,
    should_descend,
)
from npminspector.utils.logger import get_logger
from npminspector.utils.settings import DEPENDENCY_DIR, MANIFEST_NAME

LOG = get_logger(__name__)


def is_dependency_dir(target: str) -> bool:
    """
    True if `target` is a dependency-install directory holding many packages.
    """
    return os.path.basename(os.path.normpath(target)) == DEPENDENCY_DIR


def discover_packages(target: str) -> List[str]:
    """
    Return the package directories to scan for `target`.

    For a node_modules directory, every non-hidden subdirectory is a package;
    `@scope` directories are expanded into their scoped packages. Any other
    target is treated as a single package.

    :raises PathNotFound: if `target` does not exist
    """
    if not os.path.exists(target):
        raise PathNotFound(target)
    if not (os.path.isdir(target) and is_dependency_dir(target)):
        return [target]

    packages: List[str] = []
    for entry in sorted(os.listdir(target)):
        full = os.path.join(target, entry)
        if entry.startswith(".") or not os.path.isdir(full):
            continue
        if entry.startswith("@"):
            for scoped in sorted(os.listdir(full)):
                scoped_path = os.path.join(full, scoped)
                if not scoped.startswith(".") and os.path.isdir(scoped_path):
                    packages.append(scoped_path)
        else:
            packages.append(full)
    LOG.debug("Discovered %d package(s) under %s", len(packages), target)
    return packages


def package_name(package_path: str) -> str:
    """
    Display name for a package directory; scoped packages keep their scope.
    """
    norm = os.path.normpath(package_path)
    name = os.path.basename(norm)
    scope = os.path.basename(os.path.dirname(norm))
    if scope.startswith("@"):
        return f"{scope}/{name}"
    return name


def iter_package_files(
    package_path: str,
    config: Optional[Config] = None,
    skipped: Optional[List[Tuple[str, str]]] = None,
) -> Iterator[Tuple[str, str]]:
    """
    Yield (display_path, content) for every scannable file under `package_path`.

    Hidden directories and `config.skip_dirs` are not descended into.
    Unreadable, binary or oversized files are logged and, when `skipped`
    is given, recorded there as (path, reason).

    :param package_path: Package directory, or a single file
    :param config: Config specifying extensions, skip_dirs, max_file_bytes
    :param skipped: Optional list collecting skipped files
    """
    config = config or Config()
    extensions = {e.lower() for e in config.extensions}

    if os.path.isfile(package_path):
        candidates = [package_path]
    else:
        candidates = _walk(package_path, config, extensions)

    for path in candidates:
        try:
            content = read_text_file(path, max_bytes=config.max_file_bytes)
        except FileReadError as e:
            LOG.debug("Skipping %s", e)
            if skipped is not None:
                skipped.append((e.path, e.reason))
            continue
        yield display_path(path), content


def _walk(root: str, config: Config, extensions) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk never enters skipped directories
        dirnames[:] = sorted(d for d in dirnames if should_descend(d, config.skip_dirs))
        for fname in sorted(filenames):
            if is_scannable_file(fname, extensions, MANIFEST_NAME):
                yield os.path.join(dirpath, fname)
