"""
Configuration loader for npminspector.

Loads scan settings (extensions, skip_dirs, max_file_bytes, output format,
jobs) from:
  - explicit path via --config, or
  - one of: .npminspector.toml, npminspector.toml,
            .npminspector.yaml/yml, npminspector.yaml/yml,
            pyproject.toml ([tool.npminspector]),
            setup.cfg ([tool:npminspector] or [npminspector]).

Only the file walker and the CLI are configurable. Detection rules, weights
and thresholds are fixed in code.
"""

import configparser
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import toml
import yaml

from npminspector.utils.settings import DEFAULT_EXTENSIONS, DEFAULT_SKIP_DIRS

# Ordered search paths
_CONFIG_FILES = [
    ".npminspector.toml",
    "npminspector.toml",
    ".npminspector.yaml", ".npminspector.yml",
    "npminspector.yaml", "npminspector.yml",
    "pyproject.toml",
    "setup.cfg",
]

OUTPUT_FORMATS = ("text", "json", "csv", "html")


@dataclass
class Config:
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    max_file_bytes: int = 0
    output_format: str = "text"
    jobs: int = 1

    @classmethod
    def load(cls, path: str = None) -> "Config":
        cfg_path = path or cls._find_config_file(os.getcwd())
        if not cfg_path:
            return cls()
        if path and not os.path.isfile(path):
            raise FileNotFoundError(f"Config file not found: {path}")
        ext = os.path.splitext(cfg_path)[1].lower()
        if ext == ".toml":
            raw = toml.load(cfg_path)
            if os.path.basename(cfg_path) == "pyproject.toml":
                cfg = raw.get("tool", {}).get("npminspector", {})
            else:
                cfg = raw.get("tool", {}).get("npminspector", raw)
        elif ext in (".yaml", ".yml"):
            with open(cfg_path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        elif os.path.basename(cfg_path) == "setup.cfg":
            parser = configparser.ConfigParser()
            parser.read(cfg_path)
            if parser.has_section("tool:npminspector"):
                cfg = dict(parser.items("tool:npminspector"))
            elif parser.has_section("npminspector"):
                cfg = dict(parser.items("npminspector"))
            else:
                cfg = {}
        else:
            cfg = {}
        return cls._from_dict(cfg)

    @staticmethod
    def _find_config_file(start_dir: str) -> str:
        for fname in _CONFIG_FILES:
            candidate = os.path.join(start_dir, fname)
            if os.path.isfile(candidate):
                return candidate
        return ""

    @staticmethod
    def _ensure_list(val: Any) -> List[Any]:
        if val is None:
            return []
        if isinstance(val, list):
            return val
        return [v.strip() for v in str(val).split(",") if v.strip()]

    @staticmethod
    def _normalize_extension(ext: str) -> str:
        ext = ext.strip().lower()
        return ext if ext.startswith(".") else "." + ext

    @classmethod
    def _from_dict(cls, raw: Dict[str, Any]) -> "Config":
        def get(key, default=None):
            for k in raw:
                if k.lower() == key.lower():
                    return raw[k]
            return default

        defaults = cls()
        extensions = cls._ensure_list(get("extensions", get("include_extensions")))
        skip_dirs = cls._ensure_list(get("skip_dirs", get("exclude_dirs")))
        output_format = str(get("output_format", get("format", defaults.output_format))).lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output_format '{output_format}'. Choose from {list(OUTPUT_FORMATS)}"
            )

        return cls(
            extensions=[cls._normalize_extension(str(e)) for e in extensions] or defaults.extensions,
            skip_dirs=[str(d) for d in skip_dirs] or defaults.skip_dirs,
            max_file_bytes=max(int(get("max_file_bytes", defaults.max_file_bytes)), 0),
            output_format=output_format,
            jobs=max(int(get("jobs", defaults.jobs)), 1),
        )
