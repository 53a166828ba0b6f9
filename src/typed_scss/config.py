"""Configuration dataclasses and sass config discovery."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging_utils import get_logger

logger = get_logger("Config")

DEFAULT_PATTERN = "**/[^_]*.scss"

RC_FILENAMES = (".sassrc", ".sassrc.yaml", ".sassrc.yml", ".sassrc.json")

# Keyword arguments accepted by sass.compile() besides the input selection.
SASS_OPTIONS = frozenset(
    {
        "output_style",
        "source_comments",
        "source_map_contents",
        "source_map_embed",
        "omit_source_map_url",
        "source_map_root",
        "include_paths",
        "precision",
        "custom_functions",
        "indented",
    }
)
_INPUT_KEYS = frozenset({"file", "filename", "data", "string", "importer", "importers"})


@dataclass(frozen=True)
class TypingsConfig:
    search_dir: str = "."
    pattern: str = DEFAULT_PATTERN
    out_dir: Optional[str] = None
    camel_case: bool = False
    drop_extension: bool = False
    watch: bool = False
    verbose: bool = False
    ignore: Optional[str] = None

    @property
    def files_pattern(self) -> str:
        # the change stream and glob both expect forward slashes
        joined = str(Path(self.search_dir) / self.pattern)
        return joined.strip().replace("\\", "/")

    @property
    def cache(self) -> bool:
        return self.watch

    def ensure_search_dir(self) -> None:
        if not Path(self.search_dir).exists():
            raise FileNotFoundError(f"Input directory {self.search_dir} doesn't exist.")


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _read_rc(path: Path) -> Any:
    if path.name == "package.json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        return payload.get("sass") if isinstance(payload, dict) else None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def find_sass_config(start: str | Path | None = None) -> Optional[Path]:
    directory = Path(start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for name in RC_FILENAMES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
        package_json = candidate_dir / "package.json"
        if package_json.is_file() and _read_rc(package_json) is not None:
            return package_json
    return None


def normalize_sass_options(raw: Dict[str, Any], source: str = "<config>") -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _snake_case(str(key))
        if name in _INPUT_KEYS:
            continue
        if name not in SASS_OPTIONS:
            logger.warning("Ignoring unsupported sass option %r in %s", key, source)
            continue
        if name == "include_paths" and isinstance(value, str):
            value = [value]
        options[name] = value
    return options


def load_sass_config(start: str | Path | None = None) -> Dict[str, Any]:
    config_path = find_sass_config(start)
    if config_path is None:
        return {}

    raw = _read_rc(config_path)
    if not isinstance(raw, dict):
        raise ValueError(f"Sass config must be a mapping: {config_path}")
    return normalize_sass_options(raw, str(config_path))
