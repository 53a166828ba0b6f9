"""Sass rendering on top of libsass."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import sass

ROOT = "/"
_EXTENSIONS = (".scss", ".css")


class RenderError(RuntimeError):
    def __init__(self, path: str, detail: str):
        super().__init__(detail)
        self.path = path
        self.detail = detail


def _candidates(target: Path) -> List[Path]:
    names = [target]
    if target.suffix not in _EXTENSIONS:
        names.extend(target.with_name(target.name + ext) for ext in _EXTENSIONS)
    partials = [name.with_name("_" + name.name) for name in names]
    index_files = [target / f"{prefix}index{ext}" for prefix in ("", "_") for ext in _EXTENSIONS]
    return names + partials + index_files


def _node_modules_dirs(start: Path):
    for directory in (start, *start.parents):
        modules = directory / "node_modules"
        if modules.is_dir():
            yield modules


def tilde_importer(path: str, prev: str = "stdin") -> Optional[List[Tuple[str, str]]]:
    """Resolve ``~package/file`` imports against the nearest node_modules."""
    if not path.startswith("~"):
        return None

    prev_path = Path(prev)
    start = prev_path.parent if prev_path.is_file() else Path.cwd()
    for modules in _node_modules_dirs(start.resolve()):
        for candidate in _candidates(modules / path[1:]):
            if candidate.is_file():
                return [(str(candidate), candidate.read_text(encoding="utf-8"))]
    return None


class SassRenderer:
    def __init__(self, sass_options: Optional[Dict[str, Any]] = None):
        self.sass_options = dict(sass_options or {})

    def _compile(self, path: str) -> str:
        return sass.compile(
            filename=path,
            importers=[(0, tilde_importer)],
            **self.sass_options,
        )

    async def render(self, path: str, relative_to: Optional[str] = None) -> str:
        """Compile ``path`` to CSS.

        Compile errors propagate as :class:`RenderError` unless a non-root
        ``relative_to`` is given, in which case the file renders as empty
        content. Partials that cannot compile standalone rely on this.
        """
        try:
            return await asyncio.to_thread(self._compile, path)
        except sass.CompileError as exc:
            if relative_to and relative_to != ROOT:
                return ""
            raise RenderError(path, str(exc)) from exc
