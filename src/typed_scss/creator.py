"""TypeScript declaration generation for CSS modules."""

from __future__ import annotations

import asyncio
import hashlib
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .tokens import extract_tokens

_IDENTIFIER = re.compile(r"^[$A-Za-z_][$\w]*$")
_SEPARATORS = re.compile(r"[-_.\s]+")

RESERVED_WORDS = frozenset(
    """
    break case catch class const continue debugger default delete do else enum
    export extends false finally for function if import in instanceof new null
    return super switch this throw true try typeof var void while with
    implements interface let package private protected public static yield
    """.split()
)


def camelize(token: str) -> str:
    parts = [part for part in _SEPARATORS.split(token) if part]
    if not parts:
        return token
    head, *rest = parts
    return head[0].lower() + head[1:] + "".join(part[0].upper() + part[1:] for part in rest)


def is_valid_name(token: str) -> bool:
    return bool(_IDENTIFIER.match(token)) and token not in RESERVED_WORDS


@dataclass
class DtsContent:
    input_path: Path
    output_file_path: Path
    tokens: List[str]
    message_list: List[str] = field(default_factory=list)

    @property
    def formatted(self) -> str:
        if not self.tokens:
            return ""
        lines = [f"export const {token}: string;" for token in self.tokens]
        return "\n".join(lines) + "\n"

    def _write(self) -> None:
        self.output_file_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_file_path.write_text(self.formatted, encoding="utf-8")

    async def write_file(self) -> "DtsContent":
        await asyncio.to_thread(self._write)
        return self


class DtsCreator:
    """Builds ``.d.ts`` companions for rendered stylesheets.

    Output files mirror the input layout: a path relative to
    ``root_dir/search_dir`` is re-rooted under ``root_dir/out_dir`` (or the
    search dir itself when no ``out_dir`` is set).
    """

    def __init__(
        self,
        root_dir: str | Path,
        search_dir: str | Path = ".",
        out_dir: Optional[str | Path] = None,
        camel_case: bool = False,
        drop_extension: bool = False,
    ):
        self.root_dir = Path(root_dir).resolve()
        self.input_directory = (self.root_dir / search_dir).resolve()
        self.output_directory = (self.root_dir / (out_dir or search_dir)).resolve()
        self.camel_case = camel_case
        self.drop_extension = drop_extension
        self._cache: Dict[str, Tuple[str, List[str]]] = {}

    def output_path_for(self, path: str | Path) -> Path:
        relative = Path(os.path.relpath(Path(path).resolve(), self.input_directory))
        if self.drop_extension:
            relative = relative.with_suffix("")
        return self.output_directory / f"{relative}.d.ts"

    def _tokens_for(self, path: str, css: str, cache: bool) -> List[str]:
        digest = hashlib.sha1(css.encode("utf-8")).hexdigest()
        cached = self._cache.get(path)
        if cache and cached is not None and cached[0] == digest:
            return cached[1]
        tokens = extract_tokens(css)
        self._cache[path] = (digest, tokens)
        return tokens

    async def create(self, path: str | Path, css: str, cache: bool = False) -> DtsContent:
        raw_tokens = self._tokens_for(str(path), css, cache)
        if self.camel_case:
            raw_tokens = [camelize(token) for token in raw_tokens]

        tokens: List[str] = []
        messages: List[str] = []
        for token in dict.fromkeys(raw_tokens):
            if is_valid_name(token):
                tokens.append(token)
            else:
                messages.append(f'"{token}" is not valid TypeScript variable name.')

        return DtsContent(
            input_path=Path(path),
            output_file_path=self.output_path_for(path),
            tokens=tokens,
            message_list=messages,
        )
