"""File discovery and a polling change stream."""

from __future__ import annotations

import asyncio
import glob
import os
from fnmatch import fnmatch
from typing import Awaitable, Callable, Dict, List, Optional, Set, Tuple

from .logging_utils import get_logger

EVENTS = ("add", "change", "unlink")

Handler = Callable[[str], Awaitable[object]]
Snapshot = Dict[str, Tuple[int, int]]


class DiscoveryError(RuntimeError):
    pass


def _to_python_glob(pattern: str) -> str:
    # node-style negated classes ([^_]) are spelled [!_] by fnmatch
    return pattern.replace("[^", "[!")


def _globstar_variants(pattern: str) -> Set[str]:
    # fnmatch needs a "/" around "**", while globstar also matches zero directories
    variants = {pattern}
    pending = [pattern]
    while pending:
        current = pending.pop()
        start = current.find("**/")
        while start != -1:
            candidate = current[:start] + current[start + 3 :]
            if candidate not in variants:
                variants.add(candidate)
                pending.append(candidate)
            start = current.find("**/", start + 1)
    return variants


def expand(pattern: str, ignore: Optional[str] = None) -> List[str]:
    try:
        paths = glob.glob(_to_python_glob(pattern), recursive=True)
    except OSError as exc:
        raise DiscoveryError(f"Failed to expand {pattern}: {exc}") from exc
    files = [path.replace("\\", "/") for path in paths if os.path.isfile(path)]
    if ignore:
        ignore_patterns = _globstar_variants(_to_python_glob(ignore))
        files = [
            path
            for path in files
            if not any(fnmatch(path, candidate) for candidate in ignore_patterns)
        ]
    return sorted(files)


class ChangeStream:
    """Polls a glob and reports files as they appear, change or disappear."""

    def __init__(self, pattern: str, ignore: Optional[str] = None, interval: float = 0.25):
        self.pattern = pattern
        self.ignore = ignore
        self.interval = interval
        self.logger = get_logger("ChangeStream")
        self._handlers: Dict[str, List[Handler]] = {event: [] for event in EVENTS}
        self._snapshot: Optional[Snapshot] = None
        self._tasks: Set[asyncio.Task] = set()
        self._stop: Optional[asyncio.Event] = None

    def on(self, event: str, handler: Handler) -> "ChangeStream":
        if event not in self._handlers:
            raise ValueError(f"Unsupported event {event!r}; expected one of {EVENTS}")
        self._handlers[event].append(handler)
        return self

    def _scan(self) -> Snapshot:
        snapshot: Snapshot = {}
        for path in expand(self.pattern, self.ignore):
            try:
                stat = os.stat(path)
            except FileNotFoundError:
                continue
            snapshot[path] = (stat.st_mtime_ns, stat.st_size)
        return snapshot

    def poll(self) -> List[Tuple[str, str]]:
        current = self._scan()
        previous = self._snapshot or {}
        self._snapshot = current

        events: List[Tuple[str, str]] = []
        for path, signature in current.items():
            if path not in previous:
                events.append(("add", path))
            elif previous[path] != signature:
                events.append(("change", path))
        for path in previous:
            if path not in current:
                events.append(("unlink", path))
        return events

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Watch handler failed: %s", task.exception())

    def dispatch(self, event: str, path: str) -> None:
        for handler in self._handlers[event]:
            task = asyncio.ensure_future(handler(path))
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    async def run(self, stop: Optional[asyncio.Event] = None) -> None:
        self._stop = stop or asyncio.Event()
        while not self._stop.is_set():
            try:
                events = await asyncio.to_thread(self.poll)
            except DiscoveryError as exc:
                self.logger.error("%s", exc)
                events = []
            for event, path in events:
                self.dispatch(event, path)
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def close(self) -> None:
        if self._stop is not None:
            self._stop.set()
