"""Handlers attached to the change stream in watch mode."""

from __future__ import annotations

from pathlib import Path
from typing import Awaitable, Callable

from rich.markup import escape

from ..creator import DtsCreator
from ..logging_utils import colored, get_logger
from ..renderer import SassRenderer
from .base import OutcomeCounters
from .typings import create_typings

logger = get_logger("Typings")


def create_typings_for_file_on_watch(
    renderer: SassRenderer,
    creator: DtsCreator,
    cache: bool,
    verbose: bool = False,
) -> Callable[[str], Awaitable[OutcomeCounters]]:
    async def handle(path: str) -> OutcomeCounters:
        # each event is accounted on its own
        counters = OutcomeCounters()
        await create_typings(
            path, renderer, creator, cache, counters.on_error, counters.on_warning, verbose
        )
        if counters.has_issues:
            logger.info(
                "%s: %s warnings, %s errors", escape(path), counters.warnings, counters.errors
            )
        return counters

    return handle


def remove_typings_on_unlink(
    creator: DtsCreator, verbose: bool = False
) -> Callable[[str], Awaitable[bool]]:
    """Delete the declaration file left behind by a removed stylesheet."""

    async def handle(path: str) -> bool:
        output: Path = creator.output_path_for(path)
        try:
            output.unlink()
        except FileNotFoundError:
            return False
        if verbose:
            logger.info("Removed %s", colored(output, "green"))
        return True

    return handle
