"""One-shot typing over a fixed list of files."""

from __future__ import annotations

import asyncio
from typing import Iterable

from ..creator import DtsCreator
from ..logging_utils import get_logger
from ..renderer import SassRenderer
from .base import OutcomeCounters
from .typings import create_typings

logger = get_logger("Typings")


async def create_typings_for_files(
    paths: Iterable[str],
    renderer: SassRenderer,
    creator: DtsCreator,
    cache: bool,
    verbose: bool = False,
) -> OutcomeCounters:
    counters = OutcomeCounters()
    await asyncio.gather(
        *(
            create_typings(
                path, renderer, creator, cache, counters.on_error, counters.on_warning, verbose
            )
            for path in paths
        )
    )
    if counters.has_issues:
        logger.info(
            "Completed with %s warnings and %s errors.", counters.warnings, counters.errors
        )
    return counters
