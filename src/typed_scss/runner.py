"""Mode selection: one-shot batch or long-running watch."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

from rich.markup import escape

from .config import TypingsConfig
from .creator import DtsCreator
from .discovery import ChangeStream, DiscoveryError, expand
from .logging_utils import get_logger
from .pipelines.base import OutcomeCounters
from .pipelines.batch import create_typings_for_files
from .pipelines.watch import create_typings_for_file_on_watch, remove_typings_on_unlink
from .renderer import SassRenderer

logger = get_logger("Runner")


def build_creator(config: TypingsConfig, root_dir: Optional[Path] = None) -> DtsCreator:
    return DtsCreator(
        root_dir=root_dir or Path.cwd(),
        search_dir=config.search_dir,
        out_dir=config.out_dir,
        camel_case=config.camel_case,
        drop_extension=config.drop_extension,
    )


async def run_batch(
    config: TypingsConfig, renderer: SassRenderer, creator: DtsCreator
) -> Optional[OutcomeCounters]:
    try:
        paths = expand(config.files_pattern, config.ignore)
    except DiscoveryError as exc:
        logger.error(escape(str(exc)))
        return None
    if not paths:
        logger.info("Creating typings for 0 files")
        return None

    logger.info("Creating typings for %s files", len(paths))
    return await create_typings_for_files(
        paths, renderer, creator, config.cache, config.verbose
    )


async def run_watch(
    config: TypingsConfig,
    renderer: SassRenderer,
    creator: DtsCreator,
    stop: Optional[asyncio.Event] = None,
    interval: float = 0.25,
) -> None:
    logger.info("Watching %s ...", escape(config.files_pattern))
    stream = ChangeStream(config.files_pattern, config.ignore, interval=interval)
    handler = create_typings_for_file_on_watch(
        renderer, creator, config.cache, config.verbose
    )
    stream.on("add", handler)
    stream.on("change", handler)
    stream.on("unlink", remove_typings_on_unlink(creator, config.verbose))
    await stream.run(stop)


async def run_typings(
    config: TypingsConfig,
    sass_options: Optional[Dict[str, Any]] = None,
    stop: Optional[asyncio.Event] = None,
) -> Optional[OutcomeCounters]:
    """Generate typings once, or keep them up to date when ``config.watch`` is set.

    In watch mode this only returns once ``stop`` is set.
    """
    renderer = SassRenderer(sass_options)
    creator = build_creator(config)
    if not config.watch:
        return await run_batch(config, renderer, creator)
    await run_watch(config, renderer, creator, stop)
    return None
