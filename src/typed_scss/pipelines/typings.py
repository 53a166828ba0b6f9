"""Single-file typing pipeline: render, generate, write, report."""

from __future__ import annotations

from typing import Callable, Optional

from rich.markup import escape

from ..creator import DtsContent, DtsCreator
from ..logging_utils import colored, get_logger
from ..renderer import SassRenderer

logger = get_logger("Typings")

MessageHandler = Callable[[str], None]


def format_error(path: str, reason: object) -> str:
    return f"{colored(f'ERROR: {path}', 'red')}\n{escape(str(reason))}"


def format_warning(path: str, message: str) -> str:
    return f"{colored(f'WARNING: {path}', 'yellow')}\n{escape(message)}"


async def create_typings(
    path: str,
    renderer: SassRenderer,
    creator: DtsCreator,
    cache: bool,
    on_error: MessageHandler,
    on_warning: MessageHandler,
    verbose: bool = False,
) -> Optional[DtsContent]:
    """Write the declaration file for ``path``.

    Any failure is reported once through ``on_error`` and swallowed so that
    callers fanning out over many files never see an exception.
    """
    try:
        css = await renderer.render(path)
        content = await creator.create(path, css, cache)
        content = await content.write_file()

        if verbose:
            logger.info("Created %s", colored(content.output_file_path, "green"))
        for message in content.message_list:
            on_warning(format_warning(path, message))
        return content
    except Exception as exc:
        on_error(format_error(path, exc))
        return None
