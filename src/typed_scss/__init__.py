"""Generate TypeScript declarations for CSS modules written in Sass."""

__version__ = "0.1.0"

from .config import TypingsConfig, load_sass_config
from .creator import DtsContent, DtsCreator
from .renderer import RenderError, SassRenderer
from .runner import run_typings
from .cli import app

__all__ = [
    "DtsContent",
    "DtsCreator",
    "RenderError",
    "SassRenderer",
    "TypingsConfig",
    "load_sass_config",
    "run_typings",
    "app",
]
