"""Shared pipeline models."""

from __future__ import annotations

from dataclasses import dataclass

from ..logging_utils import get_logger

logger = get_logger("Typings")


@dataclass
class OutcomeCounters:
    warnings: int = 0
    errors: int = 0

    def on_error(self, message: str) -> None:
        logger.error(message)
        self.errors += 1

    def on_warning(self, message: str) -> None:
        logger.warning(message)
        self.warnings += 1

    @property
    def total(self) -> int:
        return self.warnings + self.errors

    @property
    def has_issues(self) -> bool:
        return self.total > 0
