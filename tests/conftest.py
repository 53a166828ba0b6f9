import logging
from typing import List, Optional

import pytest

from typed_scss.logging_utils import get_logger


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: Optional[int] = None) -> List[str]:
        return [
            record.getMessage()
            for record in self.records
            if level is None or record.levelno == level
        ]


@pytest.fixture
def log_messages():
    """Collect records from the non-propagating rich loggers."""
    handler = _ListHandler()
    loggers = [get_logger(name) for name in ("Typings", "Runner", "ChangeStream", "Config")]
    for logger in loggers:
        logger.addHandler(handler)
    yield handler
    for logger in loggers:
        logger.removeHandler(handler)
