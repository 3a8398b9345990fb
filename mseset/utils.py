"""Shared helpers for the card set pipeline."""
from __future__ import annotations

import logging
import os
import pathlib
from typing import Optional

LOGGER_NAME = "mseset"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module level logger configured for the pipeline."""
    logger_name = name or LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "[%(levelname)s] %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_verbosity(level: int | str) -> None:
    """Apply ``level`` to every pipeline logger created so far."""
    for name in list(logging.root.manager.loggerDict):
        if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
            logging.getLogger(name).setLevel(level)


def ensure_directory(path: str | os.PathLike[str]) -> pathlib.Path:
    """Create *path* if it does not already exist and return it as Path."""
    directory = pathlib.Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


class PipelineError(RuntimeError):
    """Raised when the converter encounters an unrecoverable error."""


class ConfigurationError(PipelineError):
    """Raised when a parser or run setting cannot be used."""


class MalformedRecordError(PipelineError):
    """Raised when a line does not carry every column of a card record."""

    def __init__(self, field_count: int, line_number: Optional[int] = None) -> None:
        self.field_count = field_count
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "record"
        super().__init__(
            f"Malformed {where}: expected 12 fields, found {field_count}"
        )


class SourceError(PipelineError):
    """Raised when the card sheet cannot be retrieved."""


class RenderError(PipelineError):
    """Raised when card images or sheets cannot be produced."""
