"""Assemble card blocks into a Magic Set Editor set and package it."""
from __future__ import annotations

import os
import pathlib
import zipfile
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .models import RunConfig
from .transform import transform_line
from .utils import MalformedRecordError, PipelineError, ensure_directory, get_logger

LOGGER = get_logger(__name__)

DEFAULT_FILENAME = "shadowfist-cardset.mse-set"
SET_MEMBER_NAME = "set"

SET_PREAMBLE = (
    "mse version: 0.3.8\n"
    "game: shadowfist\n"
    "stylesheet: fullblank\n"
    "set info:\n"
    "\tsymbol:\n"
)

SET_POSTAMBLE = (
    "version control:\n"
    "\ttype: none\n"
    "apprentice code:\n"
)


@dataclass
class SetBuildResult:
    document: str
    card_count: int
    skipped: List[Tuple[int, str]] = field(default_factory=list)


def build_set_document(
    lines: Iterable[str],
    config: RunConfig,
    skip_header: bool = True,
    skip_malformed: bool = False,
) -> SetBuildResult:
    """Transform every card row and wrap the blocks in the set file frame.

    Line numbers are 1-based and count the header.  A malformed row stops the
    build unless ``skip_malformed`` is set, in which case it is logged and
    listed in :attr:`SetBuildResult.skipped`.
    """
    blocks: List[str] = []
    skipped: List[Tuple[int, str]] = []
    for line_number, line in enumerate(lines, start=1):
        if skip_header and line_number == 1:
            LOGGER.debug("Skipping header: %s", line.rstrip("\r"))
            continue
        try:
            blocks.append(transform_line(line, config, line_number))
        except MalformedRecordError as error:
            if not skip_malformed:
                raise
            LOGGER.warning("Skipping %s", error)
            skipped.append((line_number, str(error)))

    LOGGER.info("Converted %d cards (%d skipped)", len(blocks), len(skipped))
    document = SET_PREAMBLE + "".join(blocks) + SET_POSTAMBLE
    return SetBuildResult(document=document, card_count=len(blocks), skipped=skipped)


def write_set_file(document: str, path: str | os.PathLike[str]) -> pathlib.Path:
    """Write ``document`` as the ``set`` member of an ``.mse-set`` archive."""
    output_path = pathlib.Path(path)
    ensure_directory(output_path.parent)
    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(SET_MEMBER_NAME, document.encode("utf-8"))
    LOGGER.info("Wrote %s", output_path)
    return output_path


def read_set_document(path: str | os.PathLike[str]) -> str:
    try:
        with zipfile.ZipFile(path) as archive:
            return archive.read(SET_MEMBER_NAME).decode("utf-8")
    except (OSError, KeyError, zipfile.BadZipFile) as exc:
        raise PipelineError(f"{path} is not a readable set file: {exc}") from exc
