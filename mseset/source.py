"""Retrieve the card sheet as a list of raw lines."""
from __future__ import annotations

import os
import pathlib
from typing import List
from urllib.parse import unquote, urlparse

import requests

from .utils import SourceError, get_logger

LOGGER = get_logger(__name__)

REMOTE_SCHEMES = ("http", "https")


def split_lines(text: str) -> List[str]:
    """Split on line feeds, dropping the empty tail left by a final newline.

    Carriage returns stay in place; the line tokenizer discards them.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def fetch_lines(location: str | os.PathLike[str], timeout: float = 30) -> List[str]:
    """Read the sheet from an http(s) URL, a ``file://`` URL or a local path."""
    location = str(location)
    parsed = urlparse(location)
    if parsed.scheme in REMOTE_SCHEMES:
        return split_lines(_download(location, timeout))
    if parsed.scheme == "file":
        path = pathlib.Path(unquote(parsed.path))
    else:
        path = pathlib.Path(location).expanduser()
    return split_lines(_read_local(path))


def _download(url: str, timeout: float) -> str:
    LOGGER.info("Downloading %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise SourceError(f"Could not download card sheet from {url}: {exc}") from exc
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceError(f"Card sheet from {url} is not UTF-8: {exc}") from exc


def _read_local(path: pathlib.Path) -> str:
    LOGGER.info("Reading %s", path)
    try:
        with path.open("r", encoding="utf8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Could not read card sheet {path}: {exc}") from exc
