"""Turn a packaged set into card images and printable sheets.

Card images come from the Magic Set Editor command line, which reads one
script command per line on stdin and answers each with a line on stdout.
Sheets are laid out locally with Pillow.
"""
from __future__ import annotations

import os
import pathlib
import subprocess
from typing import Iterable, List, Sequence, Tuple

from PIL import Image

from .utils import RenderError, ensure_directory, get_logger

LOGGER = get_logger(__name__)

DEFAULT_EXECUTABLE = "mse"
QUIT_COMMAND = ":quit"
IMAGE_SUFFIX = ".png"


def image_name(index: int) -> str:
    return f"card-{index + 1:03d}{IMAGE_SUFFIX}"


def write_image_command(index: int, target: pathlib.Path) -> str:
    escaped = target.as_posix().replace("\\", "\\\\").replace('"', '\\"')
    return f'write_image_file(set.cards[{index}], file: "{escaped}")'


def count_cards(document: str) -> int:
    """Count the card blocks in a set document."""
    return sum(1 for line in document.splitlines() if line == "card:")


class MseRunner:
    """Drive ``mse --cli`` to export one image per card."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout: float = 120) -> None:
        self.executable = executable
        self.timeout = timeout

    def command_line(self, set_path: pathlib.Path) -> List[str]:
        return [self.executable, "--cli", "--raw", str(set_path)]

    def write_images(
        self,
        set_path: str | os.PathLike[str],
        count: int,
        out_dir: str | os.PathLike[str],
    ) -> List[pathlib.Path]:
        set_path = pathlib.Path(set_path)
        output_dir = ensure_directory(out_dir).resolve()
        try:
            process = subprocess.Popen(
                self.command_line(set_path),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise RenderError(f"Could not start {self.executable}: {exc}") from exc

        written: List[pathlib.Path] = []
        try:
            for index in range(count):
                target = output_dir / image_name(index)
                response = self._send(process, write_image_command(index, target))
                if response.startswith("ERROR"):
                    raise RenderError(f"Card {index} could not be exported: {response}")
                LOGGER.debug("Card %d -> %s (%s)", index, target, response)
                written.append(target)
            self._quit(process)
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()

        LOGGER.info("Exported %d card images to %s", len(written), output_dir)
        return written

    def _send(self, process: subprocess.Popen, command: str) -> str:
        process.stdin.write(command + "\n")
        process.stdin.flush()
        response = process.stdout.readline()
        if not response:
            raise RenderError(f"{self.executable} exited before answering: {command}")
        return response.rstrip("\r\n")

    def _quit(self, process: subprocess.Popen) -> None:
        process.stdin.write(QUIT_COMMAND + "\n")
        process.stdin.flush()
        process.stdin.close()
        try:
            process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            raise RenderError(f"{self.executable} did not exit after {QUIT_COMMAND}") from exc


def _page_pixels(page_size: Tuple[float, float], dpi: int) -> Tuple[int, int]:
    width, height = page_size
    return int(width * dpi), int(height * dpi)


def assemble_pdf(
    image_paths: Iterable[pathlib.Path],
    output_path: str | os.PathLike[str],
    columns: int = 3,
    rows: int = 3,
    dpi: int = 300,
    page_size: Tuple[float, float] = (8.5, 11.0),
) -> pathlib.Path:
    """Lay card images out on a grid and save every page to one PDF.

    Each image is shrunk to fit its cell, keeping its aspect ratio, and
    centered in the cell.
    """
    paths: Sequence[pathlib.Path] = list(image_paths)
    if not paths:
        raise RenderError("No card images to lay out")
    if columns < 1 or rows < 1:
        raise RenderError("Sheets need at least one row and one column")

    page_width, page_height = _page_pixels(page_size, dpi)
    cell_width = page_width // columns
    cell_height = page_height // rows
    per_page = columns * rows

    pages: List[Image.Image] = []
    for start in range(0, len(paths), per_page):
        page = Image.new("RGB", (page_width, page_height), "white")
        for slot, path in enumerate(paths[start : start + per_page]):
            with Image.open(path) as img:
                img = img.convert("RGB")
                img.thumbnail((cell_width, cell_height), Image.LANCZOS)
                column, row = slot % columns, slot // columns
                left = column * cell_width + (cell_width - img.width) // 2
                top = row * cell_height + (cell_height - img.height) // 2
                page.paste(img, (left, top))
        pages.append(page)

    output = pathlib.Path(output_path)
    ensure_directory(output.parent)
    pages[0].save(output, "PDF", resolution=dpi, save_all=True, append_images=pages[1:])
    LOGGER.info("Wrote %d page(s) with %d cards to %s", len(pages), len(paths), output)
    return output
