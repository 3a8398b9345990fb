#!/usr/bin/env python3
"""Command-line interface for building Magic Set Editor card sets."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from .models import ParserConfig, RunConfig
from .render import DEFAULT_EXECUTABLE, IMAGE_SUFFIX, MseRunner, assemble_pdf, count_cards
from .set_file import DEFAULT_FILENAME, build_set_document, read_set_document, write_set_file
from .source import fetch_lines
from .utils import PipelineError, set_verbosity

app = typer.Typer(help="Convert a card sheet into a Magic Set Editor set.")


def _collect_images(image_dir: Path) -> List[Path]:
    if not image_dir.is_dir():
        raise typer.BadParameter(f"Not a directory: {image_dir}", param_name="image_dir")
    image_files = sorted(p for p in image_dir.iterdir() if p.suffix.lower() == IMAGE_SUFFIX)
    if not image_files:
        typer.echo("No card images found in directory.")
        raise typer.Exit(code=1)
    return image_files


def _error_exit(error: Exception) -> typer.Exit:
    typer.echo(f"ERROR: {error}")
    return typer.Exit(code=1)


@app.command()
def build(
    url: Optional[str] = typer.Option(
        None, "--url", "-u", envvar="MSESET_URL", help="URL or path of the card sheet CSV."
    ),
    directory: Optional[Path] = typer.Option(
        None,
        "--directory",
        "-d",
        envvar="MSESET_DIRECTORY",
        help="Directory to write the set file to. Defaults to the working directory.",
    ),
    filename: str = typer.Option(
        DEFAULT_FILENAME, "--filename", "-f", envvar="MSESET_FILENAME", help="Set file name."
    ),
    copyright: str = typer.Option(
        "", "--copyright", envvar="MSESET_COPYRIGHT", help="Copyright line printed on every card."
    ),
    separator: Optional[str] = typer.Option(None, "--separator", help="Field separator (default ',')."),
    quote: Optional[str] = typer.Option(None, "--quote", help="Quote character (default '\"')."),
    skip_malformed: bool = typer.Option(
        False, "--skip-malformed", help="Log and skip rows with missing columns.", show_default=False
    ),
    print_set: bool = typer.Option(
        False, "--print", help="Print the set document to stdout.", show_default=False
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Convert without writing the set file.", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", show_default=False),
) -> None:
    """Download the card sheet and write a .mse-set file."""

    if verbose:
        set_verbosity("DEBUG")
    if not url:
        raise typer.BadParameter("A card sheet URL or path is required.", param_name="url")

    out_dir = (directory or Path.cwd()).expanduser()
    out_path = out_dir / filename

    try:
        config = RunConfig(
            parser=ParserConfig(separator=separator, quote=quote),
            copyright=copyright,
            now=datetime.now(),
        )
        lines = fetch_lines(url)
        result = build_set_document(lines, config, skip_malformed=skip_malformed)
    except PipelineError as error:
        raise _error_exit(error) from error

    typer.echo(f"Converted {result.card_count} cards.")
    for line_number, reason in result.skipped:
        typer.echo(f"  Skipped line {line_number}: {reason}")

    if print_set or dry_run:
        typer.echo(result.document)

    if dry_run:
        typer.echo("Dry run enabled, set file not written.")
        return

    try:
        write_set_file(result.document, out_path)
    except OSError as error:
        raise _error_exit(error) from error
    typer.echo(f"Saved: {out_path}")


@app.command()
def render(
    set_file: Path = typer.Argument(..., help="Path to a .mse-set file."),
    out_dir: Path = typer.Option(Path("images"), "--out-dir", help="Directory for card images."),
    count: Optional[int] = typer.Option(
        None, "--count", help="Number of cards to export. Defaults to every card in the set."
    ),
    executable: str = typer.Option(
        DEFAULT_EXECUTABLE, "--executable", envvar="MSESET_EXECUTABLE", help="Magic Set Editor binary."
    ),
) -> None:
    """Export one image per card through Magic Set Editor."""

    set_path = set_file.expanduser().resolve()
    if not set_path.exists():
        raise typer.BadParameter(f"Path not found: {set_path}", param_name="set_file")

    try:
        if count is None:
            count = count_cards(read_set_document(set_path))
        written = MseRunner(executable).write_images(set_path, count, out_dir.expanduser())
    except PipelineError as error:
        raise _error_exit(error) from error
    typer.echo(f"Exported {len(written)} images to {out_dir}")


@app.command()
def sheet(
    image_dir: Path = typer.Argument(..., help="Directory holding card images."),
    output: Path = typer.Option(Path("cards.pdf"), "--output", "-o", help="PDF file to write."),
    columns: int = typer.Option(3, "--columns", help="Cards per row."),
    rows: int = typer.Option(3, "--rows", help="Rows per page."),
    dpi: int = typer.Option(300, "--dpi", help="Page resolution."),
) -> None:
    """Lay card images out on printable PDF pages."""

    image_files = _collect_images(image_dir.expanduser().resolve())
    try:
        written = assemble_pdf(image_files, output.expanduser(), columns=columns, rows=rows, dpi=dpi)
    except PipelineError as error:
        raise _error_exit(error) from error
    typer.echo(f"Saved: {written}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
