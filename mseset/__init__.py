"""Card sheet to Magic Set Editor set conversion package."""

from .models import CardRecord, ParserConfig, RunConfig
from .csv_line import ScanState, tokenize, tokenize_with
from .transform import (
    CARD_TYPE_SYNONYMS,
    FACTION_SYNONYMS,
    apply_designator_markup,
    format_timestamp,
    normalize_attributes,
    remap_resources,
    render_card,
    transform_line,
    transform_record,
)
from .set_file import (
    DEFAULT_FILENAME,
    SET_POSTAMBLE,
    SET_PREAMBLE,
    SetBuildResult,
    build_set_document,
    read_set_document,
    write_set_file,
)
from .source import fetch_lines
from .render import MseRunner, assemble_pdf
from .utils import (
    ConfigurationError,
    MalformedRecordError,
    PipelineError,
    RenderError,
    SourceError,
)
from .cli import main

__all__ = [
    "CardRecord",
    "ParserConfig",
    "RunConfig",
    "ScanState",
    "tokenize",
    "tokenize_with",
    "CARD_TYPE_SYNONYMS",
    "FACTION_SYNONYMS",
    "apply_designator_markup",
    "format_timestamp",
    "normalize_attributes",
    "remap_resources",
    "render_card",
    "transform_line",
    "transform_record",
    "DEFAULT_FILENAME",
    "SET_POSTAMBLE",
    "SET_PREAMBLE",
    "SetBuildResult",
    "build_set_document",
    "read_set_document",
    "write_set_file",
    "fetch_lines",
    "MseRunner",
    "assemble_pdf",
    "ConfigurationError",
    "MalformedRecordError",
    "PipelineError",
    "RenderError",
    "SourceError",
    "main",
]
