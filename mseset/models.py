from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import ConfigurationError, MalformedRecordError

DEFAULT_SEPARATOR = ","
DEFAULT_QUOTE = '"'

# Values that mean "not set" for a separator or quote character.
UNSET_CHARS = (None, "", " ")

RECORD_ARITY = 12


class ParserConfig(BaseModel):
    """Characters used to split a line of the card sheet.

    - separator: ends a field outside of quotes (default ``,``).
    - quote: opens and closes a quoted span (default ``"``).
    """

    model_config = ConfigDict(frozen=True)

    separator: str = DEFAULT_SEPARATOR
    quote: str = DEFAULT_QUOTE

    @field_validator("separator", mode="before")
    @classmethod
    def _default_separator(cls, value: Optional[str]) -> str:
        return _single_char(value, DEFAULT_SEPARATOR, "separator")

    @field_validator("quote", mode="before")
    @classmethod
    def _default_quote(cls, value: Optional[str]) -> str:
        return _single_char(value, DEFAULT_QUOTE, "quote")


def _single_char(value: Optional[str], default: str, name: str) -> str:
    if value in UNSET_CHARS:
        return default
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigurationError(f"{name} must be a single character, got {value!r}")
    return value


class RunConfig(BaseModel):
    """Read-only settings shared by every record of one conversion run."""

    model_config = ConfigDict(frozen=True)

    parser: ParserConfig = Field(default_factory=ParserConfig)

    # Printed verbatim on every card.
    copyright: str = ""

    # Used for both "time created" and "time modified".
    now: datetime = Field(default_factory=datetime.now)


@dataclass(frozen=True)
class CardRecord:
    """One row of the card sheet with its columns named."""

    title: str
    subtitle: str
    faction: str
    card_type: str
    cost: str
    provides: str
    fighting: str
    power: str
    body: str
    text: str
    artist: str
    designer: str

    @classmethod
    def from_fields(
        cls, fields: Sequence[str], line_number: Optional[int] = None
    ) -> "CardRecord":
        if len(fields) < RECORD_ARITY:
            raise MalformedRecordError(len(fields), line_number)
        return cls(*fields[:RECORD_ARITY])
