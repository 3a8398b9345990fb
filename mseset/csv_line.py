"""Split a single line of the card sheet into fields.

The scanner is a two state machine.  Outside of quotes the separator ends a
field, carriage returns are dropped and a line feed ends the line.  Inside
quotes everything is kept except the closing quote and any literal ``"``
after the first one seen in that quoted span.  That last rule matters only
when a custom quote character is configured and is kept as the sheet
exporter has always behaved.
"""
from __future__ import annotations

import enum
from typing import List, Optional

from .models import DEFAULT_QUOTE, DEFAULT_SEPARATOR, ParserConfig

LITERAL_QUOTE = '"'


class ScanState(enum.Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


class _LineScanner:
    def __init__(self, separator: str, quote: str) -> None:
        self.separator = separator
        self.quote = quote
        self.state = ScanState.UNQUOTED
        self.escaped_quote_seen = False
        self.fields: List[str] = []
        self.buffer: List[str] = []

    def scan(self, line: str) -> List[str]:
        handlers = {
            ScanState.UNQUOTED: self._unquoted,
            ScanState.QUOTED: self._quoted,
        }
        for ch in line:
            if not handlers[self.state](ch):
                break
        self._emit()
        return self.fields

    def _emit(self) -> None:
        self.fields.append("".join(self.buffer))
        self.buffer = []

    def _unquoted(self, ch: str) -> bool:
        if ch == self.quote:
            self.state = ScanState.QUOTED
        elif ch == self.separator:
            self._emit()
        elif ch == "\r":
            pass
        elif ch == "\n":
            return False
        else:
            self.buffer.append(ch)
        return True

    def _quoted(self, ch: str) -> bool:
        if ch == self.quote:
            self.state = ScanState.UNQUOTED
            self.escaped_quote_seen = False
        elif ch == LITERAL_QUOTE:
            if not self.escaped_quote_seen:
                self.buffer.append(ch)
                self.escaped_quote_seen = True
        else:
            self.buffer.append(ch)
        return True


def tokenize(
    line: Optional[str],
    separator: Optional[str] = DEFAULT_SEPARATOR,
    quote: Optional[str] = DEFAULT_QUOTE,
) -> List[str]:
    """Return the fields of ``line``.

    An empty line yields no fields at all.  Otherwise a line with N
    unquoted separators yields N + 1 fields, the last one possibly empty.
    Blank ``separator`` or ``quote`` values fall back to the defaults.
    """
    return tokenize_with(line, ParserConfig(separator=separator, quote=quote))


def tokenize_with(line: Optional[str], config: ParserConfig) -> List[str]:
    if not line:
        return []
    return _LineScanner(config.separator, config.quote).scan(line)
