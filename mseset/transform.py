"""Render card sheet rows as Magic Set Editor card blocks."""
from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from .csv_line import tokenize_with
from .models import CardRecord, RunConfig

TIMESTAMP_FORMAT = "%Y-%m-%d %I:%M:%S"
INDENT = "\t"

FACTION_SYNONYMS = {
    "Lotus": "eaters of the lotus",
    "Monarchs": "four monarchs",
    "Hand": "guiding hand",
}

CARD_TYPE_SYNONYMS = {
    "Feng Shui Site": "fss",
}

DESIGNATOR_PATTERN = re.compile(r"<(\w+)>")

# Resource letters that must not be written as "A" in the set file.
REMAPPED_RESOURCE_LETTERS = "aA"
REMAPPED_RESOURCE_TARGET = "W"


def format_timestamp(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def normalize_attributes(card_type: str, faction: str) -> str:
    """Build the ``attributes`` value, e.g. ``fss, guiding hand``."""
    card_type = CARD_TYPE_SYNONYMS.get(card_type, card_type)
    faction = FACTION_SYNONYMS.get(faction, faction)
    return f"{card_type.lower()}, {faction.lower()}"


def apply_designator_markup(text: str) -> str:
    """Italicize the first ``<Designator>`` in ``text``.

    Only one designator is rewritten per call; any later ones keep their
    angle brackets.
    """
    return DESIGNATOR_PATTERN.sub(r"<i>\1</i>", text, count=1)


def remap_resources(value: str) -> str:
    """Uppercase a cost or resource code, writing every ``a`` as ``W``."""
    return "".join(
        REMAPPED_RESOURCE_TARGET if ch in REMAPPED_RESOURCE_LETTERS else ch.upper()
        for ch in value
    )


def card_entries(record: CardRecord, timestamp: str, copyright: str) -> List[Tuple[str, str]]:
    """Return the ordered key/value pairs of one card block."""
    entries: List[Tuple[str, Optional[str]]] = [
        ("has styling", "false"),
        ("notes", ""),
        ("time created", timestamp),
        ("time modified", timestamp),
        ("attributes", normalize_attributes(record.card_type, record.faction)),
        ("title", record.title),
        ("scene", ""),
        ("fighting", record.fighting or None),
        ("power", record.power or None),
        ("body", record.body or None),
        ("image", ""),
        ("subtitle", record.subtitle),
        ("rules", apply_designator_markup(record.text)),
        ("tag", ""),
        ("cost", remap_resources(record.cost) if record.cost else None),
        ("copyright", copyright),
        ("artist", record.artist or None),
        ("resources", remap_resources(record.provides) if record.provides else None),
    ]
    return [(key, value) for key, value in entries if value is not None]


def render_card(record: CardRecord, now: datetime, copyright: str) -> str:
    lines = ["card:"]
    for key, value in card_entries(record, format_timestamp(now), copyright):
        lines.append(f"{INDENT}{key}: {value}" if value else f"{INDENT}{key}:")
    return "\n".join(lines) + "\n"


def transform_record(
    fields: Sequence[str],
    now: datetime,
    copyright: str,
    line_number: Optional[int] = None,
) -> str:
    """Render one tokenized row as a card block.

    Raises :class:`~mseset.utils.MalformedRecordError` when the row has
    fewer than twelve fields.
    """
    record = CardRecord.from_fields(fields, line_number)
    return render_card(record, now, copyright)


def transform_line(line: str, config: RunConfig, line_number: Optional[int] = None) -> str:
    fields = tokenize_with(line, config.parser)
    return transform_record(fields, config.now, config.copyright, line_number)
