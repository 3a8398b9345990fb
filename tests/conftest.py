import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from mseset.models import ParserConfig, RunConfig

HEADER = "Title,Subtitle,Faction,CardType,Cost,Provides,Fighting,Power,Body,Text,Artist,Designer"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2016, 7, 28, 15, 8, 54)


@pytest.fixture
def run_config(fixed_now: datetime) -> RunConfig:
    return RunConfig(parser=ParserConfig(), copyright="playtest round 1", now=fixed_now)


@pytest.fixture
def sheet_lines() -> list[str]:
    return [
        HEADER,
        'Ting Ting,Fox Spirit,Lotus,Character,2aa,l,5,,,"Toughness: 1. Gains <Demon>, then heals.",Jane Doe,John Roe',
        "Mountain Fortress,,Hand,Feng Shui Site,,,,1,3,Provides 1 Power.,,John Roe",
    ]
