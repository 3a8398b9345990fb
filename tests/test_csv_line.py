import pytest

from mseset.csv_line import tokenize, tokenize_with
from mseset.models import ParserConfig
from mseset.utils import ConfigurationError


def test_plain_line_matches_split_including_trailing_empty_field():
    assert tokenize("a,b,") == ["a", "b", ""]
    assert tokenize("one,two,three") == "one,two,three".split(",")


def test_quoted_field_keeps_separator():
    result = tokenize('a,bb,"This sentence has a, comma.",dddd')

    assert result == ["a", "bb", "This sentence has a, comma.", "dddd"]


def test_empty_line_has_no_fields():
    assert tokenize("") == []
    assert tokenize(None) == []


def test_separators_only_yield_empty_fields():
    assert tokenize(",,") == ["", "", ""]


def test_unterminated_quote_returns_partial_field():
    assert tokenize('a,"unfinished, still going') == ["a", "unfinished, still going"]


def test_carriage_return_dropped_and_line_feed_stops_scan():
    assert tokenize("a,b\r\nc,d") == ["a", "b"]


def test_line_breaks_inside_quotes_are_kept():
    assert tokenize('"a\r\nb",c') == ["a\r\nb", "c"]


def test_doubled_default_quotes_reopen_quoting():
    assert tokenize('"a""b",c') == ["ab", "c"]


def test_custom_quote_keeps_only_first_literal_double_quote():
    result = tokenize("'say \"hi\" \"x\"',z", quote="'")

    assert result == ['say "hi x', "z"]


def test_literal_quote_flag_resets_when_quoting_closes():
    result = tokenize("'\"a\"','\"b\"'", quote="'")

    assert result == ['"a', '"b']


def test_custom_separator():
    assert tokenize("a;b;c", separator=";") == ["a", "b", "c"]


def test_blank_settings_fall_back_to_defaults():
    assert tokenize('a;"b,c"', separator=" ", quote=" ") == ["a;b,c"]
    assert tokenize_with("x,y", ParserConfig(separator="", quote=None)) == ["x", "y"]


@pytest.mark.parametrize("field", ["separator", "quote"])
def test_multi_character_settings_rejected(field):
    with pytest.raises(ConfigurationError):
        ParserConfig(**{field: ";;"})
