import pytest

from search.services.search import build_tsquery, sanitize_query


@pytest.mark.parametrize("raw, expected", [
    ("  AC/DC!!   live_set ", "AC DC live set"),
    ("rock & roll", "rock roll"),
    ("Beyoncé", "Beyoncé"),
    ("", ""),
    (None, ""),
])
def test_sanitize_query(raw, expected):
    assert sanitize_query(raw) == expected


def test_build_tsquery_prefix_matches_last_token():
    assert build_tsquery("deep hou") == "deep & hou:*"
    assert build_tsquery("jazz") == "jazz:*"


def test_build_tsquery_of_punctuation_is_empty():
    assert build_tsquery("!!! ???") == ""
    assert build_tsquery("a'b") == "a & b:*"
