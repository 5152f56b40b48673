import pytest
from hypothesis import given
from hypothesis import strategies as st

from core.errors import InvalidInput, InvalidPattern, ParseError
from core.services import text_transforms as tt


def test_simple_transforms():
    assert tt.reverse("abc") == "cba"
    assert tt.uppercase("MiXed") == "MIXED"
    assert tt.lowercase("MiXed") == "mixed"
    assert tt.trim("  padded \n") == "padded"
    assert tt.length("héllo") == 5
    assert tt.length("😀") == 1


def test_capitalize_only_touches_first_character():
    assert tt.capitalize("hello World") == "Hello World"
    assert tt.capitalize("hELLO") == "HELLO"
    assert tt.capitalize("") == ""


def test_split_uses_literal_separator():
    assert tt.split(".", "a.b.c") == ["a", "b", "c"]
    assert tt.split("|", "a|b") == ["a", "b"]
    assert tt.split("", "abc") == ["a", "b", "c"]


def test_join_renders_json_items():
    assert tt.join("-", ["a", 1, True, None, {"k": 1}]) == 'a-1-true--{"k":1}'
    assert tt.join_json(", ", '["x", "y"]') == "x, y"


def test_join_json_rejects_non_arrays():
    with pytest.raises(InvalidInput):
        tt.join_json(",", '{"a": 1}')
    with pytest.raises(ParseError):
        tt.join_json(",", "[1,")


def test_replace_is_global_regex():
    assert tt.replace(r"\d+", "#", "a1b22c333") == "a#b#c#"
    assert tt.replace(r"(\w+)@", r"\1 at ", "me@host") == "me at host"


def test_replace_rejects_invalid_pattern():
    with pytest.raises(InvalidPattern):
        tt.replace("(unclosed", "x", "text")


def test_count_is_literal_and_non_overlapping():
    assert tt.count("aa", "aaaa") == 2
    assert tt.count(".", "a.b.c") == 2
    assert tt.count("(", "f(x)(y)") == 2
    assert tt.count("zz", "abc") == 0


@given(st.text(min_size=1), st.text())
def test_count_matches_str_count(substring, text):
    assert tt.count(substring, text) == text.count(substring)
