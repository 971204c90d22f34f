import pytest
from pystl.compiler.attributes import (
    ABSENT,
    NULL_LITERAL,
    Expression,
    Literal,
    arg_list,
    attribute_string,
    classify,
    iter_attribute_spec,
    needs_quote,
    quote,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("$x", "$x"),
        ("@ref", "@ref"),
        ("abc", "'abc'"),
        ("", "''"),
        (None, NULL_LITERAL),
    ],
)
def test_quote(value, expected) -> None:
    assert quote(value) == expected


def test_quote_escapes_literal_text() -> None:
    assert quote("it's") == "'it\\'s'"
    assert quote("C:\\temp") == "'C:\\\\temp'"
    assert quote("a\nb") == "'a\\nb'"


def test_marker_only_counts_in_first_position() -> None:
    assert quote("cost: $5") == "'cost: $5'"
    assert quote("me@example.com") == "'me@example.com'"


def test_classify() -> None:
    assert classify(None) is ABSENT
    assert classify("$user.name") == Expression("$user.name")
    assert classify("@helper") == Expression("@helper")
    assert classify("plain") == Literal("plain")
    # Empty is literal, not absent
    assert classify("") == Literal("")


def test_needs_quote() -> None:
    assert needs_quote("text")
    assert needs_quote("")
    assert not needs_quote("$x")
    assert not needs_quote("@x")


def test_arg_list_prunes_trailing_absent_values() -> None:
    assert arg_list(["'a'", None, "'b'", None]) == "'a', None, 'b'"
    assert arg_list(["'a'", None, "'b'", None], prune_tail=False) == "'a', None, 'b', None"


def test_arg_list_edges() -> None:
    assert arg_list([]) == ""
    assert arg_list([None, None]) == ""
    assert arg_list([None, None], prune_tail=False) == "None, None"
    assert arg_list([None, "$x"]) == "None, $x"


def test_arg_list_does_not_quote() -> None:
    assert arg_list(["abc", "$x"]) == "abc, $x"


def test_attribute_string() -> None:
    assert attribute_string({}) == ""
    assert attribute_string({"x": "1", "y": "d"}) == ' x="1" y="d"'


def test_iter_attribute_spec() -> None:
    assert list(iter_attribute_spec(["x", ("y", "d")])) == [("x", None), ("y", "d")]
    assert list(iter_attribute_spec({"a": None, "b": "2"})) == [("a", None), ("b", "2")]
