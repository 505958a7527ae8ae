"""Tests for scanning JavaScript literals."""

from doc_aggregator.js_literal import JsLiteralScanner, skip_to_closing_bracket


def scan_text(text: str) -> str | None:
    """Return the literal found at the start of text, if any."""
    end = JsLiteralScanner().scan(text)
    return None if end is None else text[:end]


def test_scan_scalars() -> None:
    """Verify strings, numbers, keywords and regexes are recognized."""
    assert scan_text('"a \\" b" rest') == '"a \\" b"'
    assert scan_text("'single' rest") == "'single'"
    assert scan_text("42 and more") == "42"
    assert scan_text("-3.5e2,") == "-3.5e2"
    assert scan_text("0xFF") == "0xFF"
    assert scan_text("true]") == "true"
    assert scan_text("null") == "null"
    assert scan_text("/[a-z]+/gi, x") == "/[a-z]+/gi"


def test_scan_rejects_identifiers() -> None:
    """Verify bare identifiers and operators are not literals."""
    assert scan_text("foo") is None
    assert scan_text("trueish") is None
    assert scan_text("!haa") is None
    assert scan_text("") is None


def test_scan_nested_collections() -> None:
    """Verify arrays and objects nest strings, regexes and each other."""
    assert scan_text('["foo", 5, /[a-z]/] tail') == '["foo", 5, /[a-z]/]'
    assert scan_text('{"foo": 5, bar: [1, 2, 3]}') == '{"foo": 5, bar: [1, 2, 3]}'
    assert scan_text("[]") == "[]"
    assert scan_text("{ }") == "{ }"
    assert scan_text("[1, 2,]") == "[1, 2,]"


def test_scan_rejects_bogus_collections() -> None:
    """Verify collections with identifiers or missing closers are rejected."""
    assert scan_text("[ho, ho]") is None
    assert scan_text("{ho:5, ho}") is None
    assert scan_text("{ho:5] Something") is None
    assert scan_text("[1, 2") is None


def test_skip_to_closing_bracket() -> None:
    """Verify the enclosing bracket is found past nested brackets and strings."""
    text = "[ho, ho]] Something"
    assert text[skip_to_closing_bracket(text, 0) :] == " Something"  # type: ignore[misc]

    text = ' and "]" me too] rest'
    assert text[skip_to_closing_bracket(text, 0) :] == " rest"  # type: ignore[misc]

    assert skip_to_closing_bracket("never closed", 0) is None


def test_skip_to_closing_bracket_over_regex() -> None:
    """Verify a bracket inside a regex literal does not close the bracket."""
    text = "x(/]/)] Something"
    assert text[skip_to_closing_bracket(text, 0) :] == " Something"  # type: ignore[misc]
