"""Tests for link statement parsing"""

from cubegen.dsl.links import parse_link
from cubegen.dsl.tokenizer import classify_line


def parse(text: str, number: int = 1):
    return parse_link(classify_line(number, text))


def error_of(text: str) -> str:
    link, error = parse(text)
    assert link is None
    assert error is not None
    return error.message


def test_one_way_with_label():
    link, error = parse('user -> lb: "HTTPS"', number=4)
    assert error is None
    assert (link.source, link.target, link.label) == ("user", "lb", "HTTPS")
    assert link.bidirectional is False
    assert link.line == 4


def test_bidirectional_without_label():
    link, error = parse("cache <-> api")
    assert error is None
    assert link.bidirectional is True
    assert link.label is None
    assert (link.source, link.target) == ("cache", "api")


def test_whitespace_around_arrow_is_optional():
    link, _ = parse('a->b:"x"')
    assert (link.source, link.target, link.label) == ("a", "b", "x")


def test_label_can_contain_arrow_and_colon():
    link, _ = parse('a -> b: "GET /x -> 200: ok"')
    assert link.label == "GET /x -> 200: ok"


def test_empty_label_is_kept():
    link, _ = parse('a -> b: ""')
    assert link.label == ""


# -------------------------
# Errors
# -------------------------

def test_missing_target():
    assert error_of("a ->").startswith("Missing target")
    assert error_of('a -> : "x"').startswith("Missing target")


def test_missing_source():
    assert error_of("-> b").startswith("Missing source")


def test_space_inside_identifier():
    assert error_of("my api -> db").startswith("Invalid source")
    assert error_of("api -> my db").startswith("Invalid target")


def test_chained_arrows_are_rejected():
    assert error_of("a -> b -> c").startswith("Invalid target")


def test_unterminated_label():
    assert error_of('a -> b: "calls').startswith("Unterminated string")


def test_unquoted_label():
    assert "quoted string" in error_of("a -> b: calls")


def test_colon_without_label():
    assert error_of("a -> b:").startswith("Missing label")


def test_text_after_label():
    assert error_of('a -> b: "x" extra').startswith("Unexpected text")
