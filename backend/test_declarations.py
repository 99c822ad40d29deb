"""Tests for node / container declaration parsing"""

from cubegen.dsl.declarations import opens_block, parse_declaration
from cubegen.dsl.tokenizer import classify_line


def parse(text: str, number: int = 1):
    return parse_declaration(classify_line(number, text))


def error_of(text: str) -> str:
    decl, error = parse(text)
    assert decl is None
    assert error is not None
    return error.message


def test_node_with_attributes():
    decl, error = parse('node api: "API Server" icon=Api x=500 y=200 w=120 h=60')
    assert error is None
    assert decl.kind == "node"
    assert decl.id == "api"
    assert decl.label == "API Server"
    assert decl.icon == "Api"
    assert (decl.x, decl.y, decl.width, decl.height) == (500, 200, 120, 60)
    assert decl.parent is None


def test_long_attribute_names_and_decimals():
    decl, _ = parse('node a: "A" width=10.5 height=.25 x=-3 y=+4')
    assert decl.width == 10.5
    assert decl.height == 0.25
    assert decl.x == -3
    assert decl.y == 4


def test_attribute_order_is_irrelevant():
    first, _ = parse('node a: "A" x=1 y=2 icon=User')
    second, _ = parse('node a: "A" icon=User y=2 x=1')
    assert first == second


def test_container_ignores_icon():
    decl, error = parse('container vpc: "VPC" icon=Cloud parent=region')
    assert error is None
    assert decl.is_container
    assert decl.icon is None
    assert decl.parent == "region"


def test_unknown_attributes_are_ignored():
    decl, error = parse('node a: "A" color=red x=5')
    assert error is None
    assert decl.x == 5


def test_empty_value_means_absent():
    decl, error = parse('node a: "A" x= icon=')
    assert error is None
    assert decl.x is None
    assert decl.icon is None


def test_label_may_contain_colons_and_arrows():
    decl, _ = parse('node a: "http://x -> y" x=1')
    assert decl.label == "http://x -> y"


def test_space_before_colon_is_allowed():
    decl, error = parse('node a : "A"')
    assert error is None
    assert decl.id == "a"


# -------------------------
# Errors
# -------------------------

def test_non_numeric_attribute_names_attribute():
    message = error_of('node a: "Alice" x=foo')
    assert "'x'" in message
    assert "foo" in message


def test_number_formats_rejected():
    for value in ("nan", "inf", "1e5", "0x10", "1,5"):
        assert "must be a number" in error_of(f'node a: "A" w={value}')


def test_overflowing_number_rejected():
    message = error_of('node a: "A" x=' + "9" * 400)
    assert "must be a number" in message
    assert "'x'" in message
    assert len(message) < 120


def test_missing_identifier():
    assert error_of('node : "A"').startswith("Missing identifier")
    assert error_of("node").startswith("Missing identifier")
    assert error_of('container "A"').startswith("Missing identifier")


def test_missing_colon():
    assert error_of('node a "A"').startswith("Missing ':'")
    assert error_of("node a").startswith("Missing ':'")


def test_missing_label():
    assert error_of("node a:").startswith("Missing quoted label")
    assert error_of("node a: A x=1").startswith("Missing quoted label")


def test_unterminated_label():
    assert error_of('node a: "Alice x=1').startswith("Unterminated string")


def test_space_in_identifier():
    assert error_of('node my node: "A"').startswith("Invalid identifier")


def test_malformed_attribute_token():
    assert "expected key=value" in error_of('node a: "A" big')


def test_quoted_attribute_value():
    assert "bare value" in error_of('node a: "A" icon="Api"')


def test_invalid_parent_value():
    assert "Invalid parent" in error_of('node a: "A" parent=9lives')


def test_distinct_messages_for_each_defect():
    messages = {
        error_of('node : "A"'),
        error_of('node a "A"'),
        error_of("node a:"),
        error_of('node a: "A'),
    }
    assert len(messages) == 4


# -------------------------
# Blocks
# -------------------------

def test_container_opens_block():
    decl, error = parse('container vpc: "VPC" w=400 {')
    assert error is None
    assert decl.opens_block
    assert decl.width == 400


def test_node_cannot_open_block():
    assert "Only containers" in error_of('node a: "A" {')


def test_opens_block_helper():
    assert opens_block('container vpc: "VPC" {')
    assert not opens_block('container vpc: "{"')


def test_brace_directly_after_label():
    decl, error = parse('container vpc: "VPC"{')
    assert error is None
    assert decl.opens_block


def test_opens_block_on_failed_glued_brace():
    assert opens_block('container vpc "VPC"{')
    assert not opens_block('container vpc: "open {')
