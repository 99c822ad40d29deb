"""Tests for default layout of parsed documents"""

from cubegen.compiler.layout import CONTAINER_PADDING, apply_default_layout
from cubegen.config import GRID_COLUMNS, GRID_SPACING_X, GRID_SPACING_Y, NODE_HEIGHT, NODE_WIDTH
from cubegen.dsl import parse_dsl


def layout(source: str):
    result = parse_dsl(source)
    assert result.success, result.errors
    return result.document, apply_default_layout(result.document)


def test_missing_positions_go_on_grid():
    _, doc = layout('node a: "A"\nnode b: "B"')
    a, b = doc.nodes
    assert (a.x, a.y) == (0, 0)
    if GRID_COLUMNS > 1:
        assert (b.x, b.y) == (GRID_SPACING_X, 0)
    else:
        assert (b.x, b.y) == (0, GRID_SPACING_Y)
    assert (a.width, a.height) == (NODE_WIDTH, NODE_HEIGHT)


def test_source_values_are_kept():
    _, doc = layout('node a: "A" x=7 w=33')
    node = doc.nodes[0]
    assert node.x == 7
    assert node.width == 33
    assert node.y == 0
    assert node.height == NODE_HEIGHT


def test_input_document_is_not_modified():
    original, laid_out = layout('node a: "A"')
    assert original.nodes[0].x is None
    assert laid_out.nodes[0].x == 0


def test_container_fits_children():
    _, doc = layout('container vpc: "VPC" x=0 y=0 {\n  node a: "A" x=10 y=10\n}')
    vpc = doc.containers[0]
    assert vpc.width == 10 + NODE_WIDTH + CONTAINER_PADDING
    assert vpc.height == 10 + NODE_HEIGHT + CONTAINER_PADDING


def test_nested_containers_sized_inside_out():
    source = """container outer: "Outer" x=0 y=0 {
  container inner: "Inner" x=10 y=10 {
    node a: "A" x=20 y=20 w=50 h=50
  }
}"""
    _, doc = layout(source)
    sizes = {c.id: (c.width, c.height) for c in doc.containers}
    inner_size = 20 + 50 - 10 + CONTAINER_PADDING
    assert sizes["inner"] == (inner_size, inner_size)
    outer_size = 10 + inner_size + CONTAINER_PADDING
    assert sizes["outer"] == (outer_size, outer_size)


def test_empty_container_gets_default_size():
    _, doc = layout('container vpc: "VPC"')
    vpc = doc.containers[0]
    assert (vpc.width, vpc.height) == (NODE_WIDTH, NODE_HEIGHT)
