from __future__ import annotations

import ast

from pentiment import Position, SourceText
from pentiment.pyast import leftmost_span, span_from_node


CODE = "total = price * qty\nlabel = 'größe' + name\n"


def _expr(tree: ast.Module, stmt: int) -> ast.expr:
    node = tree.body[stmt]
    assert isinstance(node, ast.Assign)
    return node.value


def test_span_from_node_ascii() -> None:
    tree = ast.parse(CODE)
    binop = _expr(tree, 0)
    assert span_from_node(binop) == Position(1, 9, 1, 20)


def test_span_from_node_converts_utf8_offsets_with_source() -> None:
    tree = ast.parse(CODE)
    concat = _expr(tree, 1)
    assert isinstance(concat, ast.BinOp)
    src = SourceText.from_string("m.py", CODE)
    # 'größe' holds two 2-byte characters, so byte and code point columns differ.
    assert span_from_node(concat.right, src) == Position(2, 19, 2, 23)
    assert span_from_node(concat.right) == Position(2, 21, 2, 25)


def test_span_from_node_point_and_missing() -> None:
    node = ast.Name(id="x", ctx=ast.Load())
    assert span_from_node(node) is None
    node.lineno = 3
    node.col_offset = 4
    assert span_from_node(node) == Position(3, 5)


def test_leftmost_span() -> None:
    tree = ast.parse(CODE)
    binop = _expr(tree, 0)
    assert isinstance(binop, ast.BinOp)
    bare = ast.Name(id="x", ctx=ast.Load())
    assert leftmost_span(binop.left, binop.right) == Position(1, 9, 1, 14)
    assert leftmost_span(bare, binop.right) == Position(1, 17, 1, 20)
    assert leftmost_span(None, bare) is None
