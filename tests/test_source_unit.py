"""Tests for lazily produced source units."""

import pytest

from doc_aggregator.doc_node import ClassNode, MemberNode
from doc_aggregator.source_unit import Chunk, SourceUnit


def test_source_unit_yields_nodes_in_order() -> None:
    """Verify nodes come out in chunk order and carry the file name."""
    unit = SourceUnit(
        "foo.js",
        [Chunk("/** @class Foo */", linenr=1), Chunk("/** @method bar */", linenr=5)],
    )
    nodes = list(unit)
    assert isinstance(nodes[0], ClassNode)
    assert isinstance(nodes[1], MemberNode)
    assert [n.linenr for n in nodes] == [1, 5]
    assert {n.filename for n in nodes} == {"foo.js"}


def test_source_unit_is_lazy() -> None:
    """Verify chunks are only read while iterating."""
    seen: list[int] = []

    def chunks():
        for i in range(3):
            seen.append(i)
            yield Chunk(f"/** @method m{i} */")

    nodes = iter(SourceUnit("lazy.js", chunks()))
    assert seen == []
    next(nodes)
    assert seen == [0]


def test_source_unit_single_pass() -> None:
    """Verify a unit cannot be iterated twice."""
    unit = SourceUnit("once.js", [])
    list(unit)
    with pytest.raises(RuntimeError, match="already been consumed"):
        list(unit)
