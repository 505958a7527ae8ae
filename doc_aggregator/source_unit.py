"""A single source file's documentation, produced lazily as a stream of nodes."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from doc_aggregator.doc_comment import DocCommentBuilder
from doc_aggregator.doc_node import DocNode


@dataclass
class Chunk:
    """A doc-comment and the code directly after it, as split by the lexer."""

    comment: str
    code: str = ""
    linenr: int = 0


class SourceUnit:
    """Yields one ``DocNode`` per chunk, in file order. Can be iterated only once."""

    def __init__(
        self,
        filename: str,
        chunks: Iterable[Chunk],
        builder: DocCommentBuilder | None = None,
    ) -> None:
        """Initialize the unit with its file name and lexed chunks."""
        self.filename = filename
        self.chunks = chunks
        self.builder = builder or DocCommentBuilder()
        self._consumed = False

    def __iter__(self) -> Iterator[DocNode]:
        """Start the single pass over this unit's nodes."""
        if self._consumed:
            msg = f"Source unit {self.filename} has already been consumed"
            raise RuntimeError(msg)
        self._consumed = True
        return self._nodes()

    def _nodes(self) -> Iterator[DocNode]:
        for chunk in self.chunks:
            yield self.builder.build(chunk, self.filename)
