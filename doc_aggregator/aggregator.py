"""Combines the documentation nodes of many source units into a class list."""

import copy
import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from doc_aggregator.class_registry import ClassRegistry
from doc_aggregator.deep_merge import deep_merge
from doc_aggregator.doc_comment import DocCommentBuilder
from doc_aggregator.doc_node import ClassNode, DocNode, MemberNode
from doc_aggregator.load_config import DEFAULT_CONFIG, load_config
from doc_aggregator.orphan_resolver import OrphanResolver
from doc_aggregator.source_unit import Chunk, SourceUnit

logger = logging.getLogger(__name__)


class Aggregator:
    """Feeds nodes into the class registry and orphan resolver, in order.

    Source units must be ingested one at a time. The current class context
    is reset for each unit, while classes and pooled orphans persist for the
    whole session.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """Initialize an empty aggregation session.

        A given ``config`` is merged over the defaults.
        """
        self.config = (
            deep_merge(copy.deepcopy(DEFAULT_CONFIG), config)
            if config is not None
            else load_config()
        )
        self.registry = ClassRegistry(on_new_class=self._on_new_class)
        self.orphans = OrphanResolver(self.registry, self.config)
        self.builder = DocCommentBuilder(self.config)
        self.finalized = False
        self.units_ingested = 0
        self.members_ingested = 0

    def _on_new_class(self, cls: ClassNode) -> None:
        self.orphans.drain_for(cls)

    def source_unit(self, filename: str, chunks: Iterable[Chunk]) -> SourceUnit:
        """Wrap lexed chunks in a source unit built with this session's config."""
        return SourceUnit(filename, chunks, self.builder)

    def ingest(self, source_unit: Iterable[DocNode]) -> None:
        """Consume every node of one source unit, in file order."""
        current_class: str | None = None
        for node in source_unit:
            current_class = self._register(node, current_class)
        self.units_ingested += 1

    def _register(self, node: DocNode, current_class: str | None) -> str | None:
        """Dispatch one node and return the current class afterwards."""
        if isinstance(node, ClassNode):
            return self.registry.add_class(node).name
        if isinstance(node, MemberNode):
            self.orphans.register_member(node, current_class)
            self.members_ingested += 1
            return current_class
        msg = f"Unsupported documentation node: {node!r}"
        raise TypeError(msg)

    def finalize(self) -> None:
        """Place every remaining orphan into a real, placeholder or global class."""
        self.orphans.resolve_named_orphans()
        self.orphans.resolve_anonymous_orphans()
        self.finalized = True
        logger.info(
            "Aggregated %d members into %d classes (%d placeholders, %d merges)",
            self.members_ingested,
            len(self.registry),
            len(self.registry.placeholders),
            self.registry.merge_count,
        )

    def result(self) -> list[DocNode]:
        """Return classes in order of first sighting, followed by unplaced orphans."""
        return [*self.registry.classes(), *self.orphans.pool]

    def uses_define_style(self) -> bool:
        """Check whether any class was declared with a configured code type."""
        code_types = set(self.config.get("event_options", {}).get("code_types", []))
        return any(cls.code_type in code_types for cls in self.registry.classes())

    def append_event_options(self) -> int:
        """Append the options parameter to every event's parameter list.

        Only applies when ``uses_define_style()``. Returns the number of events
        that received the parameter.
        """
        if not self.uses_define_style():
            return 0

        options = self.config.get("event_options", {})
        template = MemberNode(
            tagname="param",
            name=options.get("name", "eOpts"),
            type=options.get("type", "Object"),
            doc=options.get("doc", ""),
        )
        count = 0
        for cls in self.registry.classes():
            for event in cls.members.get("event", []):
                event.params.append(replace(template, params=[]))
                count += 1
        logger.debug("Appended %s to %d events", template.name, count)
        return count

    def stats(self) -> dict[str, Any]:
        """Summarize the session for diagnostics."""
        classes = self.registry.classes()
        return {
            "units": self.units_ingested,
            "classes": len(classes),
            "placeholders": list(self.registry.placeholders),
            "merges": self.registry.merge_count,
            "members": sum(len(cls.all_members()) for cls in classes),
            "orphans": len(self.orphans.pool),
            "finalized": self.finalized,
        }
