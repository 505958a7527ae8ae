"""Logic for holding members until their owning class is known."""

import logging
from typing import TYPE_CHECKING, Any

from doc_aggregator.class_registry import add_to_class
from doc_aggregator.doc_node import MEMBER_KINDS
from doc_aggregator.load_config import DEFAULT_CONFIG

if TYPE_CHECKING:
    from doc_aggregator.class_registry import ClassRegistry
    from doc_aggregator.doc_node import ClassNode, MemberNode

logger = logging.getLogger(__name__)


class OrphanResolver:
    """Places members into classes, pooling those whose class is not known yet.

    A member with an explicit owner waits in the pool until that class is
    registered. A member without an owner belongs to the current class, or is
    pooled when there is none.
    """

    def __init__(
        self, registry: "ClassRegistry", config: dict[str, Any] | None = None
    ) -> None:
        """Initialize the resolver over a class registry."""
        self.registry = registry
        self.pool: list["MemberNode"] = []
        global_class = (config or DEFAULT_CONFIG).get(
            "global_class", DEFAULT_CONFIG["global_class"]
        )
        self.global_name: str = global_class["name"]
        self.global_doc: str = global_class["doc"]

    def register_member(self, node: "MemberNode", current_class: str | None) -> None:
        """Attach ``node`` to its class, or pool it when the class is unknown."""
        if node.tagname not in MEMBER_KINDS:
            msg = f"Cannot register {node.tagname} {node.name!r} as a class member"
            raise ValueError(msg)

        if node.owner:
            cls = self.registry.get(node.owner)
            if cls is not None:
                add_to_class(cls, node)
            else:
                self.pool.append(node)
        elif current_class is not None and current_class in self.registry:
            node.owner = current_class
            add_to_class(self.registry.get(current_class), node)  # type: ignore[arg-type]
        else:
            self.pool.append(node)

    def drain_for(self, cls: "ClassNode") -> None:
        """Move every pooled member owned by ``cls`` into it."""
        matching = [node for node in self.pool if node.owner == cls.name]
        if not matching:
            return
        self.pool = [node for node in self.pool if node.owner != cls.name]
        for node in matching:
            add_to_class(cls, node)
        logger.debug("Attached %d pooled members to class %s", len(matching), cls.name)

    def resolve_named_orphans(self) -> None:
        """Create placeholder classes for every pooled member with an owner.

        Registering a placeholder drains all of its pooled members at once, so a
        single pass over a snapshot of the pool is enough.
        """
        for node in list(self.pool):
            if node.owner and node.owner not in self.registry:
                self.registry.create_placeholder(node.owner)

        # Owners registered without an on_new_class drain
        leftovers = [n for n in self.pool if n.owner and n.owner in self.registry]
        if leftovers:
            self.pool = [n for n in self.pool if not n.owner]
            for node in leftovers:
                self.register_member(node, None)

    def resolve_anonymous_orphans(self) -> "ClassNode | None":
        """Move all remaining pooled members into the global class.

        Does nothing, and creates no class, when the pool is empty.
        """
        if not self.pool:
            return None

        orphans, self.pool = self.pool, []
        cls = self.registry.create_placeholder(self.global_name, self.global_doc)
        for node in orphans:
            node.owner = cls.name
            add_to_class(cls, node)
        logger.debug("Placed %d ownerless members into class %s", len(orphans), cls.name)
        return cls
