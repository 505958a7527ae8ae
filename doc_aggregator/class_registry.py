"""Logic for registering class declarations and merging redeclarations."""

import logging
from collections.abc import Callable

from doc_aggregator.doc_node import MEMBER_KINDS, ClassNode, MemberNode

logger = logging.getLogger(__name__)


def merge_classes(old: ClassNode, new: ClassNode) -> None:
    """Merge ``new`` into ``old`` in place. Values already set on ``old`` win.

    - extends/singleton/private/protected: keep old when truthy
    - mixins/alternate_class_names: concatenate, duplicates kept
    - xtypes: per-category concatenation
    - doc: keep old unless empty
    - members cfg and method: append, for a constructor or configs documented
      in a separate doc-comment

    Other member kinds and statics of ``new`` are not merged.
    """
    old.extends = old.extends or new.extends
    old.singleton = old.singleton or new.singleton
    old.private = old.private or new.private
    old.protected = old.protected or new.protected

    old.mixins = old.mixins + new.mixins
    old.alternate_class_names = old.alternate_class_names + new.alternate_class_names

    for key, xtypes in new.xtypes.items():
        old.xtypes[key] = old.xtypes.get(key, []) + xtypes

    old.doc = old.doc if old.doc else new.doc

    for kind in ("cfg", "method"):
        old.members[kind] = old.members.get(kind, []) + new.members.get(kind, [])


def add_to_class(cls: ClassNode, member: MemberNode) -> None:
    """Append ``member`` to the statics or members list of its kind."""
    if member.tagname not in MEMBER_KINDS:
        msg = f"Cannot attach {member.tagname} {member.name!r} to class {cls.name}"
        raise ValueError(msg)
    group = cls.statics if member.static else cls.members
    group.setdefault(member.tagname, []).append(member)


class ClassRegistry:
    """Owns every class record, keyed by class name, in order of first sighting."""

    def __init__(self, on_new_class: Callable[[ClassNode], None] | None = None) -> None:
        """Initialize an empty registry.

        ``on_new_class`` is called right after a class name is first registered.
        """
        self._classes: dict[str, ClassNode] = {}
        self.on_new_class = on_new_class
        self.placeholders: list[str] = []
        self.merge_count = 0

    def __contains__(self, name: object) -> bool:
        """Check whether a class of this name is registered."""
        return name in self._classes

    def __len__(self) -> int:
        """Return the number of registered classes."""
        return len(self._classes)

    def get(self, name: str) -> ClassNode | None:
        """Return the class record for ``name``, if any."""
        return self._classes.get(name)

    def classes(self) -> list[ClassNode]:
        """Return all class records in order of first sighting."""
        return list(self._classes.values())

    def add_class(self, node: ClassNode) -> ClassNode:
        """Register a new class or merge it into the existing record of that name.

        Returns the resident record.
        """
        old = self._classes.get(node.name)
        if old is not None:
            merge_classes(old, node)
            self.merge_count += 1
            logger.debug("Merged redeclaration of class %s", node.name)
            return old

        self._classes[node.name] = node
        logger.debug("Registered class %s", node.name)
        if self.on_new_class:
            self.on_new_class(node)
        return node

    def create_placeholder(self, name: str, doc: str = "") -> ClassNode:
        """Register an empty class for members whose owner was never declared."""
        if name not in self._classes:
            self.placeholders.append(name)
            logger.debug("Creating placeholder class %s", name)
        return self.add_class(ClassNode(name=name, doc=doc))
