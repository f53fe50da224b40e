"""
Affordance collections.

An Affordances instance is an ordered collection of Affordance and Affordances
nodes, nested to any depth. Collection metadata cascades onto every nested
node when that node is copied out of the tree.

Identifiers should be globally unique across a tree. Lookups assume it and
return the first depth-first match.
"""

from typing import Any, Callable, Iterator, Union

from .affordance import Affordance
from .metadata import Metadata, cascade

Node = Union[Affordance, "Affordances"]


class Affordances:
    """A composite node holding Affordance and Affordances children."""

    def __init__(self, id: Any = None) -> None:
        self._id: str | None = id if isinstance(id, str) else None
        self._metadata: Metadata | None = None
        self._children: list[Node] = []

    def __repr__(self) -> str:
        return f"Affordances(id={self._id!r}, children={len(self._children)})"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def set_id(self, id: Any) -> "Affordances":
        if isinstance(id, str):
            self._id = id
        return self

    def set_metadata(self, metadata: Any) -> "Affordances":
        """Set protocol metadata shared by every nested node."""
        if isinstance(metadata, dict):
            self._metadata = metadata
        return self

    def get_id(self) -> str | None:
        return self._id

    def get_metadata(self) -> Metadata | None:
        return self._metadata

    def get_children(self) -> list[Node]:
        return list(self._children)

    def get_count(self) -> int:
        """Number of direct children. Nested collections are not counted into."""
        return len(self._children)

    def get_affordance_at_index(self, index: Any) -> Node | None:
        if not isinstance(index, int) or index < 0 or index >= len(self._children):
            return None
        return self._children[index]

    def get_last_affordance(self) -> Node | None:
        return self.get_affordance_at_index(len(self._children) - 1)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_affordance(self, node: Any) -> "Affordances":
        """
        Append an Affordance or Affordances.

        A node already present at this level (by reference) is ignored, as is
        a collection that is, or already contains, this collection.
        """
        if not isinstance(node, (Affordance, Affordances)):
            return self
        if any(child is node for child in self._children):
            return self
        if isinstance(node, Affordances) and (node is self or node._contains(self)):
            return self
        self._children.append(node)
        return self

    def _contains(self, target: "Affordances", path: frozenset[int] = frozenset()) -> bool:
        path = path | {id(self)}
        for child in self._children:
            if child is target:
                return True
            if isinstance(child, Affordances) and id(child) not in path:
                if child._contains(target, path):
                    return True
        return False

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def has_affordance_with_id(self, affordance_id: Any) -> bool:
        """True if any nested Affordance or Affordances carries the identifier."""
        if not isinstance(affordance_id, str):
            return False
        return self._find(affordance_id, [], frozenset()) is not None

    def copy_affordance_by_id(self, affordance_id: Any) -> Node | None:
        """
        Copy of the first node carrying the identifier, or None.

        A copy is returned rather than a reference so per-response changes
        never leak into later lookups. The copy's metadata is cascaded from
        every ancestor on the path to it: nearer ancestors override farther
        ones, and the node's own metadata overrides all of them.
        """
        if not isinstance(affordance_id, str):
            return None
        found = self._find(affordance_id, [], frozenset())
        if found is None:
            return None
        node, chain = found
        return node.copy(metadata=cascade([*chain, node.get_metadata()]))

    def _find(
        self,
        affordance_id: str,
        chain: list[Metadata | None],
        path: frozenset[int],
    ) -> tuple[Node, list[Metadata | None]] | None:
        chain = [*chain, self._metadata]
        path = path | {id(self)}
        for child in self._children:
            if child.get_id() == affordance_id:
                return child, chain
            if isinstance(child, Affordances) and id(child) not in path:
                found = child._find(affordance_id, chain, path)
                if found is not None:
                    return found
        return None

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def for_each_affordance(self, callback: Callable[[Affordance], Any]) -> "Affordances":
        """
        Invoke the callback once for every nested Affordance, depth-first.

        Collections are expanded but never passed to the callback. There is no
        way to stop the loop early; use iter_affordances() for that.
        """
        if callable(callback):
            for leaf in self.iter_affordances():
                callback(leaf)
        return self

    def iter_affordances(self) -> Iterator[Affordance]:
        """Yield every nested Affordance in pre-order."""
        yield from self._iter(frozenset())

    def _iter(self, path: frozenset[int]) -> Iterator[Affordance]:
        path = path | {id(self)}
        for child in self._children:
            if isinstance(child, Affordances):
                if id(child) not in path:
                    yield from child._iter(path)
            else:
                yield child

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def cascade_metadata(self, parent_metadata: Any) -> "Affordances":
        """Copy of this collection with the parent's metadata cascaded onto it."""
        return self.copy(metadata=cascade([parent_metadata, self._metadata]))

    def copy(self, **overrides: Any) -> "Affordances":
        """New collection with every child recursively copied."""
        return self._copy(frozenset(), overrides.get("metadata", self._metadata))

    def _copy(self, path: frozenset[int], metadata: Metadata | None) -> "Affordances":
        path = path | {id(self)}
        duplicate = Affordances(self._id)
        duplicate._metadata = metadata
        for child in self._children:
            if isinstance(child, Affordances):
                if id(child) not in path:
                    duplicate.add_affordance(child._copy(path, child._metadata))
            else:
                duplicate.add_affordance(child.copy())
        return duplicate

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_plain(self) -> dict[str, Any]:
        plain: dict[str, Any] = {}
        if self._id is not None:
            plain["id"] = self._id
        if self._metadata is not None:
            plain["metadata"] = self._metadata
        plain["children"] = [child.to_plain() for child in self._children]
        return plain

    @staticmethod
    def is_affordances(obj: Any) -> bool:
        """Strict type test."""
        return isinstance(obj, Affordances)

    @staticmethod
    def can_revive(obj: Any) -> bool:
        """Duck-type test: a dict with a children list."""
        return isinstance(obj, dict) and isinstance(obj.get("children"), list)

    @classmethod
    def revive(cls, obj: Any) -> "Affordances | None":
        """Rebuild a collection from a plain dict; None if it cannot be revived."""
        if not cls.can_revive(obj):
            return None
        instance = cls().set_id(obj.get("id")).set_metadata(obj.get("metadata"))
        for child in obj["children"]:
            if not isinstance(child, (Affordance, Affordances)):
                child = Affordance.revive(child) or cls.revive(child)
            instance.add_affordance(child)
        return instance


def affordances(id: Any = None) -> Affordances:
    """Convenience factory for an Affordances collection."""
    return Affordances(id)
