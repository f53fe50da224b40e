"""Cascading metadata.

Collection metadata spans every nested child. Lower depth wins: when keys
collide, a child's value overrides its ancestor's.
"""

from functools import reduce
from typing import Any, Iterable

Metadata = dict[str, Any]


def merge_metadata(parent: Any, child: Any) -> Metadata | None:
    """
    Merge parent metadata under child metadata.

    Neither argument is mutated. Anything that is not a dict counts as absent.

    Args:
        parent: Metadata of the enclosing collection
        child: Metadata of the node itself

    Returns:
        A new dict (parent fields first, child fields overriding), or None when
        neither side has metadata to contribute
    """
    parent_is_dict = isinstance(parent, dict)
    child_is_dict = isinstance(child, dict)
    if not (parent_is_dict or child_is_dict):
        return None

    merged: Metadata = {}
    if parent_is_dict:
        merged.update(parent)
    if child_is_dict:
        merged.update(child)
    return merged


def cascade(chain: Iterable[Any]) -> Metadata | None:
    """
    Fold a root-to-leaf chain of metadata into one value.

    Args:
        chain: Metadata values ordered from the outermost ancestor to the node

    Returns:
        Merged metadata with the nearest value winning, or None
    """
    return reduce(merge_metadata, chain, None)
