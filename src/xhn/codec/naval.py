"""NavAL JSON codec.

Encodes Affordance and Affordances trees into NavAL JSON and revives them
back. Documents carry no type field by default, so decoding infers each node's
type from its shape, innermost values first. Affordance is tried before Input,
and Input before Affordances: the narrowest shape must win.

With tagging enabled every node also carries a ``kind`` field. A document whose
root is tagged is decoded from tags alone, so plain data shaped like a node
stays plain. Untagged documents fall back to shape inference.

Only ``children`` and ``inputs`` hold nodes. Metadata, input values and
options are never revived, so a decoded tree always encodes again.
"""

from typing import Any, Callable

from xhn.core.config import Settings
from xhn.core.json import JSONParseError, loads_json, safe_json_dumps
from xhn.core.logging_config import get_logger
from xhn.core.tracing import trace_operation
from xhn.model import Affordance, Affordances, Input
from xhn.monitoring import metrics_collector

from .plugin import Plugin

logger = get_logger(__name__)

MEDIA_TYPE = "application/naval+json"
KIND_FIELD = "kind"
STRUCTURAL_FIELDS = ("children", "inputs")
DEFAULT_MAX_DEPTH = 64

Reviver = Callable[[Any], Any]

# Priority order matters: narrower shapes first
_SHAPES: list[tuple[Callable[[Any], bool], Reviver]] = [
    (Affordance.can_revive, Affordance.revive),
    (Input.can_revive, Input.revive),
    (Affordances.can_revive, Affordances.revive),
]

_KINDS: dict[str, Reviver] = {
    "affordance": Affordance.revive,
    "input": Input.revive,
    "affordances": Affordances.revive,
}


def is_tagged(value: Any) -> bool:
    """True if the value is a dict carrying a recognised ``kind``."""
    if not isinstance(value, dict):
        return False
    kind = value.get(KIND_FIELD)
    return isinstance(kind, str) and kind in _KINDS


def revive_node(obj: dict[str, Any], tagged: bool = False) -> Any:
    """
    Revive one dict whose nested nodes are already revived.

    A recognised tag wins. In a tagged document an untagged dict is a plain
    value; otherwise its type is inferred from its shape.
    """
    if is_tagged(obj):
        node = _KINDS[obj[KIND_FIELD]](obj)
        if node is not None:
            return node
    if tagged:
        return obj

    for can_revive, revive in _SHAPES:
        if can_revive(obj):
            return revive(obj)
    return obj


def revive_document(value: Any, tagged: bool | None = None) -> Any:
    """
    Walk a parsed document bottom-up and revive every recognisable node.

    Only the structural fields (``children`` and ``inputs``) are descended
    into. Metadata, input values and options stay plain data. A document whose
    root carries a recognised tag is revived from tags alone.
    """
    if tagged is None:
        tagged = is_tagged(value)
    if isinstance(value, list):
        return [revive_document(item, tagged) for item in value]
    if isinstance(value, dict):
        revived = {
            key: revive_document(item, tagged) if key in STRUCTURAL_FIELDS else item
            for key, item in value.items()
        }
        return revive_node(revived, tagged)
    return value


def tag_document(node: Any) -> Any:
    """Plain form of a node with a ``kind`` field on every nested node."""
    if isinstance(node, Affordances):
        plain = node.to_plain()
        plain["children"] = [tag_document(child) for child in node.get_children()]
        plain[KIND_FIELD] = "affordances"
        return plain
    if isinstance(node, Affordance):
        plain = node.to_plain()
        if "inputs" in plain:
            plain["inputs"] = [tag_document(control) for control in node.get_inputs()]
        plain[KIND_FIELD] = "affordance"
        return plain
    if isinstance(node, Input):
        plain = node.to_plain()
        plain[KIND_FIELD] = "input"
        return plain
    return node


class NavalCodec(Plugin):
    """NavAL JSON encoder/decoder."""

    media_type = MEDIA_TYPE

    def __init__(
        self,
        indent: int = 4,
        tagged: bool = False,
        max_size: int | None = None,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
    ) -> None:
        super().__init__()
        self.indent = indent
        self.tagged = tagged
        self.max_size = max_size
        self.max_depth = max_depth

    @classmethod
    def from_settings(cls, settings: Settings) -> "NavalCodec":
        return cls(
            indent=settings.document_indent,
            tagged=settings.tagged_documents,
            max_size=settings.max_document_size,
            max_depth=settings.max_document_depth,
        )

    def to_document(self, hypermedia: Any) -> Any:
        """Plain structure that encode() serializes."""
        if self.tagged:
            return tag_document(hypermedia)
        if isinstance(hypermedia, (Affordance, Affordances, Input)):
            return hypermedia.to_plain()
        return hypermedia

    def encode(self, hypermedia: Any) -> str:
        """Encode an Affordance or Affordances as NavAL JSON."""
        if self._encode_delegate is not None:
            return super().encode(hypermedia)
        return safe_json_dumps(self.to_document(hypermedia), indent=self.indent)

    def decode(self, text: Any) -> Affordance | Affordances | None:
        """
        Revive a NavAL JSON document.

        Returns:
            The root Affordance or Affordances; None if the text is not valid
            JSON, breaks the size or depth limits, or does not revive to an
            affordance tree at its root.
        """
        if self._decode_delegate is not None:
            return super().decode(text)

        with trace_operation("document_decode"):
            try:
                parsed = loads_json(text, max_size=self.max_size, max_depth=self.max_depth)
                document = revive_document(parsed)
            except (JSONParseError, RecursionError) as e:
                logger.warning("document_decode_failed", error=str(e))
                metrics_collector.record_decode("invalid")
                return None

            if isinstance(document, (Affordance, Affordances)):
                metrics_collector.record_decode("success")
                return document

            logger.warning("document_not_revivable", root=type(document).__name__)
            metrics_collector.record_decode("unrecognized")
            return None


# Default NavAL codec instance
naval = NavalCodec()
