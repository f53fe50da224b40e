"""Media type codecs for affordance trees."""

from .plugin import Plugin, plugin
from .naval import NavalCodec, naval, revive_document, tag_document

__all__ = ["Plugin", "plugin", "NavalCodec", "naval", "revive_document", "tag_document"]
