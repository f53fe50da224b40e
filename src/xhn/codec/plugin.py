"""
Plugin extensions.

A Plugin encodes affordance trees into one media type, decodes them back, and
may bridge a hypermedia API to a live server. Each capability is a delegate
callable that can be installed at runtime, or overridden by a subclass.
"""

from typing import Any, Callable


class Plugin:
    """Media type codec and server bridge extension point."""

    def __init__(self) -> None:
        self._encode_delegate: Callable[[Any], str] | None = None
        self._decode_delegate: Callable[[Any], Any] | None = None
        self._bridge_delegate: Callable[[Any, str, str | None], Any] | None = None

    def set_encode_delegate(self, delegate: Any) -> "Plugin":
        if callable(delegate):
            self._encode_delegate = delegate
        return self

    def set_decode_delegate(self, delegate: Any) -> "Plugin":
        if callable(delegate):
            self._decode_delegate = delegate
        return self

    def set_bridge_delegate(self, delegate: Any) -> "Plugin":
        if callable(delegate):
            self._bridge_delegate = delegate
        return self

    def can_bridge(self) -> bool:
        return self._bridge_delegate is not None

    def encode(self, hypermedia: Any) -> str:
        """Encode an Affordance or Affordances; '' when no encoder is installed."""
        if self._encode_delegate is None:
            return ""
        return self._encode_delegate(hypermedia)

    def decode(self, text: Any) -> Any:
        """Decode a document; None when no decoder is installed."""
        if self._decode_delegate is None:
            return None
        return self._decode_delegate(text)

    def bridge(self, api: Any, port: str, host: str | None = None) -> "Plugin":
        """Bind the API to a server listening on port (and host, if given)."""
        if self._bridge_delegate is not None:
            self._bridge_delegate(api, port, host)
        return self

    @staticmethod
    def is_plugin(obj: Any) -> bool:
        return isinstance(obj, Plugin)


def plugin() -> Plugin:
    """Convenience factory for an empty Plugin."""
    return Plugin()
