"""
Hypermediator.

Hands a HypermediaApi to a Plugin capable of bridging it to a live server.
Servers default to a random port ('0') and, without a host, accept
connections on any IPv4 address.
"""

from typing import Any

from returns.pipeline import is_successful

from xhn.codec import Plugin
from xhn.core.config import Settings
from xhn.core.logging_config import get_logger
from xhn.core.validate import validate_api

logger = get_logger(__name__)


class Hypermediator:
    """Spawns a server for a HypermediaApi through a Plugin bridge."""

    def __init__(self, extension: Any = None) -> None:
        self._plugin: Plugin | None = extension if Plugin.is_plugin(extension) else None
        self._port: str = "0"
        self._host: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings, extension: Any = None) -> "Hypermediator":
        return cls(extension).set_port(settings.port).set_host(settings.host)

    def set_plugin(self, extension: Any) -> "Hypermediator":
        if Plugin.is_plugin(extension):
            self._plugin = extension
        return self

    def get_plugin(self) -> Plugin | None:
        return self._plugin

    def set_port(self, port: Any) -> "Hypermediator":
        """Port as a string, e.g. '80'. '0' assigns a random port."""
        if isinstance(port, str) and port.isascii() and port.isdecimal():
            self._port = port
        return self

    def get_port(self) -> str:
        return self._port

    def set_host(self, host: Any) -> "Hypermediator":
        """Host as a string, e.g. '127.0.0.1'."""
        if isinstance(host, str):
            self._host = host
        return self

    def get_host(self) -> str | None:
        return self._host

    def mediate(self, api: Any) -> "Hypermediator":
        """Bridge the API to a server, if a plugin is set and the API can be hosted."""
        extension = self._plugin
        if extension is None:
            logger.warning("mediate_skipped", reason="no plugin")
            return self

        result = validate_api(api)
        if not is_successful(result):
            logger.warning("mediate_skipped", reason=result.failure().message)
            return self

        logger.info("mediating", api=api.get_id(), port=self._port, host=self._host)
        extension.bridge(api, self._port, self._host)
        return self


def hypermediator(extension: Any = None) -> Hypermediator:
    """Convenience factory for a Hypermediator."""
    return Hypermediator(extension)
