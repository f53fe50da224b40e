"""
xhn - hypermedia APIs as trees of affordances.

Model every action possibility of an API as Affordance and Affordances nodes,
declare which of them each request/response exchange carries, and let
HypermediaApi assemble and encode the response documents.
"""

from .model import (
    Input,
    input_control,
    Affordance,
    Response,
    affordance,
    Affordances,
    affordances,
    merge_metadata,
)
from .codec import Plugin, plugin, NavalCodec, naval
from .api import (
    Message,
    Messages,
    message,
    messages,
    HypermediaApi,
    hapi,
    Hypermediator,
    hypermediator,
)
from .core import Settings, get_settings, configure_logging, init_tracer

__version__ = "0.3.0"


def configure(settings: Settings | None = None) -> Settings:
    """Configure logging and tracing from settings; returns the settings used."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    if settings.enable_tracing:
        init_tracer("xhn")
    return settings


__all__ = [
    "Input",
    "input_control",
    "Affordance",
    "Response",
    "affordance",
    "Affordances",
    "affordances",
    "merge_metadata",
    "Plugin",
    "plugin",
    "NavalCodec",
    "naval",
    "Message",
    "Messages",
    "message",
    "messages",
    "HypermediaApi",
    "hapi",
    "Hypermediator",
    "hypermediator",
    "Settings",
    "configure",
]
