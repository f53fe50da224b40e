"""Affordance document model."""

from .input import Input, input_control
from .affordance import (
    Affordance,
    Response,
    RequestHandler,
    affordance,
    default_request_handler,
)
from .affordances import Affordances, affordances
from .metadata import merge_metadata, cascade

__all__ = [
    "Input",
    "input_control",
    "Affordance",
    "Response",
    "RequestHandler",
    "affordance",
    "default_request_handler",
    "Affordances",
    "affordances",
    "merge_metadata",
    "cascade",
]
