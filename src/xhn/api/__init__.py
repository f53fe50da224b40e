"""Hypermedia API assembly and mediation."""

from .message import Message, Messages, message, messages
from .hapi import HypermediaApi, hapi
from .hypermediator import Hypermediator, hypermediator

__all__ = [
    "Message",
    "Messages",
    "message",
    "messages",
    "HypermediaApi",
    "hapi",
    "Hypermediator",
    "hypermediator",
]
