"""
Affordances as action possibilities.

Gibson introduced the term for all "action possibilities" latent in an
environment. Here an Affordance is one action possibility on a
resource-oriented web API: a protocol method, a target URI, optional relation,
metadata and input controls, plus a table of which affordances each response
to it should carry.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from .input import Input
from .metadata import Metadata, merge_metadata

DEFAULT_MESSAGE_KEY = "*"


@dataclass
class Response:
    """Mutable response draft handed to request handlers."""

    status_code: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


RequestHandler = Callable[[Any, Any], Any]


def default_request_handler(request: Any, response: Any) -> None:
    """Report success with an empty JSON body."""
    response.status_code = "200"
    response.headers = {"Content-Type": "application/json"}
    response.body = "{}"


class Affordance:
    """A single named action: method + target + optional inputs and metadata."""

    def __init__(self, id: Any = None, method: Any = None, uri: Any = None) -> None:
        self._id: str = id if isinstance(id, str) else ""
        self._method: str = method if isinstance(method, str) else ""
        self._uri: str = uri if isinstance(uri, str) else ""
        self._relation: str | None = None
        self._metadata: Metadata | None = None
        self._inputs: list[Input] = []
        self._messages: dict[str, list[str]] = {DEFAULT_MESSAGE_KEY: [self._id]}
        self._handler: RequestHandler = default_request_handler

    def __repr__(self) -> str:
        return f"Affordance(id={self._id!r}, method={self._method!r}, uri={self._uri!r})"

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_relation(self, relation: Any) -> "Affordance":
        """Set the IANA link relation."""
        if isinstance(relation, str):
            self._relation = relation
        return self

    def set_metadata(self, metadata: Any) -> "Affordance":
        """Set protocol metadata, e.g. {'Content-Type': 'application/json'}."""
        if isinstance(metadata, dict):
            self._metadata = metadata
        return self

    def add_input(self, control: Any) -> "Affordance":
        """Append an Input, treating the affordance as a form. Duplicates are ignored."""
        if Input.is_input(control) and not any(c is control for c in self._inputs):
            self._inputs.append(control)
        return self

    def add_message(self, response_code: Any, message: Any) -> "Affordance":
        """
        Declare which affordance ids a response with this code carries.

        Ignored unless the code is a string and the message is a non-empty
        list of strings.
        """
        if (
            isinstance(response_code, str)
            and isinstance(message, list)
            and message
            and all(isinstance(id, str) for id in message)
        ):
            self._messages[response_code] = message
        return self

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_id(self) -> str:
        return self._id

    def get_method(self) -> str:
        return self._method

    def get_uri(self) -> str:
        return self._uri

    def get_relation(self) -> str | None:
        return self._relation

    def get_metadata(self) -> Metadata | None:
        return self._metadata

    def get_inputs(self) -> list[Input]:
        return list(self._inputs)

    def get_messages(self) -> dict[str, list[str]]:
        return dict(self._messages)

    def get_message(self, response_code: Any) -> list[str]:
        """Message for the response code, falling back to the '*' default."""
        message = self._messages.get(response_code) if isinstance(response_code, str) else None
        return message if message else self._messages[DEFAULT_MESSAGE_KEY]

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    def request_handler(self, request: Any, response: Any) -> Any:
        """Service an incoming request with the installed handler."""
        return self._handler(request, response)

    def add_request_handler(self, handler: Any) -> "Affordance":
        if callable(handler):
            self._handler = handler
        return self

    def remove_request_handler(self) -> "Affordance":
        self._handler = default_request_handler
        return self

    def has_request_handler(self) -> bool:
        """True when a handler other than the default is installed."""
        return self._handler is not default_request_handler

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def cascade_metadata(self, parent_metadata: Any) -> "Affordance":
        """
        Copy of this affordance with the parent's metadata cascaded onto it.

        The receiver is left untouched; its own keys win over the parent's.
        """
        return self.copy(metadata=merge_metadata(parent_metadata, self._metadata))

    def copy(self, **overrides: Any) -> "Affordance":
        """
        New Affordance with the same fields and copied inputs.

        Field values such as metadata are shared by reference. ``metadata``
        may be overridden for the copy.
        """
        duplicate = Affordance(self._id, self._method, self._uri).set_relation(self._relation)
        duplicate._metadata = overrides.get("metadata", self._metadata)
        for control in self._inputs:
            duplicate.add_input(control.copy())
        duplicate._messages = dict(self._messages)
        duplicate._handler = self._handler
        return duplicate

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_plain(self) -> dict[str, Any]:
        plain: dict[str, Any] = {"id": self._id, "method": self._method, "uri": self._uri}
        if self._relation is not None:
            plain["relation"] = self._relation
        if self._metadata is not None:
            plain["metadata"] = self._metadata
        if self._inputs:
            plain["inputs"] = [control.to_plain() for control in self._inputs]
        return plain

    @staticmethod
    def is_affordance(obj: Any) -> bool:
        """Strict type test."""
        return isinstance(obj, Affordance)

    @staticmethod
    def can_revive(obj: Any) -> bool:
        """Duck-type test: a dict with string id, method and uri."""
        return (
            isinstance(obj, dict)
            and isinstance(obj.get("id"), str)
            and isinstance(obj.get("method"), str)
            and isinstance(obj.get("uri"), str)
        )

    @classmethod
    def revive(cls, obj: Any) -> "Affordance | None":
        """
        Rebuild an Affordance from a plain dict; None if it cannot be revived.

        Inputs that are already Input instances are attached as they are;
        Input-shaped dicts are revived first. Anything else is dropped.
        """
        if not cls.can_revive(obj):
            return None
        instance = (
            cls(obj["id"], obj["method"], obj["uri"])
            .set_relation(obj.get("relation"))
            .set_metadata(obj.get("metadata"))
        )
        controls = obj.get("inputs")
        if isinstance(controls, list):
            for control in controls:
                instance.add_input(control if Input.is_input(control) else Input.revive(control))
        return instance


def affordance(id: Any = None, method: Any = None, uri: Any = None) -> Affordance:
    """Convenience factory for an Affordance."""
    return Affordance(id, method, uri)
