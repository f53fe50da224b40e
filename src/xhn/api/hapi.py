"""
Hypermedia API.

A HypermediaApi knows every action possibility of an API (its request tree)
and, for each request/response exchange, which of them the response document
carries (its message table). Responding to an exchange copies those
affordances out of the request tree, with collection metadata cascaded onto
them, and encodes the result with the API's codec.

An API must have:
    globally unique affordance identifiers,
    at least one affordance,
    at least one affordance-rich message,
    a transfer protocol,
    a hypermedia-aware media type.
"""

import importlib.util
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from xhn.codec import NavalCodec, Plugin
from xhn.core.config import Settings
from xhn.core.json import safe_json_dumps
from xhn.core.logging_config import LogContext, get_logger
from xhn.core.tracing import trace_operation
from xhn.core.validate import RequestRegistration, ResponseRegistration
from xhn.model import Affordance, Affordances, Input
from xhn.monitoring import metrics_collector

from .message import Message, Messages

logger = get_logger(__name__)

DEFAULT_PROTOCOL = "HTTP/1.1"
DEFAULT_MEDIA_TYPE = NavalCodec.media_type


class HypermediaApi:
    """Builds hypermedia-aware responses for an API."""

    def __init__(self, id: Any = None, codec: Plugin | None = None) -> None:
        self._id: str | None = id if isinstance(id, str) else None
        self._protocol: str = DEFAULT_PROTOCOL
        self._media_type: str = DEFAULT_MEDIA_TYPE
        self._requests = Affordances()
        self._responses = Messages()
        self._codec: Plugin = codec if Plugin.is_plugin(codec) else NavalCodec()
        self._middleware_path: str | None = None
        self._incoming_request: Affordance | None = None

    @classmethod
    def from_settings(
        cls, settings: Settings, id: Any = None, codec: Plugin | None = None
    ) -> "HypermediaApi":
        """Create an API with protocol, media type and codec taken from settings."""
        return (
            cls(id, codec or NavalCodec.from_settings(settings))
            .set_protocol(settings.protocol)
            .set_media_type(settings.media_type)
        )

    def __repr__(self) -> str:
        return f"HypermediaApi(id={self._id!r}, requests={self._requests.get_count()})"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def set_id(self, id: Any) -> "HypermediaApi":
        if isinstance(id, str):
            self._id = id
        return self

    def get_id(self) -> str | None:
        return self._id

    def set_protocol(self, protocol: Any) -> "HypermediaApi":
        if isinstance(protocol, str):
            self._protocol = protocol
        return self

    def get_protocol(self) -> str:
        return self._protocol

    def set_media_type(self, media_type: Any) -> "HypermediaApi":
        if isinstance(media_type, str):
            self._media_type = media_type
        return self

    def get_media_type(self) -> str:
        return self._media_type

    def set_requests(self, requests: Any) -> "HypermediaApi":
        """Replace the tree of every request possibility."""
        if isinstance(requests, Affordances):
            self._requests = requests
        return self

    def get_requests(self) -> Affordances:
        return self._requests

    def set_responses(self, responses: Any) -> "HypermediaApi":
        """Replace the table of every response possibility."""
        if isinstance(responses, Messages):
            self._responses = responses
        return self

    def get_responses(self) -> Messages:
        return self._responses

    def set_codec(self, codec: Any) -> "HypermediaApi":
        if Plugin.is_plugin(codec):
            self._codec = codec
        return self

    def get_codec(self) -> Plugin:
        return self._codec

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_metadata(self, meta: Any) -> "HypermediaApi":
        """Set metadata on the last request added, or on the whole tree if there is none."""
        request = self._requests.get_last_affordance()
        if request is not None:
            request.set_metadata(meta)
        else:
            self._requests.set_metadata(meta)
        return self

    def add_request(self, id: Any, method: Any, uri: Any) -> "HypermediaApi":
        """Add a request possibility. Ignored if the identifier is already taken."""
        try:
            registration = RequestRegistration(id=id, method=method, uri=uri)
        except PydanticValidationError:
            return self
        if not self._requests.has_affordance_with_id(registration.id):
            self._requests.add_affordance(
                Affordance(registration.id, registration.method, registration.uri)
            )
        return self

    def add_input(self, control: Any) -> "HypermediaApi":
        """Revive a plain dict into an Input and add it to the last request added."""
        request = self._requests.get_last_affordance()
        if isinstance(request, Affordance) and Input.can_revive(control):
            request.add_input(Input.revive(control))
        return self

    def add_response(self, req: Any, res: Any, msg: Any) -> "HypermediaApi":
        """
        Add a response possibility for the exchange (req, res).

        Args:
            req: Identifier of the requested affordance, e.g. 'entry'
            res: Response code, e.g. '200'
            msg: Identifiers of the affordances the response carries,
                e.g. ['entry', 'get-users']

        Ignored if the exchange is already answered, or if req or any
        identifier in msg is unknown.
        """
        try:
            registration = ResponseRegistration(request=req, response=res, message=msg)
        except PydanticValidationError:
            return self
        if self._responses.has_message_for_exchange(registration.request, registration.response):
            return self
        if not self._requests.has_affordance_with_id(registration.request):
            return self
        if not all(self._requests.has_affordance_with_id(i) for i in registration.message):
            return self
        self._responses.add_message(
            Message(registration.request, registration.response, list(registration.message))
        )
        return self

    def set_middleware_path(self, directory: Any) -> "HypermediaApi":
        """Base directory that relative middleware paths resolve against."""
        if isinstance(directory, str):
            self._middleware_path = directory
        return self

    def add_middleware(self, middleware: Any) -> "HypermediaApi":
        """
        Install a request handler on the last request added.

        Args:
            middleware: A callable, or a path relative to the middleware path
                of a Python module that defines a callable named ``handler``
        """
        request = self._requests.get_last_affordance()
        if not isinstance(request, Affordance):
            return self

        if isinstance(middleware, str) and isinstance(self._middleware_path, str):
            handler = _load_middleware(Path(self._middleware_path) / middleware)
            if handler is not None:
                request.add_request_handler(handler)
        elif callable(middleware):
            request.add_request_handler(middleware)
        return self

    def for_each_request(self, callback: Callable[[Affordance], Any]) -> "HypermediaApi":
        self._requests.for_each_affordance(callback)
        return self

    # ------------------------------------------------------------------
    # Exchanges
    # ------------------------------------------------------------------

    def set_incoming_request(self, request: Any) -> "HypermediaApi":
        """Bind the affordance the current request targets."""
        if isinstance(request, Affordance):
            self._incoming_request = request
        return self

    def get_incoming_request(self) -> Affordance | None:
        return self._incoming_request

    def handle_request(self, request: Any, response: Any) -> "HypermediaApi":
        """Run the bound affordance's request handler, then unbind it."""
        incoming = self._incoming_request
        try:
            if isinstance(incoming, Affordance):
                with LogContext(request=incoming.get_id()):
                    incoming.request_handler(request, response)
                metrics_collector.record_handled_request(incoming.get_id())
        finally:
            self._incoming_request = None
        return self

    def respond(self, res: Any) -> str:
        """
        Encode the response document for the current exchange.

        Args:
            res: Response code, e.g. '200'

        Returns:
            The encoded document carrying every affordance the exchange's
            message lists, or '' when the exchange has no message.
        """
        incoming = self._incoming_request
        req = incoming.get_id() if isinstance(incoming, Affordance) else None
        outcome = {"status": "failed"}

        with metrics_collector.measure_duration(
            lambda duration: metrics_collector.record_document(outcome["status"], duration)
        ), LogContext(request=req, response=res), trace_operation(
            "document_assembly", request=req, response=res
        ) as span:
            entry = self._responses.get_message_for_exchange(req, res)
            if entry is None:
                logger.debug("no_message_for_exchange")
                outcome["status"] = "empty"
                return ""

            hypermedia = Affordances()
            for affordance_id in entry.get_message():
                hypermedia.add_affordance(self._requests.copy_affordance_by_id(affordance_id))
            if span is not None:
                span.set_tag("affordances", str(hypermedia.get_count()))

            document = self._codec.encode(hypermedia)
            outcome["status"] = "rendered"

        return document

    def can_host(self) -> bool:
        """True if the API can be hosted as a fully hypermedia-capable server."""
        return (
            bool(self._protocol)
            and bool(self._media_type)
            and self._requests.get_count() > 0
            and self._responses.get_count() > 0
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_plain(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "protocol": self._protocol,
            "mediatype": self._media_type,
            "requests": self._requests.to_plain(),
            "responses": self._responses.to_plain(),
        }

    def to_json(self) -> str:
        return safe_json_dumps(self.to_plain())

    # DSL aliases
    meta = add_metadata
    req = add_request
    input = add_input
    res = add_response
    use = add_middleware
    path = set_middleware_path

    @staticmethod
    def is_hapi(obj: Any) -> bool:
        return isinstance(obj, HypermediaApi)


def _load_middleware(path: Path) -> Callable[..., Any] | None:
    """Load the ``handler`` callable from a Python module file."""
    path = path.resolve()
    if not path.is_file():
        logger.warning("middleware_not_found", path=str(path))
        return None

    spec = importlib.util.spec_from_file_location(f"xhn_middleware_{path.stem}", path)
    if spec is None or spec.loader is None:
        logger.warning("middleware_not_loadable", path=str(path))
        return None

    try:
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.error("middleware_load_failed", path=str(path), error=str(e))
        return None

    handler = getattr(module, "handler", None)
    if not callable(handler):
        logger.warning("middleware_without_handler", path=str(path))
        return None
    return handler


def hapi(id: Any = None) -> HypermediaApi:
    """Convenience factory for a HypermediaApi."""
    return HypermediaApi(id)
