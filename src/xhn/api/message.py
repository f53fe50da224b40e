"""
Affordance-rich messages.

A Message maps one request/response exchange (the id of the requested
affordance plus a response code) to the ids of the affordances the response
document carries. Messages is the table of every exchange an API answers.
"""

from typing import Any


class Message:
    """The affordance ids sent back for one (request id, response code) exchange."""

    def __init__(self, request_id: Any, response_code: Any, message: Any) -> None:
        self._request_id: str = request_id if isinstance(request_id, str) else ""
        self._response_code: str = response_code if isinstance(response_code, str) else ""
        self._message: list[str] = (
            list(message)
            if isinstance(message, list) and all(isinstance(id, str) for id in message)
            else []
        )

    def __repr__(self) -> str:
        return (
            f"Message(request_id={self._request_id!r}, "
            f"response_code={self._response_code!r}, message={self._message!r})"
        )

    def get_request_id(self) -> str:
        return self._request_id

    def get_response_code(self) -> str:
        return self._response_code

    def get_message(self) -> list[str]:
        return list(self._message)

    def is_exchange(self, request_id: Any, response_code: Any) -> bool:
        return self._request_id == request_id and self._response_code == response_code

    def to_plain(self) -> dict[str, Any]:
        return {
            "request": self._request_id,
            "response": self._response_code,
            "message": list(self._message),
        }

    @staticmethod
    def is_message(obj: Any) -> bool:
        return isinstance(obj, Message)


class Messages:
    """Table of messages, at most one per exchange."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def add_message(self, entry: Any) -> "Messages":
        """Add a Message. Ignored when its exchange is already answered."""
        if (
            isinstance(entry, Message)
            and entry.get_message()
            and not self.has_message_for_exchange(entry.get_request_id(), entry.get_response_code())
        ):
            self._messages.append(entry)
        return self

    def has_message_for_exchange(self, request_id: Any, response_code: Any) -> bool:
        return self.get_message_for_exchange(request_id, response_code) is not None

    def get_message_for_exchange(self, request_id: Any, response_code: Any) -> Message | None:
        for entry in self._messages:
            if entry.is_exchange(request_id, response_code):
                return entry
        return None

    def get_count(self) -> int:
        return len(self._messages)

    def to_plain(self) -> list[dict[str, Any]]:
        return [entry.to_plain() for entry in self._messages]

    @staticmethod
    def is_messages(obj: Any) -> bool:
        return isinstance(obj, Messages)


def message(request_id: Any, response_code: Any, ids: Any) -> Message:
    """Convenience factory for a Message."""
    return Message(request_id, response_code, ids)


def messages() -> Messages:
    """Convenience factory for an empty Messages table."""
    return Messages()
