"""
Input Controls

An Input is a typed data field, usually edited through a form control. It maps
to a key/value pair in application/x-www-form-urlencoded or to a body part in
multipart/form-data. Rendering concerns belong to the codec of each media type.
"""

from typing import Any


class Input:
    """A form field descriptor: identifier, default value and constraints."""

    def __init__(self, id: Any = None, value: Any = None) -> None:
        self._id: str = id if isinstance(id, str) else ""
        self._value: Any = value if value is not None else ""
        self._accept: list[str] | None = None
        self._required: bool | None = None
        self._label: str | None = None
        self._hidden: bool | None = None
        self._readonly: bool | None = None
        self._options: list[Any] | None = None
        self._regexp: str | None = None

    def __repr__(self) -> str:
        return f"Input(id={self._id!r}, value={self._value!r})"

    # ------------------------------------------------------------------
    # Setters: a malformed argument keeps the previous value
    # ------------------------------------------------------------------

    def set_id(self, id: Any) -> "Input":
        """Set the identifier. Should be globally unique within a document."""
        if isinstance(id, str):
            self._id = id
        return self

    def set_value(self, value: Any) -> "Input":
        """Set the default value. Use '' when no value is necessary."""
        if value is not None:
            self._value = value
        return self

    def set_accept(self, accept: Any) -> "Input":
        """Set the media types the value may be encoded as, e.g. ['text/plain']."""
        if isinstance(accept, list) and accept:
            self._accept = accept
        return self

    def set_required(self, required: Any) -> "Input":
        if isinstance(required, bool):
            self._required = required
        return self

    def set_label(self, label: Any) -> "Input":
        """Set a human readable label."""
        if isinstance(label, str):
            self._label = label
        return self

    def set_hidden(self, hidden: Any) -> "Input":
        """Mark the control as passed along for state only."""
        if isinstance(hidden, bool):
            self._hidden = hidden
        return self

    def set_readonly(self, readonly: Any) -> "Input":
        if isinstance(readonly, bool):
            self._readonly = readonly
        return self

    def set_value_options(self, options: Any) -> "Input":
        """Set the selectable options. Must be a non-empty list."""
        if isinstance(options, list) and options:
            self._options = options
        return self

    def set_regexp(self, regexp: Any) -> "Input":
        """Set a regular expression a user agent validates the value against."""
        if isinstance(regexp, str):
            self._regexp = regexp
        return self

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_id(self) -> str:
        return self._id

    def get_value(self) -> Any:
        return self._value

    def get_accept(self) -> list[str] | None:
        return self._accept

    def get_required(self) -> bool | None:
        return self._required

    def get_label(self) -> str | None:
        return self._label

    def get_hidden(self) -> bool | None:
        return self._hidden

    def get_readonly(self) -> bool | None:
        return self._readonly

    def get_value_options(self) -> list[Any] | None:
        return self._options

    def get_regexp(self) -> str | None:
        return self._regexp

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_plain(self) -> dict[str, Any]:
        """Plain dict of the public fields; absent optional fields are omitted."""
        plain = {
            "id": self._id,
            "value": self._value,
            "accept": self._accept,
            "required": self._required,
            "label": self._label,
            "hidden": self._hidden,
            "readonly": self._readonly,
            "options": self._options,
            "regexp": self._regexp,
        }
        return {key: value for key, value in plain.items() if value is not None}

    def copy(self) -> "Input":
        """New Input with the same fields. Lists are shared, not cloned."""
        return (
            Input(self._id, self._value)
            .set_accept(self._accept)
            .set_required(self._required)
            .set_label(self._label)
            .set_hidden(self._hidden)
            .set_readonly(self._readonly)
            .set_value_options(self._options)
            .set_regexp(self._regexp)
        )

    # ------------------------------------------------------------------
    # Type checks and revival
    # ------------------------------------------------------------------

    @staticmethod
    def is_input(obj: Any) -> bool:
        """Strict type test."""
        return isinstance(obj, Input)

    @staticmethod
    def can_revive(obj: Any) -> bool:
        """Duck-type test: a dict with a string id and a defined value."""
        return (
            isinstance(obj, dict)
            and isinstance(obj.get("id"), str)
            and "value" in obj
        )

    @classmethod
    def revive(cls, obj: Any) -> "Input | None":
        """Rebuild an Input from a plain dict; None if it cannot be revived."""
        if not cls.can_revive(obj):
            return None
        return (
            cls(obj["id"], obj["value"])
            .set_accept(obj.get("accept"))
            .set_required(obj.get("required"))
            .set_label(obj.get("label"))
            .set_hidden(obj.get("hidden"))
            .set_readonly(obj.get("readonly"))
            .set_value_options(obj.get("options"))
            .set_regexp(obj.get("regexp"))
        )


def input_control(id: Any = None, value: Any = None) -> Input:
    """Convenience factory for an Input."""
    return Input(id, value)
