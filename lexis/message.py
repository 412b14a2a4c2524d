from __future__ import annotations
import json
from typing import Any, ClassVar, Dict, Type, TypeVar

M = TypeVar("M", bound="Message")


class DecodeError(ValueError):
    """Raised when a document cannot be decoded into a message."""
    pass


def decode_json(text: str | bytes) -> Any:
    """Parse JSON text, raising DecodeError instead of json's own error."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Invalid JSON: {e}") from e


class Message:
    """
    Base class for values exchanged over the bus.

    Subclasses define ``TYPE_NAME`` (the wire name), ``TOPIC`` (the bus
    topic) and the plain-field conversions ``to_dict`` / ``from_dict``.
    """

    TYPE_NAME: ClassVar[str]
    TOPIC: ClassVar[str]

    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        raise NotImplementedError

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls: Type[M], text: str | bytes) -> M:
        """
        Decode a message from JSON text.

        Raises:
            DecodeError: If the text is not JSON or does not have the
                message's shape.
        """
        data = decode_json(text)
        if not isinstance(data, dict):
            raise DecodeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
        try:
            return cls.from_dict(data)
        except DecodeError:
            raise
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise DecodeError(f"Malformed {cls.__name__} document: {e}") from e

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return f"{self.TYPE_NAME} {self.to_json()}"


def build_registry(*classes: type[Message]) -> Dict[str, type[Message]]:
    return {cls.TYPE_NAME: cls for cls in classes}
