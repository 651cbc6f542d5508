"""ADTs for configuration serialization failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeVar

from s3command.result import Result


@dataclass(frozen=True)
class SerializationFailed:
    """A structured configuration could not be rendered to its wire bytes.

    Attributes:
        subject: Name of the configuration being serialized
            (e.g. ``"BucketLifecycleConfiguration"``).
        message: Human readable reason.
    """

    subject: str
    message: str
    kind: Literal["SerializationFailed"] = "SerializationFailed"


SerializationError = SerializationFailed

T = TypeVar("T")
SerializationResult = Result[T, SerializationError]

__all__ = [
    "SerializationError",
    "SerializationFailed",
    "SerializationResult",
]
