"""s3command error ADTs."""

from s3command.errors.request import InvalidRequest
from s3command.errors.serialization import (
    SerializationError,
    SerializationFailed,
    SerializationResult,
)

# The only error the derivation functions produce.
CommandError = SerializationError

# Errors surfaced by the request builder.
RequestError = SerializationError | InvalidRequest

__all__ = [
    "CommandError",
    "InvalidRequest",
    "RequestError",
    "SerializationError",
    "SerializationFailed",
    "SerializationResult",
]
