"""ADTs for request-building failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class InvalidRequest:
    """Command cannot be turned into an HTTP request for the given target.

    Raised for addressing problems only (a missing bucket or key); the command
    itself is always valid once constructed.
    """

    operation: str
    message: str
    kind: Literal["InvalidRequest"] = "InvalidRequest"


__all__ = ["InvalidRequest"]
