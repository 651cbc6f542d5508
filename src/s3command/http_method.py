"""HTTP methods used by the S3 API."""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """Closed set of verbs a :class:`~s3command.command.Command` can map to."""

    DELETE = "DELETE"
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    HEAD = "HEAD"

    def __str__(self) -> str:
        return self.value


__all__ = ["HttpMethod"]
