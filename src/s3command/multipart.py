"""
Multipart descriptors and Content-MD5 policies.

``Multipart`` binds a part number to its upload and renders the query string
that addresses that part. ``ContentMd5`` decides who supplies the Content-MD5
integrity header: the caller (``Md5Explicit``), nobody (``Md5Disabled``) or the
transport at send time (``Md5Auto``, the default).
"""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from typing import Literal

from s3command.exhaustive import assert_never

MIN_PART_NUMBER = 1
MAX_PART_NUMBER = 10_000

Buffer = bytes | bytearray | memoryview


def contiguous(buffer: Buffer) -> Buffer:
    """Return ``buffer`` unchanged, or a ``bytes`` copy of a strided memoryview.

    hashlib only reads C-contiguous buffers; the copy keeps the logical byte
    order, so its length equals the view's ``nbytes``.
    """
    if isinstance(buffer, memoryview) and not buffer.c_contiguous:
        return buffer.tobytes()
    return buffer


def validate_part_number(part_number: int) -> None:
    """Raise ValueError unless ``part_number`` is a valid S3 part number."""
    if isinstance(part_number, bool) or not isinstance(part_number, int):
        raise ValueError(f"part_number must be an int, got {type(part_number).__name__}")
    if not MIN_PART_NUMBER <= part_number <= MAX_PART_NUMBER:
        raise ValueError(
            f"part_number must be in [{MIN_PART_NUMBER}, {MAX_PART_NUMBER}], got {part_number}"
        )


@dataclass(frozen=True)
class Multipart:
    """Position of a part inside a multipart upload.

    Attributes:
        part_number: 1-based index of the part.
        upload_id: Identifier returned by InitiateMultipartUpload.
    """

    part_number: int
    upload_id: str

    def __post_init__(self) -> None:
        validate_part_number(self.part_number)

    def query_string(self) -> str:
        """Render ``?partNumber=<n>&uploadId=<id>``; values are not escaped."""
        return f"?partNumber={self.part_number}&uploadId={self.upload_id}"


@dataclass(frozen=True)
class Md5Explicit:
    """Caller-supplied base64 MD5 digest of the body."""

    digest: str
    kind: Literal["Md5Explicit"] = "Md5Explicit"


@dataclass(frozen=True)
class Md5Disabled:
    """Never send a Content-MD5 header."""

    kind: Literal["Md5Disabled"] = "Md5Disabled"


@dataclass(frozen=True)
class Md5Auto:
    """Let the transport compute Content-MD5 if the server requires it."""

    kind: Literal["Md5Auto"] = "Md5Auto"


ContentMd5 = Md5Explicit | Md5Disabled | Md5Auto


def content_md5_from_bytes(buffer: Buffer) -> Md5Explicit:
    """Return ``Md5Explicit(base64(MD5(buffer)))``."""
    digest = hashlib.md5(contiguous(buffer), usedforsecurity=False).digest()
    return Md5Explicit(digest=base64.b64encode(digest).decode("ascii"))


def resolve_content_md5(
    policy: ContentMd5, body: Buffer, *, server_requires: bool = False
) -> str | None:
    """Return the Content-MD5 header value to send, or None to omit it.

    Args:
        policy: How the digest is supplied.
        body: Exact bytes that will be transmitted.
        server_requires: Whether the target operation mandates Content-MD5.
    """
    match policy:
        case Md5Explicit(digest=digest):
            return digest
        case Md5Disabled():
            return None
        case Md5Auto():
            return content_md5_from_bytes(body).digest if server_requires else None
        case _:
            assert_never(policy)


__all__ = [
    "Buffer",
    "ContentMd5",
    "MAX_PART_NUMBER",
    "MIN_PART_NUMBER",
    "Md5Auto",
    "Md5Disabled",
    "Md5Explicit",
    "Multipart",
    "content_md5_from_bytes",
    "contiguous",
    "resolve_content_md5",
    "validate_part_number",
]
