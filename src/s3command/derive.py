"""
Signing metadata derived from a :data:`~s3command.command.Command`.

A request builder needs four facts per command: the HTTP verb, the body's
byte length, its declared content type, and the hex SHA-256 of the body. The
signature binds length and digest together, so both are computed from one
authoritative byte source, :func:`payload`.

Type Safety:
    - Every derivation matches on the full Command union
    - ``assert_never`` turns a missing variant into a mypy error
    - Fallible derivations return Result, never a silent zero/empty default

All functions here are pure: they read the command and caller buffers only,
perform no I/O and are safe to call from several threads at once.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from s3command.command import (
    AbortMultipartUpload,
    Command,
    CompleteMultipartUpload,
    CopyObject,
    CreateBucket,
    DeleteBucket,
    DeleteBucketLifecycle,
    DeleteObject,
    DeleteObjectTagging,
    GetBucketLifecycle,
    GetBucketLocation,
    GetObject,
    GetObjectRange,
    GetObjectTagging,
    GetObjectTorrent,
    HeadObject,
    InitiateMultipartUpload,
    ListBuckets,
    ListMultipartUploads,
    ListObjects,
    ListObjectsV2,
    PresignDelete,
    PresignGet,
    PresignPut,
    PutBucketCors,
    PutBucketLifecycle,
    PutObject,
    PutObjectTagging,
    UploadPart,
)
from s3command.errors import CommandError, SerializationFailed
from s3command.exhaustive import assert_never
from s3command.http_method import HttpMethod
from s3command.multipart import Buffer, contiguous
from s3command.result import Failure, Result, Success

# SHA-256 of the empty byte string.
EMPTY_PAYLOAD_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

CONTENT_TYPE_XML = "application/xml"
CONTENT_TYPE_DEFAULT = "text/plain"

_EMPTY: Buffer = b""


def _encode_tags(tags: str) -> Result[Buffer, CommandError]:
    try:
        return Success(tags.encode("utf-8"))
    except UnicodeEncodeError as exc:
        return Failure(SerializationFailed(subject="PutObjectTagging", message=str(exc)))


def http_verb(command: Command) -> HttpMethod:
    """Map a command to its HTTP method."""
    match command:
        case (
            GetObject()
            | GetObjectRange()
            | GetObjectTorrent()
            | GetObjectTagging()
            | GetBucketLocation()
            | GetBucketLifecycle()
            | ListBuckets()
            | ListObjects()
            | ListObjectsV2()
            | ListMultipartUploads()
            | PresignGet()
        ):
            return HttpMethod.GET
        case (
            PutObject()
            | CopyObject()
            | PutObjectTagging()
            | UploadPart()
            | PutBucketCors()
            | CreateBucket()
            | PutBucketLifecycle()
            | PresignPut()
        ):
            return HttpMethod.PUT
        case (
            DeleteObject()
            | DeleteObjectTagging()
            | AbortMultipartUpload()
            | DeleteBucket()
            | DeleteBucketLifecycle()
            | PresignDelete()
        ):
            return HttpMethod.DELETE
        case InitiateMultipartUpload() | CompleteMultipartUpload():
            return HttpMethod.POST
        case HeadObject():
            return HttpMethod.HEAD
        case _:
            assert_never(command)


def payload(command: Command) -> Result[Buffer, CommandError]:
    """Return the exact bytes sent as the request body.

    Caller-supplied contiguous buffers are returned as-is, not copied; a
    strided memoryview is flattened once so length and digest read the same
    bytes. Structured bodies
    (tag sets, manifests, configurations) are serialized here, and a
    serialization failure is returned as ``Failure``.
    """
    match command:
        case PutObject(content=content) | UploadPart(content=content):
            return Success(contiguous(content))
        case PutObjectTagging(tags=tags):
            return _encode_tags(tags)
        case CompleteMultipartUpload(data=data):
            return data.to_xml().map(lambda text: text.encode("utf-8"))
        case CreateBucket(config=config):
            return config.location_constraint_payload().map(
                lambda body: _EMPTY if body is None else body
            )
        case PutBucketLifecycle(configuration=configuration):
            return configuration.to_xml_bytes()
        case PutBucketCors(configuration=configuration):
            return configuration.to_xml_bytes()
        case (
            HeadObject()
            | GetObject()
            | GetObjectRange()
            | GetObjectTorrent()
            | GetObjectTagging()
            | DeleteObject()
            | DeleteObjectTagging()
            | CopyObject()
            | InitiateMultipartUpload()
            | AbortMultipartUpload()
            | ListMultipartUploads()
            | ListObjects()
            | ListObjectsV2()
            | GetBucketLocation()
            | DeleteBucket()
            | ListBuckets()
            | GetBucketLifecycle()
            | DeleteBucketLifecycle()
            | PresignGet()
            | PresignPut()
            | PresignDelete()
        ):
            return Success(_EMPTY)
        case _:
            assert_never(command)


def _byte_length(body: Buffer) -> int:
    # memoryview len() counts items, not bytes, for non-byte formats
    return memoryview(body).nbytes


def _hex_sha256(body: Buffer) -> str:
    if _byte_length(body) == 0:
        return EMPTY_PAYLOAD_SHA256
    return hashlib.sha256(body).hexdigest()


def content_length(command: Command) -> Result[int, CommandError]:
    """Byte length of :func:`payload`; 0 for bodiless commands."""
    return payload(command).map(_byte_length)


def sha256_digest(command: Command) -> Result[str, CommandError]:
    """Hex SHA-256 of :func:`payload`; :data:`EMPTY_PAYLOAD_SHA256` when empty."""
    return payload(command).map(_hex_sha256)


def content_type(command: Command) -> str:
    """Declared Content-Type of the request body."""
    match command:
        case InitiateMultipartUpload(content_type=declared) | PutObject(content_type=declared):
            return declared
        case CompleteMultipartUpload() | PutBucketLifecycle():
            return CONTENT_TYPE_XML
        case (
            HeadObject()
            | GetObject()
            | GetObjectRange()
            | GetObjectTorrent()
            | GetObjectTagging()
            | PutObjectTagging()
            | DeleteObject()
            | DeleteObjectTagging()
            | CopyObject()
            | UploadPart()
            | AbortMultipartUpload()
            | ListMultipartUploads()
            | ListObjects()
            | ListObjectsV2()
            | GetBucketLocation()
            | CreateBucket()
            | DeleteBucket()
            | ListBuckets()
            | PutBucketCors()
            | GetBucketLifecycle()
            | DeleteBucketLifecycle()
            | PresignGet()
            | PresignPut()
            | PresignDelete()
        ):
            return CONTENT_TYPE_DEFAULT
        case _:
            assert_never(command)


@dataclass(frozen=True)
class RequestMetadata:
    """Everything the signing layer binds, derived from one payload.

    Attributes:
        method: HTTP verb.
        content_length: Byte length of ``body``.
        content_type: Declared Content-Type.
        sha256: Hex SHA-256 of ``body``.
        body: Exact bytes to transmit (borrowed when caller-supplied).
    """

    method: HttpMethod
    content_length: int
    content_type: str
    sha256: str
    body: Buffer


def describe(command: Command) -> Result[RequestMetadata, CommandError]:
    """Derive verb, length, type and digest in one pass over a single payload."""
    result = payload(command)
    match result:
        case Failure(error):
            return Failure(error)
        case Success(body):
            return Success(
                RequestMetadata(
                    method=http_verb(command),
                    content_length=_byte_length(body),
                    content_type=content_type(command),
                    sha256=_hex_sha256(body),
                    body=body,
                )
            )
        case _:
            assert_never(result)


__all__ = [
    "CONTENT_TYPE_DEFAULT",
    "CONTENT_TYPE_XML",
    "EMPTY_PAYLOAD_SHA256",
    "RequestMetadata",
    "content_length",
    "content_type",
    "describe",
    "http_verb",
    "payload",
    "sha256_digest",
]
