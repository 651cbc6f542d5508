"""
Command ADTs for every supported S3 operation.

Each operation is a frozen dataclass carrying exactly the fields it needs,
with a ``kind`` literal discriminator. ``Command`` is the closed union of all
variants; the derivations in :mod:`s3command.derive` match on it exhaustively,
so adding a variant without extending every derivation is a mypy error and
an ``AssertionError`` at runtime.

Byte fields (``PutObject.content``, ``UploadPart.content``) are stored as
given, without copying. A caller passing a ``bytearray`` or ``memoryview`` must
not mutate the underlying buffer until every derivation for the command has
returned; :func:`owned_copy` detaches a command from caller buffers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Literal

from s3command.multipart import Buffer, ContentMd5, Md5Auto, Multipart, validate_part_number
from s3command.xml_types import (
    BucketConfiguration,
    BucketLifecycleConfiguration,
    CompleteMultipartUploadData,
    CorsConfiguration,
)

MAX_PRESIGN_EXPIRY_SECS = 604_800


def _validate_expiry(expiry_secs: int) -> None:
    if not 1 <= expiry_secs <= MAX_PRESIGN_EXPIRY_SECS:
        raise ValueError(
            f"expiry_secs must be in [1, {MAX_PRESIGN_EXPIRY_SECS}], got {expiry_secs}"
        )


def _validate_limit(name: str, value: int | None) -> None:
    if value is not None and value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


# --------------------------------------------------------------------------- #
# Object operations
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class HeadObject:
    kind: Literal["HeadObject"] = "HeadObject"


@dataclass(frozen=True)
class GetObject:
    kind: Literal["GetObject"] = "GetObject"


@dataclass(frozen=True)
class GetObjectRange:
    """Read bytes ``start..=end`` of an object; ``end=None`` reads to the end."""

    start: int
    end: int | None = None
    kind: Literal["GetObjectRange"] = "GetObjectRange"

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"range start must be non-negative, got {self.start}")
        if self.end is not None and self.end < self.start:
            raise ValueError(f"range end {self.end} precedes start {self.start}")


@dataclass(frozen=True)
class GetObjectTorrent:
    kind: Literal["GetObjectTorrent"] = "GetObjectTorrent"


@dataclass(frozen=True)
class GetObjectTagging:
    kind: Literal["GetObjectTagging"] = "GetObjectTagging"


@dataclass(frozen=True)
class PutObjectTagging:
    """Replace the tag set of an object.

    Attributes:
        tags: Serialized ``<Tagging>`` document; see :class:`~s3command.xml_types.Tagging`.
    """

    tags: str
    kind: Literal["PutObjectTagging"] = "PutObjectTagging"


@dataclass(frozen=True)
class DeleteObject:
    kind: Literal["DeleteObject"] = "DeleteObject"


@dataclass(frozen=True)
class DeleteObjectTagging:
    kind: Literal["DeleteObjectTagging"] = "DeleteObjectTagging"


@dataclass(frozen=True)
class CopyObject:
    """Server-side copy; ``source`` is ``"<bucket>/<key>"`` sent as x-amz-copy-source."""

    source: str
    kind: Literal["CopyObject"] = "CopyObject"


@dataclass(frozen=True)
class PutObject:
    """Upload an object, or one part of it when ``multipart`` is set.

    Attributes:
        content: Body bytes, borrowed from the caller.
        content_type: Sent verbatim as Content-Type.
        content_md5: Content-MD5 policy.
        multipart: Part addressing for multipart uploads.
        cache_control: Optional Cache-Control header.
        content_disposition: Optional Content-Disposition header.
    """

    content: Buffer
    content_type: str
    content_md5: ContentMd5 = field(default_factory=Md5Auto)
    multipart: Multipart | None = None
    cache_control: str | None = None
    content_disposition: str | None = None
    kind: Literal["PutObject"] = "PutObject"


# --------------------------------------------------------------------------- #
# Multipart lifecycle
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class InitiateMultipartUpload:
    content_type: str
    kind: Literal["InitiateMultipartUpload"] = "InitiateMultipartUpload"


@dataclass(frozen=True)
class UploadPart:
    part_number: int
    content: Buffer
    upload_id: str
    content_md5: ContentMd5 = field(default_factory=Md5Auto)
    kind: Literal["UploadPart"] = "UploadPart"

    def __post_init__(self) -> None:
        validate_part_number(self.part_number)

    def multipart(self) -> Multipart:
        return Multipart(part_number=self.part_number, upload_id=self.upload_id)


@dataclass(frozen=True)
class AbortMultipartUpload:
    upload_id: str
    kind: Literal["AbortMultipartUpload"] = "AbortMultipartUpload"


@dataclass(frozen=True)
class CompleteMultipartUpload:
    upload_id: str
    data: CompleteMultipartUploadData
    cache_control: str | None = None
    content_disposition: str | None = None
    kind: Literal["CompleteMultipartUpload"] = "CompleteMultipartUpload"


@dataclass(frozen=True)
class ListMultipartUploads:
    prefix: str | None = None
    delimiter: str | None = None
    key_marker: str | None = None
    max_uploads: int | None = None
    kind: Literal["ListMultipartUploads"] = "ListMultipartUploads"

    def __post_init__(self) -> None:
        _validate_limit("max_uploads", self.max_uploads)


# --------------------------------------------------------------------------- #
# Listing / location
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ListObjects:
    prefix: str
    delimiter: str | None = None
    marker: str | None = None
    max_keys: int | None = None
    kind: Literal["ListObjects"] = "ListObjects"

    def __post_init__(self) -> None:
        _validate_limit("max_keys", self.max_keys)


@dataclass(frozen=True)
class ListObjectsV2:
    prefix: str
    delimiter: str | None = None
    continuation_token: str | None = None
    start_after: str | None = None
    max_keys: int | None = None
    kind: Literal["ListObjectsV2"] = "ListObjectsV2"

    def __post_init__(self) -> None:
        _validate_limit("max_keys", self.max_keys)


@dataclass(frozen=True)
class GetBucketLocation:
    kind: Literal["GetBucketLocation"] = "GetBucketLocation"


# --------------------------------------------------------------------------- #
# Bucket & presign operations
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class CreateBucket:
    config: BucketConfiguration
    kind: Literal["CreateBucket"] = "CreateBucket"


@dataclass(frozen=True)
class DeleteBucket:
    kind: Literal["DeleteBucket"] = "DeleteBucket"


@dataclass(frozen=True)
class ListBuckets:
    kind: Literal["ListBuckets"] = "ListBuckets"


@dataclass(frozen=True)
class PutBucketCors:
    configuration: CorsConfiguration
    kind: Literal["PutBucketCors"] = "PutBucketCors"


@dataclass(frozen=True)
class GetBucketLifecycle:
    kind: Literal["GetBucketLifecycle"] = "GetBucketLifecycle"


@dataclass(frozen=True)
class PutBucketLifecycle:
    configuration: BucketLifecycleConfiguration
    kind: Literal["PutBucketLifecycle"] = "PutBucketLifecycle"


@dataclass(frozen=True)
class DeleteBucketLifecycle:
    kind: Literal["DeleteBucketLifecycle"] = "DeleteBucketLifecycle"


@dataclass(frozen=True)
class PresignGet:
    expiry_secs: int
    custom_queries: Mapping[str, str] | None = None
    kind: Literal["PresignGet"] = "PresignGet"

    def __post_init__(self) -> None:
        _validate_expiry(self.expiry_secs)


@dataclass(frozen=True)
class PresignPut:
    expiry_secs: int
    custom_headers: Mapping[str, str] | None = None
    custom_queries: Mapping[str, str] | None = None
    kind: Literal["PresignPut"] = "PresignPut"

    def __post_init__(self) -> None:
        _validate_expiry(self.expiry_secs)


@dataclass(frozen=True)
class PresignDelete:
    expiry_secs: int
    kind: Literal["PresignDelete"] = "PresignDelete"

    def __post_init__(self) -> None:
        _validate_expiry(self.expiry_secs)


ObjectCommand = (
    HeadObject
    | GetObject
    | GetObjectRange
    | GetObjectTorrent
    | GetObjectTagging
    | PutObjectTagging
    | DeleteObject
    | DeleteObjectTagging
    | CopyObject
    | PutObject
)

MultipartCommand = (
    InitiateMultipartUpload
    | UploadPart
    | AbortMultipartUpload
    | CompleteMultipartUpload
    | ListMultipartUploads
)

ListingCommand = ListObjects | ListObjectsV2 | GetBucketLocation

BucketCommand = (
    CreateBucket
    | DeleteBucket
    | ListBuckets
    | PutBucketCors
    | GetBucketLifecycle
    | PutBucketLifecycle
    | DeleteBucketLifecycle
)

PresignCommand = PresignGet | PresignPut | PresignDelete

# Master Command union - closed set matched exhaustively by every derivation
Command = ObjectCommand | MultipartCommand | ListingCommand | BucketCommand | PresignCommand


def owned_copy(command: Command) -> Command:
    """Return an equal command whose byte fields are private ``bytes`` copies."""
    match command:
        case PutObject(content=content) | UploadPart(content=content):
            return replace(command, content=bytes(content))
        case _:
            return command


__all__ = [
    "AbortMultipartUpload",
    "BucketCommand",
    "Command",
    "CompleteMultipartUpload",
    "CopyObject",
    "CreateBucket",
    "DeleteBucket",
    "DeleteBucketLifecycle",
    "DeleteObject",
    "DeleteObjectTagging",
    "GetBucketLifecycle",
    "GetBucketLocation",
    "GetObject",
    "GetObjectRange",
    "GetObjectTagging",
    "GetObjectTorrent",
    "HeadObject",
    "InitiateMultipartUpload",
    "ListBuckets",
    "ListMultipartUploads",
    "ListObjects",
    "ListObjectsV2",
    "ListingCommand",
    "MAX_PRESIGN_EXPIRY_SECS",
    "MultipartCommand",
    "ObjectCommand",
    "PresignCommand",
    "PresignDelete",
    "PresignGet",
    "PresignPut",
    "PutBucketCors",
    "PutBucketLifecycle",
    "PutObject",
    "PutObjectTagging",
    "UploadPart",
    "owned_copy",
]
