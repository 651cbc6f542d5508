"""s3command: operation descriptors and signing metadata for S3-compatible storage."""

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
    owned_copy,
)
from s3command.derive import (
    EMPTY_PAYLOAD_SHA256,
    RequestMetadata,
    content_length,
    content_type,
    describe,
    http_verb,
    payload,
    sha256_digest,
)
from s3command.errors import CommandError, InvalidRequest, SerializationFailed
from s3command.http_method import HttpMethod
from s3command.multipart import (
    ContentMd5,
    Md5Auto,
    Md5Disabled,
    Md5Explicit,
    Multipart,
    content_md5_from_bytes,
)
from s3command.result import Failure, Result, Success

__all__ = [
    # Commands
    "Command",
    "AbortMultipartUpload",
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
    "PresignDelete",
    "PresignGet",
    "PresignPut",
    "PutBucketCors",
    "PutBucketLifecycle",
    "PutObject",
    "PutObjectTagging",
    "UploadPart",
    "owned_copy",
    # Derivations
    "EMPTY_PAYLOAD_SHA256",
    "RequestMetadata",
    "content_length",
    "content_type",
    "describe",
    "http_verb",
    "payload",
    "sha256_digest",
    # Helper types
    "ContentMd5",
    "HttpMethod",
    "Md5Auto",
    "Md5Disabled",
    "Md5Explicit",
    "Multipart",
    "content_md5_from_bytes",
    # Errors / Result
    "CommandError",
    "Failure",
    "InvalidRequest",
    "Result",
    "SerializationFailed",
    "Success",
]
