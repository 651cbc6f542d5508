"""
Turn a Command into a signed botocore request.

The body, Content-Length and ``x-amz-content-sha256`` all come from a single
:func:`~s3command.derive.describe` call, so the signature always covers the
bytes that are sent. Signing itself is delegated to botocore's SigV4
implementation, which uses the precomputed ``X-Amz-Content-SHA256`` header
instead of re-hashing the body.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode, urlsplit

from botocore.auth import S3SigV4QueryAuth, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

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
    PresignCommand,
    PresignDelete,
    PresignGet,
    PresignPut,
    PutBucketCors,
    PutBucketLifecycle,
    PutObject,
    PutObjectTagging,
    UploadPart,
)
from s3command.config import ClientConfig
from s3command.derive import RequestMetadata, describe, http_verb
from s3command.errors import InvalidRequest, RequestError
from s3command.exhaustive import assert_never
from s3command.http_method import HttpMethod
from s3command.multipart import Md5Auto, Multipart, resolve_content_md5
from s3command.result import Failure, Result, Success

logger = logging.getLogger(__name__)

SERVICE_NAME = "s3"

QueryParams = list[tuple[str, str]]


def _multipart_params(part: Multipart) -> QueryParams:
    return [("partNumber", str(part.part_number)), ("uploadId", part.upload_id)]


def _optional(params: list[tuple[str, str | int | None]]) -> QueryParams:
    return [(name, str(value)) for name, value in params if value is not None]


def query_params(command: Command) -> QueryParams:
    """S3 sub-resource and listing parameters for a command, in wire order."""
    match command:
        case GetObjectTorrent():
            return [("torrent", "")]
        case GetObjectTagging() | PutObjectTagging() | DeleteObjectTagging():
            return [("tagging", "")]
        case PutObject(multipart=Multipart() as part):
            return _multipart_params(part)
        case UploadPart():
            return _multipart_params(command.multipart())
        case InitiateMultipartUpload():
            return [("uploads", "")]
        case AbortMultipartUpload(upload_id=upload_id) | CompleteMultipartUpload(
            upload_id=upload_id
        ):
            return [("uploadId", upload_id)]
        case ListMultipartUploads():
            return [("uploads", "")] + _optional(
                [
                    ("prefix", command.prefix),
                    ("delimiter", command.delimiter),
                    ("key-marker", command.key_marker),
                    ("max-uploads", command.max_uploads),
                ]
            )
        case ListObjects():
            return _optional(
                [
                    ("prefix", command.prefix or None),
                    ("delimiter", command.delimiter),
                    ("marker", command.marker),
                    ("max-keys", command.max_keys),
                ]
            )
        case ListObjectsV2():
            return [("list-type", "2")] + _optional(
                [
                    ("prefix", command.prefix or None),
                    ("delimiter", command.delimiter),
                    ("continuation-token", command.continuation_token),
                    ("start-after", command.start_after),
                    ("max-keys", command.max_keys),
                ]
            )
        case GetBucketLocation():
            return [("location", "")]
        case PutBucketCors():
            return [("cors", "")]
        case GetBucketLifecycle() | PutBucketLifecycle() | DeleteBucketLifecycle():
            return [("lifecycle", "")]
        case PresignGet(custom_queries=queries) | PresignPut(custom_queries=queries):
            return sorted((queries or {}).items())
        case (
            HeadObject()
            | GetObject()
            | GetObjectRange()
            | DeleteObject()
            | CopyObject()
            | PutObject()
            | CreateBucket()
            | DeleteBucket()
            | ListBuckets()
            | PresignDelete()
        ):
            return []
        case _:
            assert_never(command)


def encode_query(params: QueryParams) -> str:
    """Render ``?a=1&b`` style query strings; empty params give ``""``."""
    if not params:
        return ""
    return "?" + urlencode(params, quote_via=quote, safe="~")


def _requires_key(command: Command) -> bool:
    match command:
        case ListBuckets() | ListObjects() | ListObjectsV2() | ListMultipartUploads():
            return False
        case GetBucketLocation() | CreateBucket() | DeleteBucket() | PutBucketCors():
            return False
        case GetBucketLifecycle() | PutBucketLifecycle() | DeleteBucketLifecycle():
            return False
        case _:
            return True


def build_url(config: ClientConfig, bucket: str, key: str | None, command: Command) -> str:
    """Absolute URL (without query) addressing the bucket and key of a command."""
    parts = urlsplit(config.endpoint)
    path = "/" + quote(key, safe="/~") if key else "/"
    if isinstance(command, ListBuckets):
        return f"{parts.scheme}://{parts.netloc}/"
    if config.path_style:
        return f"{parts.scheme}://{parts.netloc}/{bucket}{path}"
    return f"{parts.scheme}://{bucket}.{parts.netloc}{path}"


def _server_requires_md5(command: Command) -> bool:
    return isinstance(command, (PutBucketCors, PutBucketLifecycle))


def request_headers(command: Command, meta: RequestMetadata) -> dict[str, str]:
    """Headers bound into the signature for a non-presigned request."""
    headers: dict[str, str] = {"X-Amz-Content-SHA256": meta.sha256}
    if meta.method in (HttpMethod.PUT, HttpMethod.POST):
        headers["Content-Length"] = str(meta.content_length)
        headers["Content-Type"] = meta.content_type

    match command:
        case GetObjectRange(start=start, end=end):
            headers["Range"] = f"bytes={start}-" if end is None else f"bytes={start}-{end}"
        case CopyObject(source=source):
            headers["x-amz-copy-source"] = quote(source, safe="/~")
        case PutObject(content_md5=policy) | UploadPart(content_md5=policy):
            md5 = resolve_content_md5(policy, meta.body)
            if md5 is not None:
                headers["Content-MD5"] = md5
        case PutBucketCors() | PutBucketLifecycle():
            md5 = resolve_content_md5(
                Md5Auto(), meta.body, server_requires=_server_requires_md5(command)
            )
            if md5 is not None:
                headers["Content-MD5"] = md5
        case CreateBucket(config=bucket_config):
            headers["x-amz-acl"] = bucket_config.acl.value
            if bucket_config.object_lock_enabled:
                headers["x-amz-bucket-object-lock-enabled"] = "true"
        case _:
            pass

    match command:
        case PutObject(cache_control=cache, content_disposition=disposition) | (
            CompleteMultipartUpload(cache_control=cache, content_disposition=disposition)
        ):
            if cache is not None:
                headers["Cache-Control"] = cache
            if disposition is not None:
                headers["Content-Disposition"] = disposition
        case _:
            pass
    return headers


def _credentials(config: ClientConfig) -> Credentials:
    return Credentials(config.access_key, config.secret_key, config.session_token)


def build_request(
    config: ClientConfig, bucket: str, key: str | None, command: Command
) -> Result[AWSRequest, RequestError]:
    """Assemble an unsigned request whose body and signing headers agree."""
    if not bucket and not isinstance(command, ListBuckets):
        return Failure(InvalidRequest(operation=command.kind, message="bucket name is required"))
    if not key and _requires_key(command):
        return Failure(InvalidRequest(operation=command.kind, message="object key is required"))

    match describe(command):
        case Failure(error):
            return Failure(error)
        case Success(meta):
            pass

    url = build_url(config, bucket, key, command) + encode_query(query_params(command))
    # The request outlives the command, so it gets its own copy of the body.
    request = AWSRequest(
        method=str(meta.method),
        url=url,
        headers=request_headers(command, meta),
        data=bytes(meta.body),
    )
    logger.debug(
        "built %s %s (%d bytes, sha256=%s)", meta.method, url, meta.content_length, meta.sha256
    )
    return Success(request)


def sign_request(config: ClientConfig, request: AWSRequest) -> AWSRequest:
    """Add a SigV4 Authorization header, in place; returns the same request."""
    SigV4Auth(_credentials(config), SERVICE_NAME, config.region).add_auth(request)
    logger.debug("signed %s %s", request.method, request.url)
    return request


def presign_url(
    config: ClientConfig, bucket: str, key: str, command: PresignCommand
) -> Result[str, RequestError]:
    """Return a query-string signed URL valid for the command's expiry."""
    if not bucket or not key:
        return Failure(
            InvalidRequest(operation=command.kind, message="bucket and key are required")
        )
    method = http_verb(command)
    headers: dict[str, str] = {}
    if isinstance(command, PresignPut) and command.custom_headers:
        headers.update(command.custom_headers)

    url = build_url(config, bucket, key, command) + encode_query(query_params(command))
    request = AWSRequest(method=str(method), url=url, headers=headers)
    S3SigV4QueryAuth(
        _credentials(config), SERVICE_NAME, config.region, expires=command.expiry_secs
    ).add_auth(request)
    logger.debug("presigned %s %s for %ds", method, url, command.expiry_secs)
    return Success(str(request.url))


__all__ = [
    "QueryParams",
    "SERVICE_NAME",
    "build_request",
    "build_url",
    "encode_query",
    "presign_url",
    "query_params",
    "request_headers",
    "sign_request",
]
