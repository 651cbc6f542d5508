"""
Structured request bodies and their XML wire form.

Each model is an immutable pydantic model with a serialize-to-wire operation
returning ``SerializationResult``. The command derivations measure and hash
exactly the bytes these methods produce, so a model must never render two
different byte strings for the same value.

XML 1.0 cannot carry most C0 control characters or lone surrogates; text
containing them is reported as ``SerializationFailed`` rather than emitted.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from s3command.errors.serialization import SerializationFailed, SerializationResult
from s3command.multipart import MAX_PART_NUMBER, MIN_PART_NUMBER
from s3command.result import Failure, Result, Success, collect_results
from s3command.validation import validate_model

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"

_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _text(parent: ET.Element, tag: str, value: str | int) -> ET.Element:
    """Append ``<tag>value</tag>`` to ``parent``; raise ValueError on illegal text."""
    text = str(value)
    match = _INVALID_XML_CHARS.search(text)
    if match is not None:
        raise ValueError(f"<{tag}> contains character {match.group()!r} not allowed in XML 1.0")
    child = ET.SubElement(parent, tag)
    child.text = text
    return child


def _format_date(value: datetime) -> str:
    aware = value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
    return aware.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _render(subject: str, build: Callable[[], ET.Element]) -> SerializationResult[bytes]:
    """Build an element tree and encode it as UTF-8, wrapping failures."""
    try:
        return Success(ET.tostring(build(), encoding="unicode").encode("utf-8"))
    except ValueError as exc:
        # UnicodeEncodeError (lone surrogates) is a ValueError too.
        logger.warning("failed to serialize %s: %s", subject, exc)
        return Failure(SerializationFailed(subject=subject, message=str(exc)))


# --------------------------------------------------------------------------- #
# CompleteMultipartUpload
# --------------------------------------------------------------------------- #


class Part(BaseModel):
    """An uploaded part, as listed in the completion manifest."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    part_number: int = Field(ge=MIN_PART_NUMBER, le=MAX_PART_NUMBER)
    etag: str

    def toxml(self, element: ET.Element) -> ET.Element:
        _text(element, "PartNumber", self.part_number)
        _text(element, "ETag", self.etag)
        return element


class CompleteMultipartUploadData(BaseModel):
    """Completion manifest for a multipart upload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    parts: list[Part]

    @classmethod
    def from_etags(
        cls, etags: Mapping[int, str]
    ) -> Result[CompleteMultipartUploadData, ValidationError]:
        """Build a manifest from ``{part_number: etag}``, ordered by part number."""
        match collect_results(
            [
                validate_model(Part, part_number=number, etag=etag)
                for number, etag in sorted(etags.items())
            ]
        ):
            case Success(parts):
                return validate_model(cls, parts=parts)
            case Failure(error):
                return Failure(error)

    def _build(self) -> ET.Element:
        element = ET.Element("CompleteMultipartUpload")
        for part in self.parts:
            part.toxml(ET.SubElement(element, "Part"))
        return element

    def to_xml_bytes(self) -> SerializationResult[bytes]:
        return _render("CompleteMultipartUploadData", self._build)

    def to_xml(self) -> SerializationResult[str]:
        """String form of the manifest; its UTF-8 encoding is the request body."""
        return self.to_xml_bytes().map(lambda data: data.decode("utf-8"))


# --------------------------------------------------------------------------- #
# Lifecycle
# --------------------------------------------------------------------------- #


class Tag(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    value: str

    def toxml(self, element: ET.Element) -> ET.Element:
        _text(element, "Key", self.key)
        _text(element, "Value", self.value)
        return element


class LifecycleFilter(BaseModel):
    """Selects the objects a rule applies to.

    A prefix alone or a single tag renders directly under ``<Filter>``; any
    combination renders inside ``<And>``. An empty filter matches every object.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str | None = None
    tags: list[Tag] = Field(default_factory=list)
    object_size_greater_than: int | None = Field(default=None, ge=0)
    object_size_less_than: int | None = Field(default=None, gt=0)

    def _conditions(self) -> int:
        return (
            (self.prefix is not None)
            + len(self.tags)
            + (self.object_size_greater_than is not None)
            + (self.object_size_less_than is not None)
        )

    def toxml(self, element: ET.Element) -> ET.Element:
        target = ET.SubElement(element, "And") if self._conditions() > 1 else element
        if self.prefix is not None:
            _text(target, "Prefix", self.prefix)
        for tag in self.tags:
            tag.toxml(ET.SubElement(target, "Tag"))
        if self.object_size_greater_than is not None:
            _text(target, "ObjectSizeGreaterThan", self.object_size_greater_than)
        if self.object_size_less_than is not None:
            _text(target, "ObjectSizeLessThan", self.object_size_less_than)
        return element


class LifecycleExpiration(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    date: datetime | None = None
    days: int | None = Field(default=None, gt=0)
    expired_object_delete_marker: bool | None = None

    def toxml(self, element: ET.Element) -> ET.Element:
        if self.date is not None:
            _text(element, "Date", _format_date(self.date))
        if self.days is not None:
            _text(element, "Days", self.days)
        if self.expired_object_delete_marker is not None:
            _text(
                element,
                "ExpiredObjectDeleteMarker",
                "true" if self.expired_object_delete_marker else "false",
            )
        return element


class LifecycleTransition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    date: datetime | None = None
    days: int | None = Field(default=None, ge=0)
    storage_class: str

    def toxml(self, element: ET.Element) -> ET.Element:
        if self.date is not None:
            _text(element, "Date", _format_date(self.date))
        if self.days is not None:
            _text(element, "Days", self.days)
        _text(element, "StorageClass", self.storage_class)
        return element


class NoncurrentVersionExpiration(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    noncurrent_days: int = Field(gt=0)
    newer_noncurrent_versions: int | None = Field(default=None, gt=0)

    def toxml(self, element: ET.Element) -> ET.Element:
        _text(element, "NoncurrentDays", self.noncurrent_days)
        if self.newer_noncurrent_versions is not None:
            _text(element, "NewerNoncurrentVersions", self.newer_noncurrent_versions)
        return element


class AbortIncompleteMultipartUpload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    days_after_initiation: int = Field(gt=0)

    def toxml(self, element: ET.Element) -> ET.Element:
        _text(element, "DaysAfterInitiation", self.days_after_initiation)
        return element


class LifecycleRule(BaseModel):
    """One lifecycle rule; at least one action must be present."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = None
    status: Literal["Enabled", "Disabled"] = "Enabled"
    filter: LifecycleFilter = Field(default_factory=LifecycleFilter)
    expiration: LifecycleExpiration | None = None
    transitions: list[LifecycleTransition] = Field(default_factory=list)
    noncurrent_version_expiration: NoncurrentVersionExpiration | None = None
    abort_incomplete_multipart_upload: AbortIncompleteMultipartUpload | None = None

    @model_validator(mode="after")
    def _require_action(self) -> LifecycleRule:
        if (
            self.expiration is None
            and not self.transitions
            and self.noncurrent_version_expiration is None
            and self.abort_incomplete_multipart_upload is None
        ):
            raise ValueError("lifecycle rule needs at least one action")
        return self

    def toxml(self, element: ET.Element) -> ET.Element:
        if self.id is not None:
            _text(element, "ID", self.id)
        self.filter.toxml(ET.SubElement(element, "Filter"))
        _text(element, "Status", self.status)
        if self.expiration is not None:
            self.expiration.toxml(ET.SubElement(element, "Expiration"))
        for transition in self.transitions:
            transition.toxml(ET.SubElement(element, "Transition"))
        if self.noncurrent_version_expiration is not None:
            self.noncurrent_version_expiration.toxml(
                ET.SubElement(element, "NoncurrentVersionExpiration")
            )
        if self.abort_incomplete_multipart_upload is not None:
            self.abort_incomplete_multipart_upload.toxml(
                ET.SubElement(element, "AbortIncompleteMultipartUpload")
            )
        return element


class BucketLifecycleConfiguration(BaseModel):
    """Body of PutBucketLifecycle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rules: list[LifecycleRule]

    def _build(self) -> ET.Element:
        element = ET.Element("LifecycleConfiguration")
        for rule in self.rules:
            rule.toxml(ET.SubElement(element, "Rule"))
        return element

    def to_xml_bytes(self) -> SerializationResult[bytes]:
        return _render("BucketLifecycleConfiguration", self._build)


# --------------------------------------------------------------------------- #
# CORS
# --------------------------------------------------------------------------- #


class CorsRule(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = None
    allowed_headers: list[str] = Field(default_factory=list)
    allowed_methods: list[str] = Field(min_length=1)
    allowed_origins: list[str] = Field(min_length=1)
    expose_headers: list[str] = Field(default_factory=list)
    max_age_seconds: int | None = Field(default=None, ge=0)

    def toxml(self, element: ET.Element) -> ET.Element:
        if self.id is not None:
            _text(element, "ID", self.id)
        for value in self.allowed_headers:
            _text(element, "AllowedHeader", value)
        for value in self.allowed_methods:
            _text(element, "AllowedMethod", value)
        for value in self.allowed_origins:
            _text(element, "AllowedOrigin", value)
        for value in self.expose_headers:
            _text(element, "ExposeHeader", value)
        if self.max_age_seconds is not None:
            _text(element, "MaxAgeSeconds", self.max_age_seconds)
        return element


class CorsConfiguration(BaseModel):
    """Body of PutBucketCors."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rules: list[CorsRule]

    def _build(self) -> ET.Element:
        element = ET.Element("CORSConfiguration")
        for rule in self.rules:
            rule.toxml(ET.SubElement(element, "CORSRule"))
        return element

    def to_xml_bytes(self) -> SerializationResult[bytes]:
        return _render("CorsConfiguration", self._build)


class Tagging(BaseModel):
    """Object tag set; its ``to_xml`` string is the PutObjectTagging body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tags: list[Tag]

    def _build(self) -> ET.Element:
        element = ET.Element("Tagging")
        tag_set = ET.SubElement(element, "TagSet")
        for tag in self.tags:
            tag.toxml(ET.SubElement(tag_set, "Tag"))
        return element

    def to_xml(self) -> SerializationResult[str]:
        return _render("Tagging", self._build).map(lambda data: data.decode("utf-8"))

    @classmethod
    def from_mapping(cls, tags: Mapping[str, str]) -> Tagging:
        return cls(tags=[Tag(key=key, value=value) for key, value in tags.items()])


# --------------------------------------------------------------------------- #
# CreateBucket
# --------------------------------------------------------------------------- #


class CannedBucketAcl(str, Enum):
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"


class BucketConfiguration(BaseModel):
    """Settings for CreateBucket.

    ``location_constraint`` names the target region. ``None`` or the default
    region means no request body is sent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    acl: CannedBucketAcl = CannedBucketAcl.PRIVATE
    location_constraint: str | None = Field(default=None, min_length=1)
    object_lock_enabled: bool = False

    def requires_location_constraint(self) -> bool:
        return self.location_constraint is not None and self.location_constraint != DEFAULT_REGION

    def _build(self) -> ET.Element:
        element = ET.Element("CreateBucketConfiguration")
        _text(element, "LocationConstraint", str(self.location_constraint))
        return element

    def location_constraint_payload(self) -> SerializationResult[bytes | None]:
        """Serialized ``CreateBucketConfiguration``, or None for the default region."""
        if not self.requires_location_constraint():
            return Success(None)
        return _render("BucketConfiguration", self._build)


__all__ = [
    "AbortIncompleteMultipartUpload",
    "BucketConfiguration",
    "BucketLifecycleConfiguration",
    "CannedBucketAcl",
    "CompleteMultipartUploadData",
    "CorsConfiguration",
    "CorsRule",
    "DEFAULT_REGION",
    "LifecycleExpiration",
    "LifecycleFilter",
    "LifecycleRule",
    "LifecycleTransition",
    "NoncurrentVersionExpiration",
    "Part",
    "Tag",
    "Tagging",
]
