# tests/test_command/test_command_types.py
"""
Tests for the Command ADT catalog.

Verifies frozen dataclass behavior, __post_init__ validation, catalog
completeness and buffer ownership.
"""

from __future__ import annotations

import hashlib
from dataclasses import FrozenInstanceError
from typing import get_args

import pytest

from s3command.command import (
    MAX_PRESIGN_EXPIRY_SECS,
    Command,
    GetObject,
    GetObjectRange,
    ListMultipartUploads,
    ListObjects,
    ListObjectsV2,
    PresignDelete,
    PresignGet,
    PresignPut,
    PutObject,
    UploadPart,
    owned_copy,
)
from s3command.derive import sha256_digest
from s3command.multipart import Md5Auto
from tests.helpers import TEST_UPLOAD_ID, expect_success, make_all_commands


class TestCatalog:
    """The variant set is closed and the factories cover all of it."""

    def test_factories_cover_every_variant(self) -> None:
        """Every Command variant has at least one factory instance."""
        variants = set(get_args(Command))
        built = {type(command) for command in make_all_commands()}
        assert variants == built

    def test_kind_matches_class_name(self) -> None:
        """Each variant's discriminator is its class name."""
        for command in make_all_commands():
            assert command.kind == type(command).__name__

    def test_variant_count(self) -> None:
        """The catalog has exactly 28 operations."""
        assert len(get_args(Command)) == 28


class TestImmutability:
    def test_commands_are_frozen(self) -> None:
        """Commands cannot be mutated after construction."""
        command = PutObject(content=b"data", content_type="text/plain")
        with pytest.raises(FrozenInstanceError):
            setattr(command, "content_type", "image/png")

    def test_put_object_defaults(self) -> None:
        """PutObject defaults to Md5Auto and no multipart."""
        command = PutObject(content=b"data", content_type="text/plain")
        assert command.content_md5 == Md5Auto()
        assert command.multipart is None
        assert command.cache_control is None
        assert command.content_disposition is None

    def test_upload_part_multipart_descriptor(self) -> None:
        """UploadPart exposes its part address as a Multipart."""
        command = UploadPart(part_number=7, content=b"x", upload_id=TEST_UPLOAD_ID)
        assert command.multipart().query_string() == f"?partNumber=7&uploadId={TEST_UPLOAD_ID}"


class TestValidation:
    def test_range_end_before_start_raises(self) -> None:
        with pytest.raises(ValueError, match="precedes start"):
            GetObjectRange(start=10, end=5)

    def test_negative_range_start_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            GetObjectRange(start=-1)

    def test_open_ended_range_is_valid(self) -> None:
        assert GetObjectRange(start=100).end is None

    @pytest.mark.parametrize("part_number", [0, -1, 10_001])
    def test_upload_part_number_out_of_range(self, part_number: int) -> None:
        with pytest.raises(ValueError, match="part_number"):
            UploadPart(part_number=part_number, content=b"", upload_id=TEST_UPLOAD_ID)

    @pytest.mark.parametrize("expiry", [0, MAX_PRESIGN_EXPIRY_SECS + 1])
    def test_presign_expiry_bounds(self, expiry: int) -> None:
        with pytest.raises(ValueError, match="expiry_secs"):
            PresignGet(expiry_secs=expiry)
        with pytest.raises(ValueError, match="expiry_secs"):
            PresignPut(expiry_secs=expiry)
        with pytest.raises(ValueError, match="expiry_secs"):
            PresignDelete(expiry_secs=expiry)

    def test_presign_max_expiry_accepted(self) -> None:
        assert PresignGet(expiry_secs=MAX_PRESIGN_EXPIRY_SECS).expiry_secs == 604_800

    def test_listing_limits_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_keys"):
            ListObjects(prefix="", max_keys=0)
        with pytest.raises(ValueError, match="max_keys"):
            ListObjectsV2(prefix="", max_keys=-5)
        with pytest.raises(ValueError, match="max_uploads"):
            ListMultipartUploads(max_uploads=0)


class TestBufferOwnership:
    def test_command_borrows_caller_buffer(self) -> None:
        """A bytearray body is not copied; mutations are visible to derivations."""
        buffer = bytearray(b"abc")
        command = PutObject(content=buffer, content_type="text/plain")
        buffer[0] = ord("x")
        assert expect_success(sha256_digest(command)) == hashlib.sha256(b"xbc").hexdigest()

    def test_owned_copy_detaches_from_caller_buffer(self) -> None:
        """owned_copy snapshots the bytes at copy time."""
        buffer = bytearray(b"abc")
        command = PutObject(content=buffer, content_type="text/plain")
        owned = owned_copy(command)
        buffer[0] = ord("x")

        assert isinstance(owned, PutObject)
        assert isinstance(owned.content, bytes)
        assert expect_success(sha256_digest(owned)) == hashlib.sha256(b"abc").hexdigest()

    def test_owned_copy_of_upload_part(self) -> None:
        view = memoryview(bytearray(b"part"))
        owned = owned_copy(UploadPart(part_number=1, content=view, upload_id=TEST_UPLOAD_ID))
        assert isinstance(owned, UploadPart)
        assert owned.content == b"part"
        assert isinstance(owned.content, bytes)

    def test_owned_copy_without_buffers_is_identity(self) -> None:
        command = GetObject()
        assert owned_copy(command) is command
