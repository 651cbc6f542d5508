# tests/test_multipart.py
"""Tests for Multipart descriptors and Content-MD5 policies."""

from __future__ import annotations

import base64
import hashlib
from dataclasses import FrozenInstanceError

import pytest

from s3command.multipart import (
    Md5Auto,
    Md5Disabled,
    Md5Explicit,
    Multipart,
    content_md5_from_bytes,
    resolve_content_md5,
)
from tests.helpers import EMPTY_MD5_BASE64


class TestMultipart:
    def test_query_string(self) -> None:
        assert Multipart(part_number=3, upload_id="abc").query_string() == (
            "?partNumber=3&uploadId=abc"
        )

    def test_query_string_does_not_escape(self) -> None:
        """Upload ids are emitted verbatim."""
        part = Multipart(part_number=1, upload_id="a b/c+d")
        assert part.query_string() == "?partNumber=1&uploadId=a b/c+d"

    @pytest.mark.parametrize("part_number", [0, -3])
    def test_part_number_must_be_positive(self, part_number: int) -> None:
        with pytest.raises(ValueError, match="part_number"):
            Multipart(part_number=part_number, upload_id="abc")

    def test_bool_is_not_a_part_number(self) -> None:
        with pytest.raises(ValueError, match="must be an int"):
            Multipart(part_number=True, upload_id="abc")

    def test_frozen(self) -> None:
        part = Multipart(part_number=1, upload_id="abc")
        with pytest.raises(FrozenInstanceError):
            setattr(part, "part_number", 2)


class TestContentMd5:
    def test_empty_buffer_digest(self) -> None:
        """MD5 of zero bytes is a fixed, well-known value."""
        assert content_md5_from_bytes(b"") == Md5Explicit(digest=EMPTY_MD5_BASE64)

    def test_digest_is_deterministic(self) -> None:
        results = {content_md5_from_bytes(b"").digest for _ in range(3)}
        assert results == {EMPTY_MD5_BASE64}

    def test_digest_matches_hashlib(self) -> None:
        data = b"hello world"
        expected = base64.b64encode(hashlib.md5(data).digest()).decode("ascii")
        assert content_md5_from_bytes(bytearray(data)).digest == expected

    def test_strided_view_digest(self) -> None:
        view = memoryview(b"abcdef")[::2]
        expected = base64.b64encode(hashlib.md5(b"ace").digest()).decode("ascii")
        assert content_md5_from_bytes(view).digest == expected

    def test_default_policy_is_auto(self) -> None:
        assert Md5Auto().kind == "Md5Auto"

    def test_explicit_policy_wins(self) -> None:
        assert resolve_content_md5(Md5Explicit(digest="abc=="), b"data") == "abc=="

    def test_disabled_policy_suppresses_header(self) -> None:
        assert resolve_content_md5(Md5Disabled(), b"data", server_requires=True) is None

    def test_auto_policy_only_when_required(self) -> None:
        assert resolve_content_md5(Md5Auto(), b"") is None
        assert resolve_content_md5(Md5Auto(), b"", server_requires=True) == EMPTY_MD5_BASE64
