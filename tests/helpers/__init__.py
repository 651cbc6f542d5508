# tests/helpers/__init__.py
"""Shared test utilities for the s3command test suite.

Usage:
    >>> from tests.helpers import expect_success, make_all_commands
    >>> for command in make_all_commands():
    ...     assert expect_success(content_length(command)) >= 0
"""

from __future__ import annotations

from tests.helpers.constants import (
    EMPTY_MD5_BASE64,
    EMPTY_SHA256,
    TEST_ACCESS_KEY,
    TEST_BUCKET,
    TEST_KEY,
    TEST_REGION,
    TEST_SECRET_KEY,
    TEST_UPLOAD_ID,
)
from tests.helpers.factories import (
    make_all_commands,
    make_bodiless_commands,
    make_body_commands,
    make_client_config,
    make_cors,
    make_lifecycle,
    make_manifest,
    make_tagging_xml,
)
from tests.helpers.result_utils import expect_failure, expect_success

__all__ = [
    "EMPTY_MD5_BASE64",
    "EMPTY_SHA256",
    "TEST_ACCESS_KEY",
    "TEST_BUCKET",
    "TEST_KEY",
    "TEST_REGION",
    "TEST_SECRET_KEY",
    "TEST_UPLOAD_ID",
    "expect_failure",
    "expect_success",
    "make_all_commands",
    "make_bodiless_commands",
    "make_body_commands",
    "make_client_config",
    "make_cors",
    "make_lifecycle",
    "make_manifest",
    "make_tagging_xml",
]
