# tests/helpers/constants.py
"""Shared test constants for the s3command test suite."""

from __future__ import annotations

import hashlib

EMPTY_SHA256 = hashlib.sha256(b"").hexdigest()
"""Independently computed digest of zero bytes."""

EMPTY_MD5_BASE64 = "1B2M2Y8AsgTpgAmY7PhCfg=="
"""base64(MD5(b""))."""

TEST_BUCKET = "test-bucket"
TEST_KEY = "dir/object.bin"
TEST_UPLOAD_ID = "upload-123"
TEST_ACCESS_KEY = "AKIDEXAMPLE"
TEST_SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
TEST_REGION = "eu-central-1"
