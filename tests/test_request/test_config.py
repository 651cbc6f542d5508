# tests/test_request/test_config.py
"""ClientConfig validation through the Result-returning constructor."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from s3command.config import ClientConfig
from s3command.validation import validate_model
from s3command.xml_types import DEFAULT_REGION
from tests.helpers import TEST_ACCESS_KEY, TEST_SECRET_KEY, expect_failure, expect_success


def test_defaults() -> None:
    config = expect_success(
        validate_model(ClientConfig, access_key=TEST_ACCESS_KEY, secret_key=TEST_SECRET_KEY)
    )
    assert config.endpoint == "https://s3.amazonaws.com"
    assert config.region == DEFAULT_REGION
    assert config.session_token is None
    assert config.path_style is False


def test_trailing_slash_is_stripped() -> None:
    config = expect_success(
        validate_model(
            ClientConfig,
            endpoint="http://localhost:9000/",
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
        )
    )
    assert config.endpoint == "http://localhost:9000"


@pytest.mark.parametrize("endpoint", ["ftp://s3.example.com", "s3.example.com", "https://"])
def test_non_http_endpoint_is_rejected(endpoint: str) -> None:
    error = expect_failure(
        validate_model(
            ClientConfig,
            endpoint=endpoint,
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
        )
    )
    assert isinstance(error, ValidationError)
    assert "endpoint" in str(error)


def test_empty_credentials_are_rejected() -> None:
    error = expect_failure(validate_model(ClientConfig, access_key="", secret_key=""))
    locations = {tuple(item["loc"]) for item in error.errors()}
    assert locations == {("access_key",), ("secret_key",)}


def test_unknown_fields_are_rejected() -> None:
    error = expect_failure(
        validate_model(
            ClientConfig,
            access_key=TEST_ACCESS_KEY,
            secret_key=TEST_SECRET_KEY,
            bucket="not-a-setting",
        )
    )
    assert error.errors()[0]["type"] == "extra_forbidden"


def test_config_is_frozen() -> None:
    config = expect_success(
        validate_model(ClientConfig, access_key=TEST_ACCESS_KEY, secret_key=TEST_SECRET_KEY)
    )
    with pytest.raises(ValidationError):
        config.region = "us-west-2"  # type: ignore[misc]
