"""Client settings consumed by the request builder."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from s3command.xml_types import DEFAULT_REGION


class ClientConfig(BaseModel):
    """Endpoint, region and credentials for one S3-compatible service.

    Attributes:
        endpoint: Service base URL, e.g. ``https://s3.amazonaws.com``.
        region: Signing region.
        access_key: Access key id.
        secret_key: Secret access key.
        session_token: Optional STS session token.
        path_style: Address buckets as ``/<bucket>/<key>`` instead of
            ``<bucket>.<host>/<key>``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = "https://s3.amazonaws.com"
    region: str = DEFAULT_REGION
    access_key: str = Field(min_length=1)
    secret_key: str = Field(min_length=1)
    session_token: str | None = None
    path_style: bool = False

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"endpoint must be an http(s) URL, got {value!r}")
        return value.rstrip("/")


__all__ = ["ClientConfig"]
