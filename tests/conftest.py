# tests/conftest.py
"""Global PyTest fixtures for the test-suite.

Every test runs under a wall-clock timeout; the derivations are pure and fast,
so anything slow indicates a hang in request assembly.
"""

from __future__ import annotations

import logging
import signal
from types import FrameType
from typing import Callable, Generator

import pytest

from s3command.config import ClientConfig
from tests.helpers import make_client_config

DEFAULT_TEST_TIMEOUT_SECONDS = 10.0


def _build_timeout_handler(
    timeout_seconds: float,
) -> Callable[[int, FrameType | None], None]:
    """Create SIGALRM handler that fails the test when timeout is reached."""

    def _handle_timeout(signum: int, frame: FrameType | None) -> None:
        pytest.fail(f"Test exceeded {timeout_seconds:.0f}s timeout", pytrace=True)

    return _handle_timeout


@pytest.fixture(autouse=True)
def per_test_timeout() -> Generator[None, None, None]:
    """Fail any test that runs longer than the default timeout."""
    if not hasattr(signal, "SIGALRM") or not hasattr(signal, "setitimer"):
        yield
        return

    previous_handler = signal.getsignal(signal.SIGALRM)
    signal.signal(signal.SIGALRM, _build_timeout_handler(DEFAULT_TEST_TIMEOUT_SECONDS))
    signal.setitimer(signal.ITIMER_REAL, DEFAULT_TEST_TIMEOUT_SECONDS)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0.0)
        signal.signal(signal.SIGALRM, previous_handler)


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture s3command debug records so tests can assert on them."""
    caplog.set_level(logging.DEBUG, logger="s3command")


@pytest.fixture
def client_config() -> ClientConfig:
    """Virtual-host style config against a non-default region."""
    return make_client_config()


@pytest.fixture
def path_style_config() -> ClientConfig:
    return make_client_config(path_style=True)
