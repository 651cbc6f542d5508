"""Exhaustiveness check for ``match`` statements over closed unions."""

from __future__ import annotations

from typing import Never


def assert_never(value: Never) -> Never:
    """Type-safe exhaustiveness check for pattern matching.

    Use this in the default case of match statements to ensure
    all variants are handled. If a new variant is added but not
    handled, mypy will report an error.

    Example:
        >>> match command:
        ...     case GetObject(): ...
        ...     case PutObject(): ...
        ...     case _:
        ...         assert_never(command)  # mypy error if variants missing
    """
    raise AssertionError(f"Unhandled case: {value!r}")
