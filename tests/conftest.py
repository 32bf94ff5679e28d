"""Shared fixtures for cbframe tests."""

from collections.abc import Iterator

import pytest

from cbframe import bindings, current_frame

TEST_PREFIX = "tests."


@pytest.fixture(autouse=True)
def isolated_bindings() -> Iterator[None]:
    """Drop any ``tests.*`` binding a test leaves behind."""
    yield
    for name in bindings.snapshot():
        if name.startswith(TEST_PREFIX):
            bindings.unset(name)


@pytest.fixture(autouse=True)
def no_frame_left_installed() -> Iterator[None]:
    assert current_frame() is None
    yield
    assert current_frame() is None
