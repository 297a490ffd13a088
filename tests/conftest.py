"""Shared fixtures for the Keysmith test-suite."""

from __future__ import annotations

import itertools
from typing import Callable

import pytest

from keysmith.generators.random_source import SecureRandomSource


def counting_provider(start: int = 0) -> Callable[[int], bytes]:
    """Byte provider yielding consecutive little-endian counters."""
    counter = itertools.count(start)

    def provide(n: int) -> bytes:
        return next(counter).to_bytes(n, "little")

    return provide


def constant_provider(value: int = 0) -> Callable[[int], bytes]:
    def provide(n: int) -> bytes:
        return value.to_bytes(n, "little")

    return provide


@pytest.fixture
def counting_source() -> SecureRandomSource:
    return SecureRandomSource(counting_provider())


@pytest.fixture
def zero_source() -> SecureRandomSource:
    """Always draws index 0: fully predictable and heavily biased."""
    return SecureRandomSource(constant_provider(0))


@pytest.fixture
def quiet_config_file(tmp_path):
    """Configuration file that keeps engine logging off the console."""
    path = tmp_path / "keysmith.toml"
    path.write_text(
        '[global]\nlog_level = "ERROR"\n\n'
        "[generator]\nlength = 10\nbatch_count = 3\n\n"
        "[audit]\nsamples = 200\n",
        encoding="utf-8",
    )
    return path
