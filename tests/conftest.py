"""Shared fixtures for the KeyForge test suite."""

from __future__ import annotations

import hashlib
from typing import Iterable

import pytest

from shared.config import ForgeConfig
from keyforge.core.models import AlgorithmId
from keyforge.generator.random_source import UnbiasedRandom


class SequenceSource:
    """Replays a fixed list of 32-bit values, then repeats the last one."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.calls = 0

    def random_uint32(self) -> int:
        index = min(self.calls, len(self._values) - 1)
        self.calls += 1
        return self._values[index]


class ZeroSource:
    def random_uint32(self) -> int:
        return 0


class RecordingProvider:
    """Digest provider that records every call and delegates to hashlib."""

    def __init__(self) -> None:
        self.calls: list[tuple[AlgorithmId, bytes]] = []

    def digest(self, algorithm: AlgorithmId, data: bytes) -> bytes:
        self.calls.append((algorithm, data))
        return hashlib.new(algorithm.value, data).digest()


@pytest.fixture
def zero_random() -> UnbiasedRandom:
    return UnbiasedRandom(ZeroSource())


@pytest.fixture
def recording_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def fast_config() -> ForgeConfig:
    """Default configuration with a small self-test workload."""
    config = ForgeConfig()
    config.selftest.uniformity_draws = 7_000
    return config
