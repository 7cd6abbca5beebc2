"""Tests for the self-test suite."""

from __future__ import annotations

import pytest

from keyforge.analyzers.selftest import SelfTester
from keyforge.core.models import AlgorithmId
from keyforge.digest.dispatcher import DigestDispatcher


class BrokenProvider:
    def digest(self, algorithm: AlgorithmId, data: bytes) -> bytes:
        return b"\x00" * 20


def _by_name(suite):
    return {t.check_name: t for t in suite.tests}


def test_all_checks_pass():
    suite = SelfTester(draws=7_000).run()
    assert suite.overall_pass, suite.assessment
    assert suite.tests_passed == suite.total_tests == 7
    assert suite.assessment == "All self-tests passed."


def test_uniformity_reports_statistics():
    results = _by_name(SelfTester(draws=7_000).run())
    uniformity = results["sampler_uniformity"]
    assert uniformity.statistic is not None
    assert 0.0 <= uniformity.p_value <= 1.0


def test_broken_sha_provider_is_detected():
    tester = SelfTester(dispatcher=DigestDispatcher(BrokenProvider()), draws=7_000)
    suite = tester.run()
    results = _by_name(suite)
    assert not results["sha_known_answers"].passed
    assert results["md5_known_answers"].passed
    assert not suite.overall_pass
    assert "sha_known_answers" in suite.assessment


def test_degenerate_sampler_fails_uniformity(zero_random):
    results = _by_name(SelfTester(random=zero_random, draws=700).run())
    assert not results["sampler_uniformity"].passed
    assert results["sampler_range"].passed
    assert results["shuffle_bijection"].passed
    assert results["secret_composition"].passed


def test_too_few_draws():
    with pytest.raises(ValueError):
        SelfTester(draws=10, modulus=7)
