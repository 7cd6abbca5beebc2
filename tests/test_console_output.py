"""Tests for the Rich console formatters."""

from __future__ import annotations

from keyforge.core.models import (
    DigestResult,
    GeneratedSecret,
    SelfTestResult,
    SelfTestSuiteResult,
    StrengthLabel,
    StrengthScore,
)
from keyforge.output.console import KeyForgeConsoleOutput
from shared.console import ForgeConsole


def _generated() -> GeneratedSecret:
    return GeneratedSecret(
        secret="Zq7#Zq7#Zq7#Zq7#",
        length=16,
        variety=4,
        strength=StrengthScore(score=55, label=StrengthLabel.BALANCED),
    )


def test_display_secret(capsys):
    KeyForgeConsoleOutput(ForgeConsole()).display_secret(_generated())
    out = capsys.readouterr().out
    assert "Zq7#Zq7#Zq7#Zq7#" in out
    assert "55/100" in out
    assert "Balanced" in out


def test_quiet_console_prints_nothing(capsys):
    output = KeyForgeConsoleOutput(ForgeConsole(quiet=True))
    output.display_secret(_generated())
    output.display_bulk([_generated()])
    assert capsys.readouterr().out == ""


def test_empty_digest_result(capsys):
    KeyForgeConsoleOutput(ForgeConsole()).display_digests(DigestResult())
    assert "Enter text to generate hashes." in capsys.readouterr().out


def test_failed_selftest_is_reported(capsys):
    suite = SelfTestSuiteResult(
        tests=[SelfTestResult(check_name="sampler_uniformity", detail="biased")],
        total_tests=1,
        tests_failed=1,
        assessment="1 self-test(s) failed: sampler_uniformity.",
    )
    KeyForgeConsoleOutput(ForgeConsole()).display_selftest(suite)
    out = capsys.readouterr().out
    assert "FAIL" in out
    assert "sampler_uniformity" in out
