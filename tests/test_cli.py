"""Tests for the Click command-line interface."""

from __future__ import annotations

import hashlib
import json
import string

import pytest
from click.testing import CliRunner

from keyforge.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "keyforge.toml"
    path.write_text(
        "[selftest]\nuniformity_draws = 7000\n\n[generator]\nmax_length = 128\n",
        encoding="utf-8",
    )
    return str(path)


def _invoke(runner, *args):
    return runner.invoke(cli, list(args), obj={})


class TestGenerate:
    def test_console_output(self, runner):
        result = _invoke(runner, "generate", "--length", "12")
        assert result.exit_code == 0, result.output
        assert "Generated Secret" in result.output
        assert "Strength" in result.output

    def test_text_output(self, runner):
        result = _invoke(runner, "-o", "text", "generate", "-l", "20", "--no-symbols")
        assert result.exit_code == 0, result.output
        secret = result.stdout.strip()
        assert len(secret) == 20
        assert set(secret) <= set(string.ascii_letters + string.digits)

    def test_json_output(self, runner):
        result = _invoke(runner, "-o", "json", "generate", "-l", "12", "--case", "lower")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["report_metadata"]["kind"] == "generate"
        generated = payload["results"][0]
        assert generated["length"] == 12
        assert generated["variety"] == 3
        assert not set(generated["secret"]) & set(string.ascii_uppercase)

    def test_avoid_ambiguous(self, runner):
        result = _invoke(
            runner, "-o", "text", "generate", "-l", "64", "--avoid-ambiguous"
        )
        assert result.exit_code == 0, result.output
        assert not set(result.stdout.strip()) & set("O0l1")

    def test_minimums_exceed_length(self, runner):
        result = _invoke(runner, "generate", "-l", "4", "--min-numbers", "3", "--min-symbols", "3")
        assert result.exit_code == 2
        assert "too short" in result.output

    def test_no_classes_selected(self, runner):
        result = _invoke(
            runner, "generate", "--no-letters", "--no-numbers", "--no-symbols"
        )
        assert result.exit_code == 2
        assert "Select at least one option." in result.output

    def test_length_above_configured_max(self, runner, config_file):
        result = _invoke(runner, "-c", config_file, "generate", "-l", "129")
        assert result.exit_code == 2
        assert "--length" in result.output

    def test_output_file(self, runner, tmp_path):
        out = tmp_path / "secret.json"
        result = _invoke(runner, "-q", "-o", "json", "-f", str(out), "generate")
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["results"][0]["length"] == 16


class TestBulk:
    def test_default_count(self, runner):
        result = _invoke(runner, "-o", "text", "bulk", "-l", "10")
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert len(lines) == 10
        assert all(len(line) == 10 for line in lines)

    @pytest.mark.parametrize("count,expected", [("1", 2), ("500", 50), ("7", 7)])
    def test_count_is_clamped(self, runner, count, expected):
        result = _invoke(runner, "-o", "text", "bulk", "-n", count)
        assert result.exit_code == 0, result.output
        assert len(result.stdout.splitlines()) == expected

    def test_console_table(self, runner):
        result = _invoke(runner, "bulk", "-n", "3")
        assert result.exit_code == 0, result.output
        assert "3 Generated Secrets" in result.output


class TestHash:
    def test_single_algorithm_text(self, runner):
        result = _invoke(runner, "-o", "text", "hash", "abc", "-a", "md5")
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "MD5  900150983cd24fb0d6963f7d28e17f72"

    def test_all_algorithms_json(self, runner):
        result = _invoke(runner, "-o", "json", "hash", "hello", "--salt", "pepper")
        assert result.exit_code == 0, result.output
        digest = json.loads(result.stdout)["results"][0]
        assert [row["label"] for row in digest["rows"]] == ["MD5", "SHA1", "SHA256", "SHA512"]
        assert digest["rows"][2]["hex"] == hashlib.sha256(b"hellopepper").hexdigest()
        assert digest["salted"] is True

    def test_repeated_algorithms(self, runner):
        result = _invoke(runner, "-o", "text", "hash", "x", "-a", "sha512", "-a", "SHA-1")
        assert result.exit_code == 0, result.output
        labels = [line.split()[0] for line in result.stdout.splitlines()]
        assert labels == ["SHA512", "SHA1"]

    def test_blank_text(self, runner):
        result = _invoke(runner, "-o", "json", "hash", "   ")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["results"][0]["rows"] == []

    def test_unknown_algorithm(self, runner):
        result = _invoke(runner, "hash", "abc", "-a", "whirlpool")
        assert result.exit_code == 2
        assert "whirlpool" in result.output

    def test_console_rows(self, runner):
        result = _invoke(runner, "-q", "hash", "abc")
        assert result.exit_code == 0, result.output
        assert "SHA256" in result.output

    @pytest.mark.parametrize(
        "args", [("\udcff",), ("abc", "--salt", "\ud800")]
    )
    def test_lone_surrogate_is_usage_error(self, runner, args):
        result = _invoke(runner, "-q", "hash", *args)
        assert result.exit_code == 2
        assert "surrogate" in result.output
        assert "Traceback" not in result.output


@pytest.mark.parametrize("symbols", ["abc123", ""])
def test_invalid_symbol_override_in_config(runner, tmp_path, symbols):
    path = tmp_path / "keyforge.toml"
    path.write_text(f'[generator]\nsymbols = "{symbols}"\n', encoding="utf-8")
    result = _invoke(runner, "-c", str(path), "generate")
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert not isinstance(result.exception, ValueError)


class TestScore:
    def test_explicit_classes(self, runner):
        result = _invoke(runner, "-o", "json", "score", "abc", "-k", "1")
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["results"][0] == {"score": 13, "label": "Weak"}

    def test_detected_classes(self, runner):
        result = _invoke(runner, "-o", "json", "score", "aB3$" * 4)
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["results"][0]["score"] == 55

    def test_classes_out_of_range(self, runner):
        result = _invoke(runner, "score", "abc", "-k", "5")
        assert result.exit_code == 2


def test_selftest(runner, config_file):
    result = _invoke(runner, "-c", config_file, "-o", "json", "selftest")
    assert result.exit_code == 0, result.output
    suite = json.loads(result.stdout)["results"][0]
    assert suite["overall_pass"] is True


def test_selftest_console(runner, config_file):
    result = _invoke(runner, "-c", config_file, "selftest")
    assert result.exit_code == 0, result.output
    assert "All self-tests passed." in result.output


def test_version(runner):
    result = _invoke(runner, "--version")
    assert result.exit_code == 0
    assert "1.0.0" in result.output
