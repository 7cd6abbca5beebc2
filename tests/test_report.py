"""Tests for JSON and text report generation."""

from __future__ import annotations

import json

from keyforge.core.models import (
    AlgorithmId,
    DigestResult,
    DigestRow,
    GeneratedSecret,
    StrengthLabel,
    StrengthScore,
)
from keyforge.output.report import KeyForgeReportGenerator


def _secret(value: str) -> GeneratedSecret:
    return GeneratedSecret(
        secret=value,
        length=len(value),
        variety=2,
        strength=StrengthScore(score=30, label=StrengthLabel.WEAK),
    )


def _digests() -> DigestResult:
    return DigestResult(
        rows=[
            DigestRow(
                algorithm=AlgorithmId.MD5,
                label="MD5",
                hex="900150983cd24fb0d6963f7d28e17f72",
            )
        ]
    )


def test_json_payload_shape():
    payload = json.loads(
        KeyForgeReportGenerator().render_json("bulk", [_secret("ab12"), _secret("cd34")])
    )
    meta = payload["report_metadata"]
    assert meta["tool"] == "keyforge"
    assert meta["kind"] == "bulk"
    assert meta["version"] == "1.0.0"
    assert "generated_at" in meta
    assert [r["secret"] for r in payload["results"]] == ["ab12", "cd34"]
    assert payload["results"][0]["strength"] == {"score": 30, "label": "Weak"}


def test_digest_json_uses_enum_values():
    payload = KeyForgeReportGenerator().build_payload("hash", [_digests()])
    assert payload["results"][0]["rows"][0]["algorithm"] == "md5"


def test_text_lines():
    lines = KeyForgeReportGenerator.render_text([_secret("ab12"), _digests()])
    assert lines == ["ab12", "MD5  900150983cd24fb0d6963f7d28e17f72"]


def test_generate_files(tmp_path):
    reporter = KeyForgeReportGenerator()
    json_path = reporter.generate_json("generate", [_secret("xyz")], tmp_path / "out" / "r.json")
    text_path = reporter.generate_text([_secret("xyz"), _secret("uvw")], tmp_path / "r.txt")

    assert json.loads(json_path.read_text(encoding="utf-8"))["results"][0]["secret"] == "xyz"
    assert text_path.read_text(encoding="utf-8") == "xyz\nuvw\n"
