"""
KeyForge Report Generator
==========================

Serialises KeyForge results to JSON documents and plain-text exports.

The JSON layout is::

    {
      "report_metadata": {"generated_at": ..., "tool": "keyforge",
                          "kind": "generate", "version": "1.0.0"},
      "results": [ ... model_dump(mode="json") of each result ... ]
    }

The text export writes one secret per line, or ``LABEL  hex`` per digest.
Files are written only where the caller asks; nothing is kept otherwise.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel

from keyforge import __tool_name__, __version__
from keyforge.core.models import DigestResult, GeneratedSecret


class KeyForgeReportGenerator:
    """Builds JSON and text renditions of KeyForge results.

    Usage::

        reporter = KeyForgeReportGenerator()
        reporter.generate_json("bulk", secrets, Path("secrets.json"))
        reporter.generate_text(secrets, Path("secrets.txt"))
    """

    def build_payload(self, kind: str, results: Sequence[BaseModel]) -> dict[str, Any]:
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": __tool_name__,
                "kind": kind,
                "version": __version__,
            },
            "results": [result.model_dump(mode="json") for result in results],
        }

    def render_json(self, kind: str, results: Sequence[BaseModel]) -> str:
        return json.dumps(
            self.build_payload(kind, results),
            indent=2,
            ensure_ascii=False,
            default=str,
        )

    def generate_json(
        self,
        kind: str,
        results: Sequence[BaseModel],
        output_path: Path,
    ) -> Path:
        """Write the JSON document for *results* to *output_path*.

        Returns:
            Path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(kind, results) + "\n", encoding="utf-8")
        return output_path

    @staticmethod
    def render_text(results: Sequence[BaseModel]) -> list[str]:
        """Plain-text lines: secrets one per line, digests as ``LABEL  hex``."""
        lines: list[str] = []
        for result in results:
            if isinstance(result, GeneratedSecret):
                lines.append(result.secret)
            elif isinstance(result, DigestResult):
                lines.extend(f"{label}  {value}" for label, value in result.pairs())
            else:
                lines.append(result.model_dump_json())
        return lines

    def generate_text(self, results: Sequence[BaseModel], output_path: Path) -> Path:
        """Write the plain-text export for *results* to *output_path*."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = self.render_text(results)
        output_path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        return output_path
