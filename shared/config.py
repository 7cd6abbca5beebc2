"""
KeyForge Configuration Management
==================================

Centralized configuration for the KeyForge toolkit using Python
dataclasses and TOML-based persistence.

Each section of the TOML file maps onto one dataclass. Missing keys fall
back to dataclass defaults and unknown keys are ignored, so older and
newer configuration files stay interchangeable.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the KeyForge root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Configuration for the constrained secret generator.

    ``symbols`` overrides the built-in symbol class when set. It must be
    non-empty and free of letters and digits; the engine rejects any other
    override at construction.
    """

    default_length: int = 16
    max_length: int = 4096
    symbols: str | None = None
    avoid_ambiguous: bool = False
    bulk_min: int = 2
    bulk_max: int = 50
    bulk_default: int = 10


@dataclass(frozen=False, slots=True)
class DigestConfig:
    """Configuration for the digest pipeline."""

    default_algorithm: str = "all"
    trim_input: bool = True


@dataclass(frozen=False, slots=True)
class SelfTestConfig:
    """Parameters for the built-in self-test suite.

    Reference:
        Pearson, K. (1900). On the criterion that a given system of
        deviations from the probable ... Philosophical Magazine, 50(302).
    """

    uniformity_draws: int = 100_000
    uniformity_modulus: int = 7
    significance: float = 0.001


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across all KeyForge modules."""

    log_level: str = "WARNING"
    log_file: str | None = None
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ForgeConfig:
    """Master configuration aggregating all sections.

    Usage:
        >>> config = ForgeConfig.load()                  # from default path
        >>> config = ForgeConfig.load("custom.toml")     # from custom path
        >>> print(config.generator.default_length)
        16
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)
    selftest: SelfTestConfig = field(default_factory=SelfTestConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ForgeConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root. Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`ForgeConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            digest=cls._build_section(DigestConfig, raw.get("digest", {})),
            selftest=cls._build_section(SelfTestConfig, raw.get("selftest", {})),
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
