"""
KeyForge Core Data Models
==========================

Pydantic models for the KeyForge secret generator and digest pipeline.
Constraint, plan and result objects are immutable value objects created
per call and discarded afterwards; no model carries cross-call state.

All result models serialise to JSON for the CLI's JSON output and the
report generator.

References:
    - Rivest, R. (1992). RFC 1321: The MD5 Message-Digest Algorithm.
    - NIST FIPS 180-4 (2015). Secure Hash Standard (SHS).
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class CharacterClassName(str, enum.Enum):
    """The four fixed character classes, in their canonical order."""

    UPPER = "upper"
    LOWER = "lower"
    NUMBERS = "numbers"
    SYMBOLS = "symbols"


class LetterCase(str, enum.Enum):
    """Which alphabetic classes a secret may draw from."""

    MIXED = "mixed"
    LOWER = "lower"
    UPPER = "upper"


class StrengthLabel(str, enum.Enum):
    """Qualitative strength label shown next to the 0-100 score."""

    WEAK = "Weak"
    BALANCED = "Balanced"
    STRONG = "Strong"
    ELITE = "Elite"


class AlgorithmId(str, enum.Enum):
    """Digest algorithms supported by the dispatcher.

    The canonical order of the members is the order used when all
    algorithms are requested.
    """

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def label(self) -> str:
        """Display label, the algorithm name uppercased (e.g. ``SHA256``)."""
        return self.value.upper()

    @classmethod
    def parse(cls, name: str | AlgorithmId) -> AlgorithmId:
        """Resolve ``"SHA-256"``, ``"sha_256"`` or ``"sha256"`` to a member.

        Raises:
            ValueError: If *name* does not identify a supported algorithm.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "").replace("_", "")
        try:
            return cls(key)
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unsupported digest algorithm {name!r} (supported: {supported})"
            ) from None


class PlanErrorKind(str, enum.Enum):
    """Reasons a set of constraints cannot produce a generation plan."""

    LENGTH_TOO_SMALL = "length_too_small"
    NO_CHARACTERS_AVAILABLE = "no_characters_available"


# ===================================================================== #
#  Errors
# ===================================================================== #


class PlanError(ValueError):
    """Constraints cannot be satisfied; generation does not proceed.

    The message is written as guidance for the person who chose the
    constraints and is meant to be shown to them verbatim.

    Attributes:
        kind: Which planning rule rejected the constraints.
        required: Sum of the per-class minimums, when relevant.
        length: Requested secret length, when relevant.
    """

    def __init__(
        self,
        kind: PlanErrorKind,
        message: str,
        *,
        required: Optional[int] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.required = required
        self.length = length

    @classmethod
    def length_too_small(cls, length: int, required: int) -> PlanError:
        return cls(
            PlanErrorKind.LENGTH_TOO_SMALL,
            f"Length {length} is too short for the requested minimums "
            f"({required} characters). Increase the length or lower the minimums.",
            required=required,
            length=length,
        )

    @classmethod
    def no_characters_available(cls) -> PlanError:
        return cls(
            PlanErrorKind.NO_CHARACTERS_AVAILABLE,
            "Select at least one option.",
        )


# ===================================================================== #
#  Generator Models
# ===================================================================== #


class SecretConstraints(BaseModel):
    """User-specified composition constraints for one secret.

    Attributes:
        length: Exact length of the secret (>= 1).
        include_letters: Whether alphabetic characters are used at all.
        letter_case: Mixed, lower-only or upper-only letters.
        include_numbers: Whether digits are used.
        include_symbols: Whether symbols are used.
        min_letters: Minimum alphabetic characters; 1 when unset.
        min_numbers: Minimum digits; 1 when unset.
        min_symbols: Minimum symbols; 1 when unset.
        avoid_ambiguous: Drop ``O``, ``0``, ``l`` and ``1`` from every pool.
    """

    model_config = ConfigDict(frozen=True)

    length: int = Field(..., ge=1)
    include_letters: bool = True
    letter_case: LetterCase = LetterCase.MIXED
    include_numbers: bool = True
    include_symbols: bool = True
    min_letters: Optional[int] = Field(default=None, ge=0)
    min_numbers: Optional[int] = Field(default=None, ge=0)
    min_symbols: Optional[int] = Field(default=None, ge=0)
    avoid_ambiguous: bool = False

    @classmethod
    def from_class_flags(
        cls,
        length: int,
        *,
        upper: bool = True,
        lower: bool = True,
        numbers: bool = True,
        symbols: bool = True,
        **options: object,
    ) -> SecretConstraints:
        """Build constraints from four independent class toggles.

        ``upper`` and ``lower`` together select mixed case, one of them
        selects that case only, and neither disables letters.
        """
        if upper and lower:
            letter_case = LetterCase.MIXED
        elif upper:
            letter_case = LetterCase.UPPER
        else:
            letter_case = LetterCase.LOWER
        return cls(
            length=length,
            include_letters=upper or lower,
            letter_case=letter_case,
            include_numbers=numbers,
            include_symbols=symbols,
            **options,
        )


class Requirement(BaseModel):
    """Draw at least ``min_count`` characters from ``pool``."""

    model_config = ConfigDict(frozen=True)

    pool: str = Field(..., min_length=1)
    min_count: int = Field(default=0, ge=0)


class GenerationPlan(BaseModel):
    """A concrete, validated sampling plan for one secret.

    Attributes:
        target_length: Exact length of the secret to assemble.
        requirements: Ordered per-class requirements.
        filler_pool: Union of all requirement pools, first-seen order.
        classes: Character classes that contributed a non-empty pool.
    """

    model_config = ConfigDict(frozen=True)

    target_length: int = Field(..., ge=1)
    requirements: tuple[Requirement, ...] = ()
    filler_pool: str = Field(..., min_length=1)
    classes: tuple[CharacterClassName, ...] = ()

    @model_validator(mode="after")
    def _check_capacity(self) -> GenerationPlan:
        if self.total_required > self.target_length:
            raise ValueError(
                f"requirements need {self.total_required} characters "
                f"but target length is {self.target_length}"
            )
        return self

    @property
    def total_required(self) -> int:
        return sum(r.min_count for r in self.requirements)

    @property
    def variety(self) -> int:
        """Number of distinct character classes the secret draws from."""
        return len(self.classes)


class StrengthScore(BaseModel):
    """Display-only strength estimate; not a security guarantee."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    label: StrengthLabel


class GeneratedSecret(BaseModel):
    """A generated secret together with its strength estimate.

    The secret is excluded from ``repr`` so it does not leak into
    tracebacks or debug output.
    """

    secret: str = Field(..., repr=False)
    length: int
    variety: int
    strength: StrengthScore


# ===================================================================== #
#  Digest Models
# ===================================================================== #


class DigestRequest(BaseModel):
    """Message, salt and ordered algorithm list for one dispatch."""

    model_config = ConfigDict(frozen=True)

    message: bytes
    salt: bytes = b""
    algorithms: tuple[AlgorithmId, ...] = Field(..., min_length=1)

    @property
    def salted_message(self) -> bytes:
        """``message + salt``, verbatim and without a delimiter."""
        return self.message + self.salt


class DigestRow(BaseModel):
    """One labeled digest, hex encoded in lowercase."""

    model_config = ConfigDict(frozen=True)

    algorithm: AlgorithmId
    label: str
    hex: str


class DigestResult(BaseModel):
    """Digest rows in request order."""

    rows: list[DigestRow] = Field(default_factory=list)
    salted: bool = False

    def pairs(self) -> list[tuple[str, str]]:
        """Return ``(label, hex)`` tuples in request order."""
        return [(row.label, row.hex) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


# ===================================================================== #
#  Self-Test Models
# ===================================================================== #


class SelfTestResult(BaseModel):
    """Outcome of a single self-test check.

    Attributes:
        check_name: Short identifier of the check.
        passed: Whether the check passed.
        detail: Human-readable description of what was observed.
        statistic: Test statistic, for statistical checks.
        p_value: P-value, for statistical checks.
    """

    check_name: str
    passed: bool = False
    detail: str = ""
    statistic: Optional[float] = None
    p_value: Optional[float] = None


class SelfTestSuiteResult(BaseModel):
    """Aggregate of all self-test checks."""

    tests: list[SelfTestResult] = Field(default_factory=list)
    total_tests: int = 0
    tests_passed: int = 0
    tests_failed: int = 0
    overall_pass: bool = False
    assessment: str = ""
