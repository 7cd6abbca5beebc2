"""
KeyForge Core Module
=====================

Data models shared by the generator and digest packages. Import the
engine from :mod:`keyforge.core.engine`.
"""

from keyforge.core.models import (
    AlgorithmId,
    CharacterClassName,
    DigestRequest,
    DigestResult,
    DigestRow,
    GeneratedSecret,
    GenerationPlan,
    LetterCase,
    PlanError,
    PlanErrorKind,
    Requirement,
    SecretConstraints,
    SelfTestResult,
    SelfTestSuiteResult,
    StrengthLabel,
    StrengthScore,
)

__all__ = [
    "AlgorithmId",
    "CharacterClassName",
    "DigestRequest",
    "DigestResult",
    "DigestRow",
    "GeneratedSecret",
    "GenerationPlan",
    "LetterCase",
    "PlanError",
    "PlanErrorKind",
    "Requirement",
    "SecretConstraints",
    "SelfTestResult",
    "SelfTestSuiteResult",
    "StrengthLabel",
    "StrengthScore",
]
