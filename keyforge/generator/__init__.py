"""
KeyForge Generator
===================

Constrained secret generation: unbiased sampling, character classes,
requirement planning, assembly and strength scoring.
"""

from keyforge.generator.assembler import SecretAssembler
from keyforge.generator.charsets import (
    AMBIGUOUS_CHARACTERS,
    CharacterClass,
    CharacterClassRegistry,
    filter_ambiguous,
)
from keyforge.generator.planner import RequirementPlanner
from keyforge.generator.random_source import (
    SecureRandomSource,
    SecureRandomUnavailableError,
    SystemRandomSource,
    UnbiasedRandom,
)
from keyforge.generator.strength import StrengthScorer

__all__ = [
    "AMBIGUOUS_CHARACTERS",
    "CharacterClass",
    "CharacterClassRegistry",
    "RequirementPlanner",
    "SecretAssembler",
    "SecureRandomSource",
    "SecureRandomUnavailableError",
    "StrengthScorer",
    "SystemRandomSource",
    "UnbiasedRandom",
    "filter_ambiguous",
]
