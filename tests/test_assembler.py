"""Tests for secret assembly."""

from __future__ import annotations

import string

import pytest
from pydantic import ValidationError

from keyforge.core.models import GenerationPlan, Requirement, SecretConstraints
from keyforge.generator.assembler import SecretAssembler
from keyforge.generator.charsets import AMBIGUOUS_CHARACTERS, DEFAULT_SYMBOLS
from keyforge.generator.planner import RequirementPlanner


def test_zero_source_is_deterministic(zero_random):
    plan = RequirementPlanner().plan(
        SecretConstraints(length=3, include_letters=False, include_symbols=False)
    )
    assert SecretAssembler(zero_random).assemble(plan) == "000"


@pytest.mark.parametrize("length", [4, 5, 16, 64, 257])
def test_exact_length(length):
    plan = RequirementPlanner().plan(SecretConstraints(length=length))
    assert len(SecretAssembler().assemble(plan)) == length


def test_minimums_and_exclusions_hold():
    constraints = SecretConstraints(
        length=20, min_letters=6, min_numbers=5, min_symbols=5, avoid_ambiguous=True
    )
    plan = RequirementPlanner().plan(constraints)
    assembler = SecretAssembler()
    for _ in range(200):
        secret = assembler.assemble(plan)
        assert len(secret) == 20
        assert not AMBIGUOUS_CHARACTERS.intersection(secret)
        assert sum(ch in string.ascii_letters for ch in secret) >= 6
        assert sum(ch in string.digits for ch in secret) >= 5
        assert sum(ch not in string.ascii_letters + string.digits for ch in secret) >= 5
        assert any(ch in string.ascii_lowercase for ch in secret)
        assert any(ch in string.ascii_uppercase for ch in secret)


def test_only_filler_pool_characters():
    plan = RequirementPlanner().plan(
        SecretConstraints(length=32, include_symbols=False, letter_case="upper")
    )
    secret = SecretAssembler().assemble(plan)
    assert set(secret) <= set(string.ascii_uppercase + string.digits)


def test_required_positions_are_shuffled():
    # Without the shuffle the single digit would always come first
    plan = RequirementPlanner().plan(
        SecretConstraints(
            length=8, include_letters=False, include_symbols=True, min_symbols=0
        )
    )
    assembler = SecretAssembler()
    first_chars = {assembler.assemble(plan)[0] for _ in range(200)}
    assert first_chars - set(string.digits)


@pytest.mark.parametrize(
    "flags,alphabet",
    [
        ({"upper": False, "numbers": False, "symbols": False}, string.ascii_lowercase),
        ({"lower": False, "numbers": False, "symbols": False}, string.ascii_uppercase),
        ({"upper": False, "lower": False, "symbols": False}, string.digits),
        ({"upper": False, "lower": False, "numbers": False}, DEFAULT_SYMBOLS),
        ({}, string.ascii_letters + string.digits + DEFAULT_SYMBOLS),
    ],
    ids=["lower", "upper", "numbers", "symbols", "mixed"],
)
def test_ambiguous_exclusion_per_class(flags, alphabet):
    plan = RequirementPlanner().plan(
        SecretConstraints.from_class_flags(24, avoid_ambiguous=True, **flags)
    )
    assembler = SecretAssembler()
    for _ in range(300):
        secret = assembler.assemble(plan)
        assert not AMBIGUOUS_CHARACTERS.intersection(secret)
        assert set(secret) <= set(alphabet)


def test_plan_requirements_cannot_exceed_length():
    with pytest.raises(ValidationError, match="target length is 3"):
        GenerationPlan(
            target_length=3,
            requirements=(Requirement(pool="abc", min_count=5),),
            filler_pool="abc",
        )


def test_plan_requirements_may_fill_length():
    plan = GenerationPlan(
        target_length=3,
        requirements=(Requirement(pool="abc", min_count=3),),
        filler_pool="abc",
    )
    assert plan.total_required == plan.target_length
