"""
Requirement Planner
====================

Turns :class:`SecretConstraints` into a :class:`GenerationPlan`: one
``(pool, min_count)`` requirement per character class in use, plus the
filler pool the remaining positions are drawn from.

Mixed-case letters are planned as a guaranteed lowercase letter, a
guaranteed uppercase letter and a catch-all letters requirement for the
rest of the alphabetic minimum, so the first two guaranteed characters
are not drawn twice.

A class whose pool is empty contributes no requirement and no filler.
"""

from __future__ import annotations

from typing import Optional

from keyforge.core.models import (
    CharacterClassName,
    GenerationPlan,
    LetterCase,
    PlanError,
    Requirement,
    SecretConstraints,
)
from keyforge.generator.charsets import CharacterClassRegistry


def _minimum(value: Optional[int]) -> int:
    return 1 if value is None else value


class RequirementPlanner:
    """Builds generation plans from constraints.

    Usage::

        planner = RequirementPlanner()
        plan = planner.plan(SecretConstraints(length=20, avoid_ambiguous=True))
    """

    def __init__(self, registry: CharacterClassRegistry | None = None) -> None:
        self._registry = registry or CharacterClassRegistry()

    @property
    def registry(self) -> CharacterClassRegistry:
        return self._registry

    def plan(self, constraints: SecretConstraints) -> GenerationPlan:
        """Validate *constraints* and return the sampling plan.

        Raises:
            PlanError: ``length_too_small`` when the minimums exceed the
                length, ``no_characters_available`` when every pool is empty.
        """
        avoid = constraints.avoid_ambiguous
        requirements: list[Requirement] = []
        classes: list[CharacterClassName] = []

        if constraints.include_letters:
            self._plan_letters(constraints, requirements, classes)

        optional_classes = (
            (CharacterClassName.NUMBERS, constraints.include_numbers, constraints.min_numbers),
            (CharacterClassName.SYMBOLS, constraints.include_symbols, constraints.min_symbols),
        )
        for name, enabled, min_count in optional_classes:
            if not enabled:
                continue
            pool = self._registry.pool(name, avoid_ambiguous=avoid)
            if not pool:
                continue
            requirements.append(Requirement(pool=pool, min_count=_minimum(min_count)))
            classes.append(name)

        total = sum(r.min_count for r in requirements)
        if total > constraints.length:
            raise PlanError.length_too_small(constraints.length, total)

        filler_pool = "".join(dict.fromkeys("".join(r.pool for r in requirements)))
        if not filler_pool:
            raise PlanError.no_characters_available()

        # Canonical class order keeps plans comparable across calls
        ordered = tuple(name for name in CharacterClassName if name in classes)
        return GenerationPlan(
            target_length=constraints.length,
            requirements=tuple(requirements),
            filler_pool=filler_pool,
            classes=ordered,
        )

    def _plan_letters(
        self,
        constraints: SecretConstraints,
        requirements: list[Requirement],
        classes: list[CharacterClassName],
    ) -> None:
        avoid = constraints.avoid_ambiguous
        min_letters = _minimum(constraints.min_letters)

        if constraints.letter_case is not LetterCase.MIXED:
            name = (
                CharacterClassName.LOWER
                if constraints.letter_case is LetterCase.LOWER
                else CharacterClassName.UPPER
            )
            pool = self._registry.pool(name, avoid_ambiguous=avoid)
            if pool:
                requirements.append(Requirement(pool=pool, min_count=min_letters))
                classes.append(name)
            return

        guaranteed = 0
        letters = ""
        for name in (CharacterClassName.LOWER, CharacterClassName.UPPER):
            pool = self._registry.pool(name, avoid_ambiguous=avoid)
            if not pool:
                continue
            requirements.append(Requirement(pool=pool, min_count=1))
            classes.append(name)
            letters += pool
            guaranteed += 1

        if letters:
            requirements.append(
                Requirement(pool=letters, min_count=max(min_letters - guaranteed, 0))
            )
