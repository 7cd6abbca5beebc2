"""
Secret Assembler
=================

Draws the characters a :class:`GenerationPlan` asks for and shuffles them
into a secret. Required characters are drawn first, requirement by
requirement, then filler characters from the combined pool; the Fisher-Yates
shuffle removes any link between a character's position and the
requirement that produced it.
"""

from __future__ import annotations

from keyforge.core.models import GenerationPlan
from keyforge.generator.random_source import UnbiasedRandom


class SecretAssembler:
    """Assembles secrets from validated plans.

    Usage::

        assembler = SecretAssembler(UnbiasedRandom())
        secret = assembler.assemble(plan)
    """

    def __init__(self, random: UnbiasedRandom | None = None) -> None:
        self._random = random or UnbiasedRandom()

    def assemble(self, plan: GenerationPlan) -> str:
        """Return a secret of exactly ``plan.target_length`` characters."""
        chars: list[str] = []
        for requirement in plan.requirements:
            chars.extend(
                self._random.choice(requirement.pool)
                for _ in range(requirement.min_count)
            )

        filler = plan.target_length - len(chars)
        chars.extend(self._random.choice(plan.filler_pool) for _ in range(filler))

        self._random.shuffle(chars)
        return "".join(chars[: plan.target_length])
