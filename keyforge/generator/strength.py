"""
Strength Scorer
================

Derives a 0-100 display score and a qualitative label from a secret's
length and the number of character classes it draws from:

    score = round(min(60, length / 64 * 60) + variety / 4 * 40)

Length contributes at most 60 points (reached at 64 characters) and
class variety at most 40. Halves round up. The score is presentation
data only and makes no claim about guessing resistance.
"""

from __future__ import annotations

import math
import string

from keyforge.core.models import StrengthLabel, StrengthScore

MAX_VARIETY = 4

_LABEL_THRESHOLDS: tuple[tuple[int, StrengthLabel], ...] = (
    (80, StrengthLabel.ELITE),
    (65, StrengthLabel.STRONG),
    (45, StrengthLabel.BALANCED),
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class StrengthScorer:
    """Scores secrets by length and class variety.

    Usage::

        StrengthScorer.score(16, 4)         # StrengthScore(score=55, label=BALANCED)
        StrengthScorer.score_secret("aB3$", 4)
    """

    @staticmethod
    def score(length: int, variety: int) -> StrengthScore:
        """Score a secret of *length* characters drawing from *variety* classes.

        Raises:
            ValueError: If *length* is negative or *variety* is not in [0, 4].
        """
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        if not 0 <= variety <= MAX_VARIETY:
            raise ValueError(f"variety must be in [0, {MAX_VARIETY}], got {variety}")
        if length == 0:
            return StrengthScore(score=0, label=StrengthLabel.WEAK)

        length_points = min(60.0, length / 64 * 60)
        variety_points = variety / MAX_VARIETY * 40
        value = min(100, _round_half_up(length_points + variety_points))
        return StrengthScore(score=value, label=StrengthScorer.label_for(value))

    @staticmethod
    def label_for(score: int) -> StrengthLabel:
        for threshold, label in _LABEL_THRESHOLDS:
            if score >= threshold:
                return label
        return StrengthLabel.WEAK

    @classmethod
    def score_secret(cls, secret: str, variety: int) -> StrengthScore:
        """Score an already generated *secret* for *variety* enabled classes."""
        return cls.score(len(secret), variety)

    @staticmethod
    def detect_variety(secret: str) -> int:
        """Count the classes (upper, lower, digits, other) present in *secret*.

        Used when scoring a string whose generating constraints are unknown.
        """
        present = {
            "upper" if ch in string.ascii_uppercase
            else "lower" if ch in string.ascii_lowercase
            else "numbers" if ch in string.digits
            else "symbols"
            for ch in secret
        }
        return len(present)
