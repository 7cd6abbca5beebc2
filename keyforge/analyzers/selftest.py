"""
KeyForge Self-Test Suite
=========================

Runtime checks that the generator and digest pipeline behave as
documented on the current machine:

    1. MD5 known-answer tests (RFC 1321 Appendix A.5 test suite)
    2. SHA-1 / SHA-256 / SHA-512 known-answer tests (FIPS 180-4 "abc")
    3. Salt concatenation (``text + salt`` hashes like the joined string)
    4. Range of the unbiased sampler (no value >= max is ever produced)
    5. Chi-squared uniformity of the unbiased sampler
    6. Shuffle bijection (output is a permutation of the input)
    7. Composition of generated secrets (length, minimums, no ambiguous)

A statistical check passes when its p-value is at least the configured
significance level.

References:
    - Rivest, R. (1992). RFC 1321, Appendix A.5 (test suite).
    - NIST FIPS 180-4 (2015); NIST CSRC example values for SHA.
    - Pearson, K. (1900). Chi-squared goodness-of-fit.
"""

from __future__ import annotations

from keyforge.core.models import (
    AlgorithmId,
    SecretConstraints,
    SelfTestResult,
    SelfTestSuiteResult,
)
from keyforge.digest.dispatcher import DigestDispatcher
from keyforge.digest.md5 import md5_hexdigest
from keyforge.generator.assembler import SecretAssembler
from keyforge.generator.charsets import AMBIGUOUS_CHARACTERS
from keyforge.generator.planner import RequirementPlanner
from keyforge.generator.random_source import UnbiasedRandom
from shared.math_utils import uniform_chi_squared

MD5_TEST_VECTORS: tuple[tuple[str, str], ...] = (
    ("", "d41d8cd98f00b204e9800998ecf8427e"),
    ("a", "0cc175b9c0f1b6a831c399e269772661"),
    ("abc", "900150983cd24fb0d6963f7d28e17f72"),
    ("message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    ("abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
    (
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
        "d174ab98d277d9f5a5611c2c9f419d9f",
    ),
    (
        "1234567890" * 8,
        "57edf4a22be3c955ac49da2e2107b67a",
    ),
)

SHA_TEST_VECTORS: dict[AlgorithmId, str] = {
    AlgorithmId.SHA1: "a9993e364706816aba3e25717850c26c9cd0d89d",
    AlgorithmId.SHA256: (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    ),
    AlgorithmId.SHA512: (
        "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
        "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
    ),
}

_COMPOSITION_CONSTRAINTS = SecretConstraints(
    length=12,
    min_letters=4,
    min_numbers=2,
    min_symbols=2,
    avoid_ambiguous=True,
)


class SelfTester:
    """Runs the KeyForge self-test suite.

    Usage::

        tester = SelfTester()
        suite = tester.run()
        print(f"{suite.tests_passed}/{suite.total_tests} passed")

    Args:
        random: Sampler under test.
        dispatcher: Digest dispatcher under test.
        planner: Planner used by the composition check.
        draws: Number of samples for the uniformity check.
        modulus: Range of the uniformity check, ``uniform(modulus)``.
        significance: Minimum acceptable p-value.
        composition_rounds: Secrets generated by the composition check.
    """

    def __init__(
        self,
        random: UnbiasedRandom | None = None,
        dispatcher: DigestDispatcher | None = None,
        planner: RequirementPlanner | None = None,
        *,
        draws: int = 100_000,
        modulus: int = 7,
        significance: float = 0.001,
        composition_rounds: int = 200,
    ) -> None:
        if draws < modulus * 5:
            raise ValueError("draws must give at least 5 expected hits per value")
        self._random = random or UnbiasedRandom()
        self._dispatcher = dispatcher or DigestDispatcher()
        self._planner = planner or RequirementPlanner()
        self._draws = draws
        self._modulus = modulus
        self._significance = significance
        self._composition_rounds = composition_rounds

    def run(self) -> SelfTestSuiteResult:
        """Run every check and aggregate the outcome."""
        tests = [
            self.md5_known_answers(),
            self.sha_known_answers(),
            self.salt_concatenation(),
        ]
        samples = [self._random.uniform(self._modulus) for _ in range(self._draws)]
        tests.append(self.sampler_range(samples))
        tests.append(self.sampler_uniformity(samples))
        tests.append(self.shuffle_bijection())
        tests.append(self.secret_composition())

        passed = sum(1 for t in tests if t.passed)
        failed = len(tests) - passed
        if failed == 0:
            assessment = "All self-tests passed."
        else:
            names = ", ".join(t.check_name for t in tests if not t.passed)
            assessment = f"{failed} self-test(s) failed: {names}."

        return SelfTestSuiteResult(
            tests=tests,
            total_tests=len(tests),
            tests_passed=passed,
            tests_failed=failed,
            overall_pass=failed == 0,
            assessment=assessment,
        )

    # ------------------------------------------------------------------ #
    #  Digest checks
    # ------------------------------------------------------------------ #

    def md5_known_answers(self) -> SelfTestResult:
        mismatches = [
            text for text, expected in MD5_TEST_VECTORS
            if md5_hexdigest(text) != expected
        ]
        return SelfTestResult(
            check_name="md5_known_answers",
            passed=not mismatches,
            detail=(
                f"{len(MD5_TEST_VECTORS)} RFC 1321 vectors matched"
                if not mismatches
                else f"Mismatched inputs: {mismatches!r}"
            ),
        )

    def sha_known_answers(self) -> SelfTestResult:
        mismatches = [
            algorithm.label
            for algorithm, expected in SHA_TEST_VECTORS.items()
            if self._dispatcher.digest_hex(algorithm, b"abc") != expected
        ]
        return SelfTestResult(
            check_name="sha_known_answers",
            passed=not mismatches,
            detail=(
                "SHA1, SHA256 and SHA512 matched FIPS 180-4 'abc' vectors"
                if not mismatches
                else f"Mismatched algorithms: {', '.join(mismatches)}"
            ),
        )

    def salt_concatenation(self) -> SelfTestResult:
        salted = self._dispatcher.compute("ab", "c").pairs()
        joined = self._dispatcher.compute("abc").pairs()
        return SelfTestResult(
            check_name="salt_concatenation",
            passed=salted == joined,
            detail="Salt is appended to the text without a delimiter",
        )

    # ------------------------------------------------------------------ #
    #  Sampler checks
    # ------------------------------------------------------------------ #

    def sampler_range(self, samples: list[int]) -> SelfTestResult:
        out_of_range = sum(1 for v in samples if not 0 <= v < self._modulus)
        return SelfTestResult(
            check_name="sampler_range",
            passed=out_of_range == 0,
            detail=f"{out_of_range} of {len(samples)} draws outside [0, {self._modulus})",
        )

    def sampler_uniformity(self, samples: list[int]) -> SelfTestResult:
        chi2, p_value = uniform_chi_squared(samples, self._modulus)
        return SelfTestResult(
            check_name="sampler_uniformity",
            passed=p_value >= self._significance,
            detail=(
                f"Chi-squared over {len(samples)} draws of uniform({self._modulus}), "
                f"alpha={self._significance}"
            ),
            statistic=round(chi2, 4),
            p_value=round(p_value, 6),
        )

    def shuffle_bijection(self, size: int = 64) -> SelfTestResult:
        items = list(range(size))
        shuffled = self._random.shuffle(list(items))
        return SelfTestResult(
            check_name="shuffle_bijection",
            passed=sorted(shuffled) == items,
            detail=f"Shuffled {size} distinct items",
        )

    # ------------------------------------------------------------------ #
    #  Generator check
    # ------------------------------------------------------------------ #

    def secret_composition(self) -> SelfTestResult:
        plan = self._planner.plan(_COMPOSITION_CONSTRAINTS)
        assembler = SecretAssembler(self._random)
        violations = 0
        for _ in range(self._composition_rounds):
            secret = assembler.assemble(plan)
            if len(secret) != plan.target_length:
                violations += 1
            elif AMBIGUOUS_CHARACTERS.intersection(secret):
                violations += 1
            elif any(
                sum(1 for ch in secret if ch in req.pool) < req.min_count
                for req in plan.requirements
            ):
                violations += 1
        return SelfTestResult(
            check_name="secret_composition",
            passed=violations == 0,
            detail=(
                f"{violations} of {self._composition_rounds} secrets violated "
                f"length, minimums or ambiguous exclusion"
            ),
        )
