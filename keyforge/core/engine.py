"""
KeyForge Engine
================

Central orchestrator for the KeyForge toolkit. :class:`KeyForgeEngine`
wires the planner, assembler, scorer, digest dispatcher and self-tester
together behind a small async facade used by the CLI.

The core components are synchronous and stateless between calls; the
engine only adds configuration, logging and the input conventions of the
command line (trimmed digest input, empty input skips hashing).

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley. (Facade pattern)
"""

from __future__ import annotations

from typing import Optional

from shared.config import ForgeConfig
from shared.logger import ForgeLogger

from keyforge.analyzers.selftest import SelfTester
from keyforge.core.models import (
    DigestResult,
    GeneratedSecret,
    PlanError,
    SecretConstraints,
    SelfTestSuiteResult,
    StrengthScore,
)
from keyforge.digest.dispatcher import AlgorithmSelection, DigestDispatcher
from keyforge.digest.provider import DigestProvider
from keyforge.generator.assembler import SecretAssembler
from keyforge.generator.charsets import CharacterClassRegistry
from keyforge.generator.planner import RequirementPlanner
from keyforge.generator.random_source import SecureRandomSource, UnbiasedRandom
from keyforge.generator.strength import StrengthScorer


class KeyForgeEngine:
    """Orchestrates secret generation, scoring and digest computation.

    Usage::

        engine = KeyForgeEngine()
        generated = await engine.generate_secret(SecretConstraints(length=20))
        digests = await engine.compute_digests("hello", salt="pepper")

    Args:
        config: KeyForge configuration. Defaults are used when omitted.
        random_source: Secure 32-bit source; the OS CSPRNG by default.
        digest_provider: Platform SHA primitives; :mod:`hashlib` by default.
    """

    def __init__(
        self,
        config: Optional[ForgeConfig] = None,
        *,
        random_source: Optional[SecureRandomSource] = None,
        digest_provider: Optional[DigestProvider] = None,
    ) -> None:
        self.config = config or ForgeConfig()
        settings = self.config.global_settings
        self.logger = ForgeLogger(
            "engine",
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )

        self._random = UnbiasedRandom(random_source)
        self._registry = CharacterClassRegistry(symbols=self.config.generator.symbols)
        self._planner = RequirementPlanner(self._registry)
        self._assembler = SecretAssembler(self._random)
        self._dispatcher = DigestDispatcher(digest_provider)

    @property
    def planner(self) -> RequirementPlanner:
        return self._planner

    @property
    def dispatcher(self) -> DigestDispatcher:
        return self._dispatcher

    # ------------------------------------------------------------------ #
    #  Secret generation
    # ------------------------------------------------------------------ #

    async def generate_secret(self, constraints: SecretConstraints) -> GeneratedSecret:
        """Generate one secret satisfying *constraints*.

        Raises:
            PlanError: When the constraints cannot be satisfied.
        """
        with self.logger.operation("generate"):
            return self._generate(constraints)

    async def generate_bulk(
        self, constraints: SecretConstraints, count: int
    ) -> list[GeneratedSecret]:
        """Generate *count* independent secrets from the same constraints.

        The constraints are planned once; a :class:`PlanError` is raised
        before any secret is produced.
        """
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        with self.logger.operation("bulk"):
            plan = self._plan(constraints)
            with self.logger.timed(f"bulk generation of {count} secrets"):
                secrets = [
                    self._finish(self._assembler.assemble(plan), plan.variety)
                    for _ in range(count)
                ]
            self.logger.info(
                "Generated %d secrets", count, length=plan.target_length
            )
            return secrets

    def score_secret(self, secret: str, enabled_class_count: int) -> StrengthScore:
        """Score an existing secret for *enabled_class_count* classes."""
        return StrengthScorer.score_secret(secret, enabled_class_count)

    def _generate(self, constraints: SecretConstraints) -> GeneratedSecret:
        plan = self._plan(constraints)
        generated = self._finish(self._assembler.assemble(plan), plan.variety)
        self.logger.info(
            "Generated secret",
            length=generated.length,
            variety=generated.variety,
            score=generated.strength.score,
        )
        return generated

    def _plan(self, constraints: SecretConstraints):
        try:
            plan = self._planner.plan(constraints)
        except PlanError as exc:
            self.logger.warning(
                "Constraints rejected: %s", exc.kind.value, length=constraints.length
            )
            raise
        self.logger.debug(
            "Plan accepted",
            requirements=len(plan.requirements),
            required=plan.total_required,
            filler_pool=len(plan.filler_pool),
        )
        return plan

    @staticmethod
    def _finish(secret: str, variety: int) -> GeneratedSecret:
        return GeneratedSecret(
            secret=secret,
            length=len(secret),
            variety=variety,
            strength=StrengthScorer.score_secret(secret, variety),
        )

    # ------------------------------------------------------------------ #
    #  Digests
    # ------------------------------------------------------------------ #

    async def compute_digests(
        self,
        text: str,
        salt: str = "",
        selection: Optional[AlgorithmSelection] = None,
    ) -> DigestResult:
        """Digest ``text + salt`` with the selected algorithms.

        Surrounding whitespace is trimmed from *text* (not from *salt*)
        when ``digest.trim_input`` is set. Empty text yields an empty
        result without invoking the dispatcher.

        Raises:
            ValueError: On an unsupported algorithm selection.
            UnicodeEncodeError: When *text* or *salt* holds a lone surrogate.
        """
        if selection is None:
            selection = self.config.digest.default_algorithm
        raw = text.strip() if self.config.digest.trim_input else text

        with self.logger.operation("digest"):
            if not raw:
                self.logger.debug("Empty input, nothing to digest")
                return DigestResult()
            result = self._dispatcher.compute(raw, salt, selection)
            self.logger.info(
                "Computed %d digests",
                len(result),
                algorithms=[row.label for row in result.rows],
                salted=result.salted,
            )
            return result

    # ------------------------------------------------------------------ #
    #  Self-test
    # ------------------------------------------------------------------ #

    async def run_selftest(self) -> SelfTestSuiteResult:
        """Run the self-test suite against this engine's components."""
        cfg = self.config.selftest
        tester = SelfTester(
            self._random,
            self._dispatcher,
            self._planner,
            draws=cfg.uniformity_draws,
            modulus=cfg.uniformity_modulus,
            significance=cfg.significance,
        )
        with self.logger.operation("selftest"):
            try:
                with self.logger.timed("self-test suite"):
                    suite = tester.run()
            except Exception as exc:
                self.logger.exception(f"Self-test run failed: {exc}")
                raise
            if not suite.overall_pass:
                self.logger.error(suite.assessment)
            return suite
