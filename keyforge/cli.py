"""
KeyForge CLI
=============

Click-based command-line interface for KeyForge. Provides subcommands for
generating one or many constrained secrets, computing salted digests,
scoring an existing secret and running the runtime self-test.

Usage::

    python -m keyforge generate --length 24 --min-symbols 3
    python -m keyforge bulk --count 20 --no-symbols
    python -m keyforge hash "hello world" --salt pepper -a sha256
    python -m keyforge score "Tr0ub4dor&3"
    python -m keyforge selftest

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import click
from pydantic import BaseModel, ValidationError

from shared.config import ForgeConfig
from shared.console import ForgeConsole

from keyforge import __version__
from keyforge.core.engine import KeyForgeEngine
from keyforge.core.models import AlgorithmId, LetterCase, PlanError, SecretConstraints
from keyforge.digest.dispatcher import ALL
from keyforge.generator.strength import MAX_VARIETY, StrengthScorer
from keyforge.output.console import KeyForgeConsoleOutput
from keyforge.output.report import KeyForgeReportGenerator


class ConstraintError(click.ClickException):
    """Constraints were rejected by the planner; shown as guidance."""

    exit_code = 2


# ===================================================================== #
#  Async Runner Helper
# ===================================================================== #

def _run_async(coro):
    """Run an async coroutine from synchronous Click handlers."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        import concurrent.futures
        with concurrent.futures.ThreadPoolExecutor() as pool:
            future = pool.submit(asyncio.run, coro)
            return future.result()
    else:
        return asyncio.run(coro)


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to KeyForge configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json", "text"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON/text output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.version_option(__version__, prog_name="keyforge")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """KeyForge -- Constrained Secret Generator and Digest Workbench.

    Generate random secrets that honour per-class minimums, score their
    strength, and compute MD5/SHA digests of salted text.
    """
    ctx.ensure_object(dict)

    forge_config = ForgeConfig.load(config)
    ctx.obj["config"] = forge_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = ForgeConsole()
    ctx.obj["console"] = console
    try:
        ctx.obj["engine"] = KeyForgeEngine(forge_config)
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj["display"] = KeyForgeConsoleOutput(console)
    ctx.obj["reporter"] = KeyForgeReportGenerator()

    if output == "console" and not quiet:
        console.banner(version=forge_config.global_settings.version)


def _notice(ctx: click.Context, message: str) -> None:
    """Informational line, shown only on non-quiet console output."""
    if ctx.obj["output_format"] == "console" and not ctx.obj["quiet"]:
        ctx.obj["console"].info(message)


def _handle_output(
    ctx: click.Context,
    kind: str,
    results: Sequence[BaseModel],
    show: Callable[[], None],
) -> None:
    """Render *results* in the selected format.

    Args:
        ctx: Click context containing configuration.
        kind: Result kind recorded in the report metadata.
        results: Result models to serialise.
        show: Console renderer used for ``console`` output.
    """
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: KeyForgeReportGenerator = ctx.obj["reporter"]
    console: ForgeConsole = ctx.obj["console"]

    if output_format == "console":
        show()
    elif output_format == "json":
        if output_file:
            path = reporter.generate_json(kind, results, Path(output_file))
            console.success(f"JSON report saved to: {path}")
        else:
            click.echo(reporter.render_json(kind, results))
    elif output_format == "text":
        if output_file:
            path = reporter.generate_text(results, Path(output_file))
            console.success(f"Text export saved to: {path}")
        else:
            for line in reporter.render_text(results):
                click.echo(line)


# ===================================================================== #
#  Constraint Options
# ===================================================================== #

_CONSTRAINT_OPTIONS = [
    click.option(
        "--length", "-l",
        type=click.IntRange(min=1),
        default=None,
        help="Exact secret length (default from config).",
    ),
    click.option(
        "--case",
        "letter_case",
        type=click.Choice([c.value for c in LetterCase]),
        default=LetterCase.MIXED.value,
        show_default=True,
        help="Letter case to draw from.",
    ),
    click.option("--letters/--no-letters", default=True, help="Include letters."),
    click.option("--numbers/--no-numbers", default=True, help="Include digits."),
    click.option("--symbols/--no-symbols", default=True, help="Include symbols."),
    click.option(
        "--min-letters", type=click.IntRange(min=0), default=None,
        help="Minimum letters (default 1).",
    ),
    click.option(
        "--min-numbers", type=click.IntRange(min=0), default=None,
        help="Minimum digits (default 1).",
    ),
    click.option(
        "--min-symbols", type=click.IntRange(min=0), default=None,
        help="Minimum symbols (default 1).",
    ),
    click.option(
        "--avoid-ambiguous/--allow-ambiguous",
        default=None,
        help="Drop O, 0, l and 1 from every pool (default from config).",
    ),
]


def constraint_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_CONSTRAINT_OPTIONS):
        func = option(func)
    return func


def _build_constraints(ctx: click.Context, **params: Any) -> SecretConstraints:
    """Translate CLI options into :class:`SecretConstraints`."""
    gen_cfg = ctx.obj["config"].generator
    length = params["length"] if params["length"] is not None else gen_cfg.default_length
    if length > gen_cfg.max_length:
        raise click.BadParameter(
            f"must be at most {gen_cfg.max_length}", param_hint="'--length'"
        )
    avoid = params["avoid_ambiguous"]
    try:
        return SecretConstraints(
            length=length,
            include_letters=params["letters"],
            letter_case=LetterCase(params["letter_case"]),
            include_numbers=params["numbers"],
            include_symbols=params["symbols"],
            min_letters=params["min_letters"],
            min_numbers=params["min_numbers"],
            min_symbols=params["min_symbols"],
            avoid_ambiguous=gen_cfg.avoid_ambiguous if avoid is None else avoid,
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc


def _guarded(coro):
    """Run *coro*, converting a :class:`PlanError` into exit status 2."""
    try:
        return _run_async(coro)
    except PlanError as exc:
        raise ConstraintError(str(exc)) from exc


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@constraint_options
@click.pass_context
def generate(ctx: click.Context, **params: Any) -> None:
    """Generate one secret satisfying the composition constraints.

    Every enabled class contributes at least its minimum; the remaining
    positions are filled from the union of enabled classes and the result
    is shuffled.
    """
    engine: KeyForgeEngine = ctx.obj["engine"]
    display: KeyForgeConsoleOutput = ctx.obj["display"]

    constraints = _build_constraints(ctx, **params)
    generated = _guarded(engine.generate_secret(constraints))

    _handle_output(ctx, "generate", [generated], lambda: display.display_secret(generated))


@cli.command()
@constraint_options
@click.option(
    "--count", "-n",
    type=int,
    default=None,
    help="Number of secrets (clamped to the configured range).",
)
@click.pass_context
def bulk(ctx: click.Context, count: Optional[int], **params: Any) -> None:
    """Generate several independent secrets from the same constraints."""
    engine: KeyForgeEngine = ctx.obj["engine"]
    display: KeyForgeConsoleOutput = ctx.obj["display"]
    gen_cfg = ctx.obj["config"].generator

    requested = gen_cfg.bulk_default if count is None else count
    count = max(gen_cfg.bulk_min, min(gen_cfg.bulk_max, requested))
    if count != requested:
        _notice(ctx, f"Count {requested} clamped to {count}.")

    constraints = _build_constraints(ctx, **params)
    generated = _guarded(engine.generate_bulk(constraints, count))

    _handle_output(ctx, "bulk", generated, lambda: display.display_bulk(generated))


def _parse_algorithms(
    ctx: click.Context, param: click.Parameter, value: Sequence[str]
) -> Optional[Any]:
    if not value:
        return None
    if any(name.strip().lower() == ALL for name in value):
        return ALL
    try:
        return tuple(AlgorithmId.parse(name) for name in value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


@cli.command("hash")
@click.argument("text")
@click.option("--salt", "-s", default="", help="Salt appended to the text.")
@click.option(
    "--algorithm", "-a",
    "algorithms",
    multiple=True,
    callback=_parse_algorithms,
    help="md5, sha1, sha256, sha512 or all (repeatable; default from config).",
)
@click.pass_context
def hash_cmd(
    ctx: click.Context, text: str, salt: str, algorithms: Optional[Any]
) -> None:
    """Compute digests of TEXT followed by the salt.

    The salt is appended to the text without a separator, so
    ``("ab", "c")`` and ``("a", "bc")`` hash identically.
    """
    engine: KeyForgeEngine = ctx.obj["engine"]
    display: KeyForgeConsoleOutput = ctx.obj["display"]

    try:
        result = _run_async(engine.compute_digests(text, salt, algorithms))
    except UnicodeEncodeError as exc:
        raise click.BadParameter(
            "text and salt must be valid Unicode (no lone surrogates)",
            param_hint="'TEXT' / '--salt'",
        ) from exc
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="'--algorithm'") from exc

    _handle_output(ctx, "hash", [result], lambda: display.display_digests(result))


@cli.command()
@click.argument("secret")
@click.option(
    "--classes", "-k",
    type=click.IntRange(0, MAX_VARIETY),
    default=None,
    help="Number of enabled character classes (detected when omitted).",
)
@click.pass_context
def score(ctx: click.Context, secret: str, classes: Optional[int]) -> None:
    """Score the strength of an existing SECRET."""
    engine: KeyForgeEngine = ctx.obj["engine"]
    display: KeyForgeConsoleOutput = ctx.obj["display"]

    variety = StrengthScorer.detect_variety(secret) if classes is None else classes
    strength = engine.score_secret(secret, variety)

    _handle_output(
        ctx, "score", [strength],
        lambda: display.display_strength(strength, variety=variety),
    )


@cli.command()
@click.pass_context
def selftest(ctx: click.Context) -> None:
    """Run known-answer and sampler self-tests.

    Exits with status 1 when any check fails.
    """
    engine: KeyForgeEngine = ctx.obj["engine"]
    display: KeyForgeConsoleOutput = ctx.obj["display"]
    console: ForgeConsole = ctx.obj["console"]

    if ctx.obj["output_format"] == "console":
        with console.status("Running self-tests..."):
            suite = _run_async(engine.run_selftest())
    else:
        suite = _run_async(engine.run_selftest())

    _handle_output(ctx, "selftest", [suite], lambda: display.display_selftest(suite))

    if not suite.overall_pass:
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the KeyForge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
