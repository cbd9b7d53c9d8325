"""
Passguard CLI
==============

Click-based command-line interface for the Passguard password toolkit.
Provides subcommands for single-password assessment, password generation,
and bulk analysis of password lists.

Usage::

    python -m passguard analyze                      # prompts, input hidden
    python -m passguard analyze "Tr0ub4dor&3"
    python -m passguard generate --length 20 --count 5
    python -m passguard generate --pronounceable --no-symbols
    python -m passguard bulk passwords.txt --sort-by score
    cat passwords.txt | python -m passguard -o json bulk -
    python -m passguard -o json -f report.json analyze "hunter2"

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, TextIO

import click
from pydantic import ValidationError

from shared.config import PassguardConfig
from shared.console import PassguardConsole

from passguard import __version__
from passguard.core.engine import PassguardEngine
from passguard.core.models import GeneratorConfig
from passguard.output.console import PassguardConsoleOutput
from passguard.output.report import PassguardReportGenerator


_SORT_KEYS = ("password", "score", "strength", "entropy")
_MAX_COUNT = 100


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="passguard")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Passguard configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """Passguard -- Password Strength Analysis & Generation.

    Assess password strength, estimate crack times, check policy
    compliance, generate passwords and analyse password lists.
    """
    ctx.ensure_object(dict)
    console = PassguardConsole(quiet=quiet)
    ctx.obj["console"] = console

    try:
        passguard_config = PassguardConfig.load(config) if config else PassguardConfig()
        # Keep stderr log lines out of machine-readable output.
        engine = PassguardEngine(
            passguard_config,
            log_to_console=output == "console" and not quiet,
        )
    except (OSError, ValueError) as exc:
        console.error(f"Invalid configuration: {exc}")
        ctx.exit(1)

    ctx.obj["config"] = passguard_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet
    ctx.obj["engine"] = engine
    ctx.obj["display"] = PassguardConsoleOutput(console)
    ctx.obj["reporter"] = PassguardReportGenerator()

    if output == "console" and not quiet:
        console.banner(version=__version__)


def _emit_json(ctx: click.Context, document: dict[str, Any]) -> None:
    """Write *document* to ``--output-file`` or stdout."""
    reporter: PassguardReportGenerator = ctx.obj["reporter"]
    console: PassguardConsole = ctx.obj["console"]
    output_file = ctx.obj["output_file"]

    if output_file:
        try:
            path = reporter.generate_json(document, Path(output_file))
        except OSError as exc:
            console.error(f"Could not write report: {exc}")
            ctx.exit(1)
        console.success(f"JSON report saved to: {path}")
    else:
        click.echo(reporter.to_json(document))


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password", required=False)
@click.option(
    "--policies/--no-policies",
    default=True,
    help="Show policy compliance (console output).",
)
@click.pass_context
def analyze(ctx: click.Context, password: Optional[str], policies: bool) -> None:
    """Assess the strength of PASSWORD.

    Computes entropy, detects patterns, estimates crack times, and checks
    the Basic / Enhanced / Maximum policies. When PASSWORD is omitted it is
    read from a hidden prompt so it stays out of shell history.
    """
    engine: PassguardEngine = ctx.obj["engine"]
    display: PassguardConsoleOutput = ctx.obj["display"]

    if password is None:
        password = click.prompt("Password", hide_input=True, err=True)

    if ctx.obj["output_format"] == "json":
        _emit_json(ctx, engine.export(password))
        return

    assessment = engine.assess(password)
    estimate = engine.estimate_crack_time(assessment)
    analyzer_cfg = ctx.obj["config"].analyzer
    display.display_assessment(
        assessment,
        estimate,
        engine.check_policies(assessment) if policies else None,
        rates={
            "online": analyzer_cfg.online_guesses_per_second,
            "offline": analyzer_cfg.offline_guesses_per_second,
            "optimized": analyzer_cfg.optimized_guesses_per_second,
        },
    )


@cli.command()
@click.option("--length", "-l", type=click.IntRange(4, 128), default=None,
              help="Password length (4-128).")
@click.option("--uppercase/--no-uppercase", default=None, help="Include A-Z.")
@click.option("--lowercase/--no-lowercase", default=None, help="Include a-z.")
@click.option("--numbers/--no-numbers", default=None, help="Include 0-9.")
@click.option("--symbols/--no-symbols", default=None, help="Include symbols.")
@click.option("--exclude-similar/--allow-similar", default=None,
              help="Exclude look-alike characters (i l 1 L o 0 O).")
@click.option("--pronounceable/--random", default=None,
              help="Alternate consonants and vowels.")
@click.option("--count", "-n", type=click.IntRange(1, _MAX_COUNT), default=1,
              help="Number of passwords to generate.")
@click.pass_context
def generate(
    ctx: click.Context,
    length: Optional[int],
    uppercase: Optional[bool],
    lowercase: Optional[bool],
    numbers: Optional[bool],
    symbols: Optional[bool],
    exclude_similar: Optional[bool],
    pronounceable: Optional[bool],
    count: int,
) -> None:
    """Generate random passwords.

    Unset flags fall back to the [generator] section of the configuration.
    Each password is assessed with the same scorer used by ``analyze``.
    """
    engine: PassguardEngine = ctx.obj["engine"]
    display: PassguardConsoleOutput = ctx.obj["display"]
    console: PassguardConsole = ctx.obj["console"]

    overrides = {
        "length": length,
        "include_uppercase": uppercase,
        "include_lowercase": lowercase,
        "include_numbers": numbers,
        "include_symbols": symbols,
        "exclude_similar": exclude_similar,
        "pronounceable": pronounceable,
    }
    try:
        base = engine.default_generator_config()
        settings = GeneratorConfig(**{
            **base.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except ValidationError as exc:
        console.error(f"Invalid generator settings: {exc.errors()[0]['msg']}")
        ctx.exit(2)

    results = [engine.generate_and_assess(settings) for _ in range(count)]

    if ctx.obj["output_format"] == "json":
        document = engine.export(generated=results[-1])
        if count > 1:
            document["generatedPasswords"] = [r.password for r in results]
        _emit_json(ctx, document)
        return

    if not results[-1].password:
        console.warning("No character classes enabled; nothing to generate")
        return
    display.display_generated(results)


@cli.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--sort-by", "-s",
    type=click.Choice(_SORT_KEYS),
    default=None,
    help="Sort rows by column (default: input order).",
)
@click.option("--ascending", is_flag=True, default=False,
              help="Sort lowest first.")
@click.pass_context
def bulk(
    ctx: click.Context,
    file: TextIO,
    sort_by: Optional[str],
    ascending: bool,
) -> None:
    """Analyse a list of passwords, one per line.

    FILE may be ``-`` to read from stdin. Blank lines are skipped.
    """
    engine: PassguardEngine = ctx.obj["engine"]
    display: PassguardConsoleOutput = ctx.obj["display"]
    console: PassguardConsole = ctx.obj["console"]

    if ctx.obj["output_format"] == "json":
        report = engine.analyze_bulk(file)
        if sort_by:
            report = report.model_copy(
                update={"rows": report.sorted_by(sort_by, descending=not ascending)}
            )
        document = engine.export(bulk=report)
        _emit_json(ctx, document)
        return

    with console.status("Analysing passwords..."):
        report = engine.analyze_bulk(file)

    if not report.rows:
        console.warning("No passwords found in input")
        return

    rows = report.sorted_by(sort_by, descending=not ascending) if sort_by else None
    display.display_bulk(report, rows)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Passguard CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
