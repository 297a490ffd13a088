"""
Keysmith CLI
=============

Click-based command-line interface for Keysmith. Provides subcommands
for password generation, strength checking and a statistical audit of
the generator.

Usage::

    python -m keysmith generate --length 20 --count 3 --check
    python -m keysmith generate --no-symbols --exclude-similar -e out.json
    python -m keysmith check "Tr0ub4dor&3" --extended
    python -m keysmith -o json audit --samples 5000

Defaults for the generation flags come from the ``[generator]`` section
of the configuration file.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import click

from shared.config import KeysmithConfig
from shared.console import KeysmithConsole
from shared.models import ScanResult

from keysmith import __version__
from keysmith.core.engine import KeysmithEngine, report_from_metadata
from keysmith.core.errors import GenerationError, KeysmithError, RandomUnavailable
from keysmith.core.models import ExtendedReport, GenerationAudit, GenerationOptions
from keysmith.history import PasswordHistory
from keysmith.output.console import KeysmithConsoleOutput
from keysmith.output.report import KeysmithReportGenerator

EXIT_RANDOM_UNAVAILABLE = 1
EXIT_INVALID_OPTIONS = 2


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="keysmith")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Keysmith configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json", "html"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON/HTML output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and decorated output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """Keysmith -- Password Generator & Strength Checker.

    Generate secure random passwords and assess password strength.
    """
    ctx.ensure_object(dict)

    keysmith_config = KeysmithConfig.load(config)
    ctx.obj["config"] = keysmith_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = KeysmithConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = KeysmithEngine(keysmith_config)
    ctx.obj["display"] = KeysmithConsoleOutput(
        console, mask_passwords=keysmith_config.analyzer.mask_passwords
    )
    ctx.obj["reporter"] = KeysmithReportGenerator()

    ctx.default_map = _default_map(keysmith_config)

    if not quiet and output == "console":
        console.banner(version=keysmith_config.global_settings.version)


def _default_map(config: KeysmithConfig) -> dict[str, Any]:
    """Subcommand option defaults taken from the configuration file."""
    gen = config.generator
    options = {
        "length": gen.length,
        "uppercase": gen.include_uppercase,
        "lowercase": gen.include_lowercase,
        "numbers": gen.include_numbers,
        "symbols": gen.include_symbols,
        "exclude_similar": gen.exclude_similar,
        "exclude_ambiguous": gen.exclude_ambiguous,
    }
    return {
        "generate": {**options, "count": gen.batch_count},
        "audit": {**options, "samples": config.audit.samples},
    }


def generation_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared generation flags to a subcommand."""
    decorators = [
        click.option(
            "--length", "-l",
            type=click.IntRange(min=1),
            default=16,
            show_default=True,
            help="Password length.",
        ),
        click.option(
            "--uppercase/--no-uppercase", default=True, help="Include A-Z."
        ),
        click.option(
            "--lowercase/--no-lowercase", default=True, help="Include a-z."
        ),
        click.option(
            "--numbers/--no-numbers", default=True, help="Include 0-9."
        ),
        click.option(
            "--symbols/--no-symbols", default=True, help="Include special characters."
        ),
        click.option(
            "--exclude-similar",
            is_flag=True,
            default=False,
            help="Exclude look-alike characters (0 O o 1 l I).",
        ),
        click.option(
            "--exclude-ambiguous",
            is_flag=True,
            default=False,
            help="Exclude ambiguous symbols such as brackets and quotes.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _build_options(**flags: Any) -> GenerationOptions:
    return GenerationOptions(
        length=flags["length"],
        include_uppercase=flags["uppercase"],
        include_lowercase=flags["lowercase"],
        include_numbers=flags["numbers"],
        include_symbols=flags["symbols"],
        exclude_similar=flags["exclude_similar"],
        exclude_ambiguous=flags["exclude_ambiguous"],
    )


def _fail(ctx: click.Context, exc: KeysmithError) -> None:
    """Report *exc* and exit with the matching status code."""
    console: KeysmithConsole = ctx.obj["console"]
    if ctx.obj["quiet"]:
        click.echo(f"Error: {exc}", err=True)
    else:
        console.error(str(exc))
    code = EXIT_RANDOM_UNAVAILABLE if isinstance(exc, RandomUnavailable) else EXIT_INVALID_OPTIONS
    ctx.exit(code)


def _handle_output(ctx: click.Context, result: ScanResult) -> None:
    """Write *result* as JSON or HTML according to the global options."""
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: KeysmithReportGenerator = ctx.obj["reporter"]
    console: KeysmithConsole = ctx.obj["console"]

    if output_format == "json":
        if output_file:
            path = reporter.generate_json(result, Path(output_file))
            console.success(f"JSON report saved to: {path}")
        else:
            click.echo(json.dumps(
                reporter.to_dict(result),
                indent=2,
                ensure_ascii=False,
                default=str,
            ))
    elif output_format == "html":
        config: KeysmithConfig = ctx.obj["config"]
        if output_file:
            path = Path(output_file)
        else:
            stamp = result.start_time.strftime("%Y%m%d_%H%M%S")
            path = Path(config.global_settings.output_dir) / f"keysmith_report_{stamp}.html"
        path = reporter.generate_html(result, path)
        console.success(f"HTML report saved to: {path}")


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@generation_options
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    help="Number of passwords to generate.",
)
@click.option(
    "--check",
    is_flag=True,
    default=False,
    help="Show the strength of each generated password.",
)
@click.option(
    "--export", "-e", "export_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the generated passwords to a JSON export file.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    count: int,
    check: bool,
    export_path: Optional[str],
    **flags: Any,
) -> None:
    """Generate random passwords from the selected character classes.

    One character from every selected class is guaranteed, the rest are
    drawn from the combined set and the result is shuffled.
    """
    engine: KeysmithEngine = ctx.obj["engine"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    config: KeysmithConfig = ctx.obj["config"]

    history = PasswordHistory(config.generator.history_size)
    try:
        result = engine.generate_passwords(_build_options(**flags), count, history)
    except (GenerationError, RandomUnavailable) as exc:
        _fail(ctx, exc)
        return

    passwords: list[str] = result.metadata["passwords"]

    if export_path:
        path = ctx.obj["reporter"].export_passwords(history.items(), Path(export_path))
        # JSON reports go to stdout and must stay parseable.
        if ctx.obj["output_format"] == "console":
            ctx.obj["console"].success(f"Passwords exported to: {path}")

    if ctx.obj["output_format"] != "console":
        _handle_output(ctx, result)
    elif ctx.obj["quiet"]:
        for pw in passwords:
            click.echo(pw)
    else:
        reports = [engine.analyze(pw) for pw in passwords] if check else None
        display.display_passwords(passwords, reports)
        display.display_history(history.items())
        ctx.obj["console"].findings_table(result.findings)


@cli.command()
@click.argument("password")
@click.option(
    "--extended", "-x",
    is_flag=True,
    default=False,
    help="Also check keyboard, dictionary, date and breach patterns.",
)
@click.pass_context
def check(ctx: click.Context, password: str, extended: bool) -> None:
    """Check the strength of PASSWORD.

    Reports a 0-100 score, a strength level, estimated entropy and
    improvement suggestions.
    """
    engine: KeysmithEngine = ctx.obj["engine"]
    display: KeysmithConsoleOutput = ctx.obj["display"]

    result = engine.check_password(password, extended=extended)

    if ctx.obj["output_format"] != "console":
        _handle_output(ctx, result)
    elif ctx.obj["quiet"]:
        report = report_from_metadata(result.metadata)
        level = report.level.label if report.level else "-"
        click.echo(f"{report.score if report.score is not None else '-'}\t{level}")
    else:
        if extended:
            display.display_extended(ExtendedReport(**result.metadata), password)
        else:
            display.display_strength(report_from_metadata(result.metadata), password)
        ctx.obj["console"].findings_table(result.findings)


@cli.command()
@generation_options
@click.option(
    "--samples", "-s",
    type=click.IntRange(min=1),
    default=1000,
    show_default=True,
    help="Number of passwords to generate for the audit.",
)
@click.pass_context
def audit(ctx: click.Context, samples: int, **flags: Any) -> None:
    """Audit generator output with a chi-squared goodness-of-fit test.

    Compares observed character frequencies with the exact expectation
    under the generator's sampling model.
    """
    engine: KeysmithEngine = ctx.obj["engine"]
    display: KeysmithConsoleOutput = ctx.obj["display"]
    console: KeysmithConsole = ctx.obj["console"]

    try:
        with console.status(f"Generating {samples:,} samples..."):
            result = engine.audit_generator(_build_options(**flags), samples)
    except (GenerationError, RandomUnavailable) as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] != "console":
        _handle_output(ctx, result)
    elif ctx.obj["quiet"]:
        click.echo(result.summary)
    else:
        display.display_audit(GenerationAudit(**result.metadata))
        console.findings_table(result.findings)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Keysmith CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
