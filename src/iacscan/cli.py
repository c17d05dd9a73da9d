"""Command line interface for iacscan."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from .config import ScanConfig
from .constants import EXIT_FINDINGS, EXIT_INVALID_INPUT
from .errors import ConfigError, PlanLoadError
from .evaluator import build_fatal_error_output, run_scan
from .loader import load_plan, parse_plan
from .logging_setup import configure_logging
from .renderer import render_human_readable, render_severity_summary
from .rules import default_registry
from .severity import SEVERITY_ORDER

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group()
def cli() -> None:
    """Scan infrastructure configuration for security misconfigurations."""


@cli.command()
@click.argument("plan", required=False, type=click.Path(path_type=Path))
@click.option(
    "--json-output/--no-json-output",
    "json_output",
    default=True,
    help="Emit canonical JSON output",
)
@click.option("--stdin", is_flag=True, help="Read plan JSON from stdin")
@click.option("--quiet", is_flag=True, help="Suppress scan output")
@click.option("--strict", is_flag=True, help="Abort when a rule fails instead of reporting it")
@click.option("--workers", type=int, default=None, help="Number of worker threads")
@click.option(
    "--min-severity",
    type=click.Choice([severity.value for severity in SEVERITY_ORDER], case_sensitive=False),
    default=None,
    help="Drop findings below this severity",
)
@click.option("--include", "include", multiple=True, help="Only run these rule ids")
@click.option("--exclude", "exclude", multiple=True, help="Skip these rule ids")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
)
def scan(
    plan: Optional[Path],
    json_output: bool,
    stdin: bool,
    quiet: bool,
    strict: bool,
    workers: Optional[int],
    min_severity: Optional[str],
    include: Tuple[str, ...],
    exclude: Tuple[str, ...],
    log_level: str,
) -> None:
    """Scan a Terraform plan JSON document."""

    configure_logging(log_level)
    try:
        config = ScanConfig.from_env().merged(
            strict=True if strict else None,
            workers=workers,
            minimum_severity=min_severity,
            include_rules=include,
            exclude_rules=exclude,
        )
        plan_dict, source_path = _load_plan_payload(plan, stdin)
        result = run_scan(plan=plan_dict, source_path=source_path, config=config)
    except (PlanLoadError, ConfigError) as exc:
        logger.debug("Scan aborted: %s", exc)
        _emit_fatal(str(exc), json_output=json_output, quiet=quiet)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)

    if not quiet:
        if json_output:
            click.echo(json.dumps(result, indent=2))
        else:
            click.echo(f"{render_severity_summary(result)}\n{render_human_readable(result)}")

    if result["findings"]:
        raise click.exceptions.Exit(EXIT_FINDINGS)


@cli.command()
@click.option("--manifest", is_flag=True, help="Emit the rule manifest as JSON")
def rules(manifest: bool) -> None:
    """List the registered rules."""

    registry = default_registry()
    if manifest:
        click.echo(json.dumps(registry.manifest(), indent=2))
        return
    for rule in registry.all():
        click.echo(f"{rule.id} ({rule.legacy_id}) [{rule.default_severity.value}] {rule.documentation.summary}")


def _emit_fatal(message: str, *, json_output: bool, quiet: bool) -> None:
    if quiet:
        return
    result = build_fatal_error_output(message)
    if json_output:
        click.echo(json.dumps(result, indent=2))
    else:
        click.echo(f"Scan failed for {result['tool']}: {result['error']}")


def _load_plan_payload(plan: Optional[Path], stdin: bool) -> Tuple[Dict[str, Any], Optional[Path]]:
    if stdin and plan is not None:
        raise click.UsageError("Provide a plan path or --stdin, but not both.")

    if stdin:
        text = click.get_text_stream("stdin").read()
        return parse_plan(text), None

    if plan is None:
        raise click.UsageError("Provide a plan path or --stdin.")
    return load_plan(plan), plan


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
