"""Command-line interface for Lifecycle Audit."""

import asyncio
import logging
from pathlib import Path

import click

from .core.errors import TraversalError
from .core.reporting import JsonReporter, TextReporter
from .core.scanner import audit


@click.command()
@click.argument(
    "target",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=".",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--verbose", "-v", count=True, help="Increase verbosity (-v for INFO, -vv for DEBUG)"
)
def main(target, format, verbose):
    """
    Lifecycle Audit - Find npm packages with install hooks.

    Scans TARGET (usually node_modules) for package.json files that declare
    preinstall, install or postinstall scripts.
    """
    # Setup logging
    if verbose == 1:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    elif verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        result = asyncio.run(audit(target))
    except TraversalError as e:
        raise click.ClickException(str(e)) from e

    if format == "text":
        reporter = TextReporter()
        reporter.report(result)
    elif format == "json":
        reporter = JsonReporter()
        output = reporter.report(result)
        click.echo(output)

    # Exit code based on findings
    if result.findings:
        raise SystemExit(1)
    raise SystemExit(0)


if __name__ == "__main__":
    main()
