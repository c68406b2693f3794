"""taskgate CLI - which tasks can be worked on right now."""

import json
import logging
import sys
from datetime import date

import click

from .config import Config, load_config
from .core.resolution import ResolutionResult
from .formatting import (
    blocked_to_dict,
    format_blocked_delimited,
    format_blocked_sections,
    format_delimited,
    format_summary,
    format_task_line,
    result_to_dict,
)
from .ports.task_store import StoreUnavailableError
from .workflows import get_store, resolve_available


@click.group()
@click.version_option(package_name="taskgate")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """taskgate - Task availability resolver."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _parse_as_of(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint="--as-of")


def _run_pass(config: Config, snapshot: str | None, as_of: str | None, query: str) -> ResolutionResult:
    """Shared store + resolve step. Exits 1 if the store is unavailable."""
    target = _parse_as_of(as_of)
    try:
        store = get_store(config, snapshot)
        return resolve_available(config, store=store, as_of=target, query=query)
    except StoreUnavailableError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


snapshot_option = click.option(
    "--snapshot", "-s", default=None, help="Snapshot JSON file ('-' for stdin)"
)
as_of_option = click.option(
    "--as-of", "as_of", default=None, help="Evaluate as of date (YYYY-MM-DD), defaults to today"
)


@main.command()
@click.argument("query", required=False, default="")
@snapshot_option
@as_of_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--delimited", is_flag=True, help="Output as id|name|project|status records")
@click.option("--show-blocked", is_flag=True, help="Also list blocked tasks by reason")
@click.option("--limit", "-n", type=int, default=None, help="Maximum tasks to list")
def available(
    query: str,
    snapshot: str | None,
    as_of: str | None,
    as_json: bool,
    delimited: bool,
    show_blocked: bool,
    limit: int | None,
):
    """List tasks that are available right now."""
    config = load_config()
    result = _run_pass(config, snapshot, as_of, query)
    max_results = limit if limit is not None else config.max_results

    output_format = config.output_format
    if as_json:
        output_format = "json"
    elif delimited:
        output_format = "delimited"

    if output_format == "json":
        data = result_to_dict(result, max_results)
        if show_blocked:
            data["blockedTasks"] = blocked_to_dict(result)
        click.echo(json.dumps(data, indent=2))
        return

    if output_format == "delimited":
        click.echo(format_delimited(result, max_results))
        return

    tasks = result.available[:max_results] if max_results else result.available
    if not tasks:
        click.echo("No available tasks.")
    for task in tasks:
        click.echo(format_task_line(task))

    click.echo(f"\n{result.total_available} available, {result.total_blocked} blocked")
    if show_blocked and result.total_blocked:
        click.echo()
        click.echo(format_blocked_sections(result))


@main.command()
@click.argument("query", required=False, default="")
@snapshot_option
@as_of_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--delimited", is_flag=True, help="Output as id|name|project|reason records")
def blocked(query: str, snapshot: str | None, as_of: str | None, as_json: bool, delimited: bool):
    """List blocked tasks grouped by reason."""
    config = load_config()
    result = _run_pass(config, snapshot, as_of, query)

    output_format = config.output_format
    if as_json:
        output_format = "json"
    elif delimited:
        output_format = "delimited"

    if output_format == "json":
        click.echo(json.dumps(blocked_to_dict(result), indent=2))
        return

    if output_format == "delimited":
        click.echo(format_blocked_delimited(result))
        return

    if not result.total_blocked:
        click.echo("No blocked tasks.")
        return

    click.echo(format_blocked_sections(result))


@main.command()
@snapshot_option
@as_of_option
def summary(snapshot: str | None, as_of: str | None):
    """Show available and blocked counts."""
    result = _run_pass(load_config(), snapshot, as_of, "")
    click.echo(format_summary(result))


if __name__ == "__main__":
    main()
