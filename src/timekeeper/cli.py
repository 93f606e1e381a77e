"""CLI entry point for Timekeeper.

- ``run``: check the workspace once and send reminders
- ``watch``: check on a fixed interval until interrupted
- ``check-config``: validate timekeeper.yaml and print a summary
"""

from __future__ import annotations

import functools
import sys
from pathlib import Path

import click

from timekeeper.config import ConfigError, TimekeeperConfig, find_config, load_config
from timekeeper.identity import IdentityMap
from timekeeper.logging import setup_logging
from timekeeper.pipeline import PipelineError, run_check
from timekeeper.scheduler import Scheduler

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to timekeeper.yaml (auto-detected if not specified)",
)
dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    help="Log messages instead of sending them to Slack",
)
verbose_option = click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)


def _load(
    config_path: Path | None, require_tokens: bool = True, need_slack: bool = True
) -> TimekeeperConfig:
    try:
        config = load_config(config_path or find_config())
        IdentityMap(config.identities, config.managers)
        if require_tokens:
            config.require_tokens(slack=need_slack)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)
    return config


@click.group()
@click.version_option()
def main() -> None:
    """Timekeeper - remind people about ClickUp tasks missing time or updates."""
    pass


@main.command()
@config_option
@dry_run_option
@verbose_option
def run(config_path: Path | None, dry_run: bool, verbose: bool) -> None:
    """Check the workspace once and send reminders."""
    setup_logging(level="DEBUG" if verbose else None)
    config = _load(config_path, need_slack=not dry_run)

    try:
        result = Scheduler(functools.partial(run_check, config, dry_run)).run_once()
    except PipelineError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    deliveries = result.deliveries
    click.echo(
        f"{len(result.report.issues)} tasks missing time or status update, "
        f"{len(result.report.reviewer_assignments)} awaiting a reviewer; "
        f"{len(deliveries.sent)} messages sent, {len(deliveries.failed)} failed"
    )


@main.command()
@config_option
@click.option(
    "--interval",
    "interval",
    type=click.IntRange(min=1),
    default=None,
    help="Seconds between checks (default: interval_seconds from config)",
)
@dry_run_option
@verbose_option
def watch(config_path: Path | None, interval: int | None, dry_run: bool, verbose: bool) -> None:
    """Check the workspace repeatedly until interrupted."""
    setup_logging(level="DEBUG" if verbose else None)
    config = _load(config_path, need_slack=not dry_run)

    scheduler = Scheduler(
        functools.partial(run_check, config, dry_run),
        interval_seconds=interval or config.interval_seconds,
    )
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        click.echo("Stopped.")


@main.command("check-config")
@config_option
def check_config(config_path: Path | None) -> None:
    """Validate the configuration and print a summary."""
    config = _load(config_path, require_tokens=False)
    identities = IdentityMap(config.identities, config.managers)

    click.echo(f"Team: {config.team_id}")
    click.echo(f"Tracked spaces: {', '.join(config.tracked_spaces) or '(none)'}")
    click.echo(f"Relevant statuses: {', '.join(config.relevant_statuses)}")
    click.echo(f"Activity source: {config.activity_source}")
    click.echo(f"Identities: {len(identities)}")
    for space in identities.spaces_with_managers:
        click.echo(f"Managers for {space}: {', '.join(identities.managers_for(space))}")
    tokens = (("CLICKUP_TOKEN", config.clickup_token), ("SLACK_TOKEN", config.slack_token))
    for name, value in tokens:
        click.echo(f"{name}: {'set' if value else 'MISSING'}")


if __name__ == "__main__":
    main()
