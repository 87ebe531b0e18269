import logging
from typing import cast

import typer
from configmanager import Config

from group_manager.cli.cli_config import CliConfig
from group_manager.config import get_defaults
from group_manager.db.connection import make_engine, make_session_factory
from group_manager.exceptions import GroupManagerException
from group_manager.jobs.reconciler import Reconciler
from group_manager.reporting import (
    format_demoted,
    format_promoted,
    format_stats,
    format_summary,
)
from group_manager.toolkit.logging import setup_logging
from group_manager.types.thresholds import Thresholds

LOGGER = logging.getLogger(__name__)


def load_config(cli_config: CliConfig) -> Config:
    config = Config(schema=get_defaults())

    if cli_config.config_file_path.is_file():
        LOGGER.debug("Loading config file '%s'", cli_config.config_file_path)
        config.yaml.load(str(cli_config.config_file_path))

    # CLI values override config file values
    if cli_config.verbose:
        config.logging.level.value = logging.DEBUG

    return config


def echo_lines(lines) -> None:
    for line in lines:
        typer.echo(line)


def show_statistics(reconciler: Reconciler) -> None:
    stats = reconciler.stats()
    echo_lines(format_stats(stats, reconciler.thresholds))


def process_changes(reconciler: Reconciler, dry_run: bool, detailed: bool) -> None:
    typer.echo(
        "GROUP MANAGER - " + ("DRY RUN MODE" if dry_run else "Processing Changes")
    )
    if dry_run:
        typer.echo("DRY RUN MODE - No changes will be made")

    promotions = reconciler.find_promotion_candidates()
    demotions = reconciler.find_demotion_candidates()

    if not promotions and not demotions:
        typer.echo("No changes needed - all users are in correct groups!")
        return

    if dry_run or detailed:
        echo_lines(reconciler.preview(promotions, demotions))

    if dry_run:
        return

    result = reconciler.apply(promotions, demotions)
    echo_lines(format_promoted(user) for user in result.promoted_users)
    echo_lines(format_demoted(user) for user in result.demoted_users)
    echo_lines(format_summary(result))


def manage(
    ctx: typer.Context,
    stats: bool = typer.Option(False, "--stats", help="Show statistics only."),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be changed without making changes.",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        "--verbose",
        help="List the affected users and their balances before applying.",
    ),
):
    cli_config = cast(CliConfig, ctx.obj)
    config = load_config(cli_config)

    setup_logging(
        loglevel=config.logging.level.value,
        filename=config.logging.filename.value,
        max_log_file_size=config.logging.max_log_file_size.value,
    )

    try:
        thresholds = Thresholds.from_config(config)
        engine = make_engine(config)
        reconciler = Reconciler(
            session_factory=make_session_factory(engine), thresholds=thresholds
        )

        if stats:
            show_statistics(reconciler)
        else:
            process_changes(reconciler, dry_run=dry_run, detailed=detailed)

    except GroupManagerException as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
