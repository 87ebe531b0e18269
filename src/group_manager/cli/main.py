from pathlib import Path
from typing import Optional

import typer

from .cli_config import CliConfig
from .commands.manage import manage

app = typer.Typer()


def validate_config_file_path(config: Optional[Path]) -> Optional[Path]:
    if config is not None:
        if not config.is_file():
            raise typer.BadParameter(f"'{config.absolute()}' does not exist")

    return config


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        help="Path to the configuration file. Defaults to <cwd>/config.yml.",
        callback=validate_config_file_path,
    ),
    verbose: bool = typer.Option(
        False, help="Show debug logs, SQL statements included."
    ),
):
    """
    Forum group manager: moves users in and out of the VIP group based on
    their balance.
    """

    cli_config = CliConfig(
        config_file_path=Path.cwd() / "config.yml",
        verbose=False,
    )

    if config is not None:
        cli_config.config_file_path = config

    cli_config.verbose = verbose

    ctx.obj = cli_config


app.command(name="manage", help="Manage user groups based on balance.")(manage)


if __name__ == "__main__":
    app()
