import click

from pos.infrastructure.cli.product_commands import product_categories, product_list
from pos.infrastructure.cli.terminal_commands import scan, terminal
from pos.infrastructure.config import get_settings
from pos.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--token", envvar="POS_TOKEN", default=None, help="Session bearer token.")
@click.option("--user", "username", envvar="POS_USERNAME", default=None, help="Operator name.")
@click.option("--role", envvar="POS_ROLE", default=None, help="Operator role (admin/cashier).")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, ...).")
@click.pass_context
def cli(
    ctx: click.Context,
    token: str | None,
    username: str | None,
    role: str | None,
    log_level: str | None,
) -> None:
    """POS — point-of-sale terminal"""
    overrides = {
        key: value
        for key, value in {"token": token, "username": username, "role": role}.items()
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides)
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@cli.group()
def products() -> None:
    """Browse the product catalog."""


# Register subcommands
products.add_command(product_list)
products.add_command(product_categories)
cli.add_command(scan)
cli.add_command(terminal)
