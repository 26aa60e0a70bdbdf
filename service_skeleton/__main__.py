"""Entry point when the package is executed as a module."""

import sys

import click
import uvloop

from .platform.errors import ConfigError, ServiceError
from .platform.observability import configure_logging, get_logger
from .platform.server import Server
from .platform.settings import load_settings


@click.command()
@click.option("--log-console", is_flag=True, help="Human-readable logs instead of JSON lines.")
def main(log_console=False):
    try:
        settings = load_settings()
    except ConfigError as exc:
        click.echo(f"failed to load configuration: {exc}", err=True)
        sys.exit(1)

    configure_logging(settings.log_level, console=log_console)
    logger = get_logger(__package__).bind(service=settings.service_name)

    server = Server(settings, logger)
    try:
        uvloop.run(server.run())
    except ServiceError as exc:
        logger.error("server failed", error=str(exc))
        sys.exit(1)

    logger.info("server stopped gracefully")


if __name__ == "__main__":
    sys.exit(main())
