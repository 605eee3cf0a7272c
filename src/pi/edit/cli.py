"""CLI entry point for pi-edit. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from pi.edit._version import NAME, VERSION
from pi.edit.config import LOG_LEVELS, Config, load_config
from pi.edit.errors import EditorError


def read_initial_text(path: str | None) -> str:
    """Return the contents of *path*, or ``""`` when it cannot be read."""
    if path is None:
        return ""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error reading file {path}: {e}", err=True)
        return ""


def setup_logging(config: Config) -> None:
    """Send logs to the configured file; the terminal itself is off limits."""
    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=getattr(logging, config.log_level.upper()),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    else:
        logging.getLogger("pi.edit").addHandler(logging.NullHandler())


@click.command(name=NAME)
@click.argument("file", required=False, type=click.Path(dir_okay=False))
@click.option("--debug", is_flag=True, help="Fail loudly on undecodable input")
@click.option("--log-file", default=None, help="Write logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: warning)",
)
@click.version_option(VERSION, prog_name=NAME)
def main(file, debug, log_file, log_level):
    """Edit FILE in the terminal (Ctrl-Q quits)."""
    config = load_config()
    if debug:
        config.debug = True
    if log_file:
        config.log_file = log_file
    if log_level:
        config.log_level = log_level.lower()
    setup_logging(config)

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise click.ClickException("pi-edit needs an interactive terminal")

    text = read_initial_text(file)

    from pi.edit.session import Session
    from pi.edit.terminal import ProcessTerminal

    try:
        session = Session(ProcessTerminal(), text, config)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    try:
        session.run()
    except EditorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
