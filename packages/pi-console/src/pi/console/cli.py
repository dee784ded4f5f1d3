"""CLI entry point for pi-console. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from pi.console.errors import ConsoleError
from pi.console.settings import load_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(level: str, log_file: str | None) -> None:
    # Log lines on stderr would land in the middle of the raw-mode line
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        filename=log_file,
    )


@click.command()
@click.option("--prompt", default=None, help="Prompt to show before each line")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: ~/.pi/console.json)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Logging level",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write log records to this file instead of stderr",
)
@click.option("--dump-trie", is_flag=True, help="Print the completion trie and exit")
def main(prompt, config_path, log_level, log_file, dump_trie):
    """Interactive console with history and Tab completion of commands."""
    _configure_logging(log_level, log_file)

    from pi.console.console import Console, build_command_trie
    from pi.console.terminal import ProcessTerminal

    try:
        settings = load_settings(config_path)
        if prompt is not None:
            settings.prompt = prompt

        if dump_trie:
            with build_command_trie(settings) as trie:
                click.echo(trie.dump())
            return

        with ProcessTerminal() as terminal, Console(settings, terminal) as console:
            exit_code = console.run(terminal.key_events())
    except ConsoleError as e:
        click.echo(f"An error occurred in the console: {e}", err=True)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
