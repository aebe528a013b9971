"""Pick the command to run, or list the available ones."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import click

from cli_framework.command import Command
from cli_framework.environment import Environment

logger = logging.getLogger(__name__)


def render_listing(commands: Sequence[Command], prog_name: str) -> str:
    formatter = click.HelpFormatter()
    formatter.write_usage(prog_name, "COMMAND [ARGS]...")

    rows = [
        (command.name, getattr(command, "help", None) or "")
        for command in commands
        if not getattr(command, "hidden", False)
    ]
    if rows:
        with formatter.section("Commands"):
            formatter.write_dl(rows)
    return formatter.getvalue()


def dispatch(environment: Environment, commands: Sequence[Command], prog_name: str) -> None:
    """Run exactly one command, or write the listing when none is selected.

    A lone command always runs and receives every argument. Among several,
    the first argument must equal a command name; that command receives the
    remaining arguments.
    """
    arguments = tuple(environment.arguments())

    if len(commands) == 1:
        command = commands[0]
        logger.debug("Running the only command %r", command.name)
        command(environment, arguments, {})
        return

    if arguments:
        name, rest = arguments[0], arguments[1:]
        for command in commands:
            if command.name == name:
                logger.debug("Running command %r", name)
                command(environment, rest, {})
                return
        logger.debug("No command named %r", name)

    click.echo(render_listing(commands, prog_name), file=environment.output(), nl=False)
