"""Commands and the registry that decides which ones exist for a run."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import click

from cli_framework.container import ServiceContainer, invoke_factory
from cli_framework.environment import Environment
from cli_framework.loader import discover_commands

logger = logging.getLogger(__name__)


@runtime_checkable
class Command(Protocol):
    """A named unit of behaviour.

    ``name`` is only used to match the first positional argument and to
    list the available commands. Commands may also expose ``help`` (a one
    line summary) and ``hidden``. A hidden command is deliberately left out
    of the listing but still runs when its name is given.
    """

    name: str

    def __call__(
        self,
        environment: Environment,
        arguments: Sequence[str],
        options: Mapping[str, str],
    ) -> None: ...  # pragma: no cover


class HelloWorld:
    """Command used when the application registers none."""

    name = "hello"
    help = "Say hello."

    def __call__(self, environment: Environment, arguments: Sequence[str], options: Mapping[str, str]) -> None:
        click.echo("Hello world", file=environment.output())


CommandsFactory = Callable[..., Sequence[Command]]


@dataclass(frozen=True)
class CommandRegistry:
    """Sources of commands registered on an application.

    ``build`` is called once per run, after the environment overlay is in
    place, so factories observe the merged variables.
    """

    factory: CommandsFactory | None = None
    names: tuple[str, ...] = ()
    directory: Path | None = None

    @property
    def empty(self) -> bool:
        return self.factory is None and not self.names and self.directory is None

    def build(self, environment: Environment, operating_system: Any, container: ServiceContainer) -> list[Command]:
        if self.empty:
            logger.debug("No command registered, falling back to %s", HelloWorld.__name__)
            return [HelloWorld()]

        commands: list[Command] = []
        if self.factory is not None:
            commands.extend(invoke_factory(self.factory, environment, operating_system, container.resolve))

        for name in self.names:
            command = container.resolve(name)
            if not isinstance(command, Command):
                raise TypeError(f"Service {name!r} does not provide a command (got {type(command).__name__})")
            commands.append(command)

        if self.directory is not None:
            commands.extend(discover_commands(self.directory))

        logger.debug("Registry provides %d command(s)", len(commands))
        return commands
