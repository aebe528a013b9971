"""Application builder: the registration surface and the run procedure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from cli_framework.command import CommandRegistry, CommandsFactory
from cli_framework.config import load_overlay
from cli_framework.container import Factory, ServiceContainer
from cli_framework.dispatcher import dispatch
from cli_framework.environment import Environment, EnvironmentOverlay
from cli_framework.system import OperatingSystem
from cli_framework.utils.metadata import Metadata

logger = logging.getLogger(__name__)

EnvironmentDecorator = Callable[[Environment], Environment]
OperatingSystemDecorator = Callable[[OperatingSystem], OperatingSystem]


@dataclass(frozen=True)
class Application:
    """Immutable description of a command-line application.

    Every registration returns a new application::

        app = (
            Application.of(ProcessEnvironment(), LocalOperatingSystem())
            .config_at(Path("/etc/my-app"))
            .command("deploy")
            .service("deploy", lambda env, os, get: Deploy(get("client")))
            .service("client", lambda env: Client(env.variables()["API_URL"]))
        )
        app.run()
    """

    environment: Environment
    operating_system: OperatingSystem
    prog_name: str = Metadata.COMMAND_NAME
    config_path: Path | None = None
    registry: CommandRegistry = CommandRegistry()
    services: tuple[tuple[str, Factory], ...] = ()
    environment_decorators: tuple[EnvironmentDecorator, ...] = ()
    operating_system_decorators: tuple[OperatingSystemDecorator, ...] = ()

    @classmethod
    def of(cls, environment: Environment, operating_system: OperatingSystem) -> Application:
        return cls(environment, operating_system)

    def named(self, prog_name: str) -> Application:
        """Name shown in the usage line of the command listing."""
        return replace(self, prog_name=prog_name)

    def config_at(self, path: Path) -> Application:
        return replace(self, config_path=Path(path))

    def commands(self, factory: CommandsFactory) -> Application:
        return replace(self, registry=replace(self.registry, factory=factory))

    def command(self, name: str) -> Application:
        return replace(self, registry=replace(self.registry, names=(*self.registry.names, name)))

    def commands_at(self, path: Path) -> Application:
        return replace(self, registry=replace(self.registry, directory=Path(path)))

    def service(self, name: str, factory: Factory) -> Application:
        return replace(self, services=(*self.services, (name, factory)))

    def decorate_environment(self, decorator: EnvironmentDecorator) -> Application:
        return replace(self, environment_decorators=(*self.environment_decorators, decorator))

    def decorate_operating_system(self, decorator: OperatingSystemDecorator) -> Application:
        return replace(self, operating_system_decorators=(*self.operating_system_decorators, decorator))

    def run(self) -> None:
        """Select and execute one command.

        The outcome is only visible through the environment (its streams and
        exit code). ``ServiceNotFound`` escapes when the wiring is broken.
        """
        operating_system = self._build_operating_system()
        environment = self._build_environment(operating_system)

        container = ServiceContainer(environment, operating_system)
        for name, factory in self.services:
            container.register(name, factory)

        commands = self.registry.build(environment, operating_system, container)
        dispatch(environment, commands, self.prog_name)

    def _build_operating_system(self) -> OperatingSystem:
        operating_system = self.operating_system
        for decorator in self.operating_system_decorators:
            operating_system = decorator(operating_system)
        return operating_system

    def _build_environment(self, operating_system: OperatingSystem) -> Environment:
        source: Callable[[], Mapping[str, str]] | None = None
        config_path = self.config_path
        if config_path is not None:
            logger.debug("Looking for configuration in %s", config_path)

            def load() -> Mapping[str, str]:
                return load_overlay(config_path, operating_system.filesystem())

            source = load

        environment: Environment = EnvironmentOverlay(self.environment, source)
        for decorator in self.environment_decorators:
            environment = decorator(environment)
        return environment
