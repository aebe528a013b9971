"""Entry point for the bundled CLI."""

from __future__ import annotations

import logging
import sys

from cli_framework.application import Application
from cli_framework.environment import ProcessEnvironment
from cli_framework.system import LocalOperatingSystem
from cli_framework.utils.metadata import Metadata


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging(Metadata.log_level())

    #
    # Variables from <config dir>/.env fill the gaps of the process variables.
    # Plugin commands are discovered in the commands directory.
    #
    environment = ProcessEnvironment()
    app = (
        Application.of(environment, LocalOperatingSystem())
        .named(Metadata.COMMAND_NAME)
        .config_at(Metadata.config_dir())
        .commands_at(Metadata.commands_dir())
    )
    app.run()

    raise SystemExit(environment.exit_code())


if __name__ == "__main__":
    main()
