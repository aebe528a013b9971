"""Plugin command discovery and lazy loading.

A plugin directory holds one sub-directory per command::

    commands/
        greet/
            entry.py    # exports ``cli``, a click.Command
            meta.yaml   # HelpSummary, hidden, enabled

Only ``meta.yaml`` is read during discovery; ``entry.py`` is imported the
first time the command runs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from importlib import util
from pathlib import Path

import click
import yaml

from cli_framework.environment import Environment
from cli_framework.exceptions import InvalidPluginError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    name: str
    entry_path: Path
    meta_path: Path
    help_summary: str
    hidden: bool
    enabled: bool


def _safe_name(name: str) -> str:
    return name.replace("_", "-")


def load_meta(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001 - surface any parse error
        raise InvalidPluginError(f"Invalid meta.yaml at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidPluginError(f"Invalid meta.yaml at {path}: expected mapping")

    # Support both HelpSummary (new) and shortHelp (legacy)
    help_summary = data.get("HelpSummary") or data.get("shortHelp")
    if not isinstance(help_summary, str) or not help_summary.strip():
        raise InvalidPluginError(f"Invalid meta.yaml at {path}: HelpSummary must be a non-empty string")

    data["HelpSummary"] = help_summary.strip()
    data.setdefault("hidden", False)
    data.setdefault("enabled", True)

    # Disabled commands are never listed
    if not data["enabled"]:
        data["hidden"] = True

    return data


def discover_specs(commands_dir: Path) -> dict[str, CommandSpec]:
    """Read every plugin of *commands_dir*, reporting all problems at once."""
    errors: list[str] = []
    specs: dict[str, CommandSpec] = {}
    if not commands_dir.exists():
        logger.debug("Plugin directory %s does not exist", commands_dir)
        return specs

    for command_dir in sorted(p for p in commands_dir.iterdir() if p.is_dir()):
        # Ignore interpreter / tooling artefacts.
        if command_dir.name.startswith(".") or command_dir.name.startswith("__"):
            continue

        entry_path = command_dir / "entry.py"
        meta_path = command_dir / "meta.yaml"

        missing: list[str] = []
        if not entry_path.is_file():
            missing.append("entry.py")
        if not meta_path.is_file():
            missing.append("meta.yaml")
        if missing:
            errors.append(f"{command_dir.name}: missing {', '.join(missing)}")
            continue

        try:
            meta = load_meta(meta_path)
        except InvalidPluginError as exc:
            errors.append(str(exc))
            continue

        name = _safe_name(command_dir.name)
        specs[name] = CommandSpec(
            name=name,
            entry_path=entry_path,
            meta_path=meta_path,
            help_summary=meta["HelpSummary"],
            hidden=bool(meta["hidden"]),
            enabled=bool(meta["enabled"]),
        )

    if errors:
        message = "Invalid command plugins detected:\n" + "\n".join(f"- {err}" for err in errors)
        raise InvalidPluginError(message)
    return specs


def load_click_command(spec: CommandSpec) -> click.Command:
    module_name = f"cli_framework_plugins.{spec.entry_path.parent.name}.entry"
    module_spec = util.spec_from_file_location(module_name, spec.entry_path)
    if module_spec is None or module_spec.loader is None:
        raise InvalidPluginError(f"Failed to import entry.py at {spec.entry_path}")
    module = util.module_from_spec(module_spec)
    try:
        module_spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - surface any import error
        raise InvalidPluginError(f"Failed to import entry.py at {spec.entry_path}: {exc}") from exc

    cli = getattr(module, "cli", None)
    if not isinstance(cli, click.Command):
        raise InvalidPluginError(
            f"{spec.entry_path} must export 'cli' as a click.Command (found {type(cli).__name__})"
        )

    cli.name = spec.name
    cli.help = spec.help_summary
    cli.short_help = spec.help_summary
    logger.debug("Loaded plugin %r from %s", spec.name, spec.entry_path)
    return cli


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


class ClickCommand:
    """Run a plugin's click command against a framework environment.

    The environment is available to the click callback as ``ctx.obj``.
    """

    def __init__(self, spec: CommandSpec) -> None:
        self.spec = spec
        self._cli: click.Command | None = None

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def help(self) -> str:
        return self.spec.help_summary

    @property
    def hidden(self) -> bool:
        return self.spec.hidden

    def load(self) -> click.Command:
        if self._cli is None:
            self._cli = load_click_command(self.spec)
        return self._cli

    def __call__(self, environment: Environment, arguments: Sequence[str], options: Mapping[str, str]) -> None:
        if not self.spec.enabled:
            click.echo(f"Command '{self.name}' is disabled.", file=environment.error())
            environment.exit(1)
            return

        cli = self.load()
        try:
            result = cli.main(
                args=list(arguments),
                prog_name=self.name,
                standalone_mode=False,
                obj=environment,
            )
        except click.ClickException as exc:
            exc.show(file=environment.error())
            environment.exit(exc.exit_code)
            return
        except click.Abort:
            click.echo("Aborted!", file=environment.error())
            environment.exit(1)
            return
        except SystemExit as exc:
            if exc.code is not None and not isinstance(exc.code, int):
                click.echo(str(exc.code), file=environment.error())
            environment.exit(_exit_status(exc.code))
            return

        if isinstance(result, int) and not isinstance(result, bool):
            environment.exit(result)


def discover_commands(commands_dir: Path) -> list[ClickCommand]:
    return [ClickCommand(spec) for spec in discover_specs(commands_dir).values()]
