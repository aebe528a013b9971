"""Shared fakes for the test suite.

Environments and operating systems are in-memory: no test touches the real
process streams or variables unless it says so.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest


class FakeEnvironment:
    def __init__(self, arguments=(), variables=None, interactive=False) -> None:
        self._arguments = tuple(arguments)
        self._variables = dict(variables or {})
        self._interactive = interactive
        self.stdin = io.StringIO()
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.cwd = Path("/working/directory")
        self.code = 0
        self.variables_calls = 0

    def interactive(self) -> bool:
        return self._interactive

    def input(self):
        return self.stdin

    def output(self):
        return self.stdout

    def error(self):
        return self.stderr

    def arguments(self):
        return self._arguments

    def variables(self):
        self.variables_calls += 1
        return self._variables

    def exit(self, code: int) -> None:
        self.code = code

    def exit_code(self) -> int:
        return self.code

    def working_directory(self) -> Path:
        return self.cwd


class FakeDirectory:
    def __init__(self, files: dict[str, str]) -> None:
        self.files = files

    def contains(self, name: str) -> bool:
        return name in self.files

    def read(self, name: str) -> str:
        return self.files[name]


class FakeFilesystem:
    def __init__(self, directories: dict[str, dict[str, str]] | None = None) -> None:
        self.directories = {Path(path): files for path, files in (directories or {}).items()}
        self.mounted: list[Path] = []

    def contains(self, path: Path) -> bool:
        return Path(path) in self.directories

    def mount(self, path: Path) -> FakeDirectory:
        self.mounted.append(Path(path))
        return FakeDirectory(self.directories[Path(path)])


class FakeOperatingSystem:
    def __init__(self, filesystem: FakeFilesystem | None = None) -> None:
        self._filesystem = filesystem or FakeFilesystem()
        self.filesystem_calls = 0

    def filesystem(self) -> FakeFilesystem:
        self.filesystem_calls += 1
        return self._filesystem


class RecordingCommand:
    """Command remembering every invocation."""

    def __init__(self, name: str, output: str | None = None, help: str | None = None) -> None:
        self.name = name
        self.help = help
        self._output = output
        self.calls: list[tuple] = []

    def __call__(self, environment, arguments, options) -> None:
        self.calls.append((environment, tuple(arguments), dict(options)))
        if self._output is not None:
            environment.output().write(self._output)


@pytest.fixture
def make_environment():
    return FakeEnvironment


@pytest.fixture
def make_os():
    def _make(directories: dict[str, dict[str, str]] | None = None) -> FakeOperatingSystem:
        return FakeOperatingSystem(FakeFilesystem(directories))

    return _make


@pytest.fixture
def make_command():
    return RecordingCommand


def write_plugin(
    base: Path,
    name: str,
    body: str = "    click.echo('ok', file=env.output())\n",
    short_help: str = "Help",
    **kwargs: bool,
) -> Path:
    """Create ``<base>/<name>/{entry.py,meta.yaml}``."""
    hidden = kwargs.get("hidden", False)
    enabled = kwargs.get("enabled", True)

    target = base / name
    target.mkdir(parents=True, exist_ok=True)
    (target / "entry.py").write_text(
        "import click\n\n@click.command()\n@click.argument('args', nargs=-1)\n@click.pass_obj\n"
        "def cli(env, args):\n" + body,
        encoding="utf-8",
    )
    (target / "meta.yaml").write_text(
        f"shortHelp: {short_help}\nhidden: {str(hidden).lower()}\nenabled: {str(enabled).lower()}\n",
        encoding="utf-8",
    )
    return target


@pytest.fixture
def plugin_writer():
    return write_plugin
