from __future__ import annotations

from pathlib import Path

import pytest

import cli_framework.main as main_mod
from cli_framework.utils.metadata import Metadata


@pytest.fixture
def process(monkeypatch, tmp_path: Path):
    """Point the entry point at a temporary config dir, return an argv setter."""
    monkeypatch.setenv(Metadata.CONFIG_DIR_VARIABLE, str(tmp_path))
    monkeypatch.delenv(Metadata.COMMANDS_DIR_VARIABLE, raising=False)
    monkeypatch.delenv("GREET_NAME", raising=False)

    def _argv(*arguments: str) -> None:
        monkeypatch.setattr("sys.argv", ["cli-framework", *arguments])

    return _argv


def test_main_lists_bundled_commands(process, capsys) -> None:
    process()

    with pytest.raises(SystemExit) as exc_info:
        main_mod.main()

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("Usage: cli-framework COMMAND [ARGS]...")
    assert "greet" in out
    assert "variable" in out


def test_main_reads_dotenv_from_config_dir(process, capsys, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("GREET_NAME=Ada\n", encoding="utf-8")
    process("greet")

    with pytest.raises(SystemExit) as exc_info:
        main_mod.main()

    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "Hello Ada\n"


def test_main_real_variables_win(process, capsys, monkeypatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("GREET_NAME=Ada\n", encoding="utf-8")
    monkeypatch.setenv("GREET_NAME", "Grace")
    process("variable", "GREET_NAME")

    with pytest.raises(SystemExit) as exc_info:
        main_mod.main()

    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "Grace\n"


def test_main_exits_with_command_status(process, capsys) -> None:
    process("variable", "CLI_FRAMEWORK_SURELY_UNDEFINED")

    with pytest.raises(SystemExit) as exc_info:
        main_mod.main()

    assert exc_info.value.code == 1
    assert "is not defined" in capsys.readouterr().err


def test_main_uses_commands_dir_override(process, capsys, monkeypatch, tmp_path: Path, plugin_writer) -> None:
    commands_dir = tmp_path / "plugins"
    plugin_writer(commands_dir, "only")
    monkeypatch.setenv(Metadata.COMMANDS_DIR_VARIABLE, str(commands_dir))
    process("anything")

    with pytest.raises(SystemExit) as exc_info:
        main_mod.main()

    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "ok\n"
