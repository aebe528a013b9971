"""Execution environment seen by commands.

:class:`ProcessEnvironment` is the default capability built from the running
process. :class:`EnvironmentOverlay` decorates any environment so that
variables coming from a ``.env`` file fill the gaps left by the real
variables, computed once and kept for the lifetime of the overlay.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class Environment(Protocol):
    """Contract every environment (and environment decorator) satisfies."""

    def interactive(self) -> bool: ...  # pragma: no cover

    def input(self) -> TextIO: ...  # pragma: no cover

    def output(self) -> TextIO: ...  # pragma: no cover

    def error(self) -> TextIO: ...  # pragma: no cover

    def arguments(self) -> Sequence[str]: ...  # pragma: no cover

    def variables(self) -> Mapping[str, str]: ...  # pragma: no cover

    def exit(self, code: int) -> None: ...  # pragma: no cover

    def exit_code(self) -> int: ...  # pragma: no cover

    def working_directory(self) -> Path: ...  # pragma: no cover


class ProcessEnvironment:
    """Environment of the current process.

    Every part can be overridden, which is mostly useful in tests.
    """

    def __init__(
        self,
        argv: Sequence[str] | None = None,
        variables: Mapping[str, str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        working_directory: Path | None = None,
    ) -> None:
        self._arguments = tuple(sys.argv[1:] if argv is None else argv)
        self._variables = dict(os.environ if variables is None else variables)
        self._input = stdin or sys.stdin
        self._output = stdout or sys.stdout
        self._error = stderr or sys.stderr
        self._working_directory = working_directory or Path.cwd()
        self._exit_code = 0

    def interactive(self) -> bool:
        isatty = getattr(self._input, "isatty", None)
        return bool(isatty and isatty())

    def input(self) -> TextIO:
        return self._input

    def output(self) -> TextIO:
        return self._output

    def error(self) -> TextIO:
        return self._error

    def arguments(self) -> Sequence[str]:
        return self._arguments

    def variables(self) -> Mapping[str, str]:
        return self._variables

    def exit(self, code: int) -> None:
        self._exit_code = code

    def exit_code(self) -> int:
        return self._exit_code

    def working_directory(self) -> Path:
        return self._working_directory


class EnvironmentOverlay:
    """Keep the variables of *inner* in memory, merged with overlay entries.

    The inner ``variables()`` is called at most once, on the first call made
    to this overlay; later calls return the very same mapping. Real variables
    always win over the overlay. Every other accessor is a plain delegation.
    """

    def __init__(
        self,
        inner: Environment,
        source: Callable[[], Mapping[str, str]] | None = None,
    ) -> None:
        self._inner = inner
        self._source = source
        self._variables: Mapping[str, str] | None = None

    def interactive(self) -> bool:
        return self._inner.interactive()

    def input(self) -> TextIO:
        return self._inner.input()

    def output(self) -> TextIO:
        return self._inner.output()

    def error(self) -> TextIO:
        return self._inner.error()

    def arguments(self) -> Sequence[str]:
        return self._inner.arguments()

    def variables(self) -> Mapping[str, str]:
        if self._variables is None:
            self._variables = merge_variables(
                self._inner.variables(),
                self._source() if self._source is not None else {},
            )
        return self._variables

    def exit(self, code: int) -> None:
        self._inner.exit(code)

    def exit_code(self) -> int:
        return self._inner.exit_code()

    def working_directory(self) -> Path:
        return self._inner.working_directory()


def merge_variables(real: Mapping[str, str], overlay: Mapping[str, str]) -> Mapping[str, str]:
    """Add the overlay entries missing from *real*.

    *real* itself is returned when the overlay brings nothing new.
    """
    missing = {key: value for key, value in overlay.items() if key not in real}
    if not missing:
        return real
    logger.debug("Overlay adds %d variable(s): %s", len(missing), ", ".join(missing))
    merged = dict(real)
    merged.update(missing)
    return merged
