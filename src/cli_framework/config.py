"""Load the ``.env`` overlay from a configuration directory."""

from __future__ import annotations

import logging
from pathlib import Path

from cli_framework.system import Filesystem

logger = logging.getLogger(__name__)

DOTENV_FILENAME = ".env"


def parse_overlay(content: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines.

    The value is everything after the first ``=``, kept as written: quotes,
    ``#`` and surrounding blanks are part of it. Lines without ``=`` or with
    nothing before it are dropped, an empty value is kept as ``""`` and the
    last assignment of a key wins. Malformed lines never raise.
    """
    entries: dict[str, str] = {}
    for line in content.split("\n"):
        key, sep, value = line.partition("=")
        if not sep or not key:
            continue
        entries[key] = value
    return entries


def load_overlay(path: Path, filesystem: Filesystem) -> dict[str, str]:
    """Return the entries of ``<path>/.env``, or nothing when either is missing."""
    if not filesystem.contains(path):
        logger.debug("Config directory %s does not exist, no overlay", path)
        return {}

    directory = filesystem.mount(path)
    if not directory.contains(DOTENV_FILENAME):
        logger.debug("No %s in %s, no overlay", DOTENV_FILENAME, path)
        return {}

    entries = parse_overlay(directory.read(DOTENV_FILENAME))
    logger.debug("Loaded %d overlay entries from %s", len(entries), path)
    return entries
