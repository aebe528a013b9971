"""Exceptions raised by the framework.

Only wiring defects surface as exceptions: a service that was never
registered, or a plugin directory that cannot be turned into commands.
Missing configuration is never an error.

Hierarchy
---------
FrameworkError
├── ServiceNotFound
└── InvalidPluginError
"""

from __future__ import annotations


class FrameworkError(Exception):
    """Base exception for all framework errors."""


class ServiceNotFound(FrameworkError, LookupError):
    """Raised when resolving an identifier that has no registered factory.

    The message is the bare identifier so callers can key on it.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier)
        self.identifier = identifier


class InvalidPluginError(FrameworkError, RuntimeError):
    """Raised when a plugin command directory is malformed or fails to load."""
