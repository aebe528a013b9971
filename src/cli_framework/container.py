"""Lazy service container.

Each identifier maps either to a factory that has not run yet or to the
instance it produced. A factory runs on the first request for its
identifier and receives the environment, the operating system and the
container's own ``resolve`` so it can pull other services, in any order.
Cycles are not detected; a true cycle ends in ``RecursionError``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cli_framework.exceptions import ServiceNotFound

logger = logging.getLogger(__name__)

Factory = Callable[..., Any]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class Deferred:
    factory: Factory


@dataclass(frozen=True)
class Resolved:
    instance: Any


def invoke_factory(factory: Factory, *args: Any) -> Any:
    """Call *factory* with as many leading *args* as it accepts."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return factory(*args)

    parameters = signature.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return factory(*args)
    accepted = sum(1 for p in parameters if p.kind in _POSITIONAL)
    return factory(*args[:accepted])


class ServiceContainer:
    def __init__(self, environment: Any, operating_system: Any) -> None:
        self._environment = environment
        self._operating_system = operating_system
        self._services: dict[str, Deferred | Resolved] = {}

    def register(self, identifier: str, factory: Factory) -> None:
        """Add or replace the factory for *identifier* without running it."""
        self._services[identifier] = Deferred(factory)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._services

    def resolve(self, identifier: str) -> Any:
        entry = self._services.get(identifier)
        if entry is None:
            raise ServiceNotFound(identifier)
        if isinstance(entry, Resolved):
            return entry.instance

        logger.debug("Building service %r", identifier)
        instance = invoke_factory(entry.factory, self._environment, self._operating_system, self.resolve)
        self._services[identifier] = Resolved(instance)
        return instance

    __call__ = resolve
