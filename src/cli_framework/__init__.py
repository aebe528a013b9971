"""Bootstrap layer for command-line applications."""

__version__ = "0.1.0"

from cli_framework.application import Application  # noqa: E402
from cli_framework.command import Command, CommandRegistry, HelloWorld  # noqa: E402
from cli_framework.container import ServiceContainer  # noqa: E402
from cli_framework.environment import EnvironmentOverlay, ProcessEnvironment  # noqa: E402
from cli_framework.exceptions import FrameworkError, InvalidPluginError, ServiceNotFound  # noqa: E402
from cli_framework.system import LocalOperatingSystem  # noqa: E402

__all__ = [
    "Application",
    "Command",
    "CommandRegistry",
    "EnvironmentOverlay",
    "FrameworkError",
    "HelloWorld",
    "InvalidPluginError",
    "LocalOperatingSystem",
    "ProcessEnvironment",
    "ServiceContainer",
    "ServiceNotFound",
    "__version__",
]
