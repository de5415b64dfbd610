"""Base class and registry for CLI commands."""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from gl_admin.models import Result

if TYPE_CHECKING:
    from gl_admin.client import GitLabClient

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

_command_registry: dict[str, type[Command]] = {}


def register_command(name: str):
    """Decorator to register a command class under a CLI subcommand name."""

    def decorator(cls):
        _command_registry[name] = cls
        cls.command_name = name
        return cls

    return decorator


def get_command_registry() -> dict[str, type[Command]]:
    """Get the command registry."""
    return _command_registry


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class Command(ABC):
    """Base class for all commands."""

    command_name: str = ""

    def __init__(self, client: GitLabClient, args: argparse.Namespace):
        self.client = client
        self.args = args
        self.logger = logging.getLogger("gl-admin")

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific CLI arguments."""
        ...

    @abstractmethod
    def run(self) -> int:
        """Execute the command and return the process exit code."""
        ...

    def _check(self, result: Result, what: str) -> bool:
        """Log a failed result; True when the result succeeded."""
        if result.is_failure:
            self.logger.error(f"{what}: {result.error}")
            return False
        return True

    def _emit(self, item, text: str) -> None:
        """Report one result object: the object itself in JSON mode, `text` otherwise."""
        handler = self.logger.handlers[0] if self.logger.handlers else None
        if handler and getattr(handler.formatter, "json_mode", False):
            record = self.logger.makeRecord("gl-admin", logging.INFO, "", 0, "", (), None)
            record.payload = item.to_dict() if hasattr(item, "to_dict") else item
            self.logger.handle(record)
        else:
            self.logger.info(text)
