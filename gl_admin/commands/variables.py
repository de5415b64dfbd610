"""CI/CD variable commands."""

from __future__ import annotations

import argparse

from gl_admin.commands.base import Command, register_command
from gl_admin.models import DEFAULT_ENVIRONMENT_SCOPE, VARIABLE_TYPES, Variable
from gl_admin.operations import VariableOperations


def add_scope_arguments(parser: argparse.ArgumentParser) -> None:
    scope = parser.add_mutually_exclusive_group(required=True)
    scope.add_argument("--group", dest="group_id", help="Group ID")
    scope.add_argument("--project", dest="project_id", help="Project ID")


def add_environment_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--environment-scope",
        default=DEFAULT_ENVIRONMENT_SCOPE,
        help="Environment scope (default: *; project variables only)",
    )


def describe_variable(variable: Variable) -> str:
    flags = [f for f, on in (("protected", variable.protected), ("masked", variable.masked)) if on]
    suffix = f" [{', '.join(flags)}]" if flags else ""
    return f"{variable.key}={variable.value} ({variable.variable_type}, scope={variable.environment_scope}){suffix}"


@register_command("get-variable")
class GetVariableCommand(Command):
    """Show a single group or project variable."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_scope_arguments(parser)
        parser.add_argument("key", help="Variable key")
        add_environment_argument(parser)

    def run(self) -> int:
        ops = VariableOperations(self.client, self.logger)
        if self.args.group_id:
            result = ops.get_group_variable(self.args.group_id, self.args.key)
        else:
            result = ops.get_project_variable(self.args.project_id, self.args.key, self.args.environment_scope)
        if not self._check(result, "Error getting variable"):
            return 1
        self._emit(result.value, describe_variable(result.value))
        return 0


@register_command("list-variables")
class ListVariablesCommand(Command):
    """List all variables of a group or project."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_scope_arguments(parser)

    def run(self) -> int:
        ops = VariableOperations(self.client, self.logger)
        if self.args.group_id:
            result = ops.list_group_variables(self.args.group_id)
        else:
            result = ops.list_project_variables(self.args.project_id)
        if not self._check(result, "Error listing variables"):
            return 1
        for variable in result.value:
            self._emit(variable, describe_variable(variable))
        return 0


@register_command("set-variable")
class SetVariableCommand(Command):
    """Create or update a group or project variable."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_scope_arguments(parser)
        parser.add_argument("key", help="Variable key")
        parser.add_argument("value", help="Variable value")
        parser.add_argument("--type", dest="variable_type", default="env_var", choices=VARIABLE_TYPES)
        parser.add_argument("--protected", action="store_true", help="Only expose to protected branches/tags")
        parser.add_argument(
            "--masked",
            action="store_true",
            help="Mask the value in job logs (sent for group variables only with --send-group-masked)",
        )
        parser.add_argument(
            "--send-group-masked",
            action="store_true",
            help="Transmit the masked flag for group variables (currently has no effect on the API)",
        )
        add_environment_argument(parser)

    def run(self) -> int:
        ops = VariableOperations(self.client, self.logger, send_group_masked=self.args.send_group_masked)
        common = dict(
            key=self.args.key,
            value=self.args.value,
            variable_type=self.args.variable_type,
            protected=self.args.protected,
            masked=self.args.masked,
            environment_scope=self.args.environment_scope,
        )
        if self.args.group_id:
            result = ops.create_or_update_group_variable(self.args.group_id, **common)
        else:
            result = ops.create_or_update_project_variable(self.args.project_id, **common)
        if not self._check(result, "Error setting variable"):
            return 1
        self._emit(result.value, describe_variable(result.value))
        return 0


@register_command("delete-variable")
class DeleteVariableCommand(Command):
    """Delete a group or project variable."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_scope_arguments(parser)
        parser.add_argument("key", help="Variable key")
        add_environment_argument(parser)

    def run(self) -> int:
        ops = VariableOperations(self.client, self.logger)
        if self.args.group_id:
            result = ops.delete_group_variable(self.args.group_id, self.args.key)
        else:
            result = ops.delete_project_variable(self.args.project_id, self.args.key, self.args.environment_scope)
        if not self._check(result, "Error deleting variable"):
            return 1
        self._emit({"key": self.args.key, "deleted": True}, f"Deleted variable {self.args.key}")
        return 0
