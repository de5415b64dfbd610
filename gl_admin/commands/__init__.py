"""CLI commands for gl-admin."""

from gl_admin.commands.base import Command, get_command_registry, register_command

# Import all commands to register them
from gl_admin.commands.groups import FindGroupsCommand, GroupSummaryCommand, SearchGroupsCommand, SubgroupsCommand
from gl_admin.commands.projects import (
    CreateProjectCommand,
    ProjectsCommand,
    ProjectSummaryCommand,
    TransferProjectCommand,
)
from gl_admin.commands.seed import SeedProjectCommand
from gl_admin.commands.variables import (
    DeleteVariableCommand,
    GetVariableCommand,
    ListVariablesCommand,
    SetVariableCommand,
)

__all__ = [
    "Command",
    "register_command",
    "get_command_registry",
    "FindGroupsCommand",
    "SearchGroupsCommand",
    "SubgroupsCommand",
    "GroupSummaryCommand",
    "ProjectsCommand",
    "ProjectSummaryCommand",
    "CreateProjectCommand",
    "TransferProjectCommand",
    "SeedProjectCommand",
    "GetVariableCommand",
    "ListVariablesCommand",
    "SetVariableCommand",
    "DeleteVariableCommand",
]
