"""Project commands."""

from __future__ import annotations

import argparse

from gl_admin.commands.base import Command, register_command
from gl_admin.commands.groups import add_ordering_arguments
from gl_admin.models import PROJECT_ORDER_BY_FIELDS
from gl_admin.operations import ProjectOperations, SummaryOperations


@register_command("projects")
class ProjectsCommand(Command):
    """List the active projects in a group."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("group", help="Group ID or name")
        parser.add_argument(
            "--no-subgroups",
            dest="include_subgroups",
            action="store_false",
            help="Only list projects directly in the group",
        )
        parser.add_argument("--summary", action="store_true", help="Include variable counts per project")
        add_ordering_arguments(parser, PROJECT_ORDER_BY_FIELDS)

    def run(self) -> int:
        if self.args.summary:
            summaries = SummaryOperations(self.client, self.logger).get_group_projects_summary(
                self.args.group, include_subgroups=self.args.include_subgroups
            )
            if not self._check(summaries, "Error summarizing projects"):
                return 1
            for s in summaries.value:
                self._emit(s, f"{s.name} (id={s.id}) group={s.group_name}: {s.variable_count} variables")
            return 0

        result = ProjectOperations(self.client, self.logger).get_projects_in_group(
            self.args.group, self.args.include_subgroups, self.args.order_by, self.args.sort
        )
        if not self._check(result, "Error getting projects"):
            return 1
        for p in result.value:
            namespace = p.namespace.full_path if p.namespace else "-"
            self._emit(p, f"{p.name} (id={p.id}) namespace={namespace} {p.web_url}")
        return 0


@register_command("project-summary")
class ProjectSummaryCommand(Command):
    """Summarize a single project."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project_id", help="Project ID")

    def run(self) -> int:
        result = SummaryOperations(self.client, self.logger).get_project_summary(self.args.project_id)
        if not self._check(result, "Error summarizing project"):
            return 1
        s = result.value
        self._emit(s, f"{s.name} (id={s.id}) group={s.group_name}: {s.variable_count} variables")
        return 0


@register_command("create-project")
class CreateProjectCommand(Command):
    """Create a project, appending -1, -2, ... to the name until it is free."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name", help="Desired project name")
        parser.add_argument("--namespace-id", type=int, default=None, help="Group/namespace ID to create in")
        runners = parser.add_mutually_exclusive_group()
        runners.add_argument("--shared-runners", dest="shared_runners", action="store_true", help="Enable shared runners")
        runners.add_argument(
            "--no-shared-runners", dest="shared_runners", action="store_false", help="Disable shared runners"
        )
        parser.set_defaults(shared_runners=None)

    def run(self) -> int:
        result = ProjectOperations(self.client, self.logger).create_project(
            self.args.name,
            namespace_id=self.args.namespace_id,
            shared_runners_enabled=self.args.shared_runners,
        )
        if not self._check(result, "Error creating project"):
            return 1
        p = result.value
        self._emit(p, f"{p.name} (id={p.id}) has been created: {p.http_url_to_repo}")
        return 0


@register_command("transfer-project")
class TransferProjectCommand(Command):
    """Move a project to another group or namespace."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("project_id", help="Project ID")
        parser.add_argument("namespace", help="Target namespace ID or full path")

    def run(self) -> int:
        result = ProjectOperations(self.client, self.logger).transfer_project(self.args.project_id, self.args.namespace)
        if not self._check(result, "Error transferring project"):
            return 1
        p = result.value
        namespace = p.namespace.full_path if p.namespace else self.args.namespace
        self._emit(p, f"{p.name} (id={p.id}) moved to {namespace}")
        return 0
