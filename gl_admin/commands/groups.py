"""Group listing commands."""

from __future__ import annotations

import argparse

from gl_admin.commands.base import Command, register_command
from gl_admin.models import DEFAULT_ORDER_BY, DEFAULT_SORT, GROUP_ORDER_BY_FIELDS, Group
from gl_admin.operations import GroupOperations, SummaryOperations


def add_ordering_arguments(parser: argparse.ArgumentParser, fields: tuple[str, ...]) -> None:
    parser.add_argument(
        "--order-by",
        default=DEFAULT_ORDER_BY,
        help=f"Order by one of {', '.join(fields)}; anything else falls back to name (default: name)",
    )
    parser.add_argument("--sort", default=DEFAULT_SORT, help="asc or desc (default: asc)")


def describe_group(group: Group) -> str:
    line = f"{group.full_path or group.name} (id={group.id}) {group.web_url}"
    if group.has_subgroups:
        line += " [has subgroups]"
    return line


@register_command("find-groups")
class FindGroupsCommand(Command):
    """Find groups whose ID, name or path matches exactly."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name_or_id", help="Group ID, name or path")
        add_ordering_arguments(parser, GROUP_ORDER_BY_FIELDS)

    def run(self) -> int:
        ops = GroupOperations(self.client, self.logger)
        result = ops.find_groups(self.args.name_or_id, self.args.order_by, self.args.sort)
        if not self._check(result, "Error finding groups"):
            return 1
        for group in result.value:
            self._emit(group, describe_group(group))
        return 0


@register_command("search-groups")
class SearchGroupsCommand(Command):
    """Search groups by partial name or path."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("pattern", help="Search text")
        add_ordering_arguments(parser, GROUP_ORDER_BY_FIELDS)

    def run(self) -> int:
        ops = GroupOperations(self.client, self.logger)
        result = ops.search_groups(self.args.pattern, self.args.order_by, self.args.sort)
        if not self._check(result, "Error searching groups"):
            return 1
        for group in result.value:
            self._emit(group, describe_group(group))
        return 0


@register_command("subgroups")
class SubgroupsCommand(Command):
    """List the direct subgroups of a group."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("group", help="Parent group ID or name")
        add_ordering_arguments(parser, GROUP_ORDER_BY_FIELDS)

    def run(self) -> int:
        ops = GroupOperations(self.client, self.logger, max_workers=self.args.concurrency)
        result = ops.get_subgroups(self.args.group, self.args.order_by, self.args.sort)
        if not self._check(result, "Error getting subgroups"):
            return 1
        for group in result.value:
            self._emit(group, describe_group(group))
        return 0


@register_command("group-summary")
class GroupSummaryCommand(Command):
    """Summarize a group: subgroup and project counts."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("group", help="Group ID, name or path")

    def run(self) -> int:
        ops = SummaryOperations(self.client, self.logger, max_workers=self.args.concurrency)
        result = ops.get_group_summary(self.args.group)
        if not self._check(result, "Error summarizing group"):
            return 1
        s = result.value
        self._emit(s, f"{s.full_path} (id={s.id}): {s.subgroup_count} subgroups, {s.project_count} projects")
        return 0
