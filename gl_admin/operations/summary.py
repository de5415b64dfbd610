"""Group and project summaries built from the other operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gl_admin.models import DEFAULT_PROBE_WORKERS, GroupSummary, Project, ProjectSummary, Result
from gl_admin.operations.groups import GroupOperations
from gl_admin.operations.projects import ProjectOperations
from gl_admin.operations.variables import VariableOperations

if TYPE_CHECKING:
    from gl_admin.client import GitLabClient


class SummaryOperations:
    """Counts of subgroups, projects and variables for a group or project."""

    def __init__(
        self,
        client: GitLabClient,
        logger: logging.Logger | None = None,
        max_workers: int = DEFAULT_PROBE_WORKERS,
    ):
        self.logger = logger or client.logger
        self.groups = GroupOperations(client, self.logger, max_workers=max_workers)
        self.projects = ProjectOperations(client, self.logger)
        self.variables = VariableOperations(client, self.logger)

    def get_group_summary(self, group_id_or_name: str) -> Result[GroupSummary]:
        self.logger.info(f"Getting summary for group: {group_id_or_name}")
        found = self.groups.find_groups(group_id_or_name)
        if found.is_failure:
            return Result.failure(found.error)
        if not found.value:
            return Result.failure(f"Group '{group_id_or_name}' not found")
        group = found.value[0]

        subgroups = self.groups.get_subgroups(str(group.id))
        if subgroups.is_failure:
            self.logger.warning(f"Counting subgroups failed, reporting 0: {subgroups.error}")
        projects = self.projects.get_projects_in_group(str(group.id))
        if projects.is_failure:
            self.logger.warning(f"Counting projects failed, reporting 0: {projects.error}")

        summary = GroupSummary(
            id=group.id,
            name=group.name,
            full_path=group.full_path,
            web_url=group.web_url,
            subgroup_count=len(subgroups.value) if subgroups.is_success else 0,
            project_count=len(projects.value) if projects.is_success else 0,
            is_marked_for_deletion=group.is_marked_for_deletion,
            parent_id=group.parent_id,
        )
        self.logger.info(
            f"Group summary completed: {summary.name} "
            f"({summary.subgroup_count} subgroups, {summary.project_count} projects)"
        )
        return Result.success(summary)

    def get_project_summary(self, project_id: int | str) -> Result[ProjectSummary]:
        self.logger.info(f"Getting summary for project ID: {project_id}")
        project = self.projects.get_project(project_id)
        if project.is_failure:
            return Result.failure(project.error)
        return Result.success(self._summarize(project.value))

    def get_group_projects_summary(
        self, group_id_or_name: str, include_subgroups: bool = True
    ) -> Result[list[ProjectSummary]]:
        self.logger.info(f"Getting project summaries for group: {group_id_or_name}")
        projects = self.projects.get_projects_in_group(group_id_or_name, include_subgroups=include_subgroups)
        if projects.is_failure:
            return Result.failure(projects.error)
        summaries = [self._summarize(p) for p in projects.value]
        self.logger.info(f"Retrieved summaries for {len(summaries)} projects")
        return Result.success(summaries)

    def _summarize(self, project: Project) -> ProjectSummary:
        variables = self.variables.list_project_variables(project.id)
        if variables.is_failure:
            self.logger.warning(f"Counting variables of project {project.id} failed, reporting 0: {variables.error}")
        return ProjectSummary(
            id=project.id,
            name=project.name,
            description=project.description,
            web_url=project.web_url,
            path=project.path,
            group_id=project.group_id,
            group_name=project.namespace.name if project.namespace else "",
            variable_count=len(variables.value) if variables.is_success else 0,
            created_at=project.created_at,
            last_activity_at=project.last_activity_at,
            is_marked_for_deletion=project.is_marked_for_deletion,
        )
