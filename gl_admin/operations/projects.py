"""Project listing, creation with name negotiation, and transfer."""

from __future__ import annotations

from typing import Callable

import requests

from gl_admin.client import normalize_order_by, normalize_sort
from gl_admin.models import (
    DEFAULT_ORDER_BY,
    DEFAULT_SORT,
    PROJECT_ORDER_BY_FIELDS,
    CreatedProject,
    Project,
    Result,
)
from gl_admin.operations.base import ApiOperations

UNAUTHORIZED_MESSAGE = "Unauthorized: the personal access token is invalid or has expired"


class ProjectOperations(ApiOperations):
    """List, fetch, create and transfer GitLab projects."""

    def get_projects_in_group(
        self,
        group_id_or_name: str,
        include_subgroups: bool = True,
        order_by: str = DEFAULT_ORDER_BY,
        sort: str = DEFAULT_SORT,
    ) -> Result[list[Project]]:
        self.logger.info(f"Retrieving projects for group {group_id_or_name}...")
        try:
            group_id = self.client.resolve_group_id(group_id_or_name)
            if group_id is None:
                return Result.success([])
            found = self.client.paginate(
                f"/groups/{group_id}/projects",
                params={
                    "order_by": normalize_order_by(order_by, PROJECT_ORDER_BY_FIELDS),
                    "sort": normalize_sort(sort),
                    "include_subgroups": "true" if include_subgroups else "false",
                },
                label="projects",
            )
            projects = [Project.from_api(p) for p in found]
        except Exception as e:
            return self._failure("Failed to get projects", e)

        self.logger.info(f"Retrieved a total of {len(projects)} active projects from group {group_id_or_name}")
        return Result.success(projects)

    def get_project(self, project_id: int | str) -> Result[Project]:
        try:
            return Result.success(Project.from_api(self.client.get(f"/projects/{project_id}")))
        except Exception as e:
            return self._failure("Failed to get project", e)

    def create_project(
        self,
        name: str,
        namespace_id: int | None = None,
        shared_runners_enabled: bool | None = None,
        on_exists: Callable[[str], None] | None = None,
    ) -> Result[CreatedProject]:
        """
        Create a project, suffixing the name with -1, -2, ... until it is free.

        `on_exists` is called with every candidate name that is already taken.
        The availability probe and the create are separate requests, so a
        concurrent create of the same name is not detected.
        """
        candidate = name
        suffix = 0
        try:
            while self._project_name_taken(candidate):
                if on_exists:
                    on_exists(candidate)
                self.logger.info(f"{candidate} exists, establishing an available project name...")
                suffix += 1
                candidate = f"{name}-{suffix}"
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 401:
                return Result.failure(UNAUTHORIZED_MESSAGE)
            return self._failure("Failed to check project name", e)
        except Exception as e:
            return self._failure("Failed to check project name", e)

        payload: dict = {"name": candidate}
        if namespace_id is not None:
            payload["namespace_id"] = namespace_id
        if shared_runners_enabled is not None:
            payload["shared_runners_enabled"] = shared_runners_enabled

        try:
            data = self.client.post("/projects", data=payload)
            created = CreatedProject(
                id=data["id"],
                name=data.get("name", candidate),
                http_url_to_repo=data.get("http_url_to_repo", ""),
                path_with_namespace=data.get("path_with_namespace", ""),
                ssh_url_to_repo=data.get("ssh_url_to_repo", ""),
                web_url=data.get("web_url", ""),
            )
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 401:
                return Result.failure(UNAUTHORIZED_MESSAGE)
            return self._failure("Failed to create project", e)
        except Exception as e:
            return self._failure("Failed to create project", e)

        self.logger.info(f"Created project {created.path_with_namespace or created.name} (id={created.id})")
        return Result.success(created)

    def _project_name_taken(self, candidate: str) -> bool:
        """Walk every page of the substring search; projects pending deletion still hold their name."""
        wanted = candidate.casefold()
        taken = self.client.paginate(
            "/projects",
            params={"search": candidate},
            match=lambda p: (p.get("name") or "").casefold() == wanted,
            label="projects",
            include_deleted=True,
        )
        return bool(taken)

    def transfer_project(self, project_id: int | str, namespace: int | str) -> Result[Project]:
        """Move a project into another group or namespace (ID or full path)."""
        self.logger.info(f"Transferring project {project_id} to namespace {namespace}...")
        try:
            data = self.client.put(f"/projects/{project_id}/transfer", data={"namespace": namespace})
            project = Project.from_api(data)
        except Exception as e:
            return self._failure("Failed to transfer project", e)
        return Result.success(project)
