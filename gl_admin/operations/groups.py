"""Group lookup, search and subgroup listing."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import requests

from gl_admin.client import normalize_order_by, normalize_sort
from gl_admin.models import (
    DEFAULT_ORDER_BY,
    DEFAULT_PROBE_WORKERS,
    DEFAULT_SORT,
    GROUP_ORDER_BY_FIELDS,
    Group,
    Result,
    is_active,
)
from gl_admin.operations.base import ApiOperations

if TYPE_CHECKING:
    from gl_admin.client import GitLabClient


class GroupOperations(ApiOperations):
    """Find, search and enumerate GitLab groups."""

    def __init__(
        self,
        client: GitLabClient,
        logger: logging.Logger | None = None,
        max_workers: int = DEFAULT_PROBE_WORKERS,
    ):
        super().__init__(client, logger)
        self.max_workers = max(1, max_workers)

    def find_groups(
        self, name_or_id: str, order_by: str = DEFAULT_ORDER_BY, sort: str = DEFAULT_SORT
    ) -> Result[list[Group]]:
        """
        Exact-match lookup by ID, name or path.

        A numeric value is fetched directly; a group marked for deletion yields an
        empty result, a 404 falls back to a name search. Name matching is
        case-insensitive against either the group's name or its path.
        """
        self.logger.info(f"Finding groups with name or ID: {name_or_id}...")
        try:
            if name_or_id.isdigit():
                try:
                    data = self.client.get(f"/groups/{name_or_id}")
                    group = Group.from_api(data)
                    if group.is_marked_for_deletion:
                        return Result.success([])
                    self.logger.info(f"Found 1 group with ID {name_or_id}")
                    return Result.success([group])
                except requests.HTTPError as e:
                    if e.response is None or e.response.status_code != 404:
                        return self._failure("Error searching for group by ID", e)

            wanted = name_or_id.casefold()
            matches = self.client.paginate(
                "/groups",
                params={
                    "order_by": normalize_order_by(order_by, GROUP_ORDER_BY_FIELDS),
                    "sort": normalize_sort(sort),
                    "search": name_or_id,
                },
                match=lambda g: g.get("name", "").casefold() == wanted or g.get("path", "").casefold() == wanted,
                label="groups",
            )
            groups = [Group.from_api(g) for g in matches]
        except Exception as e:
            return self._failure("Failed to search for groups", e)

        self.logger.info(f"Found {len(groups)} group(s) matching '{name_or_id}'")
        return Result.success(groups)

    def search_groups(
        self, pattern: str, order_by: str = DEFAULT_ORDER_BY, sort: str = DEFAULT_SORT
    ) -> Result[list[Group]]:
        """Partial-match search returning every active group the API matches."""
        self.logger.info(f"Searching for groups matching pattern: {pattern}...")
        try:
            found = self.client.paginate(
                "/groups",
                params={
                    "order_by": normalize_order_by(order_by, GROUP_ORDER_BY_FIELDS),
                    "sort": normalize_sort(sort),
                    "search": pattern,
                },
                label="search results",
            )
            groups = [Group.from_api(g) for g in found]
        except Exception as e:
            return self._failure("Failed to search for groups", e)

        self.logger.info(f"Found {len(groups)} group(s) matching pattern '{pattern}'")
        return Result.success(groups)

    def get_subgroups(
        self, group_id_or_name: str, order_by: str = DEFAULT_ORDER_BY, sort: str = DEFAULT_SORT
    ) -> Result[list[Group]]:
        """List active direct subgroups, each with has_subgroups filled in by a probe."""
        self.logger.info(f"Retrieving subgroups for group {group_id_or_name}...")
        try:
            group_id = self.client.resolve_group_id(group_id_or_name)
            if group_id is None:
                return Result.success([])
            found = self.client.paginate(
                f"/groups/{group_id}/subgroups",
                params={
                    "order_by": normalize_order_by(order_by, GROUP_ORDER_BY_FIELDS),
                    "sort": normalize_sort(sort),
                },
                label="subgroups",
            )
            subgroups = [Group.from_api(g) for g in found]
        except Exception as e:
            return self._failure("Failed to get subgroups", e)

        self.logger.info(f"Found {len(subgroups)} active subgroups, checking for nested subgroups...")
        if subgroups:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(subgroups))) as pool:
                for group, has_subgroups in zip(subgroups, pool.map(self._probe_has_subgroups, subgroups)):
                    group.has_subgroups = has_subgroups

        self.logger.info(f"Retrieved a total of {len(subgroups)} active subgroups")
        return Result.success(subgroups)

    def _probe_has_subgroups(self, group: Group) -> bool:
        """One-item subgroup query; an unanswerable probe counts as no subgroups."""
        try:
            data = self.client.get(f"/groups/{group.id}/subgroups", params={"per_page": 1})
            return isinstance(data, list) and any(is_active(g) for g in data)
        except Exception as e:
            self.logger.warning(f"Could not check nested subgroups of {group.full_path or group.id}: {e}")
            return False
