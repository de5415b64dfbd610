"""CI/CD variable operations for groups and projects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gl_admin.models import DEFAULT_ENVIRONMENT_SCOPE, Result, Variable
from gl_admin.operations.base import ApiOperations

if TYPE_CHECKING:
    from gl_admin.client import GitLabClient


def _scope_filter(environment_scope: str | None) -> dict | None:
    """Project variables are keyed by (key, scope) once a scope other than '*' is used."""
    if environment_scope and environment_scope != DEFAULT_ENVIRONMENT_SCOPE:
        return {"filter[environment_scope]": environment_scope}
    return None


class VariableOperations(ApiOperations):
    """
    Get, list, upsert and delete CI/CD variables.

    `send_group_masked` controls whether the masked flag is sent when writing
    group variables. It currently has no effect against the live API (the
    variable is stored unmasked either way), so it defaults to off.
    """

    def __init__(self, client: GitLabClient, logger: logging.Logger | None = None, send_group_masked: bool = False):
        super().__init__(client, logger)
        self.send_group_masked = send_group_masked

    # -- Group scope --

    def get_group_variable(self, group_id: int | str, key: str) -> Result[Variable]:
        self.logger.info(f"Retrieving variable {key} for group {group_id}...")
        return self._get(f"/groups/{group_id}/variables/{key}")

    def list_group_variables(self, group_id: int | str) -> Result[list[Variable]]:
        self.logger.info(f"Retrieving variables for group {group_id}...")
        return self._list(f"/groups/{group_id}/variables")

    def create_or_update_group_variable(
        self,
        group_id: int | str,
        key: str,
        value: str,
        variable_type: str = "env_var",
        protected: bool = False,
        masked: bool = False,
        environment_scope: str | None = DEFAULT_ENVIRONMENT_SCOPE,
    ) -> Result[Variable]:
        fields = self._fields(key, value, variable_type, protected, environment_scope)
        if self.send_group_masked:
            fields["masked"] = masked
        exists = self.get_group_variable(group_id, key).is_success
        return self._upsert(f"/groups/{group_id}/variables", key, fields, exists)

    def delete_group_variable(self, group_id: int | str, key: str) -> Result[None]:
        self.logger.info(f"Deleting variable {key} from group {group_id}...")
        return self._delete(f"/groups/{group_id}/variables/{key}")

    # -- Project scope --

    def get_project_variable(
        self, project_id: int | str, key: str, environment_scope: str | None = DEFAULT_ENVIRONMENT_SCOPE
    ) -> Result[Variable]:
        self.logger.info(f"Retrieving variable {key} for project {project_id}...")
        return self._get(f"/projects/{project_id}/variables/{key}", params=_scope_filter(environment_scope))

    def list_project_variables(self, project_id: int | str) -> Result[list[Variable]]:
        self.logger.info(f"Retrieving variables for project {project_id}...")
        return self._list(f"/projects/{project_id}/variables")

    def create_or_update_project_variable(
        self,
        project_id: int | str,
        key: str,
        value: str,
        variable_type: str = "env_var",
        protected: bool = False,
        masked: bool = False,
        environment_scope: str | None = DEFAULT_ENVIRONMENT_SCOPE,
    ) -> Result[Variable]:
        fields = self._fields(key, value, variable_type, protected, environment_scope)
        fields["masked"] = masked
        exists = self.get_project_variable(project_id, key, environment_scope).is_success
        return self._upsert(
            f"/projects/{project_id}/variables", key, fields, exists, params=_scope_filter(environment_scope)
        )

    def delete_project_variable(
        self, project_id: int | str, key: str, environment_scope: str | None = DEFAULT_ENVIRONMENT_SCOPE
    ) -> Result[None]:
        self.logger.info(f"Deleting variable {key} from project {project_id}...")
        return self._delete(f"/projects/{project_id}/variables/{key}", params=_scope_filter(environment_scope))

    # -- Shared --

    @staticmethod
    def _fields(key: str, value: str, variable_type: str, protected: bool, environment_scope: str | None) -> dict:
        fields = {"key": key, "value": value, "variable_type": variable_type, "protected": protected}
        if environment_scope is not None:
            fields["environment_scope"] = environment_scope
        return fields

    def _get(self, endpoint: str, params: dict | None = None) -> Result[Variable]:
        try:
            return Result.success(Variable.from_api(self.client.get(endpoint, params=params)))
        except Exception as e:
            return self._failure("Failed to get variable", e)

    def _list(self, endpoint: str) -> Result[list[Variable]]:
        try:
            found = self.client.paginate(endpoint, label="variables")
            variables = [Variable.from_api(v) for v in found]
        except Exception as e:
            return self._failure("Failed to get variables", e)
        self.logger.info(f"Retrieved a total of {len(variables)} variables")
        return Result.success(variables)

    def _upsert(
        self, endpoint: str, key: str, fields: dict, exists: bool, params: dict | None = None
    ) -> Result[Variable]:
        action = "update" if exists else "create"
        try:
            if exists:
                self.logger.info("Variable exists, updating...")
                data = self.client.put(f"{endpoint}/{key}", data=fields, params=params)
            else:
                self.logger.info("Variable does not exist, creating...")
                data = self.client.post(endpoint, data=fields)
            variable = Variable.from_api(data)
        except Exception as e:
            return self._failure(f"Failed to {action} variable", e)

        self.logger.info(f"Successfully {action}d variable {key}")
        return Result.success(variable)

    def _delete(self, endpoint: str, params: dict | None = None) -> Result[None]:
        try:
            self.client.delete(endpoint, params=params)
        except Exception as e:
            return self._failure("Failed to delete variable", e)
        return Result.success(None)
