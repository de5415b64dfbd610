"""Domain operations for gl-admin."""

from gl_admin.operations.base import ApiOperations
from gl_admin.operations.groups import GroupOperations
from gl_admin.operations.projects import ProjectOperations
from gl_admin.operations.summary import SummaryOperations
from gl_admin.operations.variables import VariableOperations

__all__ = [
    "ApiOperations",
    "GroupOperations",
    "ProjectOperations",
    "SummaryOperations",
    "VariableOperations",
]
