"""
gl-admin: GitLab group/project administration library and CLI.

Finds and searches groups, walks subgroups and projects page by page, creates
projects with name-collision handling, manages group and project CI/CD
variables, and seeds new projects from a template repository.

Every public operation returns a `Result` instead of raising.

Environment (CLI only):
    GL_PAT       - GitLab Personal Access Token (required)
    GL_DOMAIN    - GitLab domain (default: gitlab.com)
    GL_NAMESPACE - Namespace seed-project transfers new projects to
"""

from gl_admin.cli import main
from gl_admin.client import DeserializationError, GitLabClient, GroupNotFoundError
from gl_admin.models import (
    CreatedProject,
    Group,
    GroupSummary,
    Namespace,
    Project,
    ProjectSummary,
    Result,
    Variable,
)
from gl_admin.operations import GroupOperations, ProjectOperations, SummaryOperations, VariableOperations

__version__ = "0.1.0"
__all__ = [
    "main",
    "__version__",
    "GitLabClient",
    "DeserializationError",
    "GroupNotFoundError",
    "Result",
    "Group",
    "Namespace",
    "Project",
    "Variable",
    "CreatedProject",
    "GroupSummary",
    "ProjectSummary",
    "GroupOperations",
    "ProjectOperations",
    "VariableOperations",
    "SummaryOperations",
]
