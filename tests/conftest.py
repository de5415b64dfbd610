"""Shared test fixtures for gl-admin tests."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_admin.client import GitLabClient

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GITLAB_DOMAIN = "gitlab.example.com"
MOCK_API_URL = f"https://{MOCK_GITLAB_DOMAIN}/api/v4"


def make_group(group_id: int, name: str, deleted: bool = False, **extra) -> dict[str, Any]:
    """Group API payload."""
    data = {
        "id": group_id,
        "name": name,
        "path": name.lower().replace(" ", "-"),
        "full_path": f"org/{name.lower().replace(' ', '-')}",
        "web_url": f"https://{MOCK_GITLAB_DOMAIN}/groups/org/{name.lower()}",
        "parent_id": 1,
        "marked_for_deletion_on": "2026-01-01" if deleted else None,
    }
    data.update(extra)
    return data


def make_project(project_id: int, name: str, deleted: bool = False, namespace_id: int = 1) -> dict[str, Any]:
    """Project API payload."""
    return {
        "id": project_id,
        "name": name,
        "path": name,
        "description": None,
        "web_url": f"https://{MOCK_GITLAB_DOMAIN}/org/{name}",
        "http_url_to_repo": f"https://{MOCK_GITLAB_DOMAIN}/org/{name}.git",
        "ssh_url_to_repo": f"git@{MOCK_GITLAB_DOMAIN}:org/{name}.git",
        "path_with_namespace": f"org/{name}",
        "namespace": {"id": namespace_id, "name": "org", "path": "org", "full_path": "org", "kind": "group"},
        "created_at": "2025-03-01T10:00:00.000Z",
        "last_activity_at": "2025-04-01T10:00:00.000Z",
        "marked_for_deletion_at": "2026-01-01" if deleted else None,
    }


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_DOMAIN, "test-token")


@pytest.fixture
def sample_group() -> dict[str, Any]:
    """Sample group API response."""
    return make_group(42, "Team-X")


@pytest.fixture
def sample_project() -> dict[str, Any]:
    """Sample project API response."""
    return make_project(123, "my-project")


@pytest.fixture
def sample_variable() -> dict[str, Any]:
    """Sample variable API response."""
    return {
        "key": "DEPLOY_TOKEN",
        "value": "s3cr3t",
        "variable_type": "env_var",
        "protected": False,
        "masked": False,
        "environment_scope": "*",
    }
