"""Data models and constants for gl-admin."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Generic, TypeVar

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GITLAB_DOMAIN = "gitlab.com"
API_V4 = "/api/v4"
PER_PAGE = 100  # GitLab maximum

DEFAULT_ORDER_BY = "name"
DEFAULT_SORT = "asc"
GROUP_ORDER_BY_FIELDS = ("id", "name", "path", "created_at")
PROJECT_ORDER_BY_FIELDS = GROUP_ORDER_BY_FIELDS + ("updated_at", "last_activity_at")

DEFAULT_ENVIRONMENT_SCOPE = "*"
VARIABLE_TYPES = ("env_var", "file")

DEFAULT_PROBE_WORKERS = 8

T = TypeVar("T")


def is_active(item: dict) -> bool:
    """True unless the API entity carries a deletion marker (groups and projects name it differently)."""
    return not item.get("marked_for_deletion_on") and not item.get("marked_for_deletion_at")


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class Result(Generic[T]):
    """Outcome of a public operation: a value on success, an error description on failure."""

    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> Result[T]:
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass
class Group:
    """GitLab group as returned by the groups endpoints."""

    id: int
    name: str
    path: str
    full_path: str
    web_url: str
    parent_id: int | None = None
    has_subgroups: bool = False
    marked_for_deletion_on: str | None = None

    @property
    def is_marked_for_deletion(self) -> bool:
        return bool(self.marked_for_deletion_on)

    @classmethod
    def from_api(cls, data: dict) -> Group:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data.get("path", ""),
            full_path=data.get("full_path", ""),
            web_url=data.get("web_url", ""),
            parent_id=data.get("parent_id"),
            marked_for_deletion_on=data.get("marked_for_deletion_on"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Namespace:
    """Container (group or user) owning a project."""

    id: int
    name: str
    path: str
    full_path: str
    kind: str  # "group" or "user"

    @classmethod
    def from_api(cls, data: dict) -> Namespace:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data.get("path", ""),
            full_path=data.get("full_path", ""),
            kind=data.get("kind", ""),
        )


@dataclass
class Project:
    """GitLab project as returned by the projects endpoints."""

    id: int
    name: str
    path: str
    description: str = ""
    web_url: str = ""
    http_url_to_repo: str = ""
    ssh_url_to_repo: str = ""
    namespace: Namespace | None = None
    created_at: datetime | None = None
    last_activity_at: datetime | None = None
    marked_for_deletion_at: str | None = None

    @property
    def group_id(self) -> int:
        return self.namespace.id if self.namespace else 0

    @property
    def is_marked_for_deletion(self) -> bool:
        return bool(self.marked_for_deletion_at)

    @classmethod
    def from_api(cls, data: dict) -> Project:
        namespace = data.get("namespace")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data.get("path", ""),
            description=data.get("description") or "",
            web_url=data.get("web_url", ""),
            http_url_to_repo=data.get("http_url_to_repo", ""),
            ssh_url_to_repo=data.get("ssh_url_to_repo", ""),
            namespace=Namespace.from_api(namespace) if namespace else None,
            created_at=_parse_timestamp(data.get("created_at")),
            last_activity_at=_parse_timestamp(data.get("last_activity_at")),
            marked_for_deletion_at=data.get("marked_for_deletion_at"),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["group_id"] = self.group_id
        for key in ("created_at", "last_activity_at"):
            if d[key] is not None:
                d[key] = d[key].isoformat()
        return d


@dataclass
class Variable:
    """CI/CD variable at group or project scope."""

    key: str
    value: str
    variable_type: str = "env_var"
    protected: bool = False
    masked: bool = False
    environment_scope: str = DEFAULT_ENVIRONMENT_SCOPE

    @classmethod
    def from_api(cls, data: dict) -> Variable:
        return cls(
            key=data["key"],
            value=data.get("value", ""),
            variable_type=data.get("variable_type", "env_var"),
            protected=bool(data.get("protected", False)),
            masked=bool(data.get("masked", False)),
            environment_scope=data.get("environment_scope") or DEFAULT_ENVIRONMENT_SCOPE,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CreatedProject:
    """Project returned by a successful create, with its final (possibly suffixed) name."""

    id: int
    name: str
    http_url_to_repo: str
    path_with_namespace: str
    ssh_url_to_repo: str = ""
    web_url: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GroupSummary:
    id: int
    name: str
    full_path: str
    web_url: str
    subgroup_count: int = 0
    project_count: int = 0
    is_marked_for_deletion: bool = False
    parent_id: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProjectSummary:
    id: int
    name: str
    description: str
    web_url: str
    path: str
    group_id: int
    group_name: str
    variable_count: int = 0
    created_at: datetime | None = None
    last_activity_at: datetime | None = None
    is_marked_for_deletion: bool = False

    def to_dict(self) -> dict:
        d = asdict(self)
        for key in ("created_at", "last_activity_at"):
            if d[key] is not None:
                d[key] = d[key].isoformat()
        return d
