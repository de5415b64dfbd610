"""GitLab API client with pagination and group resolution."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable

import requests

from gl_admin.models import API_V4, DEFAULT_ORDER_BY, DEFAULT_SORT, PER_PAGE, is_active


class DeserializationError(ValueError):
    """Response body did not have the expected JSON shape."""


class GroupNotFoundError(LookupError):
    """A group name or ID could not be resolved to an active group."""


def normalize_order_by(order_by: str | None, allowed: Iterable[str]) -> str:
    """Return order_by if it is an allowed field, otherwise fall back to 'name'."""
    value = (order_by or "").lower()
    return value if value in allowed else DEFAULT_ORDER_BY


def normalize_sort(sort: str | None) -> str:
    return "desc" if (sort or "").lower() == "desc" else DEFAULT_SORT


def describe_http_error(error: requests.HTTPError) -> str:
    """Status code plus raw body, the shape every HTTP failure message uses."""
    resp = error.response
    if resp is None:
        return str(error)
    return f"{resp.status_code} {resp.reason or ''}".rstrip() + f". {resp.text}"


def _parse_total_pages(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class GitLabClient:
    """Thin wrapper around GitLab REST API v4 with pagination support."""

    def __init__(self, domain: str, token: str, logger: logging.Logger | None = None):
        domain = domain.rstrip("/")
        self.base_url = domain if "://" in domain else f"https://{domain}"
        self.token = token
        self.api_url = f"{self.base_url}{API_V4}"
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        self._local = threading.local()
        self.logger = logger or logging.getLogger("gl-admin")

    @property
    def session(self) -> requests.Session:
        """The calling thread's session; worker threads never share one."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
            session.headers.update(self.headers)
        return session

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Make a single HTTP request; non-2xx responses raise requests.HTTPError."""
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')} {kwargs.get('json', '')}")
        resp = self.session.request(method, url, **kwargs)
        if resp.status_code >= 400:
            self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise DeserializationError(f"Response from {resp.url} is not valid JSON") from e

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._json(self._request("GET", endpoint, params=params))

    def post(self, endpoint: str, data: dict | None = None) -> Any:
        return self._json(self._request("POST", endpoint, json=data))

    def put(self, endpoint: str, data: dict | None = None, params: dict | None = None) -> Any:
        return self._json(self._request("PUT", endpoint, json=data, params=params))

    def delete(self, endpoint: str, params: dict | None = None) -> requests.Response:
        return self._request("DELETE", endpoint, params=params)

    def paginate(
        self,
        endpoint: str,
        params: dict | None = None,
        match: Callable[[dict], bool] | None = None,
        label: str = "items",
        include_deleted: bool = False,
    ) -> list[dict]:
        """
        Fetch every page of a listing endpoint.

        Soft-deleted entities are dropped unless include_deleted is set; `match`
        narrows the result further.
        Stops on a short page, or when X-Total-Pages says the current page is the last.
        Any HTTP error aborts the whole walk.
        """
        params = dict(params or {})
        params["per_page"] = PER_PAGE
        page = 1
        results: list[dict] = []
        while True:
            self.logger.info(f"Fetching page {page} of {label}...")
            params["page"] = page
            resp = self._request("GET", endpoint, params=params)
            data = self._json(resp)
            if not isinstance(data, list):
                raise DeserializationError(f"Failed to deserialize {label} data")

            results.extend(
                item
                for item in data
                if (include_deleted or is_active(item)) and (match is None or match(item))
            )

            if len(data) < PER_PAGE:
                break
            total_pages = _parse_total_pages(resp.headers.get("X-Total-Pages"))
            if total_pages is not None and page >= total_pages:
                break
            page += 1
        return results

    # -- Resolution helpers --

    def resolve_group_id(self, group_id_or_name: str) -> int | None:
        """
        Resolve a numeric ID or a group name to a group ID.

        Numeric input is looked up directly: an active group returns its ID, a group
        marked for deletion returns None, and a 404 falls through to a name search.
        A name search takes the first active match.
        """
        value = str(group_id_or_name).strip()
        if value.isdigit():
            try:
                group = self.get(f"/groups/{value}")
                if not is_active(group):
                    self.logger.info(f"Group {value} is marked for deletion")
                    return None
                return group["id"]
            except requests.HTTPError as e:
                if e.response is None or e.response.status_code != 404:
                    raise

        groups = self.get("/groups", params={"search": value})
        if not isinstance(groups, list):
            raise DeserializationError("Failed to deserialize groups data")
        for group in groups:
            if is_active(group):
                self.logger.info(f"Resolved group name to ID: {group['id']}")
                return group["id"]
        raise GroupNotFoundError(f"No active group found with name: {value}")
