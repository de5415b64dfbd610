"""Base class shared by the group, project, variable and summary operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from gl_admin.client import DeserializationError, GroupNotFoundError, describe_http_error
from gl_admin.models import Result

if TYPE_CHECKING:
    from gl_admin.client import GitLabClient


class ApiOperations:
    """
    Holds the client and the progress logger.

    The logger is the observer callers inject to receive progress messages; it
    defaults to the client's logger.
    """

    def __init__(self, client: GitLabClient, logger: logging.Logger | None = None):
        self.client = client
        self.logger = logger or client.logger

    def _failure(self, context: str, error: Exception) -> Result:
        if isinstance(error, requests.HTTPError):
            message = f"{context}: {describe_http_error(error)}"
        elif isinstance(error, GroupNotFoundError):
            message = str(error)
        elif isinstance(error, DeserializationError):
            message = f"{context}: {error}"
        elif isinstance(error, (KeyError, TypeError, ValueError)):
            message = f"{context}: failed to deserialize response ({error!r})"
        else:
            message = f"An error occurred: {error}"
        self.logger.debug(message)
        return Result.failure(message)
