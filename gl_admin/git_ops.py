"""Local git operations used to seed a new project from a template repository."""

from __future__ import annotations

import logging
import re
import urllib.parse
from pathlib import Path

from git import GitCommandError, Repo

from gl_admin.models import Result

logger = logging.getLogger("gl-admin")

OAUTH2_USERINFO = re.compile(r"oauth2:[^@\s/]+@")


def build_authenticated_url(url: str, token: str | None) -> str:
    """Embed the access token in the userinfo of an http(s) URL; other URLs are returned unchanged."""
    if not token:
        return url
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return url
    netloc = parsed.hostname
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    netloc = f"oauth2:{urllib.parse.quote(token, safe='')}@{netloc}"
    return urllib.parse.urlunparse(parsed._replace(netloc=netloc))


def _redact(text: str, token: str | None = None) -> str:
    """Mask the token itself and any oauth2 credentials embedded in a remote URL."""
    if token:
        text = text.replace(token, "***")
    return OAUTH2_USERINFO.sub("oauth2:***@", text)


def _git_error(error: GitCommandError, token: str | None = None) -> str:
    """Git's own stderr without GitPython's `stderr: '...'` wrapper, credentials masked."""
    text = str(error.stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:") :].strip().strip("'").strip()
    return _redact(text or str(error), token)


def clone_repository(url: str, clone_path: str | Path, token: str | None = None) -> Result[str]:
    """Clone url into clone_path, authenticating with token when given."""
    logger.info(f"Cloning {url} into {clone_path}")
    try:
        Repo.clone_from(build_authenticated_url(url, token), str(clone_path))
    except GitCommandError as e:
        return Result.failure(f"Failed to clone {url}: {_git_error(e, token)}")
    return Result.success(str(clone_path))


def branch_commit_push(repo_path: str | Path, commit_message: str, branch: str = "") -> Result[str]:
    """
    Stage everything, commit and push to origin.

    With a branch name the branch is checked out first (created when missing)
    and pushed with upstream tracking; without one the current branch is used.
    Nothing is committed when the working tree is clean, but the push still runs.
    """
    try:
        repo = Repo(str(repo_path))
        if branch:
            if branch in [h.name for h in repo.heads]:
                repo.git.checkout(branch)
            else:
                repo.git.checkout("-b", branch)
        repo.git.add("-A")
        if repo.git.status("--porcelain"):
            repo.git.commit("-m", commit_message)
            logger.info(f"Committed changes in {repo_path}: {commit_message}")
        else:
            logger.info(f"No changes to commit in {repo_path}")
        target = branch or repo.active_branch.name
        repo.git.push("--set-upstream", "origin", target)
        logger.info(f"Pushed {target} to origin")
    except GitCommandError as e:
        return Result.failure(f"Git operation failed in {repo_path}: {_git_error(e)}")
    return Result.success(target)
