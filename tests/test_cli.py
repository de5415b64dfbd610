"""Tests for the command line: parser wiring, environment handling and command output."""

import argparse
import json

import pytest
import responses

from conftest import MOCK_API_URL, MOCK_GITLAB_DOMAIN, make_group, make_project

from gl_admin import cli
from gl_admin.commands import get_command_registry
from gl_admin.commands.seed import SeedProjectCommand
from gl_admin.logging_utils import setup_logging
from gl_admin.models import Result


def make_args(**kwargs) -> argparse.Namespace:
    """Helper to create argparse.Namespace with default values."""
    defaults = {
        "json_output": False,
        "verbose": False,
        "gitlab_domain": None,
        "concurrency": 8,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("GL_PAT", "test-token")
    monkeypatch.setenv("GL_DOMAIN", MOCK_GITLAB_DOMAIN)
    monkeypatch.delenv("GL_NAMESPACE", raising=False)


class TestParser:
    def test_all_commands_registered(self):
        expected = {
            "find-groups",
            "search-groups",
            "subgroups",
            "group-summary",
            "projects",
            "project-summary",
            "create-project",
            "transfer-project",
            "get-variable",
            "list-variables",
            "set-variable",
            "delete-variable",
            "seed-project",
        }
        assert expected <= set(get_command_registry())

    def test_variable_scope_is_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["get-variable", "KEY"])

    def test_shared_runners_default_is_unset(self):
        args = cli.build_parser().parse_args(["create-project", "demo"])
        assert args.shared_runners is None
        args = cli.build_parser().parse_args(["create-project", "demo", "--no-shared-runners"])
        assert args.shared_runners is False


class TestMain:
    def test_missing_token_exits_1(self, monkeypatch, capsys):
        monkeypatch.delenv("GL_PAT", raising=False)

        assert cli.main(["find-groups", "platform"]) == 1
        assert "GL_PAT" in capsys.readouterr().err

    @responses.activate
    def test_find_groups_text_output(self, env, capsys):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups", json=[make_group(7, "platform")])

        assert cli.main(["find-groups", "platform"]) == 0
        err = capsys.readouterr().err
        assert "org/platform (id=7)" in err
        assert responses.calls[0].request.headers["Authorization"] == "Bearer test-token"

    @responses.activate
    def test_projects_json_output(self, env, capsys):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups/1", json=make_group(1, "org"))
        responses.add(responses.GET, f"{MOCK_API_URL}/groups/1/projects", json=[make_project(10, "api")])

        assert cli.main(["--json", "projects", "1"]) == 0
        lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
        payloads = [line for line in lines if "id" in line]
        assert [(p["id"], p["name"], p["group_id"]) for p in payloads] == [(10, "api", 1)]

    @responses.activate
    def test_failed_lookup_exits_1(self, env, capsys):
        responses.add(responses.GET, f"{MOCK_API_URL}/groups", status=500, body="boom")

        assert cli.main(["search-groups", "platform"]) == 1
        assert "Failed to search for groups: 500" in capsys.readouterr().err


class TestSeedProject:
    """Tests for the seed-project workflow with git and file steps stubbed."""

    def _args(self, tmp_path, **kwargs):
        defaults = dict(
            name="svc",
            template_url="https://templates.example.org/base.git",
            root_folder=str(tmp_path),
            clone_path=None,
            branch="",
            commit_message="initial commit",
            namespace_id=None,
            transfer_to=None,
            dry_run=False,
        )
        defaults.update(kwargs)
        return make_args(**defaults)

    @responses.activate
    def test_dry_run_makes_no_requests(self, mock_client, tmp_path):
        setup_logging()

        assert SeedProjectCommand(mock_client, self._args(tmp_path, dry_run=True)).run() == 0
        assert len(responses.calls) == 0

    @responses.activate
    def test_full_workflow(self, mock_client, tmp_path, monkeypatch):
        setup_logging()
        responses.add(responses.GET, f"{MOCK_API_URL}/projects", json=[])
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=make_project(55, "svc"))
        responses.add(responses.PUT, f"{MOCK_API_URL}/projects/55/transfer", json=make_project(55, "svc", namespace_id=9))

        clones, pushes = [], []

        def fake_clone(url, path, token=None):
            clones.append((url, token))
            return Result.success(str(path))

        def fake_push(path, message, branch=""):
            pushes.append((message, branch))
            return Result.success(branch or "main")

        monkeypatch.setattr("gl_admin.git_ops.clone_repository", fake_clone)
        monkeypatch.setattr("gl_admin.git_ops.branch_commit_push", fake_push)
        monkeypatch.setattr("gl_admin.files.copy_files", lambda src, dst: 0)

        args = self._args(tmp_path, branch="seed", transfer_to="9")
        assert SeedProjectCommand(mock_client, args).run() == 0

        # Template host differs from the GitLab host, so no token is sent there
        assert clones == [
            ("https://templates.example.org/base.git", None),
            (f"https://{MOCK_GITLAB_DOMAIN}/org/svc.git", "test-token"),
        ]
        assert pushes == [("initial commit", "main"), ("initial commit", "seed")]
        assert (tmp_path / "svc" / "README.md").read_text() == "# svc"
        assert json.loads(responses.calls[-1].request.body) == {"namespace": "9"}

    @responses.activate
    def test_clone_failure_stops_workflow(self, mock_client, tmp_path, monkeypatch):
        setup_logging()
        responses.add(responses.GET, f"{MOCK_API_URL}/projects", json=[])
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=make_project(55, "svc"))
        monkeypatch.setattr(
            "gl_admin.git_ops.clone_repository", lambda url, path, token=None: Result.failure("Failed to clone")
        )
        pushed = []
        monkeypatch.setattr("gl_admin.git_ops.branch_commit_push", lambda *a, **k: pushed.append(a))

        assert SeedProjectCommand(mock_client, self._args(tmp_path)).run() == 1
        assert pushed == []

    @responses.activate
    def test_unreadable_template_stops_workflow(self, mock_client, tmp_path, monkeypatch):
        """A file error is logged and exits 1 instead of escaping as a traceback."""
        setup_logging()
        responses.add(responses.GET, f"{MOCK_API_URL}/projects", json=[])
        responses.add(responses.POST, f"{MOCK_API_URL}/projects", json=make_project(55, "svc"))
        monkeypatch.setattr("gl_admin.git_ops.clone_repository", lambda url, path, token=None: Result.success(str(path)))
        pushes = []
        monkeypatch.setattr(
            "gl_admin.git_ops.branch_commit_push", lambda *a, **k: pushes.append(a) or Result.success("main")
        )

        def unreadable(src, dst):
            raise PermissionError(13, "Permission denied", str(src))

        monkeypatch.setattr("gl_admin.files.copy_files", unreadable)

        assert SeedProjectCommand(mock_client, self._args(tmp_path)).run() == 1
        assert len(pushes) == 1
