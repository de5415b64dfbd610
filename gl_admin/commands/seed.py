"""Create a project and seed it from a template repository."""

from __future__ import annotations

import argparse
import os
import urllib.parse
from pathlib import Path

from gl_admin import files, git_ops
from gl_admin.commands.base import Command, register_command
from gl_admin.operations import ProjectOperations


@register_command("seed-project")
class SeedProjectCommand(Command):
    """Create a project, then clone a template into it and push."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name", help="Name for the new project (suffixed with -N if taken)")
        parser.add_argument("--template-url", required=True, help="Repository to copy files from")
        parser.add_argument("--root-folder", default=".", help="Working folder for local clones (default: .)")
        parser.add_argument("--clone-path", default=None, help="Temporary template clone (default: <root>/<name>-tmp)")
        parser.add_argument("--branch", default="", help="Branch for the template commit (default: mainline)")
        parser.add_argument("--commit-message", default="initial commit")
        parser.add_argument("--namespace-id", type=int, default=None, help="Group/namespace ID to create in")
        parser.add_argument(
            "--transfer-to",
            default=os.environ.get("GL_NAMESPACE"),
            help="Namespace to move the project to afterwards (default: GL_NAMESPACE env)",
        )
        parser.add_argument("--dry-run", action="store_true", help="Print the plan without doing anything")

    def run(self) -> int:
        args = self.args
        root = Path(args.root_folder).expanduser()
        clone_path = Path(args.clone_path) if args.clone_path else root / f"{args.name}-tmp"

        self.logger.info("Summary of actions:")
        self.logger.info(f" - Working folder is {root}")
        self.logger.info(f" - Create a new GitLab project called {args.name}")
        self.logger.info(f" - Clone {args.template_url} to folder {clone_path}")
        self.logger.info(f" - Copy files (except .git/) from {clone_path} to {root / args.name}")
        self.logger.info(f" - Branch {args.branch or '(mainline)'}")
        self.logger.info(f" - Commit and push to {args.name}")
        if args.transfer_to:
            self.logger.info(f" - Transfer the project to {args.transfer_to}")
        if args.dry_run:
            self.logger.info("DRY-RUN MODE - no changes will be made")
            return 0

        projects = ProjectOperations(self.client, self.logger)
        created = projects.create_project(
            args.name,
            namespace_id=args.namespace_id,
            on_exists=lambda taken: self.logger.info(f" - {taken} exists, establishing an available project name..."),
        )
        if not self._check(created, "Error creating project"):
            return 1
        project = created.value
        self.logger.info(f"{project.name}({project.id}) has been created!")
        project_dir = root / project.name

        token = self.client.token
        template_token = token if self._same_host(args.template_url) else None
        steps = [
            lambda: git_ops.clone_repository(args.template_url, clone_path, token=template_token),
            lambda: git_ops.clone_repository(project.http_url_to_repo, project_dir, token=token),
        ]
        for step in steps:
            if not self._check(step(), "Error seeding project"):
                return 1

        try:
            files.create_file_with_content(project_dir, "README.md", f"# {project.name}")
        except OSError as e:
            self.logger.error(f"Error writing README: {e}")
            return 1
        if not self._check(git_ops.branch_commit_push(project_dir, "initial commit", "main"), "Error pushing README"):
            return 1

        self.logger.info(f"Copying files from {clone_path} into {project_dir}")
        try:
            files.copy_files(clone_path, project_dir)
        except OSError as e:
            self.logger.error(f"Error copying template files: {e}")
            return 1
        pushed = git_ops.branch_commit_push(project_dir, args.commit_message, args.branch)
        if not self._check(pushed, "Error pushing template"):
            return 1

        self.logger.info(f"Tidying up by removing the {clone_path} folder")
        try:
            files.remove_temp_folder(clone_path)
        except OSError as e:
            self.logger.error(f"Error removing {clone_path}: {e}")
            return 1

        if args.transfer_to:
            moved = projects.transfer_project(project.id, args.transfer_to)
            if not self._check(moved, "Error transferring project"):
                return 1

        self._emit(project, "Workflow completed successfully!")
        return 0

    def _same_host(self, url: str) -> bool:
        return urllib.parse.urlparse(url).hostname == urllib.parse.urlparse(self.client.base_url).hostname
