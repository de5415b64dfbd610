"""CLI entry point for gl-admin."""

from __future__ import annotations

import argparse
import os
import sys

# Ensure all commands are registered by importing the commands package
import gl_admin.commands  # noqa: F401
from gl_admin.client import GitLabClient
from gl_admin.commands import get_command_registry
from gl_admin.logging_utils import setup_logging
from gl_admin.models import DEFAULT_GITLAB_DOMAIN, DEFAULT_PROBE_WORKERS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gl-admin",
        description="Find, list and administer GitLab groups, projects and CI/CD variables.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    GL_PAT       - GitLab Personal Access Token (required)
    GL_DOMAIN    - GitLab domain (default: gitlab.com)
    GL_NAMESPACE - Namespace seed-project transfers new projects to (optional)

Examples:
    # Exact-match lookup by ID, name or path
    gl-admin find-groups platform-team

    # List subgroups of a group, newest first
    gl-admin subgroups 1437 --order-by created_at --sort desc

    # All projects below a group, as JSON lines
    gl-admin --json projects platform-team

    # Create or update a project variable for one environment
    gl-admin set-variable --project 321 DEPLOY_TARGET eu-west --environment-scope production

    # Create a project and seed it from a template
    gl-admin seed-project my-service --template-url https://gitlab.com/templates/service.git
""",
    )
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output results as JSON lines (to stderr)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--gitlab-domain", default=None, help="GitLab domain (default: from GL_DOMAIN env or gitlab.com)"
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_PROBE_WORKERS,
        help=f"Parallel requests when checking subgroups for nested subgroups (default: {DEFAULT_PROBE_WORKERS})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    registry = get_command_registry()
    for name, cmd_cls in sorted(registry.items()):
        sub = subparsers.add_parser(name, help=cmd_cls.__doc__)
        cmd_cls.add_arguments(sub)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Resolve GitLab domain
    gitlab_domain = args.gitlab_domain or os.environ.get("GL_DOMAIN", DEFAULT_GITLAB_DOMAIN)

    # Get token
    token = os.environ.get("GL_PAT")
    if not token:
        print("ERROR: GL_PAT environment variable is not set.", file=sys.stderr)
        return 1

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)
    client = GitLabClient(gitlab_domain, token, logger=logger)

    command = get_command_registry()[args.command](client=client, args=args)
    try:
        return command.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
