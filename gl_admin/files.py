"""Local file helpers for seeding repositories."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from gl_admin.models import Result

logger = logging.getLogger("gl-admin")


def create_file_with_content(directory: str | Path, filename: str, content: str) -> Path:
    path = Path(directory) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def replace_placeholder_in_file(
    file_path: str | Path, key: str, old_value: str, new_value: str, delimiter: str = ":"
) -> Result[int]:
    """
    Replace old_value with new_value on lines of the form `<key><delimiter> <old_value>`.

    Returns the number of lines changed; fails when the file is missing or no line matches.
    """
    path = Path(file_path)
    if not path.is_file():
        return Result.failure(f"File not found: {path}")

    lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
    changed = 0
    for i, line in enumerate(lines):
        head, sep, tail = line.partition(delimiter)
        if not sep or head.strip() != key or tail.strip() != old_value:
            continue
        lines[i] = head + sep + tail.replace(old_value, new_value, 1)
        changed += 1

    if not changed:
        return Result.failure(f"Placeholder '{key}{delimiter} {old_value}' not found in {path}")
    path.write_text("".join(lines), encoding="utf-8")
    logger.info(f"Replaced {changed} placeholder(s) for {key} in {path}")
    return Result.success(changed)


def copy_files(source: str | Path, destination: str | Path) -> int:
    """Copy a directory tree, skipping any .git directory. Returns the number of files copied."""
    source, destination = Path(source), Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for item in source.rglob("*"):
        relative = item.relative_to(source)
        if ".git" in relative.parts:
            continue
        target = destination / relative
        if item.is_dir():
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, target)
            copied += 1
    return copied


def remove_temp_folder(path: str | Path) -> None:
    if Path(path).is_dir():
        shutil.rmtree(path)
