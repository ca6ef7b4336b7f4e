import logging
import os
import shutil
from pathlib import Path
from typing import List, Tuple

from errors import ContainmentViolation, NotFound, TypeMismatch, from_os_error
from models import DIRECTORY, FILE, DirectoryEntry
from workspace import display_path, resolve

logger = logging.getLogger("files")


def scan_directory(p: Path) -> List[DirectoryEntry]:
    """
    Immediate children of `p`, sorted by name. Symlinks are never
    reported as directories, so nothing walks through them.
    Raises OSError as-is; callers map it.
    """
    entries: List[DirectoryEntry] = []
    with os.scandir(p) as it:
        for item in it:
            if item.is_dir(follow_symlinks=False):
                entries.append(DirectoryEntry(name=item.name, kind=DIRECTORY))
                continue
            try:
                size = item.stat(follow_symlinks=False).st_size
            except OSError:
                size = None
            entries.append(DirectoryEntry(name=item.name, kind=FILE, size=size))
    entries.sort(key=lambda e: e.name)
    return entries


def require_directory(op: str, root: Path, p: Path) -> None:
    if not p.exists():
        raise NotFound(f"{op}: directory not found: {display_path(root, p)}")
    if not p.is_dir():
        raise TypeMismatch(f"{op}: path is not a directory: {display_path(root, p)}")


def create_directory(root: Path, directory_path: str) -> Path:
    p = resolve(root, directory_path)
    if p.exists() and not p.is_dir():
        raise TypeMismatch(
            f"create_directory: path exists and is not a directory: {display_path(root, p)}"
        )
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise from_os_error("create_directory", display_path(root, p), e)
    logger.info(f"[FILES] Created directory {p}")
    return p


def delete_directory(root: Path, directory_path: str) -> Path:
    """Remove a directory and everything under it. No confirmation step."""
    p = resolve(root, directory_path)
    if p == root:
        raise ContainmentViolation("delete_directory: refusing to delete the workspace root")
    require_directory("delete_directory", root, p)
    if p.is_symlink():
        raise TypeMismatch(
            f"delete_directory: path is a symlink, not a directory: {display_path(root, p)}"
        )
    try:
        shutil.rmtree(p)
    except OSError as e:
        logger.exception(f"[FILES] rmtree failed for {p}")
        raise from_os_error("delete_directory", display_path(root, p), e)
    logger.info(f"[FILES] Deleted directory {p}")
    return p


def list_directory(root: Path, directory_path: str) -> Tuple[Path, List[DirectoryEntry]]:
    p = resolve(root, directory_path)
    require_directory("list_directory", root, p)
    try:
        entries = scan_directory(p)
    except OSError as e:
        raise from_os_error("list_directory", display_path(root, p), e)
    logger.info(f"[FILES] Listed directory {p} ({len(entries)} entries)")
    return p, entries


def render_listing(shown: str, entries: List[DirectoryEntry]) -> str:
    lines = [f"Contents of directory: {shown}", ""]
    if not entries:
        lines.append("(empty directory)")
    else:
        lines.extend(e.label() for e in entries)
    return "\n".join(lines)
