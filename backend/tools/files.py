import logging
from pathlib import Path
from typing import Tuple

from errors import ArgumentError, NotFound, TypeMismatch, from_os_error
from workspace import display_path, resolve

logger = logging.getLogger("files")


def _not_a_directory(op: str, root: Path, p: Path) -> None:
    # the workspace root itself always lands here for file operations
    if p.is_dir() and not p.is_symlink():
        raise TypeMismatch(f"{op}: path is a directory, not a file: {display_path(root, p)}")


def read_file(root: Path, file_path: str) -> Tuple[Path, bytes]:
    p = resolve(root, file_path)
    _not_a_directory("read_file", root, p)
    try:
        data = p.read_bytes()
    except FileNotFoundError:
        raise NotFound(f"read_file: file not found: {display_path(root, p)}")
    except OSError as e:
        raise from_os_error("read_file", display_path(root, p), e)
    logger.info(f"[FILES] Read file {p} ({len(data)} bytes)")
    return p, data


def write_file(root: Path, file_path: str, content: str) -> Tuple[Path, int]:
    """Replace the file's content, creating missing parent directories first."""
    p = resolve(root, file_path)
    _not_a_directory("write_file", root, p)
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError:
        raise ArgumentError(f"write_file: content is not valid UTF-8 text: {display_path(root, p)}")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except OSError as e:
        raise from_os_error("write_file", display_path(root, p), e)
    logger.info(f"[FILES] Wrote file {p} ({len(data)} bytes)")
    return p, len(data)


def delete_file(root: Path, file_path: str) -> Path:
    p = resolve(root, file_path)
    if not p.exists() and not p.is_symlink():
        raise NotFound(f"delete_file: file not found: {display_path(root, p)}")
    _not_a_directory("delete_file", root, p)
    try:
        p.unlink()
    except OSError as e:
        raise from_os_error("delete_file", display_path(root, p), e)
    logger.info(f"[FILES] Deleted file {p}")
    return p
