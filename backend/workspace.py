# backend/workspace.py
"""
Path containment for the workspace.

`resolve()` is the only way to turn a caller-supplied path into a
filesystem path. It works purely lexically: nothing here touches the
disk, and nothing here checks existence or the kind of entry.
"""
import os
import posixpath
import re
from pathlib import Path

from errors import ContainmentViolation

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def _clean_relative(user_path: str) -> str:
    # Backslashes count as separators whatever the host OS.
    p = posixpath.normpath((user_path or "").replace("\\", "/"))

    # Treat absolute-looking input as relative to the workspace.
    while True:
        stripped = _DRIVE_PREFIX.sub("", p, count=1).lstrip("/")
        if stripped == p:
            break
        p = stripped
    return p or "."


def is_within(root: Path, candidate: str) -> bool:
    """True when `candidate` is `root` or lies beneath it (lexically)."""
    try:
        rel = os.path.relpath(os.path.normcase(candidate), os.path.normcase(str(root)))
    except ValueError:
        # different drives on Windows
        return False
    if os.path.isabs(rel):
        return False
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def resolve(root: Path, user_path: str) -> Path:
    """
    Map `user_path` onto an absolute path inside `root`.

    Leading "/", "\\" and drive letters are stripped, so "/etc/passwd"
    means "<root>/etc/passwd". Anything that still climbs above the
    root after normalisation raises ContainmentViolation. The empty
    string resolves to the root itself.
    """
    if "\x00" in (user_path or ""):
        raise ContainmentViolation("access denied: path contains a NUL byte")
    try:
        (user_path or "").encode("utf-8")
    except UnicodeEncodeError:
        raise ContainmentViolation("access denied: path is not valid UTF-8 text")

    rel = _clean_relative(user_path)
    full = os.path.normpath(os.path.join(str(root), rel))

    if not is_within(root, full):
        raise ContainmentViolation(
            f"access denied: path is outside workspace folder: {user_path}"
        )
    return Path(full)


def display_path(root: Path, resolved: Path) -> str:
    """Workspace-relative, forward-slash form of a resolved path ("." for the root)."""
    rel = os.path.relpath(str(resolved), str(root))
    return rel.replace(os.sep, "/")
