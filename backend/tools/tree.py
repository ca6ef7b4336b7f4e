"""
Directory tree view.

Building and rendering are separate steps: `build_tree` walks the disk
and returns TreeNodes, `render_tree` turns nodes into connector lines
without touching the filesystem.

Depth: the queried directory is depth 0, its children depth 1. The
children of the queried directory are always listed. A directory at
depth d is expanded only while d < max_depth, so max_depth 0 and 1
both show just the immediate children. A negative max_depth is
unlimited.
"""
import logging
from pathlib import Path
from typing import List, Tuple

from errors import WorkspaceIOError
from models import TreeNode
from tools.directories import require_directory, scan_directory
from workspace import display_path, resolve

logger = logging.getLogger("files")

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
BLANK = "    "


def _expand(max_depth: int, depth: int) -> bool:
    return max_depth < 0 or depth < max_depth


def _walk(p: Path, depth: int, max_depth: int) -> List[TreeNode]:
    nodes: List[TreeNode] = []
    for entry in scan_directory(p):
        node = TreeNode(entry=entry, depth=depth)
        if entry.is_dir and _expand(max_depth, depth):
            node.children = _walk(p / entry.name, depth + 1, max_depth)
        nodes.append(node)
    return nodes


def build_tree(root: Path, directory_path: str, max_depth: int = -1) -> Tuple[Path, List[TreeNode]]:
    p = resolve(root, directory_path)
    require_directory("tree_view", root, p)
    try:
        nodes = _walk(p, 1, max_depth)
    except OSError as e:
        where = display_path(root, Path(e.filename)) if e.filename else display_path(root, p)
        reason = e.strerror or str(e)
        raise WorkspaceIOError(f"tree_view: error building tree view: {reason}: {where}")
    except RecursionError:
        raise WorkspaceIOError(
            f"tree_view: directory nesting too deep, retry with max_depth: {display_path(root, p)}"
        )
    logger.info(f"[FILES] Built tree view for {p} (max_depth={max_depth})")
    return p, nodes


def render_tree(nodes: List[TreeNode], lines: List[str], prefix: str = "") -> None:
    """Append one line per node to `lines`, recursing into expanded directories."""
    total = len(nodes)
    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = LAST if is_last else BRANCH
        lines.append(f"{prefix}{connector}{node.entry.label()}")
        if node.children:
            render_tree(node.children, lines, prefix + (BLANK if is_last else PIPE))


def render_tree_view(shown: str, nodes: List[TreeNode]) -> str:
    lines = [f"Tree view of directory: {shown}", ""]
    render_tree(nodes, lines)
    return "\n".join(lines)
