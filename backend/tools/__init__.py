from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from workspace import display_path
from .files import read_file, write_file, delete_file
from .directories import create_directory, delete_directory, list_directory, render_listing
from .tree import build_tree, render_tree_view


@dataclass(frozen=True)
class Param:
    name: str
    type: str  # "string" | "number"
    description: str
    required: bool = True


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[..., str]
    params: List[Param] = field(default_factory=list)

    def schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description} for p in self.params
            },
            "required": [p.name for p in self.params if p.required],
        }


# ---- Handlers: run the operation, render the result as text ------------------
def _read_file(root: Path, file_path: str) -> str:
    _, data = read_file(root, file_path)
    return data.decode("utf-8", errors="replace")


def _write_file(root: Path, file_path: str, content: str) -> str:
    p, nbytes = write_file(root, file_path, content)
    return f"Successfully wrote {nbytes} bytes to {display_path(root, p)}"


def _delete_file(root: Path, file_path: str) -> str:
    p = delete_file(root, file_path)
    return f"Successfully deleted file: {display_path(root, p)}"


def _create_directory(root: Path, directory_path: str) -> str:
    p = create_directory(root, directory_path)
    return f"Successfully created directory: {display_path(root, p)}"


def _delete_directory(root: Path, directory_path: str) -> str:
    p = delete_directory(root, directory_path)
    return f"Successfully deleted directory: {display_path(root, p)}"


def _list_directory(root: Path, directory_path: str) -> str:
    p, entries = list_directory(root, directory_path)
    return render_listing(display_path(root, p), entries)


def _tree_view(root: Path, directory_path: str, max_depth: Optional[float] = None) -> str:
    depth = -1 if max_depth is None else int(max_depth)
    p, nodes = build_tree(root, directory_path, depth)
    return render_tree_view(display_path(root, p), nodes)


_FILE_PATH = "file_path"
_DIR_PATH = "directory_path"

TOOL_REGISTRY: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in [
        ToolSpec(
            "read_file", "Read the content of a text file", _read_file,
            [Param(_FILE_PATH, "string", "Path to the file to read")],
        ),
        ToolSpec(
            "write_file", "Write content to a text file", _write_file,
            [
                Param(_FILE_PATH, "string", "Path to the file to write"),
                Param("content", "string", "Content to write to the file"),
            ],
        ),
        ToolSpec(
            "delete_file", "Delete a file from the filesystem", _delete_file,
            [Param(_FILE_PATH, "string", "Path to the file to delete")],
        ),
        ToolSpec(
            "create_directory",
            "Create a directory and its parent directories if they don't exist",
            _create_directory,
            [Param(_DIR_PATH, "string", "Path to the directory to create")],
        ),
        ToolSpec(
            "delete_directory",
            "Delete a directory and all its contents from the filesystem",
            _delete_directory,
            [Param(_DIR_PATH, "string", "Path to the directory to delete")],
        ),
        ToolSpec(
            "list_directory", "List the contents of a directory", _list_directory,
            [Param(_DIR_PATH, "string", "Path to the directory to list")],
        ),
        ToolSpec(
            "tree_view", "Display a tree view of a directory structure", _tree_view,
            [
                Param(_DIR_PATH, "string", "Path to the directory to display as tree"),
                Param("max_depth", "number", "Maximum depth to traverse (default: unlimited)", required=False),
            ],
        ),
    ]
}
