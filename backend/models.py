# backend/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FILE = "file"
DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a directory. `size` is set for files only (None if unreadable)."""
    name: str
    kind: str
    size: Optional[int] = None

    @property
    def is_dir(self) -> bool:
        return self.kind == DIRECTORY

    def label(self) -> str:
        if self.is_dir:
            return f"{self.name}/"
        if self.size is None:
            return self.name
        return f"{self.name} ({self.size} bytes)"


@dataclass
class TreeNode:
    entry: DirectoryEntry
    depth: int
    children: List["TreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class ToolResult:
    ok: bool
    tool: str
    text: str = ""
    kind: Optional[str] = None

    @classmethod
    def success(cls, tool: str, text: str) -> "ToolResult":
        return cls(ok=True, tool=tool, text=text)

    @classmethod
    def failure(cls, tool: str, kind: str, message: str) -> "ToolResult":
        return cls(ok=False, tool=tool, text=message, kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "tool": self.tool, "result": self.text}
        return {"ok": False, "tool": self.tool, "kind": self.kind, "error": self.text}
