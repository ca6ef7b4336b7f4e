# backend/dispatcher.py
import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from errors import ArgumentError, WorkspaceError, WorkspaceIOError
from models import ToolResult
from settings import WorkspaceConfig
from tools import TOOL_REGISTRY, ToolSpec
from workspace import display_path

logger = logging.getLogger("files")


def _check_type(tool: str, name: str, expected: str, value: Any) -> None:
    if expected == "string":
        if not isinstance(value, str):
            raise ArgumentError(f"{tool}: parameter '{name}' must be a string")
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates survive JSON decoding but not the filesystem
            raise ArgumentError(f"{tool}: parameter '{name}' is not valid UTF-8 text")
        return
    if expected == "number":
        # bool is an int subclass; JSON true/false is not a depth
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ArgumentError(f"{tool}: parameter '{name}' must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ArgumentError(f"{tool}: parameter '{name}' must be a finite number")
        return
    raise ArgumentError(f"{tool}: parameter '{name}' has unsupported type {expected!r}")


class Dispatcher:
    """Routes a tool name plus raw arguments to the registered operation."""

    def __init__(self, config: WorkspaceConfig, registry: Optional[Dict[str, ToolSpec]] = None):
        self.config = config
        self.registry = TOOL_REGISTRY if registry is None else registry

    def validate(self, name: str, args: Any) -> Tuple[ToolSpec, Dict[str, Any]]:
        """
        Check the request shape without touching the filesystem.
        Raises ArgumentError for unknown tools and missing or mistyped
        arguments; unknown extra arguments are ignored.
        """
        spec = self.registry.get(name) if isinstance(name, str) else None
        if spec is None:
            raise ArgumentError(f"Unknown tool: {name}")
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise ArgumentError(f"{name}: arguments must be an object")

        kwargs: Dict[str, Any] = {}
        for param in spec.params:
            value = args.get(param.name)
            if value is None:
                if param.required:
                    raise ArgumentError(f"{name}: missing required parameter '{param.name}'")
                continue
            _check_type(name, param.name, param.type, value)
            kwargs[param.name] = value
        return spec, kwargs

    def dispatch(self, name: str, args: Any) -> ToolResult:
        spec, kwargs = self.validate(name, args)
        root: Path = self.config.root
        try:
            text = spec.handler(root, **kwargs)
        except ArgumentError:
            raise
        except WorkspaceError as e:
            return self._failed(name, e)
        except OSError as e:
            logger.exception(f"[FILES] {name} hit an unexpected OS error")
            where = display_path(root, Path(e.filename)) if e.filename else "?"
            return self._failed(name, WorkspaceIOError(f"{e.strerror or e}: {where}"))
        return ToolResult.success(name, text)

    def _failed(self, name: str, e: WorkspaceError) -> ToolResult:
        message = e.message if e.message.startswith(f"{name}:") else f"{name}: {e.message}"
        logger.warning(f"[FILES] {name} failed ({e.kind}): {message}")
        return ToolResult.failure(name, e.kind, message)
