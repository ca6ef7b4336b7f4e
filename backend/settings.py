# backend/settings.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from errors import ConfigurationError

SERVER_NAME = "mcp-files-server"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9090


@dataclass(frozen=True)
class WorkspaceConfig:
    """
    Process-wide configuration. Built once at startup and handed to
    every component that needs the workspace root.
    """
    root: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allowed_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WorkspaceConfig":
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ
        env = environ

        raw_root = (env.get("LOCAL_WORKSPACE_FOLDER") or "").strip()
        if not raw_root:
            raise ConfigurationError("LOCAL_WORKSPACE_FOLDER environment variable is not set")

        raw_port = (env.get("MCP_HTTP_PORT") or "").strip() or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"MCP_HTTP_PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ConfigurationError(f"MCP_HTTP_PORT out of range: {port}")

        origins = tuple(
            o.strip() for o in (env.get("FRONTEND_ORIGIN") or "").split(",") if o.strip()
        ) or ("*",)

        return cls(
            root=resolve_root(raw_root),
            host=(env.get("MCP_HTTP_HOST") or "").strip() or DEFAULT_HOST,
            port=port,
            allowed_origins=origins,
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        )


def resolve_root(raw: str) -> Path:
    """Absolute, resolved workspace root. Must exist and be a directory."""
    try:
        root = Path(raw).expanduser().resolve()
    except (OSError, RuntimeError) as e:
        raise ConfigurationError(f"error resolving workspace path {raw!r}: {e}")
    if not root.exists():
        raise ConfigurationError(f"workspace folder does not exist: {root}")
    if not root.is_dir():
        raise ConfigurationError(f"workspace folder is not a directory: {root}")
    return root
