"""Root conftest: sets LOCAL_WORKSPACE_FOLDER BEFORE app.py is imported.

app.py builds its module-level FastAPI application at import time, and
that reads the workspace root from the environment. Tests that need a
workspace build their own WorkspaceConfig from the fixtures below.
"""

import os
import tempfile
from pathlib import Path

import pytest

# Force-set (not setdefault) so a real workspace never leaks into tests
os.environ["LOCAL_WORKSPACE_FOLDER"] = tempfile.mkdtemp(prefix="files-server-test-")
os.environ.pop("MCP_HTTP_PORT", None)

from settings import WorkspaceConfig  # noqa: E402


@pytest.fixture
def root(tmp_path: Path) -> Path:
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws.resolve()


@pytest.fixture
def config(root: Path) -> WorkspaceConfig:
    return WorkspaceConfig(root=root)
