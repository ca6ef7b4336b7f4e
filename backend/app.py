# backend/app.py
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dispatcher import Dispatcher
from mcp_server import build_mcp
from settings import SERVER_NAME, WorkspaceConfig
from tool_router import build_tool_router

APP_TITLE = "Workspace Files Server"

logger = logging.getLogger("files")


def configure_logging(level: str = "INFO") -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s")
    logger.setLevel(level)


class _MCPPathFix:
    """Serve POST /mcp without a redirect to /mcp/."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope.get("path") == "/mcp":
            scope = dict(scope, path="/mcp/")
        await self.app(scope, receive, send)


def create_app(config: Optional[WorkspaceConfig] = None) -> FastAPI:
    # Raises ConfigurationError when the workspace is unset or invalid
    if config is None:
        config = WorkspaceConfig.from_env()
    configure_logging(config.log_level)

    dispatcher = Dispatcher(config)
    mcp = build_mcp(dispatcher)
    mcp_app = mcp.streamable_http_app()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"[FILES] Workspace root: {config.root}")
        async with mcp.session_manager.run():
            yield

    app = FastAPI(title=APP_TITLE, lifespan=lifespan)
    app.state.config = config
    app.state.dispatcher = dispatcher
    app.state.mcp = mcp

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(_MCPPathFix)

    # ---- Basic routes ---------------------------------------------------------
    @app.get("/")
    def root():
        return {"ok": True, "service": APP_TITLE}

    @app.get("/health")
    def health():
        return JSONResponse({"status": "healthy", "server": SERVER_NAME})

    # ---- Tools ----------------------------------------------------------------
    app.include_router(build_tool_router(dispatcher))
    app.mount("/mcp", mcp_app)
    return app


app = create_app()


def main():
    import uvicorn

    config: WorkspaceConfig = app.state.config
    logger.info(f"MCP Files Server is running on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
