# backend/mcp_server.py
"""
MCP surface: the same operations as POST /tool, served by FastMCP over
streamable HTTP. Every tool delegates to the Dispatcher.

Arguments reach the Dispatcher untouched, so it is the only validator.
Path and content parameters are typed `str` so FastMCP never JSON-decodes
them; `max_depth` is `Any` so "2" or true are not coerced to a number.
Malformed calls are answered with
a JSON-RPC INVALID_PARAMS error before the tool runs; operation
failures come back as MCP error results (isError) with the
dispatcher's message.
"""
from typing import Any

from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError

from dispatcher import Dispatcher
from errors import ArgumentError
from settings import SERVER_NAME


def _invalid_params(e: ArgumentError) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_PARAMS, message=e.message))


def build_mcp(dispatcher: Dispatcher) -> FastMCP:
    # host decides whether FastMCP restricts Host headers to localhost
    mcp = FastMCP(SERVER_NAME, host=dispatcher.config.host)
    # mounted under /mcp by the FastAPI app
    mcp.settings.streamable_http_path = "/"
    registry = dispatcher.registry

    def call(name: str, **args) -> str:
        try:
            result = dispatcher.dispatch(name, args)
        except ArgumentError as e:
            raise ToolError(e.message)
        if not result.ok:
            raise ToolError(result.text)
        return result.text

    @mcp.tool(name="read_file", description=registry["read_file"].description)
    def read_file(file_path: str) -> str:
        return call("read_file", file_path=file_path)

    @mcp.tool(name="write_file", description=registry["write_file"].description)
    def write_file(file_path: str, content: str) -> str:
        return call("write_file", file_path=file_path, content=content)

    @mcp.tool(name="delete_file", description=registry["delete_file"].description)
    def delete_file(file_path: str) -> str:
        return call("delete_file", file_path=file_path)

    @mcp.tool(name="create_directory", description=registry["create_directory"].description)
    def create_directory(directory_path: str) -> str:
        return call("create_directory", directory_path=directory_path)

    @mcp.tool(name="delete_directory", description=registry["delete_directory"].description)
    def delete_directory(directory_path: str) -> str:
        return call("delete_directory", directory_path=directory_path)

    @mcp.tool(name="list_directory", description=registry["list_directory"].description)
    def list_directory(directory_path: str) -> str:
        return call("list_directory", directory_path=directory_path)

    @mcp.tool(name="tree_view", description=registry["tree_view"].description)
    def tree_view(directory_path: str, max_depth: Any = None) -> str:
        return call("tree_view", directory_path=directory_path, max_depth=max_depth)

    # Advertise the registry's typed schemas instead of the untyped signatures
    for name, spec in registry.items():
        tool = mcp._tool_manager.get_tool(name)
        if tool is not None:
            tool.parameters = spec.schema()

    handlers = mcp._mcp_server.request_handlers
    run_tool_call = handlers[types.CallToolRequest]

    async def checked_tool_call(req: types.CallToolRequest):
        try:
            dispatcher.validate(req.params.name, req.params.arguments or {})
        except ArgumentError as e:
            raise _invalid_params(e)
        return await run_tool_call(req)

    handlers[types.CallToolRequest] = checked_tool_call
    return mcp
