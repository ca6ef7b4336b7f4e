from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dispatcher import Dispatcher
from errors import ArgumentError


class ToolRequest(BaseModel):
    name: str
    args: Dict[str, Any] = {}


def build_tool_router(dispatcher: Dispatcher) -> APIRouter:
    router = APIRouter()

    @router.get("/tools")
    def list_tools():
        return {
            "tools": [
                {"name": spec.name, "description": spec.description, "input_schema": spec.schema()}
                for spec in dispatcher.registry.values()
            ]
        }

    @router.post("/tool")
    def run_tool(req: ToolRequest):
        try:
            result = dispatcher.dispatch(req.name, req.args)
        except ArgumentError as e:
            raise HTTPException(400, e.message)
        return result.to_dict()

    return router
