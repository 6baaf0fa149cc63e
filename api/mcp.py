"""Tool catalog endpoints for the context server."""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.deps import get_tool_executor
from services.tools import parse_tool_call

router = APIRouter(prefix="/api/mcp", tags=["mcp"])


class ExecuteRequest(BaseModel):
    """Request body for executing a tool."""
    tool: Optional[str] = None
    args: Optional[Dict[str, Any]] = None


@router.get("/capabilities")
async def get_capabilities():
    """List server capabilities and the available tools."""
    return get_tool_executor().capabilities()


@router.post("/execute")
async def execute_tool(request: ExecuteRequest):
    """Validate and run a single tool call."""
    if not request.tool:
        raise HTTPException(status_code=400, detail="Tool name is required")

    try:
        call = parse_tool_call(request.tool, request.args)
        return await get_tool_executor().execute(call)
    except ValueError as e:  # includes InvalidToolCallError
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
