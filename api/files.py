"""File search endpoints."""

from typing import List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.deps import get_tool_executor

router = APIRouter(prefix="/api/files", tags=["files"])


class FileSearchRequest(BaseModel):
    """Request body for a multi-location content search."""
    query: Optional[str] = None
    locations: Optional[List[str]] = None  # Defaults to the configured roots
    file_types: Optional[List[str]] = None  # Defaults to the email-like types


@router.post("/search")
async def search_files(request: FileSearchRequest):
    """
    Search file contents across multiple locations.

    Returns at most 50 matches, each with up to 3 preview lines.
    """
    if not request.query or not request.query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    try:
        executor = get_tool_executor()
        return await executor.search_files(request.query, request.locations, request.file_types)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
