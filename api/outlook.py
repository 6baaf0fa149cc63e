"""Outlook integration endpoint."""

from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.outlook import search_outlook_emails

router = APIRouter(prefix="/api/outlook", tags=["outlook"])


class OutlookSearchRequest(BaseModel):
    contact_name: Optional[str] = None


@router.post("/search")
async def search_outlook(request: OutlookSearchRequest):
    """Search the local Outlook client for a contact's messages."""
    if not request.contact_name or not request.contact_name.strip():
        raise HTTPException(status_code=400, detail="Contact name is required")

    try:
        return await search_outlook_emails(request.contact_name.strip())
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
