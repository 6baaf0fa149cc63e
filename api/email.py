"""Email drafting endpoints."""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.deps import ai_enabled, get_email_drafter

router = APIRouter(prefix="/api", tags=["email"])


class GenerateEmailRequest(BaseModel):
    """Request body for AI generation with a communication profile."""
    recipient: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    prompt: Optional[str] = None


class SimpleEmailRequest(BaseModel):
    """Request body for AI generation without context."""
    recipient: Optional[str] = None
    original_message: Optional[str] = None


class DraftRequest(BaseModel):
    """Request body for the full draft flow."""
    recipient: Optional[str] = None
    mcp_enabled: bool = False
    use_ai: bool = True
    original_message: Optional[str] = None


def _require_recipient(recipient: Optional[str]) -> str:
    if not recipient or not recipient.strip():
        raise HTTPException(status_code=400, detail="Recipient is required")
    return recipient.strip()


@router.post("/ai/generate-email")
async def generate_email(request: GenerateEmailRequest):
    """Generate a draft from a communication profile."""
    recipient = _require_recipient(request.recipient)

    try:
        result = await get_email_drafter().generate_ai_email(recipient, request.context, request.prompt)
        return result.to_dict()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/ai/generate-simple-email")
async def generate_simple_email(request: SimpleEmailRequest):
    """Generate a draft without any communication context."""
    recipient = _require_recipient(request.recipient)

    if not ai_enabled():
        raise HTTPException(
            status_code=400,
            detail="API key not configured. Please set ANTHROPIC_API_KEY in your environment variables."
        )

    result = await get_email_drafter().generate_simple_email(recipient, request.original_message)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return {
        "success": True,
        "email_draft": result.email_draft,
        "ai_generated": True,
        "ai_model": result.ai_model,
        "tokens_used": result.tokens_used,
        "context": "No context - MCP disabled",
    }


@router.post("/email/draft")
async def draft_email(request: DraftRequest):
    """
    Draft an email, with or without communication context.

    With mcp_enabled the recipient's files are analysed first; the draft
    falls back to templates whenever AI generation is unavailable.
    """
    recipient = _require_recipient(request.recipient)

    try:
        response = await get_email_drafter().draft(
            recipient,
            mcp_enabled=request.mcp_enabled,
            use_ai=request.use_ai,
            original_message=request.original_message,
        )
        return response.to_dict()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
