"""Chat message endpoint backing the single-page UI."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.deps import get_chat_responder, get_llm_client

router = APIRouter(prefix="/api/chat", tags=["chat"])


class ChatMessageRequest(BaseModel):
    """A message typed into the chat box."""
    message: str
    mcp_enabled: bool = True
    use_ai: bool = True


@router.post("/message")
async def send_message(request: ChatMessageRequest):
    """Reply to a chat message; email requests produce a draft."""
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        reply = await get_chat_responder().respond(
            request.message.strip(),
            mcp_enabled=request.mcp_enabled,
            use_ai=request.use_ai,
        )
        return reply.to_dict()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/models")
async def get_models():
    """Get available models and the one used for drafting."""
    client = get_llm_client()
    if client is None:
        return {"models": [], "active_model": None}
    return {"models": client.get_available_models(), "active_model": client.model}
