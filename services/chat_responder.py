"""Turns a chat message into the assistant's markdown reply."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from services.email_drafter import DraftResponse, EmailDrafter, display_name
from services.intent import parse_email_request

HELP_WITH_CONTEXT = (
    "I can help you draft emails with personalized context from your Outlook and local files! "
    "Try asking \"draft me an email for [person's name]\". With MCP enabled, I'll analyze your "
    "communication history for tone, style, and context."
)

HELP_WITHOUT_CONTEXT = (
    "I can help you draft emails! Try asking \"draft me an email for [person's name]\". "
    "I'll use AI to generate a professional email draft."
)


@dataclass
class ChatReply:
    reply: str
    mcp_mode: bool
    draft: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"reply": self.reply, "mcp_mode": self.mcp_mode, "draft": self.draft}


def render_context_reply(draft: DraftResponse) -> str:
    """Analysis summary, communication profile and the personalised draft."""
    context = draft.context or {}
    lines = [f"**Enhanced MCP Analysis for {draft.recipient}:**", ""]

    source = context.get("data_source")
    if "error" in context:
        lines += [f"**Analysis failed:** {context['error']}", ""]
    elif source in ("none", "fixture"):
        lines += [f"**Using fallback profile** (no communication history found for {draft.recipient})", ""]
    else:
        lines += [
            "**Analysis Summary:**",
            f"• Files Found: {context.get('found_files', 0)}",
            f"• Files Analyzed: {context.get('analyzed_files', 0)}",
            f"• AI Enhanced: {'Yes' if context.get('ai_generated') else 'No'}",
            "",
        ]

    if "relationship" in context:
        lines.append("**Communication Profile:**")
        lines.append(f"• Relationship: {context.get('relationship') or 'Unknown'}")
        lines.append(f"• Communication Style: {context.get('communication_style') or 'Unknown'}")
        if context.get("tone"):
            lines.append(f"• Tone: {context['tone']}")
        lines.append(f"• Common Topics: {', '.join(context.get('common_topics') or []) or 'None identified'}")
        lines.append(f"• Last Interaction: {context.get('last_interaction_date') or 'Unknown'}")
        if context.get("recent_context"):
            lines.append(f"• Recent Context: {context['recent_context']}")
        lines.append("")

    lines += ["**Personalized Email Draft:**", "", draft.email_draft, ""]
    if draft.ai_generated:
        lines.append(f"*Generated using {draft.ai_model} with personalized context*")
    else:
        lines.append("*Generated using enhanced templates with context*")
    return "\n".join(lines)


def render_plain_reply(draft: DraftResponse) -> str:
    if draft.ai_generated:
        return (
            f"**AI-Generated Email (No Context):**\n\n{draft.email_draft}\n\n"
            "*Note: Enable MCP for personalized context based on your communication history*"
        )

    reason = draft.ai_error or "AI is disabled or the API key is not configured"
    name = display_name(draft.recipient)
    return (
        "**AI Generation Unavailable** - Using Basic Template\n\n"
        f"**Email Draft for {name}:**\n\n{draft.email_draft}\n\n"
        f"*Note: {reason}. Enable MCP for personalized context.*"
    )


class ChatResponder:
    def __init__(self, drafter: EmailDrafter):
        self.drafter = drafter

    async def respond(self, message: str, mcp_enabled: bool, use_ai: bool = True) -> ChatReply:
        request = parse_email_request(message)
        if request is None:
            help_text = HELP_WITH_CONTEXT if mcp_enabled else HELP_WITHOUT_CONTEXT
            return ChatReply(reply=help_text, mcp_mode=mcp_enabled)

        draft = await self.drafter.draft(
            request.recipient,
            mcp_enabled=mcp_enabled,
            use_ai=use_ai,
            original_message=request.original_message,
        )
        reply = render_context_reply(draft) if mcp_enabled else render_plain_reply(draft)
        return ChatReply(reply=reply, mcp_mode=mcp_enabled, draft=draft.to_dict())
