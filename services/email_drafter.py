"""Email draft generation with and without communication context.

With context enabled, the recipient's communication profile shapes both
the LLM prompt and the template used when the LLM is unavailable. With
context disabled, the LLM drafts from the chat message alone and the
generic template is the fallback.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import DRAFT_MAX_TOKENS, DRAFT_TEMPERATURE
from services.contact_profiles import ContactProfile
from services.context_analyzer import ContextAnalyzer
from services.intent import EmailIntent, extract_email_intent
from services.llm_client import LLMError


def display_name(recipient: str) -> str:
    return recipient[:1].upper() + recipient[1:]


# ============================================================================
# Prompts
# ============================================================================

def build_context_prompt(recipient: str, profile: ContactProfile) -> str:
    return f"""Draft a professional email to {recipient}.

Context from analysis:
{json.dumps(profile.model_dump(), indent=2)}

Requirements:
- Match the communication style ({profile.communication_style})
- Reference the relationship type ({profile.relationship})
- Include relevant topics: {', '.join(profile.common_topics)}
- Use appropriate tone and formality
- Keep it concise but personalized
- Include a clear subject line

Generate a complete email draft:"""


def build_simple_prompt(recipient: str, original_message: str, intent: EmailIntent) -> str:
    return f"""You are a professional email assistant. Draft a well-written, professional email to {display_name(recipient)}.

Original request: "{original_message}"

Context: This is a {intent.type} email. {intent.description}

Requirements:
- Use a professional but friendly tone
- Include an appropriate subject line
- Make it concise but complete
- Use proper email formatting
- Include placeholders for specific details that the sender should fill in
- Sign off appropriately

Generate a complete email draft:"""


# ============================================================================
# Templates
# ============================================================================

def _recent(profile: ContactProfile) -> str:
    return profile.recent_context + "\n\n" if profile.recent_context else ""


def fallback_email(recipient: str, profile: ContactProfile) -> str:
    """Template draft chosen by relationship; unknown relationships use Contact."""
    name = display_name(recipient)
    topics = ", ".join(profile.common_topics)
    recent = _recent(profile)

    if profile.relationship == "Manager":
        preferences = " and ".join(profile.preferences) or "detailed updates"
        return f"""Subject: Project Status Update and Next Steps

Dear {name},

I hope this message finds you well. Following up on our recent discussions about {topics or 'our ongoing projects'}, I wanted to provide you with an update on current progress.

Given your preference for {preferences}, I've prepared a comprehensive status report that addresses the key areas we discussed.

{recent}Could we schedule a brief meeting this week to review the progress and discuss the next steps? I believe we can address any challenges effectively with your guidance.

Thank you for your continued leadership on this project.

Best regards,
[Your name]"""

    if profile.relationship == "Colleague":
        return f"""Subject: Quick update on our project

Hey {name}!

Hope you're having a good week! Wanted to follow up on our recent chat about {topics or 'the project'}.

Here's what's been happening:
• Made solid progress on the items we discussed
• Addressed the feedback from our last conversation
• Ready to move forward with the next phase

{recent}Let me know what you think when you get a chance. Always appreciate your input on these things!

Thanks,
[Your name]"""

    if profile.relationship == "Client":
        return f"""Subject: Thank You and Next Steps

Dear {name},

Thank you for your continued partnership and positive feedback on our recent work. It's wonderful to hear that you're satisfied with the deliverables.

{recent}Based on our previous discussions about {topics or 'our collaboration'}, I've prepared some recommendations for next steps:

1. Detailed proposal for the upcoming phase
2. Timeline and milestone breakdown
3. Resource requirements and deliverable schedule

I'd love to schedule a call to discuss these opportunities in detail. What does your calendar look like next week?

Looking forward to continuing our successful partnership.

Best regards,
[Your name]"""

    return f"""Subject: Following Up on Our Discussion

Hi {name},

I hope you're doing well. I wanted to follow up on our recent communication regarding {topics or 'our discussion topics'}.

{recent}Please let me know if you have any questions or if there's anything I can help with moving forward.

Best regards,
[Your name]"""


def generic_email(recipient: str) -> str:
    """Context-free template used when neither analysis nor AI is available."""
    name = display_name(recipient)
    return f"""Subject: Hello {name}

Hi {name},

I hope you're doing well. I wanted to reach out regarding [topic/reason for email].

[Your main message here]

Please let me know if you have any questions or if there's anything I can help with.

Best regards,
[Your name]

*Note: This is a generic template. Enable MCP and ensure proper API keys are configured for personalized drafts based on your actual communication history and AI generation.*"""


# ============================================================================
# Drafting
# ============================================================================

@dataclass
class GenerationResult:
    """Outcome of one AI generation attempt."""
    success: bool
    email_draft: str = ""
    ai_model: Optional[str] = None
    tokens_used: Optional[int] = None
    error: Optional[str] = None
    context_used: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        result = {
            "success": True,
            "email_draft": self.email_draft,
            "ai_model": self.ai_model,
            "tokens_used": self.tokens_used,
        }
        if self.context_used is not None:
            result["context_used"] = self.context_used
        return result


@dataclass
class DraftResponse:
    """Response of the draft flow, shaped for the chat UI."""
    recipient: str
    mcp_enabled: bool
    use_ai: bool
    email_draft: str = ""
    context: Optional[Dict[str, Any]] = None
    ai_generated: bool = False
    ai_model: Optional[str] = None
    tokens_used: Optional[int] = None
    ai_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "recipient": self.recipient,
            "mcp_enabled": self.mcp_enabled,
            "use_ai": self.use_ai,
            "email_draft": self.email_draft,
            "context": self.context,
            "ai_generated": self.ai_generated,
        }
        if self.ai_generated:
            result["ai_model"] = self.ai_model
            result["tokens_used"] = self.tokens_used
        if self.ai_error:
            result["ai_error"] = self.ai_error
        return result


class EmailDrafter:
    """Drafts emails using the LLM when available and templates otherwise."""

    def __init__(self, analyzer: ContextAnalyzer, llm=None):
        self.analyzer = analyzer
        self.llm = llm

    @property
    def ai_available(self) -> bool:
        return self.llm is not None

    async def _generate(self, prompt: str) -> GenerationResult:
        if self.llm is None:
            return GenerationResult(success=False, error="AI generation is not configured")
        try:
            completion = await self.llm.complete(
                prompt, max_tokens=DRAFT_MAX_TOKENS, temperature=DRAFT_TEMPERATURE
            )
        except LLMError as e:
            print(f"[DRAFT] AI generation failed: {e}")
            return GenerationResult(success=False, error=f"AI generation failed: {e}")
        return GenerationResult(
            success=True,
            email_draft=completion.text,
            ai_model=completion.model,
            tokens_used=completion.tokens_used,
        )

    async def generate_ai_email(
        self,
        recipient: str,
        context: Optional[Dict[str, Any]] = None,
        prompt: Optional[str] = None,
    ) -> GenerationResult:
        """Draft with a communication profile (or a caller-supplied prompt)."""
        profile = ContactProfile.model_validate(context or {})
        result = await self._generate(prompt or build_context_prompt(recipient, profile))
        if result.success:
            result.context_used = context or {}
        return result

    async def generate_simple_email(self, recipient: str, original_message: Optional[str] = None) -> GenerationResult:
        """Draft without context, from the chat message alone."""
        message = original_message or f"draft me an email for {recipient}"
        intent = extract_email_intent(message)
        return await self._generate(build_simple_prompt(recipient, message, intent))

    async def draft(
        self,
        recipient: str,
        mcp_enabled: bool,
        use_ai: bool = True,
        original_message: Optional[str] = None,
    ) -> DraftResponse:
        response = DraftResponse(recipient=recipient, mcp_enabled=mcp_enabled, use_ai=use_ai)
        wants_ai = use_ai and self.ai_available

        if mcp_enabled:
            try:
                analysis = await self.analyzer.analyze(recipient)
            except ValueError as e:
                response.email_draft = generic_email(recipient)
                response.context = {"error": str(e)}
                return response

            response.context = analysis.model_dump()
            if wants_ai:
                result = await self.generate_ai_email(recipient, context=response.context)
                if result.success:
                    self._apply(response, result)
                else:
                    response.email_draft = fallback_email(recipient, analysis)
                    response.ai_error = result.error
            else:
                response.email_draft = fallback_email(recipient, analysis)
            return response

        if wants_ai:
            result = await self.generate_simple_email(recipient, original_message)
            if result.success:
                self._apply(response, result)
                response.context = {"note": "No context analysis - MCP disabled"}
            else:
                response.email_draft = generic_email(recipient)
                response.ai_error = result.error
        else:
            response.email_draft = generic_email(recipient)
            response.context = {"note": "AI disabled or API key not configured"}
        return response

    @staticmethod
    def _apply(response: DraftResponse, result: GenerationResult) -> None:
        response.email_draft = result.email_draft
        response.ai_generated = True
        response.ai_model = result.ai_model
        response.tokens_used = result.tokens_used
