"""Mock completion client for deterministic testing.

When MOCK_LLM=1 environment variable is set, the app uses MockLLMClient
instead of the Anthropic API. It has the same interface as LLMClient and
returns fixed responses, so the drafting flow can be exercised without
external API dependencies.
"""

import json
import os
from typing import List, Optional

from services.llm_client import Completion, LLMError

MOCK_MODEL = "mock-model"


def is_mock_mode() -> bool:
    """Check if mock mode is enabled via environment variable."""
    return os.getenv("MOCK_LLM", "").lower() in ("1", "true", "yes")


# ============================================================================
# Mock Data Constants
# ============================================================================

MOCK_ANALYSIS = {
    "relationship": "Colleague",
    "communication_style": "Professional",
    "common_topics": ["project", "meeting"],
    "last_interaction_date": "2024-01-15",
    "preferences": ["Concise updates"],
    "recent_context": "Mock analysis of local communication files",
    "tone": "Friendly",
}

MOCK_EMAIL_DRAFT = """Subject: Quick Follow-Up

Hi there,

I hope you're doing well. I wanted to follow up on our recent conversation and share a short update.

[Your main message here]

Best regards,
[Your name]"""


class MockLLMClient:
    """Deterministic stand-in for LLMClient.

    Args:
        fail_with: if set, every call raises this error instead
    """

    model = MOCK_MODEL

    def __init__(self, fail_with: Optional[LLMError] = None):
        self.fail_with = fail_with
        self.prompts: List[str] = []

    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        expect_json: bool = False,
    ) -> Completion:
        self.prompts.append(prompt)
        if self.fail_with is not None:
            raise self.fail_with

        text = json.dumps(MOCK_ANALYSIS) if expect_json else MOCK_EMAIL_DRAFT
        return Completion(text=text, model=MOCK_MODEL, tokens_used=len(prompt.split()))

    def get_available_models(self):
        return [{"id": MOCK_MODEL, "name": "Mock Model", "max_tokens": 0, "description": "Deterministic test responses"}]
