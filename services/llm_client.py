"""Anthropic API client wrapper for one-shot text completions."""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import anthropic
from dotenv import load_dotenv

from config import API_KEY_PLACEHOLDER, DEFAULT_MODEL, MODELS

load_dotenv()

JSON_SYSTEM_PROMPT = (
    "You are a careful analyst. Respond with a single JSON object only, "
    "without markdown fences or commentary."
)


class LLMError(Exception):
    """Base class for text-generation failures."""


class LLMAuthError(LLMError):
    """The API key is missing, invalid or lacks permission."""


class LLMRateLimitedError(LLMError):
    """The provider rejected the request for rate limiting."""


class LLMServiceError(LLMError):
    """Any other provider or transport failure."""


@dataclass
class Completion:
    """Generated text plus accounting details."""
    text: str
    model: str
    tokens_used: Optional[int] = None


def get_api_key() -> Optional[str]:
    """Return the configured API key, ignoring the .env.example placeholder."""
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        return None
    return api_key


def is_llm_configured() -> bool:
    return get_api_key() is not None


class LLMClient:
    """Wrapper for the Anthropic Messages API."""

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL):
        api_key = api_key or get_api_key()
        if not api_key:
            raise LLMAuthError("ANTHROPIC_API_KEY environment variable is required")
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        expect_json: bool = False,
    ) -> Completion:
        """Generate a completion for a single user prompt.

        Raises:
            LLMAuthError, LLMRateLimitedError, LLMServiceError
        """
        model_config = MODELS.get(self.model)
        params: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": min(max_tokens, model_config.max_tokens) if model_config else max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if expect_json:
            params["system"] = JSON_SYSTEM_PROMPT

        try:
            response = await self.client.messages.create(**params)
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise LLMAuthError(f"Invalid or missing API key: {e}") from e
        except anthropic.RateLimitError as e:
            raise LLMRateLimitedError(f"Rate limited: {e}") from e
        except anthropic.APIError as e:
            raise LLMServiceError(f"API Error: {e}") from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        usage = getattr(response, "usage", None)
        tokens_used = usage.input_tokens + usage.output_tokens if usage else None

        return Completion(text=text, model=response.model, tokens_used=tokens_used)

    def get_available_models(self) -> List[Dict[str, Any]]:
        """Return list of available models with their configurations."""
        return [
            {
                "id": model.id,
                "name": model.name,
                "max_tokens": model.max_tokens,
                "description": model.description
            }
            for model in MODELS.values()
        ]
