"""Dependency injection providers for the API layer.

This module provides a single source of truth for shared services like
the tool executor, email drafter and LLM client. All routers should use
these providers instead of creating their own instances.
"""

from typing import Optional

from config import SearchConfig, load_search_config
from services.chat_responder import ChatResponder
from services.contact_profiles import ContactFixtures
from services.context_analyzer import ContextAnalyzer
from services.email_drafter import EmailDrafter
from services.llm_client import LLMClient, is_llm_configured
from services.mock_llm import MockLLMClient, is_mock_mode
from services.tools import ToolExecutor

# Singleton instances
_search_config: Optional[SearchConfig] = None
_llm_client = None
_executor: Optional[ToolExecutor] = None
_drafter: Optional[EmailDrafter] = None
_responder: Optional[ChatResponder] = None
_initialized: bool = False


def _create_llm_client():
    """Mock client in MOCK_LLM mode, real client when a key is set, else None."""
    if is_mock_mode():
        return MockLLMClient()
    if is_llm_configured():
        return LLMClient()
    return None


async def initialize_all():
    """Initialize all services. Called once at app startup."""
    global _search_config, _llm_client, _executor, _drafter, _responder, _initialized

    if _initialized:
        return

    _search_config = load_search_config()
    _llm_client = _create_llm_client()

    analyzer = ContextAnalyzer(_search_config, llm=_llm_client, fixtures=ContactFixtures.from_env())
    _drafter = EmailDrafter(analyzer, llm=_llm_client)
    _executor = ToolExecutor(_search_config, analyzer, _drafter)
    _responder = ChatResponder(_drafter)

    _initialized = True
    print("[DEPS] All services initialized")


def reset_all():
    """Drop all singletons so the next initialize_all() rebuilds them."""
    global _search_config, _llm_client, _executor, _drafter, _responder, _initialized
    _search_config = None
    _llm_client = None
    _executor = None
    _drafter = None
    _responder = None
    _initialized = False


def _require(instance, name: str):
    if not _initialized or instance is None:
        raise RuntimeError(f"Dependencies not initialized ({name}). Call initialize_all() first.")
    return instance


def get_search_config() -> SearchConfig:
    """Get the active SearchConfig."""
    return _require(_search_config, "search_config")


def get_tool_executor() -> ToolExecutor:
    """Get the singleton ToolExecutor instance."""
    return _require(_executor, "executor")


def get_email_drafter() -> EmailDrafter:
    """Get the singleton EmailDrafter instance."""
    return _require(_drafter, "drafter")


def get_chat_responder() -> ChatResponder:
    """Get the singleton ChatResponder instance."""
    return _require(_responder, "responder")


def get_llm_client():
    """Get the LLM client, or None when AI generation is not configured."""
    _require(_search_config, "search_config")
    return _llm_client


def ai_enabled() -> bool:
    return get_llm_client() is not None


def is_initialized() -> bool:
    """Check if dependencies have been initialized."""
    return _initialized
