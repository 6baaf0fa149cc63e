"""Tests for the mock completion client."""

import json

import pytest

from services.llm_client import LLMServiceError
from services.mock_llm import (
    MOCK_ANALYSIS,
    MOCK_EMAIL_DRAFT,
    MOCK_MODEL,
    MockLLMClient,
    is_mock_mode,
)


class TestMockMode:
    """Test suite for mock mode detection."""

    def test_mock_mode_disabled_by_default(self, monkeypatch):
        """Mock mode should be disabled by default."""
        monkeypatch.delenv("MOCK_LLM", raising=False)
        assert is_mock_mode() is False

    @pytest.mark.parametrize("value", ["1", "true", "yes", "TRUE"])
    def test_mock_mode_enabled(self, monkeypatch, value):
        monkeypatch.setenv("MOCK_LLM", value)
        assert is_mock_mode() is True

    def test_mock_mode_disabled_with_0(self, monkeypatch):
        """Mock mode should be disabled with MOCK_LLM=0."""
        monkeypatch.setenv("MOCK_LLM", "0")
        assert is_mock_mode() is False


class TestMockLLMClient:
    """Test suite for mock completions."""

    @pytest.mark.asyncio
    async def test_draft_reply(self):
        completion = await MockLLMClient().complete("Draft an email", max_tokens=400, temperature=0.7)

        assert completion.text == MOCK_EMAIL_DRAFT
        assert completion.model == MOCK_MODEL
        assert completion.tokens_used == 3

    @pytest.mark.asyncio
    async def test_json_reply(self):
        completion = await MockLLMClient().complete("Analyze", max_tokens=300, temperature=0.3, expect_json=True)
        assert json.loads(completion.text) == MOCK_ANALYSIS

    @pytest.mark.asyncio
    async def test_records_prompts(self):
        llm = MockLLMClient()
        await llm.complete("one", max_tokens=1, temperature=0)
        await llm.complete("two", max_tokens=1, temperature=0)
        assert llm.prompts == ["one", "two"]

    def test_available_models(self):
        assert MockLLMClient().get_available_models()[0]["id"] == MOCK_MODEL

    @pytest.mark.asyncio
    async def test_fail_with(self):
        llm = MockLLMClient(fail_with=LLMServiceError("unavailable"))
        with pytest.raises(LLMServiceError):
            await llm.complete("hi", max_tokens=1, temperature=0)
        assert llm.prompts == ["hi"]
