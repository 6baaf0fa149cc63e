"""Tests for email drafting."""

import pytest

from services.contact_profiles import ContactFixtures, ContactProfile
from services.context_analyzer import ContextAnalyzer
from services.email_drafter import (
    EmailDrafter,
    build_context_prompt,
    build_simple_prompt,
    fallback_email,
    generic_email,
)
from services.intent import extract_email_intent
from services.llm_client import LLMServiceError
from services.mock_llm import MOCK_EMAIL_DRAFT, MOCK_MODEL, MockLLMClient


def _drafter(search_config, llm=None, fixtures=None):
    analyzer = ContextAnalyzer(search_config, llm=llm, fixtures=fixtures)
    return EmailDrafter(analyzer, llm=llm)


class TestTemplates:
    """Test suite for template drafts."""

    @pytest.mark.parametrize("relationship,subject", [
        ("Manager", "Subject: Project Status Update and Next Steps"),
        ("Colleague", "Subject: Quick update on our project"),
        ("Client", "Subject: Thank You and Next Steps"),
        ("Contact", "Subject: Following Up on Our Discussion"),
        ("Project Manager", "Subject: Following Up on Our Discussion"),
    ])
    def test_template_by_relationship(self, relationship, subject):
        draft = fallback_email("sarah", ContactProfile(relationship=relationship))
        assert draft.startswith(subject)

    def test_template_uses_name_and_topics(self):
        profile = ContactProfile(relationship="Client", common_topics=["review", "feedback"])
        draft = fallback_email("lisa", profile)

        assert "Dear Lisa," in draft
        assert "review, feedback" in draft

    def test_template_includes_recent_context(self):
        profile = ContactProfile(relationship="Contact", recent_context="Q1 milestones")
        assert "Q1 milestones\n\n" in fallback_email("sam", profile)

    def test_manager_template_defaults(self):
        draft = fallback_email("sarah", ContactProfile(relationship="Manager"))
        assert "our ongoing projects" in draft
        assert "detailed updates" in draft

    def test_generic_email(self):
        draft = generic_email("john")
        assert draft.startswith("Subject: Hello John")
        assert "Hi John," in draft


class TestPrompts:
    def test_context_prompt_mentions_profile(self):
        profile = ContactProfile(relationship="Client", communication_style="Formal", common_topics=["budget"])
        prompt = build_context_prompt("lisa", profile)

        assert "Draft a professional email to lisa." in prompt
        assert "(Formal)" in prompt
        assert "(Client)" in prompt
        assert "Include relevant topics: budget" in prompt

    def test_simple_prompt_mentions_intent(self):
        message = "draft a follow up email for sarah"
        prompt = build_simple_prompt("sarah", message, extract_email_intent(message))

        assert "Draft a well-written, professional email to Sarah." in prompt
        assert "This is a follow-up email." in prompt
        assert f'Original request: "{message}"' in prompt


class TestEmailDrafter:
    """Test suite for the draft decision table."""

    @pytest.mark.asyncio
    async def test_context_with_ai(self, search_config):
        drafter = _drafter(search_config, llm=MockLLMClient())

        response = await drafter.draft("sarah", mcp_enabled=True)

        assert response.ai_generated is True
        assert response.email_draft == MOCK_EMAIL_DRAFT
        assert response.ai_model == MOCK_MODEL
        assert response.context["data_source"] == "files"

    @pytest.mark.asyncio
    async def test_context_with_ai_failure_uses_template(self, search_config):
        drafter = _drafter(search_config, llm=MockLLMClient(fail_with=LLMServiceError("down")))

        response = await drafter.draft("sarah", mcp_enabled=True)

        assert response.ai_generated is False
        assert "down" in response.ai_error
        # Keyword analysis found "manager" in sarah.eml
        assert response.email_draft.startswith("Subject: Project Status Update")

    @pytest.mark.asyncio
    async def test_context_without_ai_uses_template(self, search_config, contact_fixtures_path):
        fixtures = ContactFixtures.from_file(contact_fixtures_path)
        drafter = _drafter(search_config, llm=None, fixtures=fixtures)

        response = await drafter.draft("lisa", mcp_enabled=True)

        assert response.ai_generated is False
        assert response.context["data_source"] == "fixture"
        assert response.email_draft.startswith("Subject: Thank You and Next Steps")

    @pytest.mark.asyncio
    async def test_context_with_use_ai_false(self, search_config):
        llm = MockLLMClient()
        drafter = _drafter(search_config, llm=llm)

        response = await drafter.draft("nobody", mcp_enabled=True, use_ai=False)

        assert response.ai_generated is False
        assert response.email_draft.startswith("Subject: Following Up on Our Discussion")
        assert llm.prompts == []

    @pytest.mark.asyncio
    async def test_no_context_with_ai(self, search_config):
        llm = MockLLMClient()
        drafter = _drafter(search_config, llm=llm)

        response = await drafter.draft("john", mcp_enabled=False, original_message="thank john for the demo")

        assert response.ai_generated is True
        assert response.context == {"note": "No context analysis - MCP disabled"}
        assert "This is a thank you email." in llm.prompts[0]

    @pytest.mark.asyncio
    async def test_no_context_ai_failure_uses_generic(self, search_config):
        drafter = _drafter(search_config, llm=MockLLMClient(fail_with=LLMServiceError("boom")))

        response = await drafter.draft("john", mcp_enabled=False)

        assert response.ai_generated is False
        assert response.email_draft.startswith("Subject: Hello John")
        assert "boom" in response.ai_error

    @pytest.mark.asyncio
    async def test_no_context_no_ai(self, search_config):
        response = await _drafter(search_config).draft("john", mcp_enabled=False)

        assert response.ai_generated is False
        assert response.context == {"note": "AI disabled or API key not configured"}
        assert response.email_draft == generic_email("john")

    @pytest.mark.asyncio
    async def test_generate_ai_email_custom_prompt(self, search_config):
        llm = MockLLMClient()
        result = await _drafter(search_config, llm=llm).generate_ai_email("sarah", {}, prompt="Say hi")

        assert result.success is True
        assert llm.prompts == ["Say hi"]

    @pytest.mark.asyncio
    async def test_generate_ai_email_without_llm(self, search_config):
        result = await _drafter(search_config).generate_ai_email("sarah", {})

        assert result.success is False
        assert result.to_dict() == {"success": False, "error": "AI generation is not configured"}

    @pytest.mark.asyncio
    async def test_response_to_dict(self, search_config):
        response = await _drafter(search_config, llm=MockLLMClient()).draft("john", mcp_enabled=False)
        payload = response.to_dict()

        assert payload["recipient"] == "john"
        assert payload["mcp_enabled"] is False
        assert payload["ai_generated"] is True
        assert payload["ai_model"] == MOCK_MODEL
        assert "ai_error" not in payload
