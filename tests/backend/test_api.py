"""HTTP-level tests against the FastAPI app in mock LLM mode."""

import sys

from services.mock_llm import MOCK_EMAIL_DRAFT, MOCK_MODEL


class TestMetaEndpoints:
    def test_health(self, app_client):
        data = app_client.get("/api/health").json()

        assert data["status"] == "OK"
        assert data["features"]["ai_integration"] is True
        assert data["search_locations"] == 1
        assert data["supported_file_types"] == 3

    def test_config(self, app_client, mail_tree):
        data = app_client.get("/api/config").json()

        assert data["platform"] == sys.platform
        assert data["search_locations"] == [str(mail_tree)]
        assert data["file_types"] == [".eml", ".md", ".txt"]

    def test_index_page(self, app_client):
        response = app_client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]


class TestMcpEndpoints:
    """Test suite for the tool catalog endpoints."""

    def test_capabilities(self, app_client):
        data = app_client.get("/api/mcp/capabilities").json()
        names = [t["name"] for t in data["tools"]]

        assert "search_files_advanced" in names
        assert len(names) == 7

    def test_execute_search(self, app_client):
        response = app_client.post(
            "/api/mcp/execute", json={"tool": "search_files_advanced", "args": {"query": "world"}}
        )

        assert response.status_code == 200
        assert response.json()["total_results"] == 1

    def test_execute_unknown_tool(self, app_client):
        response = app_client.post("/api/mcp/execute", json={"tool": "rm_rf", "args": {}})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown tool: rm_rf"

    def test_execute_missing_tool(self, app_client):
        assert app_client.post("/api/mcp/execute", json={"args": {}}).status_code == 400

    def test_execute_invalid_args(self, app_client):
        response = app_client.post("/api/mcp/execute", json={"tool": "read_file", "args": {}})
        assert response.status_code == 400


class TestFileSearchEndpoint:
    def test_search(self, app_client):
        data = app_client.post("/api/files/search", json={"query": "sarah"}).json()

        assert data["success"] is True
        assert data["total_results"] == 1
        assert data["results"][0]["file"].endswith("sarah.eml")

    def test_missing_query(self, app_client):
        assert app_client.post("/api/files/search", json={}).status_code == 400

    def test_blank_query(self, app_client):
        assert app_client.post("/api/files/search", json={"query": "  "}).status_code == 400


class TestEmailEndpoints:
    """Test suite for drafting endpoints."""

    def test_draft_without_context(self, app_client):
        data = app_client.post("/api/email/draft", json={"recipient": "john", "mcp_enabled": False}).json()

        assert data["ai_generated"] is True
        assert data["email_draft"] == MOCK_EMAIL_DRAFT
        assert data["context"] == {"note": "No context analysis - MCP disabled"}

    def test_draft_with_context(self, app_client):
        """use_ai only governs drafting; the profile still comes from the mock LLM."""
        data = app_client.post(
            "/api/email/draft", json={"recipient": "sarah", "mcp_enabled": True, "use_ai": False}
        ).json()

        assert data["ai_generated"] is False
        assert data["context"]["found_files"] == 1
        assert data["context"]["ai_generated"] is True
        assert data["context"]["relationship"] == "Colleague"
        assert data["email_draft"].startswith("Subject: Quick update on our project")

    def test_draft_missing_recipient(self, app_client):
        assert app_client.post("/api/email/draft", json={"mcp_enabled": True}).status_code == 400

    def test_generate_email(self, app_client):
        data = app_client.post(
            "/api/ai/generate-email", json={"recipient": "sarah", "context": {"relationship": "Manager"}}
        ).json()

        assert data["success"] is True
        assert data["ai_model"] == MOCK_MODEL

    def test_generate_simple_email(self, app_client):
        data = app_client.post("/api/ai/generate-simple-email", json={"recipient": "john"}).json()

        assert data["ai_generated"] is True
        assert data["context"] == "No context - MCP disabled"


class TestOutlookEndpoint:
    def test_missing_contact(self, app_client):
        assert app_client.post("/api/outlook/search", json={}).status_code == 400

    def test_unsupported_platform(self, app_client, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        data = app_client.post("/api/outlook/search", json={"contact_name": "sarah"}).json()
        assert data["success"] is False


class TestChatEndpoint:
    def test_email_request(self, app_client):
        data = app_client.post(
            "/api/chat/message", json={"message": "draft me an email for Sarah", "mcp_enabled": True}
        ).json()

        assert data["mcp_mode"] is True
        assert "**Enhanced MCP Analysis for sarah:**" in data["reply"]
        assert data["draft"]["ai_generated"] is True

    def test_help_reply(self, app_client):
        data = app_client.post("/api/chat/message", json={"message": "hi", "mcp_enabled": False}).json()

        assert data["draft"] is None
        assert "draft me an email for" in data["reply"]

    def test_models(self, app_client):
        data = app_client.get("/api/chat/models").json()

        assert data["active_model"] == MOCK_MODEL
        assert [m["id"] for m in data["models"]] == [MOCK_MODEL]

    def test_models_without_llm(self, app_client, monkeypatch):
        from api import deps

        monkeypatch.setattr(deps, "_llm_client", None)
        assert app_client.get("/api/chat/models").json() == {"models": [], "active_model": None}

    def test_blank_message(self, app_client):
        assert app_client.post("/api/chat/message", json={"message": "   "}).status_code == 400
