"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_data_dir() -> Generator[str, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_env(monkeypatch):
    """Set up mock environment variables."""
    monkeypatch.setenv("MOCK_LLM", "1")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    return monkeypatch


@pytest.fixture
def contact_fixtures_path() -> str:
    return str(FIXTURES_DIR / "contacts.json")


@pytest.fixture
def mail_tree(temp_data_dir) -> Path:
    """A small tree of email-like files.

    data/
        a.txt                 "hello world"
        sub/b.md              "nothing relevant"
        notes/sarah.eml       mentions Sarah (manager, budget)
        notes/image.png       mentions Sarah, wrong extension
        .hidden/sarah.txt     hidden directory
        node_modules/x.txt    excluded directory
    """
    root = Path(temp_data_dir) / "data"
    (root / "sub").mkdir(parents=True)
    (root / "notes").mkdir()
    (root / ".hidden").mkdir()
    (root / "node_modules").mkdir()

    (root / "a.txt").write_text("hello world")
    (root / "sub" / "b.md").write_text("nothing relevant")
    (root / "notes" / "sarah.eml").write_text(
        "From: Sarah\nSubject: Budget review\n\nHi team,\nSarah here, our manager wants the budget by Friday.\n"
    )
    (root / "notes" / "image.png").write_text("Sarah world")
    (root / ".hidden" / "sarah.txt").write_text("Sarah world")
    (root / "node_modules" / "x.txt").write_text("Sarah world")
    return root


@pytest.fixture
def search_config(mail_tree):
    """A SearchConfig rooted at the mail tree only."""
    from config import SearchConfig

    return SearchConfig(roots=(str(mail_tree),), file_types=frozenset({".txt", ".md", ".eml"}))


@pytest.fixture
def app_client(mock_env, mail_tree, contact_fixtures_path):
    """A TestClient with mock LLM, isolated search roots and fixtures."""
    from fastapi.testclient import TestClient
    from api import deps
    from app import app

    mock_env.setenv("SEARCH_ROOTS", str(mail_tree))
    mock_env.setenv("SEARCH_FILE_TYPES", ".txt,.md,.eml")
    mock_env.setenv("CONTACT_FIXTURES_PATH", contact_fixtures_path)

    deps.reset_all()
    with TestClient(app) as client:
        yield client
    deps.reset_all()
