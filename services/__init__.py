"""Services module for the Email Context Assistant."""

from .file_search import search, MatchRecord, SearchResult
from .llm_client import LLMClient
from .tools import ToolExecutor, parse_tool_call

__all__ = ["search", "MatchRecord", "SearchResult", "LLMClient", "ToolExecutor", "parse_tool_call"]
