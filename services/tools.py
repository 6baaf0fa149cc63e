"""Tool catalog and executor for the context server.

Each tool has a typed argument model carrying a `tool` literal; the models
form a discriminated union, so a request is validated into exactly one
call type and then resolved by the executor.
"""

import asyncio
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from config import SearchConfig
from services.context_analyzer import ContextAnalyzer
from services.email_drafter import EmailDrafter
from services.file_search import search
from services.filesystem import get_system_info, list_directory, read_file
from services.outlook import outlook_available, search_outlook_emails


class ToolName(str, Enum):
    READ_FILE = "read_file"
    LIST_DIRECTORY = "list_directory"
    SEARCH_FILES = "search_files_advanced"
    SYSTEM_INFO = "get_system_info"
    ANALYZE_EMAIL_PATTERNS = "analyze_email_patterns_advanced"
    SEARCH_OUTLOOK = "search_outlook_emails"
    GENERATE_EMAIL = "generate_ai_email"


TOOL_DESCRIPTIONS = {
    ToolName.READ_FILE: "Read contents of a file",
    ToolName.LIST_DIRECTORY: "List contents of a directory",
    ToolName.SEARCH_FILES: "Advanced file search across multiple locations",
    ToolName.SYSTEM_INFO: "Get system information",
    ToolName.ANALYZE_EMAIL_PATTERNS: "Advanced email pattern analysis with AI",
    ToolName.SEARCH_OUTLOOK: "Search Outlook emails for contact context",
    ToolName.GENERATE_EMAIL: "Generate email using real AI with context",
}


class InvalidToolCallError(ValueError):
    """Unknown tool name or arguments that do not fit the tool."""


class ReadFileCall(BaseModel):
    tool: Literal["read_file"] = "read_file"
    path: str


class ListDirectoryCall(BaseModel):
    tool: Literal["list_directory"] = "list_directory"
    path: str = "."


class SearchFilesCall(BaseModel):
    tool: Literal["search_files_advanced"] = "search_files_advanced"
    query: str = Field(min_length=1)
    locations: Optional[List[str]] = None
    file_types: Optional[List[str]] = None


class SystemInfoCall(BaseModel):
    tool: Literal["get_system_info"] = "get_system_info"


class AnalyzeEmailPatternsCall(BaseModel):
    tool: Literal["analyze_email_patterns_advanced"] = "analyze_email_patterns_advanced"
    contact_name: str = Field(min_length=1)


class SearchOutlookCall(BaseModel):
    tool: Literal["search_outlook_emails"] = "search_outlook_emails"
    contact_name: str = Field(min_length=1)


class GenerateEmailCall(BaseModel):
    tool: Literal["generate_ai_email"] = "generate_ai_email"
    recipient: str = Field(min_length=1)
    context: Optional[Dict[str, Any]] = None
    prompt: Optional[str] = None


ToolCall = Annotated[
    Union[
        ReadFileCall,
        ListDirectoryCall,
        SearchFilesCall,
        SystemInfoCall,
        AnalyzeEmailPatternsCall,
        SearchOutlookCall,
        GenerateEmailCall,
    ],
    Field(discriminator="tool"),
]

_tool_call_adapter = TypeAdapter(ToolCall)


def parse_tool_call(tool: str, args: Optional[Dict[str, Any]] = None) -> ToolCall:
    """Validate a (tool name, arguments) pair into a typed call.

    Raises:
        InvalidToolCallError: unknown tool or invalid arguments
    """
    try:
        ToolName(tool)
    except ValueError:
        raise InvalidToolCallError(f"Unknown tool: {tool}") from None

    if args is not None and not isinstance(args, dict):
        raise InvalidToolCallError("Tool arguments must be an object")

    try:
        return _tool_call_adapter.validate_python({**(args or {}), "tool": tool})
    except ValidationError as e:
        raise InvalidToolCallError(f"Invalid arguments for {tool}: {e.errors(include_url=False)}") from e


class ToolExecutor:
    """Runs validated tool calls against the configured services."""

    def __init__(self, search_config: SearchConfig, analyzer: ContextAnalyzer, drafter: EmailDrafter):
        self.search_config = search_config
        self.analyzer = analyzer
        self.drafter = drafter

    def capabilities(self) -> Dict[str, Any]:
        return {
            "capabilities": {
                "resources": True,
                "tools": True,
                "logging": True,
                "ai_integration": self.drafter.ai_available,
                "outlook_integration": outlook_available(),
            },
            "tools": [
                {"name": name.value, "description": TOOL_DESCRIPTIONS[name]}
                for name in ToolName
            ],
        }

    async def search_files(
        self,
        query: str,
        locations: Optional[List[str]] = None,
        file_types: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        roots = locations or list(self.search_config.roots)
        types = file_types or self.search_config.file_types
        result = await asyncio.to_thread(search, query, roots, types)
        return result.to_dict()

    async def execute(self, call: ToolCall) -> Dict[str, Any]:
        print(f"[TOOLS] Executing {call.tool}")

        if isinstance(call, ReadFileCall):
            return await asyncio.to_thread(read_file, call.path)

        if isinstance(call, ListDirectoryCall):
            return await asyncio.to_thread(list_directory, call.path)

        if isinstance(call, SearchFilesCall):
            return await self.search_files(call.query, call.locations, call.file_types)

        if isinstance(call, SystemInfoCall):
            return get_system_info(self.search_config)

        if isinstance(call, AnalyzeEmailPatternsCall):
            analysis = await self.analyzer.analyze(call.contact_name)
            return {"success": True, "analysis": analysis.model_dump()}

        if isinstance(call, SearchOutlookCall):
            return await search_outlook_emails(call.contact_name)

        if isinstance(call, GenerateEmailCall):
            result = await self.drafter.generate_ai_email(call.recipient, call.context, call.prompt)
            return result.to_dict()

        raise InvalidToolCallError(f"Unhandled tool call: {call!r}")
