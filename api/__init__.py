"""API routes module for the Email Context Assistant."""

from .chat import router as chat_router
from .email import router as email_router
from .files import router as files_router
from .mcp import router as mcp_router
from .outlook import router as outlook_router

__all__ = ["chat_router", "email_router", "files_router", "mcp_router", "outlook_router"]
