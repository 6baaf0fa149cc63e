"""FastAPI application entry point for the Email Context Assistant."""

import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.requests import Request
from dotenv import load_dotenv

from api import chat_router, email_router, files_router, mcp_router, outlook_router
from api.deps import initialize_all, get_search_config, get_tool_executor, ai_enabled
from services.outlook import outlook_available

# Load environment variables
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


def log_startup_summary():
    """Print the enabled features once services are up."""
    config = get_search_config()
    tools = get_tool_executor().capabilities()["tools"]
    print(f"[APP] AI integration: {'enabled' if ai_enabled() else 'disabled (set ANTHROPIC_API_KEY)'}")
    print(f"[APP] Outlook integration: {'available' if outlook_available() else 'macOS/Windows only'}")
    print(f"[APP] Available tools: {', '.join(t['name'] for t in tools)}")
    print(f"[APP] Search locations: {len(config.roots)} configured")
    print(f"[APP] File types: {', '.join(sorted(config.file_types))}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Initialize all services via DI
    await initialize_all()
    log_startup_summary()

    yield


# Create FastAPI app
app = FastAPI(
    title="Email Context Assistant",
    description="Chat assistant that drafts emails with context from local files and Outlook",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")

# Setup templates
templates = Jinja2Templates(directory=BASE_DIR / "templates")

# Include routers
app.include_router(mcp_router)
app.include_router(files_router)
app.include_router(outlook_router)
app.include_router(email_router)
app.include_router(chat_router)


@app.get("/")
async def index(request: Request):
    """Serve the chat page."""
    return templates.TemplateResponse(request, "index.html", {"ai_enabled": ai_enabled()})


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    config = get_search_config()
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "features": {
            "file_system_access": True,
            "ai_integration": ai_enabled(),
            "outlook_integration": outlook_available(),
            "advanced_search": True,
        },
        "search_locations": len(config.roots),
        "supported_file_types": len(config.file_types),
    }


@app.get("/api/config")
async def get_config():
    """Expose the active search configuration and feature flags."""
    config = get_search_config()
    return {
        "platform": sys.platform,
        "search_locations": list(config.roots),
        "file_types": sorted(config.file_types),
        "features": {
            "ai_enabled": ai_enabled(),
            "outlook_enabled": outlook_available(),
            "advanced_search_enabled": True,
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", "3001")), reload=True)
