"""Configuration constants and value objects for the Email Context Assistant."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple


@dataclass
class ModelConfig:
    """Configuration for a Claude model."""
    id: str
    name: str
    max_tokens: int
    description: str


# Available Claude models
MODELS = {
    "claude-sonnet-4-5-20250929": ModelConfig(
        id="claude-sonnet-4-5-20250929",
        name="Claude Sonnet 4.5",
        max_tokens=64000,  # API limit for output tokens
        description="Balanced performance and speed"
    ),
    "claude-sonnet-4-20250514": ModelConfig(
        id="claude-sonnet-4-20250514",
        name="Claude Sonnet 4",
        max_tokens=64000,
        description="Fast and capable"
    ),
    "claude-3-5-haiku-20241022": ModelConfig(
        id="claude-3-5-haiku-20241022",
        name="Claude 3.5 Haiku",
        max_tokens=8192,
        description="Fastest model, best for short drafts"
    ),
}

# Default model
DEFAULT_MODEL = os.getenv("LLM_MODEL", "claude-sonnet-4-5-20250929")

# Placeholder shipped in .env.example; treated the same as an unset key
API_KEY_PLACEHOLDER = "your-api-key-here"

# Generation parameters
ANALYSIS_MAX_TOKENS = 300
ANALYSIS_TEMPERATURE = 0.3
DRAFT_MAX_TOKENS = 400
DRAFT_TEMPERATURE = 0.7

# Search limits
MAX_SEARCH_DEPTH = 3
MAX_SEARCH_RESULTS = 50
MAX_PREVIEW_LINES = 3
MAX_ANALYSIS_FILES = 10  # Files whose content is sent to the LLM
ANALYSIS_PREVIEW_CHARS = 500
MAX_DIRECTORY_ENTRIES = 100

# Text decoding: primary, then one single-byte fallback
PRIMARY_ENCODING = "utf-8"
SECONDARY_ENCODING = "cp1252"

# Names skipped during recursive search (in addition to dot-prefixed names)
HIDDEN_PREFIX = "."
EXCLUDED_NAMES = frozenset({"node_modules", "vendor", "venv", "__pycache__"})

# File types considered "email-like"
DEFAULT_FILE_TYPES = frozenset({
    ".eml", ".msg", ".mbox", ".txt", ".md", ".docx", ".pdf", ".csv", ".json", ".xml"
})

# Outlook integration
OUTLOOK_EXPORT_FILE_TYPES = frozenset({".olm", ".pst", ".mbox", ".eml"})
OUTLOOK_EXPORT_RESULT_LIMIT = 5
OUTLOOK_MESSAGE_LIMIT = 10
OUTLOOK_SCRIPT_TIMEOUT = 30  # seconds


@dataclass(frozen=True)
class SearchConfig:
    """Where to search and which file types count as email-like.

    Passed explicitly into every search so callers and tests can supply
    their own roots.
    """
    roots: Tuple[str, ...]
    file_types: FrozenSet[str] = DEFAULT_FILE_TYPES

    def to_dict(self) -> dict:
        return {
            "roots": list(self.roots),
            "file_types": sorted(self.file_types),
        }


def default_search_roots(platform: Optional[str] = None, home: Optional[str] = None) -> List[str]:
    """Return the built-in search roots for a platform.

    Order matters and duplicates are kept; the walker tolerates both.
    """
    platform = platform or sys.platform
    home = home or str(Path.home())

    roots = [
        ".",  # Current directory
        home + "/Documents",
        home + "/Downloads",
        home + "/Desktop",
    ]

    if platform == "win32":
        roots.extend([
            home + "\\Documents",
            home + "\\AppData\\Local\\Microsoft\\Outlook",
            "C:\\Users\\" + os.getenv("USERNAME", "") + "\\Documents",
        ])
    elif platform == "darwin":
        roots.extend([
            home + "/Library/Mail",
            home + "/Documents",
        ])

    return roots


def outlook_export_roots(home: Optional[str] = None) -> List[str]:
    """Folders where Outlook exports usually end up on macOS."""
    home_path = Path(home) if home else Path.home()
    return [
        str(home_path / "Documents" / "Microsoft User Data" / "Outlook"),
        str(home_path / "Documents" / "Outlook"),
        str(home_path / "Downloads"),
        str(home_path / "Desktop"),
    ]


def load_search_config() -> SearchConfig:
    """Build a SearchConfig from SEARCH_ROOTS / SEARCH_FILE_TYPES or the defaults."""
    roots_env = os.getenv("SEARCH_ROOTS")
    if roots_env:
        roots = [r for r in roots_env.split(os.pathsep) if r.strip()]
    else:
        roots = default_search_roots()

    types_env = os.getenv("SEARCH_FILE_TYPES")
    if types_env:
        file_types = frozenset(
            t.strip().lower() if t.strip().startswith(".") else "." + t.strip().lower()
            for t in types_env.split(",") if t.strip()
        )
    else:
        file_types = DEFAULT_FILE_TYPES

    return SearchConfig(roots=tuple(roots), file_types=file_types)
