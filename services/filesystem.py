"""Read-only filesystem tools: file reading, directory listing, system info."""

import getpass
import os
import platform
import socket
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from config import MAX_DIRECTORY_ENTRIES, SearchConfig
from services.content_matcher import UnreadableFileError, decode_text


def read_file(file_path: str) -> Dict[str, Any]:
    """Read a text file, trying the primary encoding and then the fallback."""
    try:
        resolved = Path(file_path).expanduser().resolve()
        text, encoding = decode_text(resolved.read_bytes())
        stat = resolved.stat()
        return {
            "success": True,
            "content": text,
            "metadata": {
                "size": stat.st_size,
                "modified": stat.st_mtime,
                "path": str(resolved),
                "encoding": encoding,
            },
        }
    except (OSError, UnreadableFileError) as e:
        return {"success": False, "error": str(e)}


def list_directory(dir_path: str = ".") -> Dict[str, Any]:
    """List up to MAX_DIRECTORY_ENTRIES entries of a directory."""
    try:
        resolved = Path(dir_path).expanduser().resolve()
        entries = list(resolved.iterdir())[:MAX_DIRECTORY_ENTRIES]
    except OSError as e:
        return {"success": False, "error": str(e)}

    contents = []
    for item in entries:
        try:
            is_dir = item.is_dir()
            stat = item.stat()
            contents.append({
                "name": item.name,
                "type": "directory" if is_dir else "file",
                "size": stat.st_size,
                "modified": stat.st_mtime,
                "path": str(item),
            })
        except OSError:
            contents.append({
                "name": item.name,
                "type": "unknown",
                "error": "Permission denied",
            })

    return {"success": True, "path": str(resolved), "contents": contents}


def _memory_gb() -> Dict[str, Optional[int]]:
    """Total/free physical memory in GB where the OS exposes it via sysconf."""
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
        total = os.sysconf("SC_PHYS_PAGES") * page_size
        free = os.sysconf("SC_AVPHYS_PAGES") * page_size
    except (AttributeError, ValueError, OSError):
        return {"total": None, "free": None}
    gb = 1024 ** 3
    return {"total": round(total / gb), "free": round(free / gb)}


def _current_user() -> Optional[str]:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


def get_system_info(search_config: SearchConfig) -> Dict[str, Any]:
    """Describe the host and the active search configuration."""
    return {
        "success": True,
        "system_info": {
            "platform": sys.platform,
            "architecture": platform.machine(),
            "hostname": socket.gethostname(),
            "user": _current_user(),
            "home_directory": str(Path.home()),
            "current_working_directory": os.getcwd(),
            "python_version": platform.python_version(),
            "memory_gb": _memory_gb(),
            "cpus": os.cpu_count(),
            "search_locations": list(search_config.roots),
            "supported_file_types": sorted(search_config.file_types),
        },
    }
