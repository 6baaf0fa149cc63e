"""Outlook email lookup through the platform's scripting host.

macOS drives Microsoft Outlook with AppleScript (osascript) and falls back
to searching exported mailbox files. Windows uses PowerShell COM
automation. The contact name always travels as a script argument or
environment variable, never inside the script text.
"""

import asyncio
import json
import os
import subprocess
import sys
from typing import Any, Dict, List, Optional

from config import (
    OUTLOOK_EXPORT_FILE_TYPES, OUTLOOK_EXPORT_RESULT_LIMIT, OUTLOOK_MESSAGE_LIMIT,
    OUTLOOK_SCRIPT_TIMEOUT, outlook_export_roots,
)
from services.file_search import search


class ScriptError(Exception):
    """A scripting host is missing, timed out or reported an error."""


APPLESCRIPT_SEARCH = """
on run argv
    set contactName to item 1 of argv
    set output to ""
    tell application "Microsoft Outlook"
        repeat with aMessage in (every message of inbox)
            set messageSubject to ""
            set senderName to ""
            try
                set messageSubject to subject of aMessage
            end try
            try
                set senderName to name of (sender of aMessage)
            end try
            if messageSubject contains contactName or senderName contains contactName then
                set output to output & messageSubject & tab & senderName & tab & ((time received of aMessage) as string) & linefeed
            end if
        end repeat
    end tell
    return output
end run
"""

POWERSHELL_SEARCH = """
$contact = $env:OUTLOOK_CONTACT_NAME
$outlook = New-Object -ComObject Outlook.Application
$namespace = $outlook.GetNamespace("MAPI")
$inbox = $namespace.GetDefaultFolder(6)
$emails = $inbox.Items | Where-Object {
    $_.Subject -like "*$contact*" -or $_.SenderName -like "*$contact*"
} | Select-Object -First %d Subject, SenderName, ReceivedTime, Body
$emails | ConvertTo-Json -Depth 2
""" % OUTLOOK_MESSAGE_LIMIT


def run_script(args: List[str], env: Optional[Dict[str, str]] = None) -> str:
    """Run a scripting host command and return its stdout.

    Raises:
        ScriptError: if the executable is missing, times out or exits non-zero
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=OUTLOOK_SCRIPT_TIMEOUT,
            env=env,
        )
    except FileNotFoundError as e:
        raise ScriptError(f"{args[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise ScriptError(f"{args[0]} timed out after {OUTLOOK_SCRIPT_TIMEOUT}s") from e

    if result.returncode != 0 or result.stderr.strip():
        error_msg = result.stderr.strip() or f"exit code {result.returncode}"
        raise ScriptError(error_msg)

    return result.stdout


def parse_applescript_output(output: str) -> List[Dict[str, Optional[str]]]:
    """Parse tab-separated subject/sender/received lines; drop lines without a subject."""
    emails = []
    for line in output.strip().splitlines():
        parts = [p.strip() for p in line.split("\t")]
        subject = parts[0] if parts else ""
        if not subject:
            continue
        emails.append({
            "subject": subject,
            "sender": parts[1] if len(parts) > 1 else None,
            "received": parts[2] if len(parts) > 2 else None,
        })
    return emails


def parse_powershell_output(output: str) -> List[Dict[str, Any]]:
    """ConvertTo-Json emits an object for one result and an array for many.

    Raises:
        ValueError: if the output is not JSON
    """
    if not output.strip():
        return []
    data = json.loads(output)
    return data if isinstance(data, list) else [data]


async def search_export_files(contact_name: str, home: Optional[str] = None) -> Dict[str, Any]:
    """Look for the contact in exported Outlook/mbox files."""
    result = await asyncio.to_thread(
        search, contact_name, outlook_export_roots(home), OUTLOOK_EXPORT_FILE_TYPES
    )
    if not result.matches:
        return {
            "success": False,
            "error": "No Outlook data found. Try exporting emails or ensure Outlook is installed.",
        }
    return {
        "success": True,
        "source": "Outlook Export Files",
        "contact_name": contact_name,
        "found_files": result.total_match_count,
        "files": [m.to_dict() for m in result.matches[:OUTLOOK_EXPORT_RESULT_LIMIT]],
    }


async def search_macos_outlook(contact_name: str) -> Dict[str, Any]:
    try:
        output = await asyncio.to_thread(
            run_script, ["osascript", "-e", APPLESCRIPT_SEARCH, contact_name]
        )
    except ScriptError as e:
        print(f"[OUTLOOK] AppleScript failed, searching export files: {e}")
        return await search_export_files(contact_name)

    return {
        "success": True,
        "emails": parse_applescript_output(output),
        "source": "Outlook macOS (AppleScript)",
        "contact_name": contact_name,
    }


async def search_windows_outlook(contact_name: str) -> Dict[str, Any]:
    env = dict(os.environ, OUTLOOK_CONTACT_NAME=contact_name)
    try:
        output = await asyncio.to_thread(
            run_script, ["powershell", "-NoProfile", "-Command", POWERSHELL_SEARCH], env
        )
    except ScriptError as e:
        return {"success": False, "error": f"Outlook access failed: {e}"}

    try:
        emails = parse_powershell_output(output)
    except ValueError:
        return {"success": False, "error": f"Could not parse Outlook data: {output[:200]}"}

    return {
        "success": True,
        "emails": emails,
        "source": "Outlook Desktop",
        "contact_name": contact_name,
    }


def outlook_available(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform) in ("darwin", "win32")


async def search_outlook_emails(contact_name: str, platform: Optional[str] = None) -> Dict[str, Any]:
    """Search the local Outlook client for messages involving a contact."""
    platform = platform or sys.platform
    if platform == "darwin":
        return await search_macos_outlook(contact_name)
    if platform == "win32":
        return await search_windows_outlook(contact_name)
    return {
        "success": False,
        "error": "Outlook integration is only available on macOS and Windows",
    }
