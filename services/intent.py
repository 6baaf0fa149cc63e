"""Free-text parsing of chat messages into email requests and intents."""

import re
from dataclasses import dataclass
from typing import Optional

# Tried in order; the first match wins
EMAIL_REQUEST_PATTERNS = [
    re.compile(r"draft.*email.*for\s+(\w+)", re.IGNORECASE),
    re.compile(r"write.*email.*to\s+(\w+)", re.IGNORECASE),
    re.compile(r"email\s+(\w+).*about", re.IGNORECASE),
    re.compile(r"respond.*to\s+(\w+)", re.IGNORECASE),
    re.compile(r"send.*email.*to\s+(\w+)", re.IGNORECASE),
    re.compile(r"compose.*email.*for\s+(\w+)", re.IGNORECASE),
    re.compile(r"create.*email.*to\s+(\w+)", re.IGNORECASE),
    re.compile(r"help.*me.*email\s+(\w+)", re.IGNORECASE),
]


@dataclass(frozen=True)
class EmailRequest:
    """A chat message recognised as a request to draft an email."""
    recipient: str
    original_message: str


@dataclass(frozen=True)
class EmailIntent:
    type: str
    description: str


# (keywords, intent); checked in order
INTENT_RULES = [
    (("reply", "respond"), EmailIntent(
        "reply", "The sender wants to reply to a previous communication.")),
    (("follow up", "followup"), EmailIntent(
        "follow-up", "The sender wants to follow up on a previous discussion or action.")),
    (("meeting", "schedule"), EmailIntent(
        "meeting", "The sender wants to schedule or discuss a meeting.")),
    (("thank", "appreciation"), EmailIntent(
        "thank you", "The sender wants to express gratitude or appreciation.")),
    (("introduction", "introduce"), EmailIntent(
        "introduction", "The sender wants to make an introduction or introduce themselves.")),
    (("request", "ask"), EmailIntent(
        "request", "The sender wants to make a request or ask for something.")),
]

GENERAL_INTENT = EmailIntent("general", "This appears to be a general communication.")


def parse_email_request(message: str) -> Optional[EmailRequest]:
    """Extract the recipient from requests like "draft me an email for Sarah"."""
    for pattern in EMAIL_REQUEST_PATTERNS:
        match = pattern.search(message)
        if match:
            return EmailRequest(recipient=match.group(1).lower(), original_message=message)
    return None


def extract_email_intent(message: Optional[str]) -> EmailIntent:
    lowered = (message or "").lower()
    for keywords, intent in INTENT_RULES:
        if any(k in lowered for k in keywords):
            return intent
    return GENERAL_INTENT
