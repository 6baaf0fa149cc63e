"""Communication-pattern analysis for a contact.

Searches the configured locations for files mentioning the contact, sends
a bounded sample of them to the LLM for a JSON profile, and falls back to
keyword heuristics when the LLM is unavailable or returns something that
is not a valid profile.
"""

import asyncio
import json
import re
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from config import (
    ANALYSIS_MAX_TOKENS, ANALYSIS_PREVIEW_CHARS, ANALYSIS_TEMPERATURE, SearchConfig,
)
from services.contact_profiles import ContactFixtures, ContactProfile
from services.content_matcher import UnreadableFileError, read_text
from services.file_search import search, select_for_analysis
from services.llm_client import LLMError

TOPIC_KEYWORDS = ["project", "meeting", "deadline", "budget", "review", "update", "call"]

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ContactAnalysis(ContactProfile):
    """A contact profile plus where it came from."""
    contact_name: str
    found_files: int = 0
    analyzed_files: int = 0
    search_locations: List[str] = []
    ai_generated: bool = False
    data_source: str = "files"


def build_analysis_prompt(contact_name: str, samples: List[dict]) -> str:
    return f"""Analyze these email/communication files for patterns with {contact_name}:

{json.dumps(samples, indent=2)}

Please analyze and return a JSON object with these keys:
- relationship: (Manager/Colleague/Client/Contact)
- communication_style: (Formal/Professional/Casual)
- common_topics: array of common discussion topics
- last_interaction_date: estimated date (YYYY-MM-DD)
- preferences: array of communication preferences
- recent_context: summary of recent communication themes
- tone: overall tone of communications

Focus on communication patterns, not personal details."""


def parse_profile(text: str) -> ContactProfile:
    """Parse an LLM reply into a profile. Raises ValueError when invalid."""
    cleaned = _FENCE_RE.sub("", text.strip())
    try:
        return ContactProfile.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"LLM did not return a valid profile: {e}") from e


def extract_patterns_manually(contents: List[str]) -> ContactProfile:
    """Keyword heuristics over the combined lower-cased file contents."""
    text = " ".join(c.lower() for c in contents)

    relationship = "Contact"
    if "manager" in text or "supervisor" in text:
        relationship = "Manager"
    elif "team" in text or "colleague" in text:
        relationship = "Colleague"
    elif "client" in text or "customer" in text:
        relationship = "Client"

    style = "Professional"
    if "dear" in text and "sincerely" in text:
        style = "Formal"
    elif "hey" in text or "thanks!" in text:
        style = "Casual"

    return ContactProfile(
        relationship=relationship,
        communication_style=style,
        common_topics=[t for t in TOPIC_KEYWORDS if t in text],
        last_interaction_date=date.today().isoformat(),
        preferences=[],
        recent_context="Communication history found in local files",
    )


class ContextAnalyzer:
    """Builds a ContactAnalysis from local files, the LLM and fixtures."""

    def __init__(self, search_config: SearchConfig, llm=None, fixtures: Optional[ContactFixtures] = None):
        self.search_config = search_config
        self.llm = llm
        self.fixtures = fixtures or ContactFixtures()

    async def analyze(self, contact_name: str) -> ContactAnalysis:
        result = await asyncio.to_thread(
            search, contact_name, list(self.search_config.roots), self.search_config.file_types
        )

        if not result.matches:
            profile, source = self.fixtures.profile_for(contact_name)
            return ContactAnalysis(
                contact_name=contact_name,
                search_locations=list(result.roots_searched),
                data_source=source,
                **profile.model_dump(),
            )

        samples = []
        contents = []
        for match in select_for_analysis(result.matches):
            try:
                content = await asyncio.to_thread(read_text, match.file_path)
            except (OSError, UnreadableFileError):
                continue
            contents.append(content)
            samples.append({
                "file": Path(match.file_path).name,
                "preview": content[:ANALYSIS_PREVIEW_CHARS],
            })

        profile, ai_generated = await self._profile_from(contact_name, samples, contents)

        return ContactAnalysis(
            contact_name=contact_name,
            found_files=result.total_match_count,
            analyzed_files=len(contents),
            search_locations=list(result.roots_searched),
            ai_generated=ai_generated,
            data_source="files",
            **profile.model_dump(),
        )

    async def _profile_from(self, contact_name: str, samples: List[dict], contents: List[str]):
        if self.llm is None or not samples:
            return extract_patterns_manually(contents), False

        try:
            completion = await self.llm.complete(
                build_analysis_prompt(contact_name, samples),
                max_tokens=ANALYSIS_MAX_TOKENS,
                temperature=ANALYSIS_TEMPERATURE,
                expect_json=True,
            )
            return parse_profile(completion.text), True
        except (LLMError, ValueError) as e:
            print(f"[ANALYSIS] AI analysis failed for {contact_name}: {e}")
            return extract_patterns_manually(contents), False
