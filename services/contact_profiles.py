"""Contact profile model and the configurable fallback-profile fixtures.

A ContactProfile summarises how the user communicates with someone. When
no communication history is found, a profile is taken from a fixture file
(CONTACT_FIXTURES_PATH) or, failing that, the generic default profile.
"""

import json
import os
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError


class ContactProfile(BaseModel):
    """Communication profile for one contact."""
    relationship: str = "Contact"
    communication_style: str = "Professional"
    common_topics: List[str] = Field(default_factory=list)
    last_interaction_date: Optional[str] = None
    preferences: List[str] = Field(default_factory=list)
    recent_context: Optional[str] = None
    tone: Optional[str] = None


def default_profile() -> ContactProfile:
    """Profile used when nothing is known about a contact."""
    return ContactProfile(
        relationship="Contact",
        communication_style="Professional",
        common_topics=["follow-up"],
        last_interaction_date=date.today().isoformat(),
        preferences=["Professional communication"],
        recent_context="No specific context available",
    )


class ContactFixtures:
    """Named fallback profiles, keyed by lower-cased contact name."""

    def __init__(self, profiles: Optional[Dict[str, ContactProfile]] = None):
        self._profiles = {k.lower(): v for k, v in (profiles or {}).items()}

    @classmethod
    def from_file(cls, path: str) -> "ContactFixtures":
        """Load fixtures from a JSON object of {name: profile}.

        Raises:
            ValueError: if the file is not valid JSON or a profile is malformed
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
            profiles = {name: ContactProfile.model_validate(data) for name, data in raw.items()}
        except (json.JSONDecodeError, AttributeError, ValidationError) as e:
            raise ValueError(f"Invalid contact fixtures file {path}: {e}") from e
        return cls(profiles)

    @classmethod
    def from_env(cls) -> "ContactFixtures":
        """Load from CONTACT_FIXTURES_PATH, or start empty when unset."""
        path = os.getenv("CONTACT_FIXTURES_PATH")
        if not path:
            return cls()
        if not Path(path).is_file():
            print(f"[FIXTURES] {path} not found, using default profile only")
            return cls()
        fixtures = cls.from_file(path)
        print(f"[FIXTURES] Loaded {len(fixtures)} contact profiles from {path}")
        return fixtures

    def __len__(self) -> int:
        return len(self._profiles)

    def lookup(self, contact_name: str) -> Optional[ContactProfile]:
        return self._profiles.get(contact_name.lower())

    def profile_for(self, contact_name: str) -> tuple:
        """Return (profile, data_source), where the source is "fixture" or "none"."""
        profile = self.lookup(contact_name)
        if profile is not None:
            return profile.model_copy(deep=True), "fixture"
        return default_profile(), "none"
