"""Text decoding and case-insensitive content matching for file search."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from config import MAX_PREVIEW_LINES, PRIMARY_ENCODING, SECONDARY_ENCODING


class UnreadableFileError(Exception):
    """Raised when file bytes decode under neither supported encoding."""


@dataclass(frozen=True)
class PreviewLine:
    """A single matching line, numbered from 1."""
    line_number: int
    text: str

    def to_dict(self) -> dict:
        return {"line_number": self.line_number, "text": self.text}


def decode_text(raw: bytes) -> Tuple[str, str]:
    """Decode bytes, falling back once to a single-byte encoding.

    Returns:
        (text, encoding_used)

    Raises:
        UnreadableFileError: if both encodings fail
    """
    try:
        return raw.decode(PRIMARY_ENCODING), PRIMARY_ENCODING
    except UnicodeDecodeError:
        pass

    try:
        return raw.decode(SECONDARY_ENCODING), SECONDARY_ENCODING
    except UnicodeDecodeError as e:
        raise UnreadableFileError(f"Cannot decode content: {e.reason}") from e


def read_text(path: Union[str, Path]) -> str:
    """Read a file and decode it. Raises OSError or UnreadableFileError."""
    raw = Path(path).read_bytes()
    text, _ = decode_text(raw)
    return text


def find_matching_lines(content: str, query: str, limit: int = MAX_PREVIEW_LINES) -> List[PreviewLine]:
    """Return up to `limit` trimmed lines containing `query`, in file order."""
    needle = query.lower()
    matches = []
    for index, line in enumerate(content.split("\n")):
        stripped = line.strip()
        if needle in stripped.lower():
            matches.append(PreviewLine(line_number=index + 1, text=stripped))
            if len(matches) >= limit:
                break
    return matches


def match_content(content: str, query: str) -> Tuple[bool, List[PreviewLine]]:
    """Test whether `content` contains `query` (case-insensitive).

    The preview is only computed for a match. A match that spans a line
    break still counts, it just produces no preview lines.
    """
    if query.lower() not in content.lower():
        return False, []
    return True, find_matching_lines(content, query)
