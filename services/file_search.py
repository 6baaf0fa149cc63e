"""Bounded recursive content search across multiple directories.

Given a query, a list of search roots and a set of allowed extensions,
walk each root (at most MAX_SEARCH_DEPTH levels deep), skip hidden and
vendor directories, and collect every file whose text contains the query.

Unreadable directories and files are skipped silently; they shrink the
result set but never fail the search. Results follow filesystem
enumeration order, so callers must not rely on a stable ordering.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from config import (
    EXCLUDED_NAMES, HIDDEN_PREFIX, MAX_ANALYSIS_FILES, MAX_SEARCH_DEPTH,
    MAX_SEARCH_RESULTS,
)
from services.content_matcher import (
    PreviewLine, UnreadableFileError, match_content, read_text,
)


@dataclass(frozen=True)
class MatchRecord:
    """Evidence that a file's content contains the query."""
    file_path: str
    extension: str
    size_bytes: int
    modified: float  # POSIX timestamp
    preview: Tuple[PreviewLine, ...] = ()

    def to_dict(self) -> dict:
        return {
            "file": self.file_path,
            "type": self.extension,
            "size": self.size_bytes,
            "modified": self.modified,
            "preview": [line.to_dict() for line in self.preview],
        }


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one multi-root search."""
    query: str
    roots_searched: Tuple[str, ...]
    matches: Tuple[MatchRecord, ...] = field(default_factory=tuple)
    total_match_count: int = 0

    def to_dict(self) -> dict:
        return {
            "success": True,
            "query": self.query,
            "search_locations": list(self.roots_searched),
            "total_results": self.total_match_count,
            "results": [m.to_dict() for m in self.matches],
        }


def has_allowed_extension(name: str, file_types: Iterable[str]) -> bool:
    """Check the lower-cased extension (with its dot) against `file_types`."""
    return Path(name).suffix.lower() in file_types


def is_excluded(name: str) -> bool:
    """Hidden entries and dependency/virtual-env directories are never searched."""
    return name.startswith(HIDDEN_PREFIX) or name in EXCLUDED_NAMES


def _build_record(path: Path, query: str) -> Optional[MatchRecord]:
    """Read one candidate file; return a MatchRecord if it matches."""
    try:
        content = read_text(path)
        is_match, preview = match_content(content, query)
        if not is_match:
            return None
        stat = path.stat()
    except (OSError, UnreadableFileError):
        return None

    return MatchRecord(
        file_path=str(path),
        extension=path.suffix.lower(),
        size_bytes=stat.st_size,
        modified=stat.st_mtime,
        preview=tuple(preview),
    )


def _walk_directory(
    directory: Path,
    query: str,
    file_types: frozenset,
    depth: int,
    max_depth: int,
    results: List[MatchRecord],
) -> None:
    if depth > max_depth:
        return

    try:
        entries = list(directory.iterdir())
    except OSError:
        # Not found, permission denied, not a directory
        return

    for entry in entries:
        if is_excluded(entry.name):
            continue

        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError:
            continue

        if is_dir:
            _walk_directory(entry, query, file_types, depth + 1, max_depth, results)
        elif is_file and has_allowed_extension(entry.name, file_types):
            record = _build_record(entry, query)
            if record is not None:
                results.append(record)


def walk(
    root: str,
    query: str,
    file_types: Iterable[str],
    max_depth: int = MAX_SEARCH_DEPTH,
) -> List[MatchRecord]:
    """Search one root directory.

    The root itself is depth 0; directories deeper than `max_depth` are
    never enumerated.
    """
    results: List[MatchRecord] = []
    start = Path(root).expanduser().absolute()
    _walk_directory(start, query, frozenset(file_types), 0, max_depth, results)
    return results


def cap_matches(matches: Sequence[MatchRecord], limit: int = MAX_SEARCH_RESULTS) -> Tuple[MatchRecord, ...]:
    """Bound the number of matches returned to a caller."""
    return tuple(matches[:limit])


def select_for_analysis(matches: Sequence[MatchRecord], limit: int = MAX_ANALYSIS_FILES) -> Tuple[MatchRecord, ...]:
    """Bound the number of files whose content is sent to the LLM."""
    return tuple(matches[:limit])


def _validate_arguments(query, roots, file_types) -> None:
    if not isinstance(query, str) or not query.strip():
        raise ValueError("Search query must be a non-empty string")
    if isinstance(roots, (str, bytes)) or not isinstance(roots, Sequence):
        raise ValueError("Search roots must be a sequence of paths")
    if not all(isinstance(r, str) for r in roots):
        raise ValueError("Search roots must be strings")
    if isinstance(file_types, (str, bytes)):
        raise ValueError("File types must be a collection of extensions")


def search(query: str, roots: Sequence[str], file_types: Iterable[str]) -> SearchResult:
    """Search every root in order and merge the matches.

    A root that fails is skipped without aborting the others. The merged
    list is capped at MAX_SEARCH_RESULTS; `total_match_count` reports how
    many matches were found before capping. `roots_searched` echoes the
    input, whether or not a root yielded anything.

    Raises:
        ValueError: for an empty query or malformed roots/file types
    """
    _validate_arguments(query, roots, file_types)
    allowed = frozenset(t.lower() for t in file_types)

    # No early exit at the cap: total_match_count needs the full walk
    found: List[MatchRecord] = []
    for root in roots:
        try:
            found.extend(walk(root, query, allowed))
        except OSError as e:
            print(f"[SEARCH] Skipping location {root}: {e}")
            continue

    print(f"[SEARCH] '{query}': {len(found)} matches across {len(roots)} locations")
    return SearchResult(
        query=query,
        roots_searched=tuple(roots),
        matches=cap_matches(found),
        total_match_count=len(found),
    )
