"""
Client-instance detection.

Looks for a module that builds a shared axios instance and default-exports
it. Detection is a pair of substring heuristics, not a parse: formatting
tricks or re-exports can defeat it, and an unrelated file can match it.
Callers only see has_factory_call / has_client_default_export, so either
check can be swapped for a syntax-aware one later.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from usemaru.models import CandidateInstanceFile, Conventions


FACTORY_MARKERS = ("axios.create(",)

# Substrings that make a default-exported identifier look like a client
CLIENT_HINTS = ("api", "client", "instance", "axios", "http", "request", "fetcher")

_DEFAULT_EXPORT = re.compile(r"export\s+default\s+([A-Za-z_$][\w$]*)")


def has_factory_call(text: str) -> bool:
    return any(marker in text for marker in FACTORY_MARKERS)


def has_client_default_export(text: str) -> bool:
    for match in _DEFAULT_EXPORT.finditer(text):
        ident = match.group(1).lower()
        if any(hint in ident for hint in CLIENT_HINTS):
            return True
    return False


def inspect_file(path: Path) -> CandidateInstanceFile:
    """Apply both heuristics to one file. Unreadable files match nothing."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return CandidateInstanceFile(absolute_path=Path(os.path.abspath(path)))

    return CandidateInstanceFile(
        absolute_path=Path(os.path.abspath(path)),
        contains_factory_call=has_factory_call(text),
        contains_default_export=has_client_default_export(text),
    )


def iter_source_files(root: Path, conventions: Conventions):
    """Yield source files under root, sorted per directory."""
    extensions = {ext.lower() for ext in conventions.source_extensions}
    ignored = set(conventions.ignored_dirs)

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1].lower() in extensions:
                yield Path(dirpath) / filename


def scan(root: str | Path, conventions: Conventions | None = None) -> list[CandidateInstanceFile]:
    """
    Find files under root that look like a shared client instance.

    Args:
        root: Directory to search. A missing directory yields no matches.
        conventions: Extensions and ignored directories to honor

    Returns:
        Qualifying candidates in traversal order
    """
    conventions = conventions or Conventions()
    root = Path(root)
    if not root.is_dir():
        return []

    candidates = []
    for path in iter_source_files(root, conventions):
        candidate = inspect_file(path)
        if candidate.qualifies:
            candidates.append(candidate)
    return candidates
