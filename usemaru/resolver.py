"""
Import specifier resolution for detected client modules.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from usemaru.models import Conventions


def alias_prefix(base_dir: str | Path, conventions: Conventions) -> str:
    """
    Alias token for imports rooted at base_dir.

    A base directory that is, or sits inside, the source root keeps that
    segment in the alias ("@/src"); anything else maps to the bare alias.
    """
    root = conventions.source_root
    if not root:
        return conventions.alias

    # "." typed from inside the source root still names it
    is_root = Path(os.path.realpath(base_dir)).name == root
    if is_root or root in Path(os.path.normpath(base_dir)).parts:
        return f"{conventions.alias}/{conventions.source_root}"
    return conventions.alias


def resolve_import_path(
    file_path: str | Path,
    base_dir: str | Path,
    conventions: Conventions | None = None,
) -> str:
    """
    Convert a module path into an aliased import specifier.

    >>> resolve_import_path("src/lib/api.ts", "src")
    '@/src/lib/api'
    """
    conventions = conventions or Conventions()
    file_path = Path(file_path)

    if file_path.suffix.lower() in {ext.lower() for ext in conventions.source_extensions}:
        file_path = file_path.with_suffix("")

    relative = os.path.relpath(os.path.abspath(file_path), os.path.abspath(base_dir))
    specifier = PurePosixPath(*Path(relative).parts).as_posix()
    if not specifier.startswith("/"):
        specifier = "/" + specifier

    return alias_prefix(base_dir, conventions) + specifier
