"""
Name derivation for generated symbols and paths.
"""

from __future__ import annotations

from usemaru.models import ResourceName


def singularize(s: str) -> str:
    """
    Drop one trailing "s".

    Deliberately naive: irregular plurals are not handled, so "categories"
    becomes "categorie" and "status" becomes "statu".
    """
    return s[:-1] if s.endswith("s") else s


def capitalize(s: str) -> str:
    """Upper-case the first character, keep the rest as is."""
    return s[:1].upper() + s[1:]


def uncapitalize(s: str) -> str:
    """Lower-case the first character, keep the rest as is."""
    return s[:1].lower() + s[1:]


def normalize(raw: str) -> ResourceName:
    """Derive the canonical forms used by every template.

    Blank input is not rejected; it produces empty forms.
    """
    singular = singularize(raw.strip().lower())
    return ResourceName(raw=raw, singular=singular, capitalized=capitalize(singular))
