"""
usemaru - CRUD scaffolding for Next.js resources

Generates route handlers, types, zod schemas, react-query hooks and
axios actions for a named resource, optionally wired to a shared client.
"""

__version__ = "0.1.0"

from usemaru.models import ClientMode, ClientRef, Conventions, ResourceName, ScaffoldInputs
from usemaru.naming import normalize
from usemaru.generator import GenerationPlan, ResourceGenerator, generate_resource, plan_resource
from usemaru.scanner import scan
from usemaru.resolver import resolve_import_path

__all__ = [
    "ClientMode",
    "ClientRef",
    "Conventions",
    "ResourceName",
    "ScaffoldInputs",
    "normalize",
    "GenerationPlan",
    "ResourceGenerator",
    "generate_resource",
    "plan_resource",
    "scan",
    "resolve_import_path",
]
