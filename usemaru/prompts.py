"""
Interactive question sequence.

Collects the operator's answers into one ScaffoldInputs record before any
planning happens. The prompt and confirm callables default to typer's and
can be replaced for non-interactive use.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

from usemaru.generator import ResourceGenerator
from usemaru.models import ClientMode, ClientRef, Conventions, ScaffoldInputs
from usemaru.naming import normalize
from usemaru.resolver import resolve_import_path
from usemaru.scanner import scan


class PromptSession:
    """Runs the question sequence for one resource."""

    def __init__(
        self,
        conventions: Conventions | None = None,
        console: Console | None = None,
        prompt: Callable = typer.prompt,
        confirm: Callable = typer.confirm,
    ):
        self.conventions = conventions or Conventions()
        self.console = console or Console()
        self.prompt = prompt
        self.confirm = confirm

    def run(self) -> ScaffoldInputs:
        raw = self.prompt("Resource name (e.g. users, products)")
        dest = self.prompt("Destination directory", default=self.conventions.default_dest_dir)
        client = self.ask_client(Path(dest))
        return ScaffoldInputs(resource=normalize(raw), dest_dir=Path(dest), client=client)

    def ask_client(self, dest_dir: Path) -> ClientRef:
        """Decide how generated actions reach the network."""
        candidates = scan(dest_dir, self.conventions)

        if candidates:
            self.console.print(f"\n[cyan]Found {len(candidates)} configured client instance(s):[/cyan]")
            for i, candidate in enumerate(candidates, 1):
                self.console.print(f"  {i}. {escape(str(candidate.absolute_path))}")

            if self.confirm("Reuse an existing client instance?", default=True):
                index = 1
                if len(candidates) > 1:
                    index = self.prompt("Which instance? (number)", default=1, type=int)

                if not 1 <= index <= len(candidates):
                    self.console.print("[yellow]Invalid selection, creating a new instance instead[/yellow]")
                    return self._new_instance(dest_dir)

                proposed = resolve_import_path(
                    candidates[index - 1].absolute_path, dest_dir, self.conventions
                )
                specifier = self.prompt("Import path for the instance", default=proposed)
                return ClientRef(mode=ClientMode.EXISTING, import_specifier=specifier or proposed)

        if self.confirm("Create a configured axios instance?", default=False):
            return self._new_instance(dest_dir)
        return ClientRef()

    def _new_instance(self, dest_dir: Path) -> ClientRef:
        return ResourceGenerator(self.conventions).new_client_ref(dest_dir)
