"""
usemaru Generator - Plans and writes the CRUD artifacts for one resource

Planning is pure: it resolves every directory and file body up front.
Materializing the plan is the only step that touches the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from usemaru.models import (
    ArtifactKind,
    ClientMode,
    ClientRef,
    Conventions,
    ResourceName,
    ScaffoldInputs,
)
from usemaru.resolver import resolve_import_path
from usemaru.templates import ARTIFACTS, RENDERERS, is_client_rendered


# ═══════════════════════════════════════════════════════════════════════════
# PLAN MODEL
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PlannedFile:
    """A file the plan will write."""

    path: Path
    content: str
    kind: ArtifactKind


@dataclass(frozen=True)
class GenerationPlan:
    """Directories and files for one resource, in creation order."""

    resource: ResourceName
    client: ClientRef
    directories: tuple[Path, ...]
    files: tuple[PlannedFile, ...]

    def file_for(self, kind: ArtifactKind) -> PlannedFile | None:
        return next((f for f in self.files if f.kind == kind), None)


@dataclass
class MaterializeResult:
    """What materialize() did, for reporting."""

    plan: GenerationPlan
    created_dirs: list[Path] = field(default_factory=list)
    existing_dirs: list[Path] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)

    @property
    def client_mode(self) -> ClientMode:
        return self.plan.client.mode


# ═══════════════════════════════════════════════════════════════════════════
# RESOURCE GENERATOR
# ═══════════════════════════════════════════════════════════════════════════


class ResourceGenerator:
    """
    Builds and executes generation plans.

    Files are overwritten without merging: re-running for the same resource
    replaces any manual edits to previously generated files.
    """

    def __init__(self, conventions: Conventions | None = None):
        self.conventions = conventions or Conventions()

    def api_dir(self, resource: ResourceName, dest_dir: str | Path) -> Path:
        return Path(dest_dir) / "app" / "api" / resource.singular

    def client_file(self, dest_dir: str | Path) -> Path:
        return Path(dest_dir) / self.conventions.client_module_dir / self.conventions.client_file_name

    def new_client_ref(self, dest_dir: str | Path) -> ClientRef:
        """ClientRef pointing at the instance this tool writes to lib/."""
        specifier = resolve_import_path(self.client_file(dest_dir), dest_dir, self.conventions)
        return ClientRef(mode=ClientMode.NEW, import_specifier=specifier)

    def plan(
        self,
        resource: ResourceName,
        dest_dir: str | Path,
        client: ClientRef | None = None,
    ) -> GenerationPlan:
        """
        Resolve every directory and file body for a resource.

        Args:
            resource: Normalized resource name
            dest_dir: Project source directory (e.g. ./src)
            client: Client wiring; defaults to direct axios calls

        Returns:
            GenerationPlan, ready for materialize()
        """
        client = client or ClientRef()
        api_dir = self.api_dir(resource, dest_dir)

        directories = [
            api_dir,
            api_dir / "[id]",
            api_dir / "types",
            api_dir / "schemas",
            api_dir / "hooks",
            api_dir / "actions",
        ]
        files: list[PlannedFile] = []

        if is_client_rendered(client):
            directories.append(Path(dest_dir) / self.conventions.client_module_dir)
            files.append(PlannedFile(
                path=self.client_file(dest_dir),
                content=RENDERERS[ArtifactKind.CLIENT_CONFIG](resource, client, self.conventions),
                kind=ArtifactKind.CLIENT_CONFIG,
            ))

        for artifact in ARTIFACTS:
            files.append(PlannedFile(
                path=api_dir / artifact.relative_path(resource),
                content=artifact.render(resource, client, self.conventions),
                kind=artifact.kind,
            ))

        return GenerationPlan(
            resource=resource,
            client=client,
            directories=tuple(directories),
            files=tuple(files),
        )

    def materialize(self, plan: GenerationPlan) -> MaterializeResult:
        """Create missing directories and write every file in the plan.

        OSError from the filesystem is not caught.
        """
        result = MaterializeResult(plan=plan)

        for directory in plan.directories:
            if directory.is_dir():
                result.existing_dirs.append(directory)
                continue
            directory.mkdir(parents=True, exist_ok=True)
            result.created_dirs.append(directory)

        for planned in plan.files:
            planned.path.parent.mkdir(parents=True, exist_ok=True)
            planned.path.write_text(planned.content, encoding="utf-8")
            result.written_files.append(planned.path)

        return result


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def plan_resource(
    inputs: ScaffoldInputs,
    conventions: Conventions | None = None,
) -> GenerationPlan:
    """Build the plan for collected operator inputs."""
    generator = ResourceGenerator(conventions)
    return generator.plan(inputs.resource, inputs.dest_dir, inputs.client)


def generate_resource(
    inputs: ScaffoldInputs,
    conventions: Conventions | None = None,
) -> MaterializeResult:
    """
    Plan and write all artifacts for a resource.

    Args:
        inputs: Resource name, destination and client wiring
        conventions: Optional project conventions

    Returns:
        MaterializeResult describing created directories and written files
    """
    generator = ResourceGenerator(conventions)
    plan = generator.plan(inputs.resource, inputs.dest_dir, inputs.client)
    return generator.materialize(plan)
