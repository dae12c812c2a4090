"""
usemaru Models - Pydantic models shared by the generation pipeline

Resource naming, client wiring decisions, scan candidates and the
per-project conventions that steer path resolution and rendering.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class ArtifactKind(str, Enum):
    COLLECTION_ROUTE = "collectionRoute"
    ITEM_ROUTE = "itemRoute"
    TYPE_DECL = "typeDecl"
    VALIDATION_SCHEMA = "validationSchema"
    DATA_HOOKS = "dataHooks"
    ACTION_FUNCTIONS = "actionFunctions"
    CLIENT_CONFIG = "clientConfig"


class ClientMode(str, Enum):
    """How generated network calls are wired"""
    NONE = "none"          # Direct axios calls
    NEW = "new"            # Fresh shared instance written to lib/
    EXISTING = "existing"  # Shared instance already in the project


# ═══════════════════════════════════════════════════════════════════════════
# NAMING
# ═══════════════════════════════════════════════════════════════════════════


class ResourceName(BaseModel):
    """Canonical name forms for one resource"""

    raw: str
    singular: str
    capitalized: str

    model_config = {"frozen": True}


# ═══════════════════════════════════════════════════════════════════════════
# CLIENT WIRING
# ═══════════════════════════════════════════════════════════════════════════


class ClientRef(BaseModel):
    """Client wiring decision consumed by the renderers"""

    mode: ClientMode = ClientMode.NONE
    import_specifier: str | None = Field(None, alias="importSpecifier")

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def check_specifier(self) -> "ClientRef":
        if self.mode == ClientMode.NONE:
            if self.import_specifier is not None:
                raise ValueError("direct axios wiring takes no import specifier")
        elif not self.import_specifier:
            raise ValueError(f"client mode '{self.mode.value}' needs an import specifier")
        return self

    @property
    def uses_shared_client(self) -> bool:
        return self.mode != ClientMode.NONE


class CandidateInstanceFile(BaseModel):
    """A scanned source file and what the heuristics found in it"""

    absolute_path: Path
    contains_factory_call: bool = False
    contains_default_export: bool = False

    model_config = {"frozen": True}

    @property
    def qualifies(self) -> bool:
        return self.contains_factory_call and self.contains_default_export


# ═══════════════════════════════════════════════════════════════════════════
# CONVENTIONS
# ═══════════════════════════════════════════════════════════════════════════


class Conventions(BaseModel):
    """Project layout conventions (usemaru.yaml)"""

    source_root: str = Field("src", alias="sourceRoot")
    alias: str = "@"
    api_base_path: str = Field("/api", alias="apiBasePath")
    base_url_env: str = Field("NEXT_PUBLIC_API_URL", alias="baseUrlEnv")
    client_module_dir: str = Field("lib", alias="clientModuleDir")
    client_module_name: str = Field("api", alias="clientModuleName")
    token_storage_key: str = Field("token", alias="tokenStorageKey")
    source_extensions: list[str] = Field(
        [".ts", ".tsx", ".js", ".jsx"], alias="sourceExtensions"
    )
    ignored_dirs: list[str] = Field(
        ["node_modules", ".next", ".git", "dist", "build"], alias="ignoredDirs"
    )
    default_dest_dir: str = Field("./src", alias="defaultDestDir")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Conventions":
        """Parse YAML content into Conventions"""
        import yaml

        data = yaml.safe_load(yaml_content) or {}
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "Conventions":
        """Load conventions from a YAML file"""
        content = Path(path).read_text()
        return cls.from_yaml(content)

    def to_yaml(self) -> str:
        """Export conventions to YAML"""
        import yaml

        return yaml.dump(
            self.model_dump(by_alias=True),
            default_flow_style=False,
            sort_keys=False,
        )

    @property
    def client_file_name(self) -> str:
        return f"{self.client_module_name}.ts"


# ═══════════════════════════════════════════════════════════════════════════
# PROMPT OUTCOME
# ═══════════════════════════════════════════════════════════════════════════


class ScaffoldInputs(BaseModel):
    """Everything the operator supplied for one run"""

    resource: ResourceName
    dest_dir: Path
    client: ClientRef = ClientRef()

    model_config = {"frozen": True}
