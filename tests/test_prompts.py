"""Tests for the interactive question sequence."""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console

from usemaru.models import ClientMode
from usemaru.prompts import PromptSession

from conftest import CLIENT_MODULE


pytestmark = pytest.mark.unit


def _session(prompts) -> PromptSession:
    return PromptSession(console=Console(quiet=True), prompt=prompts.prompt, confirm=prompts.confirm)


def test_defaults_without_instances(scripted, tmp_path: Path) -> None:
    prompts = scripted([ "orders", str(tmp_path / "src")], [None])
    inputs = _session(prompts).run()

    assert inputs.resource.singular == "order"
    assert inputs.dest_dir == tmp_path / "src"
    assert inputs.client.mode == ClientMode.NONE
    assert prompts.asked[-1] == "Create a configured axios instance?"


def test_default_destination(scripted, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    prompts = scripted(["users", None], [False])
    inputs = _session(prompts).run()
    assert inputs.dest_dir == Path("./src")


def test_new_instance_requested(scripted, tmp_path: Path) -> None:
    prompts = scripted(["orders", str(tmp_path / "src")], [True])
    inputs = _session(prompts).run()

    assert inputs.client.mode == ClientMode.NEW
    assert inputs.client.import_specifier == "@/src/lib/api"


def test_single_instance_reused(scripted, project_with_client: Path) -> None:
    prompts = scripted(["orders", str(project_with_client), None], [None])
    inputs = _session(prompts).run()

    assert inputs.client.mode == ClientMode.EXISTING
    assert inputs.client.import_specifier == "@/shared/http"
    assert "Which instance? (number)" not in prompts.asked


def test_import_path_override(scripted, project_with_client: Path) -> None:
    prompts = scripted(["orders", str(project_with_client), "~/http"], [True])
    inputs = _session(prompts).run()
    assert inputs.client.import_specifier == "~/http"


def test_reuse_declined_falls_through_to_new_instance_question(scripted, project_with_client: Path) -> None:
    prompts = scripted(["orders", str(project_with_client)], [False, False])
    inputs = _session(prompts).run()

    assert inputs.client.mode == ClientMode.NONE
    assert prompts.asked[-1] == "Create a configured axios instance?"


@pytest.fixture
def two_instances(project_with_client: Path) -> Path:
    (project_with_client / "lib").mkdir()
    (project_with_client / "lib" / "apiClient.ts").write_text(
        CLIENT_MODULE.replace("http", "apiClient"), encoding="utf-8"
    )
    return project_with_client


def test_pick_among_several(scripted, two_instances: Path) -> None:
    # Sorted traversal: lib/apiClient.ts, then shared/http.ts
    prompts = scripted(["orders", str(two_instances), 2, None], [True])
    inputs = _session(prompts).run()

    assert inputs.client.mode == ClientMode.EXISTING
    assert inputs.client.import_specifier == "@/shared/http"


@pytest.mark.parametrize("index", [0, 3, -1])
def test_out_of_range_index_creates_new_instance(scripted, two_instances: Path, index: int) -> None:
    prompts = scripted(["orders", str(two_instances), index], [True])
    inputs = _session(prompts).run()

    assert inputs.client.mode == ClientMode.NEW
    assert inputs.client.import_specifier == "@/lib/api"
