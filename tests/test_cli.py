"""End-to-end tests for the typer CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from usemaru import __version__
from usemaru.cli import app
from usemaru.models import Conventions


pytestmark = pytest.mark.integration

runner = CliRunner()


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_generate_direct_axios(in_tmp: Path) -> None:
    result = runner.invoke(app, ["generate"], input="orders\n./app\nn\n")

    assert result.exit_code == 0, result.output
    assert "File written" in result.output
    assert "call axios directly" in result.output

    actions = in_tmp / "app" / "app" / "api" / "order" / "actions" / "orderActions.ts"
    assert actions.read_text(encoding="utf-8").startswith("import axios from 'axios'")


def test_generate_with_new_instance(in_tmp: Path) -> None:
    result = runner.invoke(app, ["generate"], input="products\n\ny\n")

    assert result.exit_code == 0, result.output
    assert (in_tmp / "src" / "lib" / "api.ts").is_file()
    actions = in_tmp / "src" / "app" / "api" / "product" / "actions" / "productActions.ts"
    assert "import api from '@/src/lib/api'" in actions.read_text(encoding="utf-8")


def test_generate_reuses_existing_instance(in_tmp: Path) -> None:
    from conftest import CLIENT_MODULE

    (in_tmp / "app" / "shared").mkdir(parents=True)
    (in_tmp / "app" / "shared" / "http.ts").write_text(CLIENT_MODULE, encoding="utf-8")

    result = runner.invoke(app, ["generate"], input="orders\n./app\ny\n\n")

    assert result.exit_code == 0, result.output
    actions = in_tmp / "app" / "app" / "api" / "order" / "actions" / "orderActions.ts"
    assert actions.read_text(encoding="utf-8").startswith("import api from '@/shared/http'\n")
    assert not (in_tmp / "app" / "lib").exists()


def test_dry_run_writes_nothing(in_tmp: Path) -> None:
    result = runner.invoke(app, ["generate", "--dry-run"], input="orders\n./app\n\n")

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert not (in_tmp / "app").exists()


def test_write_failure_exits_nonzero(in_tmp: Path) -> None:
    (in_tmp / "app").write_text("in the way")
    result = runner.invoke(app, ["generate"], input="orders\n.\nn\n")

    assert result.exit_code == 1
    assert "Error" in result.output


def test_generate_with_conventions_file(in_tmp: Path) -> None:
    conventions = in_tmp / "usemaru.yaml"
    conventions.write_text(yaml.safe_dump({"apiBasePath": "/backend", "defaultDestDir": "./web"}))

    result = runner.invoke(app, ["generate", "-c", str(conventions)], input="orders\n\nn\n")

    assert result.exit_code == 0, result.output
    actions = in_tmp / "web" / "app" / "api" / "order" / "actions" / "orderActions.ts"
    assert "axios.get('/backend/order')" in actions.read_text(encoding="utf-8")


def test_scan_lists_instances(project_with_client: Path) -> None:
    result = runner.invoke(app, ["scan", str(project_with_client)])

    assert result.exit_code == 0, result.output
    assert "http.ts" in result.output
    assert "@/shared/http" in result.output


def test_scan_without_matches(tmp_path: Path) -> None:
    result = runner.invoke(app, ["scan", str(tmp_path)])
    assert result.exit_code == 0
    assert "No client instances found" in result.output


def test_init_writes_conventions(in_tmp: Path) -> None:
    result = runner.invoke(app, ["init", "--alias", "~"])

    assert result.exit_code == 0, result.output
    conventions = Conventions.from_file(in_tmp / "usemaru.yaml")
    assert conventions.alias == "~"
    assert conventions.source_root == "src"


def test_init_keeps_existing_file_when_declined(in_tmp: Path) -> None:
    (in_tmp / "usemaru.yaml").write_text("alias: '#'\n")
    result = runner.invoke(app, ["init"], input="n\n")

    assert result.exit_code == 0
    assert Conventions.from_file(in_tmp / "usemaru.yaml").alias == "#"


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_abort_at_prompt_is_not_reported_as_error(in_tmp: Path) -> None:
    # Input ends before the destination question, like Ctrl-D / Ctrl-C
    result = runner.invoke(app, ["generate"], input="orders\n")

    assert result.exit_code == 1
    assert "Aborted" in result.output
    assert "Error:" not in result.output
    assert not (in_tmp / "src").exists()
