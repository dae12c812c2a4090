"""Shared pytest fixtures for the usemaru test suite."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from usemaru.models import ClientMode, ClientRef, Conventions
from usemaru.naming import normalize


CLIENT_MODULE = textwrap.dedent("""\
    import axios from 'axios'

    const http = axios.create({
      baseURL: '/api',
    })

    export default http
""")


@pytest.fixture
def conventions() -> Conventions:
    return Conventions()


@pytest.fixture
def order():
    return normalize("orders")


@pytest.fixture
def existing_client() -> ClientRef:
    return ClientRef(mode=ClientMode.EXISTING, import_specifier="@/shared/http")


@pytest.fixture
def new_client() -> ClientRef:
    return ClientRef(mode=ClientMode.NEW, import_specifier="@/src/lib/api")


@pytest.fixture
def project_with_client(tmp_path: Path) -> Path:
    """A destination directory holding one configured axios instance."""
    dest = tmp_path / "app"
    (dest / "shared").mkdir(parents=True)
    (dest / "shared" / "http.ts").write_text(CLIENT_MODULE, encoding="utf-8")
    return dest


class ScriptedPrompts:
    """Replays canned answers in place of typer.prompt / typer.confirm.

    None as an answer means "accept the default".
    """

    def __init__(self, answers: list, confirms: list):
        self.answers = list(answers)
        self.confirms = list(confirms)
        self.asked: list[str] = []

    def prompt(self, text, default=None, type=None):
        self.asked.append(text)
        answer = self.answers.pop(0)
        if answer is None:
            return default
        return type(answer) if type else answer

    def confirm(self, text, default=False):
        self.asked.append(text)
        answer = self.confirms.pop(0)
        return default if answer is None else answer


@pytest.fixture
def scripted():
    return ScriptedPrompts
