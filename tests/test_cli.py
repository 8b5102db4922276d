"""Tests for duet.cli — layout resolution, ``duet routes`` and ``duet call``."""

import sys
import types
from dataclasses import dataclass

import pytest

from duet import App, Both, Get, HTTPError, Post
from duet.cli import main
from duet.cli import _call as call_module
from duet.cli._resolve import resolve_layout
from duet.testing import asgi_transport


@dataclass(frozen=True)
class Note:
    text: str


API = "notes" / (Get(list[Note], name="list_notes") | Post(Note, body=Note, name="add_note"))


def _add_note(body: Note) -> Note:
    if not body.text:
        raise HTTPError(422, "empty note")
    return body


@pytest.fixture
def _fake_api_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module exposing a layout, an App and a factory."""
    mod = types.ModuleType("_fake_duet_api")
    mod.api = API  # type: ignore[attr-defined]
    mod.app = App(API, Both(lambda: [Note("hi")], _add_note))  # type: ignore[attr-defined]
    mod.make_api = lambda: API  # type: ignore[attr-defined]
    mod.broken = lambda: 1 / 0  # type: ignore[attr-defined]
    mod.not_a_layout = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_duet_api", mod)


@pytest.mark.usefixtures("_fake_api_module")
class TestResolveLayout:
    def test_explicit_attribute(self) -> None:
        assert resolve_layout("_fake_duet_api:api") is API

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'api'."""
        assert resolve_layout("_fake_duet_api") is API

    def test_app_yields_its_layout(self) -> None:
        assert resolve_layout("_fake_duet_api:app") is API

    def test_factory(self) -> None:
        assert resolve_layout("_fake_duet_api:make_api") is API

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="raised an error"):
            resolve_layout("_fake_duet_api:broken")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_layout("nonexistent_module_xyz:api")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_layout("_fake_duet_api:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="not a duet layout or App"):
            resolve_layout("_fake_duet_api:not_a_layout")


@pytest.mark.usefixtures("_fake_api_module")
class TestRoutesCommand:
    def test_lists_endpoints_in_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_duet_api:api"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["METHOD", "PATH", "RESULT", "NAME"]
        assert lines[2].split() == ["GET", "/notes", "list[Note]", "list_notes"]
        assert lines[3].split() == ["POST", "/notes", "Note", "->", "Note", "add_note"]

    def test_bad_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_duet_api:not_a_layout"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out


@pytest.mark.usefixtures("_fake_api_module")
class TestCallCommand:
    @pytest.fixture(autouse=True)
    def _serve_in_process(self, _fake_api_module: None, monkeypatch: pytest.MonkeyPatch) -> None:
        app = sys.modules["_fake_duet_api"].app
        monkeypatch.setattr(call_module, "Transport", lambda config=None: asgi_transport(app))

    def _call(self, *extra: str) -> None:
        main(["call", "_fake_duet_api:api", *extra, "--base-url", "http://testserver"])

    def test_get(self, capsys: pytest.CaptureFixture[str]) -> None:
        self._call("list_notes")
        assert capsys.readouterr().out.strip() == '[{"text":"hi"}]'

    def test_post_with_body(self, capsys: pytest.CaptureFixture[str]) -> None:
        self._call("add_note", "--body", '{"text":"remember"}')
        assert capsys.readouterr().out.strip() == '{"text":"remember"}'

    def test_failure_status(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            self._call("add_note", "--body", '{"text":""}')
        assert exc_info.value.code == 1
        assert "HTTP POST request failed with status: 422" in capsys.readouterr().err

    def test_unknown_operation(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            self._call("delete_note")
        err = capsys.readouterr().err
        assert "no operation named 'delete_note'" in err
        assert "add_note, list_notes" in err

    def test_body_on_get(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            self._call("list_notes", "--body", "1")
        assert "does not take a body" in capsys.readouterr().err

    def test_invalid_body_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            self._call("add_note", "--body", "{nope")
        assert "--body is not valid JSON" in capsys.readouterr().err

    def test_malformed_query(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            self._call("list_notes", "--query", "novalue")
        assert "NAME=VALUE" in capsys.readouterr().err
