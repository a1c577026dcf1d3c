"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

from pathlib import Path

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from xtags.lsp import _document_path, _validate


@pytest.fixture
def lsp_env(tmp_path: Path):
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    uri = (tmp_path / "page.blade.php").as_uri()

    def put(source: str) -> str:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="blade", version=0, text=source)
        )
        return uri

    return ls, published, put


class TestDocumentPath:
    def test_file_uri(self) -> None:
        assert _document_path("file:///srv/app/page%20one.blade.php") == Path(
            "/srv/app/page one.blade.php"
        )

    def test_other_scheme(self) -> None:
        assert _document_path("untitled:/Untitled-1") == Path("Untitled-1")


class TestResolutionErrors:
    def test_unresolved_component(self, lsp_env) -> None:
        ls, published, put = lsp_env
        uri = put("<div>\n    <x-missing/>\n</div>")
        _validate(ls, uri)

        assert len(published) == 1
        assert published[0].uri == uri
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert d.message == "unable to locate a class or view for component [missing]"
        assert d.source == "xtags"
        # the tag spans columns 5-17 (1-based) on line 2
        assert d.range.start.line == 1
        assert d.range.start.character == 4
        assert d.range.end.line == 1
        assert d.range.end.character == 16

    def test_broken_alias(self, lsp_env, tmp_path: Path) -> None:
        ls, published, put = lsp_env
        (tmp_path / "xtags.toml").write_text("[aliases]\nalert = 'App\\Gone'\n")
        _validate(ls, put("<x-alert>"))

        d = published[0].diagnostics[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "[App\\Gone]" in d.message


class TestCleanDocuments:
    def test_plain_markup(self, lsp_env) -> None:
        ls, published, put = lsp_env
        _validate(ls, put("<div>{{ $title }}</div>"))
        assert published[0].diagnostics == []

    def test_mail_component(self, lsp_env) -> None:
        ls, published, put = lsp_env
        _validate(ls, put("<x-mail::message>\nHi\n</x-mail::message>"))
        assert published[0].diagnostics == []

    def test_slots_need_no_resolution(self, lsp_env) -> None:
        ls, published, put = lsp_env
        _validate(ls, put("<x-slot:title>T</x-slot>"))
        assert published[0].diagnostics == []


class TestConfigErrors:
    def test_invalid_config_is_warning(self, lsp_env, tmp_path: Path) -> None:
        ls, published, put = lsp_env
        (tmp_path / "xtags.toml").write_text("[aliases\n")
        _validate(ls, put("<x-alert>"))

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].severity == DiagnosticSeverity.Warning
        assert diags[0].range.start.line == 0
