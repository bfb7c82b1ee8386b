"""
Unit tests for core/section_editor.py

Server list edits are written back immediately, text field edits only touch
the working copy until commit().
"""

from __future__ import annotations

import pytest

from defaults.resolver_default import DoHConfiguration, DoTConfiguration
from core.section_editor import (
    DoHSectionEditor,
    DoTSectionEditor,
    create_section_editor,
)


class Recorder:
    """Collects every configuration handed to the commit callback."""

    def __init__(self):
        self.commits = []

    def __call__(self, configuration):
        self.commits.append(configuration)

    @property
    def last(self):
        return self.commits[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def dot_editor(recorder):
    configuration = DoTConfiguration(servers=["1.1.1.1", "1.0.0.1"], server_name="one.one")
    return DoTSectionEditor(configuration, recorder)


@pytest.fixture
def doh_editor(recorder):
    configuration = DoHConfiguration(servers=["8.8.8.8"], server_url="https://dns.google/dns-query")
    return DoHSectionEditor(configuration, recorder)


# ---------------------------------------------------------------------------
# Structural edits commit immediately
# ---------------------------------------------------------------------------


def test_add_server_appends_empty_and_commits(dot_editor, recorder):
    dot_editor.add_server()

    assert dot_editor.servers == ["1.1.1.1", "1.0.0.1", ""]
    assert recorder.last.servers == ["1.1.1.1", "1.0.0.1", ""]


def test_delete_servers_commits(dot_editor, recorder):
    dot_editor.delete_servers({0})

    assert recorder.last == DoTConfiguration(servers=["1.0.0.1"], server_name="one.one")


def test_move_servers_commits(dot_editor, recorder):
    dot_editor.move_servers({0}, 2)

    assert recorder.last.servers == ["1.0.0.1", "1.1.1.1"]


def test_structural_edit_carries_staged_text(dot_editor, recorder):
    dot_editor.set_server_name("staged.example")
    dot_editor.add_server()

    assert recorder.last.server_name == "staged.example"


# ---------------------------------------------------------------------------
# Staged text edits
# ---------------------------------------------------------------------------


def test_set_server_is_staged_until_commit(dot_editor, recorder):
    dot_editor.set_server(0, "  9.9.9.9 ")

    assert recorder.commits == []
    assert dot_editor.servers[0] == "9.9.9.9"

    dot_editor.commit()
    assert recorder.last.servers == ["9.9.9.9", "1.0.0.1"]


def test_server_name_is_trimmed(dot_editor, recorder):
    dot_editor.set_server_name("  dns.example \t")
    dot_editor.commit()

    assert recorder.last.server_name == "dns.example"


def test_server_name_text_for_missing_name(recorder):
    editor = DoTSectionEditor(DoTConfiguration(), recorder)
    assert editor.server_name is None
    assert editor.server_name_text == ""


def test_valid_server_url_is_committed(doh_editor, recorder):
    doh_editor.set_server_url_text("https://dns.example/dns-query")
    doh_editor.commit()

    assert recorder.last.server_url == "https://dns.example/dns-query"


def test_invalid_server_url_commits_none(doh_editor, recorder):
    doh_editor.set_server_url_text("not a url")
    doh_editor.commit()

    assert doh_editor.server_url_text == "not a url"
    assert recorder.last.server_url is None


def test_commit_hands_out_independent_copies(dot_editor, recorder):
    dot_editor.commit()
    recorder.last.servers.append("mutated")

    assert dot_editor.servers == ["1.1.1.1", "1.0.0.1"]


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def test_create_section_editor_matches_variant(recorder):
    assert isinstance(create_section_editor(DoTConfiguration(), recorder), DoTSectionEditor)
    assert isinstance(create_section_editor(DoHConfiguration(), recorder), DoHSectionEditor)


def test_create_section_editor_rejects_unknown_type(recorder):
    with pytest.raises(TypeError):
        create_section_editor(object(), recorder)
