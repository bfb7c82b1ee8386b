"""
Unit tests for core/resolver_editor.py and core/focus.py

Covers the detail editor without any widgets: focus driven commits,
DoT/DoH switching, rule bindings and rule list edits.
"""

from __future__ import annotations

import logging

import pytest

from core.binding import Binding
from core.focus import FocusedField, FocusTracker
from core.resolver_editor import ResolverEditor, RuleNotFoundError
from defaults.resolver_default import (
    DEFAULT_RULE_NAME,
    ConfigurationKind,
    DoHConfiguration,
    DoTConfiguration,
    OnDemandRuleAction,
)


@pytest.fixture
def editor(resolver_binding, enabled_binding):
    return ResolverEditor(resolver_binding, enabled_binding)


# ---------------------------------------------------------------------------
# Focus tracker
# ---------------------------------------------------------------------------


def test_focus_commit_only_when_leaving_all_fields():
    tracker = FocusTracker()

    assert tracker.transition(FocusedField.DOT_ADDRESS) is False
    assert tracker.transition(FocusedField.DOT_SERVER_NAME) is False
    assert tracker.current is FocusedField.DOT_SERVER_NAME
    assert tracker.transition(None) is True
    assert tracker.current is None
    assert tracker.transition(None) is False


def test_focus_same_field_is_noop():
    tracker = FocusTracker()
    tracker.transition(FocusedField.DOH_SERVER_URL)
    assert tracker.transition(FocusedField.DOH_SERVER_URL) is False


# ---------------------------------------------------------------------------
# Basic fields
# ---------------------------------------------------------------------------


def test_name_edits_write_back(editor, resolver_binding):
    editor.set_name("Renamed")

    assert resolver_binding.get().name == "Renamed"
    assert editor.title == "Renamed"


def test_enabled_toggle_writes_binding(editor, enabled_binding):
    editor.enabled = True
    assert enabled_binding.get() is True
    editor.enabled = False
    assert editor.enabled is False


# ---------------------------------------------------------------------------
# Staged edits committed on focus loss
# ---------------------------------------------------------------------------


def test_address_edit_commits_when_focus_leaves(editor, resolver_binding):
    editor.focus_changed(FocusedField.DOT_ADDRESS)
    editor.section.set_server(0, "9.9.9.9")

    assert resolver_binding.get().configuration.servers[0] == "1.1.1.1"

    editor.focus_changed(None)
    assert resolver_binding.get().configuration.servers[0] == "9.9.9.9"


def test_moving_between_fields_does_not_commit(editor, resolver_binding):
    editor.focus_changed(FocusedField.DOT_ADDRESS)
    editor.section.set_server(0, "9.9.9.9")
    editor.focus_changed(FocusedField.DOT_SERVER_NAME)

    assert resolver_binding.get().configuration.servers[0] == "1.1.1.1"
    assert editor.focused_field is FocusedField.DOT_SERVER_NAME


def test_empty_server_name_is_stored_empty(editor, resolver_binding):
    editor.focus_changed(FocusedField.DOT_SERVER_NAME)
    editor.section.set_server_name("   ")
    editor.focus_changed(None)

    assert resolver_binding.get().configuration.server_name == ""


def test_invalid_url_committed_as_none(doh_resolver):
    binding = Binding.constant(doh_resolver)
    editor = ResolverEditor(binding, Binding.constant(False))

    editor.focus_changed(FocusedField.DOH_SERVER_URL)
    editor.section.set_server_url_text("definitely not a url")
    editor.focus_changed(None)

    assert binding.get().configuration.server_url is None


# ---------------------------------------------------------------------------
# DoT / DoH switching
# ---------------------------------------------------------------------------


def test_switch_to_doh_starts_empty(editor, resolver_binding):
    editor.switch_configuration(ConfigurationKind.DNS_OVER_HTTPS)

    configuration = resolver_binding.get().configuration
    assert configuration == DoHConfiguration()
    assert editor.configuration_kind is ConfigurationKind.DNS_OVER_HTTPS
    assert editor.section.kind is ConfigurationKind.DNS_OVER_HTTPS


def test_switch_back_restores_untouched_configuration(editor, resolver_binding):
    original = resolver_binding.get().configuration

    editor.switch_configuration(ConfigurationKind.DNS_OVER_HTTPS)
    editor.switch_configuration(ConfigurationKind.DNS_OVER_TLS)

    assert resolver_binding.get().configuration == original


def test_switch_keeps_staged_edits(editor, resolver_binding):
    editor.focus_changed(FocusedField.DOT_SERVER_NAME)
    editor.section.set_server_name("staged.example")

    editor.switch_configuration(ConfigurationKind.DNS_OVER_HTTPS)
    editor.switch_configuration(ConfigurationKind.DNS_OVER_TLS)

    assert resolver_binding.get().configuration == DoTConfiguration(
        servers=["1.1.1.1", "1.0.0.1"], server_name="staged.example"
    )
    assert editor.focused_field is None


def test_switch_to_same_kind_is_noop(editor, resolver_binding):
    before = resolver_binding.get()
    editor.switch_configuration(ConfigurationKind.DNS_OVER_TLS)
    assert resolver_binding.get() == before


# ---------------------------------------------------------------------------
# On-demand rules
# ---------------------------------------------------------------------------


def test_add_rule_uses_default_name(editor):
    rule = editor.add_rule()

    assert rule.name == DEFAULT_RULE_NAME
    assert editor.rules[-1].id == rule.id
    assert len(editor.rules) == 3


def test_added_rules_are_distinct(editor):
    first = editor.add_rule()
    second = editor.add_rule()

    assert first.id != second.id
    assert [rule.name for rule in editor.rules[-2:]] == [DEFAULT_RULE_NAME, DEFAULT_RULE_NAME]


def test_rule_binding_reads_and_writes_by_id(editor, resolver_binding):
    office = editor.rules[1]
    binding = editor.rule_binding(office.id)

    rule = binding.get()
    rule.action = OnDemandRuleAction.DISCONNECT
    binding.set(rule)

    assert resolver_binding.get().on_demand_rules[1].action is OnDemandRuleAction.DISCONNECT


def test_rule_binding_follows_moves(editor, resolver_binding):
    office = editor.rules[1]
    binding = editor.rule_binding(office.id)

    editor.move_rules({1}, 0)
    assert binding.get().name == "Office"

    rule = binding.get()
    rule.name = "Work"
    binding.set(rule)
    assert [r.name for r in resolver_binding.get().on_demand_rules] == ["Work", "Home"]


def test_unknown_rule_raises_and_logs_critical(editor, caplog):
    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(RuleNotFoundError):
            editor.rule_binding("missing")
    assert any(record.levelno == logging.CRITICAL for record in caplog.records)


def test_rule_binding_raises_after_rule_deleted(editor):
    home = editor.rules[0]
    binding = editor.rule_binding(home.id)

    editor.delete_rules({0})

    with pytest.raises(RuleNotFoundError):
        binding.get()


def test_external_rule_index_is_used(resolver_binding, enabled_binding):
    lookups = []

    def rule_index(rule_id):
        lookups.append(rule_id)
        return resolver_binding.get().rule_indexes().get(rule_id)

    editor = ResolverEditor(resolver_binding, enabled_binding, rule_index)
    rule_id = editor.rules[0].id
    editor.rule_binding(rule_id).get()

    assert rule_id in lookups


def test_delete_and_move_rules(editor):
    editor.add_rule()
    editor.move_rules({2}, 0)
    assert [rule.name for rule in editor.rules] == [DEFAULT_RULE_NAME, "Home", "Office"]

    editor.delete_rules({0, 2})
    assert [rule.name for rule in editor.rules] == ["Home"]
