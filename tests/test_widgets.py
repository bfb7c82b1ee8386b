"""
Widget tests for ui/ (offscreen Qt platform)

Focus changes are fed to the detail page directly instead of relying on a
real window manager; everything else drives the widgets' own slots.
"""

from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication, QEvent, QModelIndex, Qt

from core.binding import Binding
from defaults.resolver_default import (
    DEFAULT_RULE_NAME,
    ConfigurationKind,
    InterfaceType,
    OnDemandRuleAction,
)
from ui.detail_view import ResolverDetailWidget
from ui.error_dialog import ErrorDialog
from ui.main_window import ResolverListWindow
from ui.rule_dialog import RuleEditDialog
from ui.server_section import DoHSectionWidget, DoTSectionWidget


@pytest.fixture
def detail(qapp, resolver_binding, enabled_binding):
    widget = ResolverDetailWidget(resolver_binding, enabled_binding)
    yield widget
    widget.detach()
    widget.deleteLater()


def leave_fields(widget: ResolverDetailWidget):
    widget._on_focus_changed(None, None)


# ---------------------------------------------------------------------------
# Detail page
# ---------------------------------------------------------------------------


def test_detail_loads_resolver(detail):
    assert detail.name_edit.text() == "My Server"
    assert detail.enable_check.isChecked() is False
    assert isinstance(detail.section_widget, DoTSectionWidget)
    assert detail.section_widget.displayed_servers() == ["1.1.1.1", "1.0.0.1"]
    assert detail.section_widget.server_name_edit.text() == "cloudflare-dns.com"
    assert detail.displayed_rule_names() == ["Home", "Office"]


def test_enable_checkbox_writes_binding(detail, enabled_binding):
    detail.enable_check.setChecked(True)
    assert enabled_binding.get() is True


def test_name_edit_emits_title(detail, resolver_binding):
    titles = []
    detail.title_changed.connect(titles.append)

    detail.on_name_edited("Renamed")

    assert resolver_binding.get().name == "Renamed"
    assert titles == ["Renamed"]


def test_displayed_servers_match_model_after_edits(detail, resolver_binding):
    section = detail.section_widget

    section.add_server()
    assert section.displayed_servers() == resolver_binding.get().configuration.servers

    section.list_widget.setCurrentRow(0)
    section.move_server_down()
    assert section.displayed_servers() == ["1.0.0.1", "1.1.1.1", ""]
    assert resolver_binding.get().configuration.servers == ["1.0.0.1", "1.1.1.1", ""]

    section.list_widget.setCurrentRow(2)
    section.delete_server()
    assert section.displayed_servers() == resolver_binding.get().configuration.servers


def test_edited_address_is_trimmed_and_committed_on_focus_loss(detail, resolver_binding):
    section = detail.section_widget
    detail._on_focus_changed(None, section.list_widget)

    section.list_widget.item(0).setText("  9.9.9.9  ")

    assert section.displayed_servers()[0] == "9.9.9.9"
    assert resolver_binding.get().configuration.servers[0] == "1.1.1.1"

    leave_fields(detail)
    assert resolver_binding.get().configuration.servers[0] == "9.9.9.9"


def test_server_name_committed_on_focus_loss(detail, resolver_binding):
    section = detail.section_widget
    detail._on_focus_changed(None, section.server_name_edit)
    section.server_name_edit.textEdited.emit("dns.example")

    assert resolver_binding.get().configuration.server_name == "cloudflare-dns.com"

    leave_fields(detail)
    assert resolver_binding.get().configuration.server_name == "dns.example"


def test_switch_kind_rebuilds_section(detail, resolver_binding):
    detail.kind_combo.setCurrentIndex(1)

    assert isinstance(detail.section_widget, DoHSectionWidget)
    assert detail.section_widget.displayed_servers() == []
    assert resolver_binding.get().kind is ConfigurationKind.DNS_OVER_HTTPS

    detail.kind_combo.setCurrentIndex(0)
    assert detail.section_widget.displayed_servers() == ["1.1.1.1", "1.0.0.1"]


def test_drag_reorder_updates_binding(qapp, detail, resolver_binding):
    section = detail.section_widget

    # a drop ends in the model's moveRow, so drive the model directly
    moved = section.list_widget.model().moveRow(QModelIndex(), 0, QModelIndex(), 2)
    qapp.processEvents()

    assert moved
    assert resolver_binding.get().configuration.servers == ["1.0.0.1", "1.1.1.1"]
    assert section.displayed_servers() == ["1.0.0.1", "1.1.1.1"]


def test_refresh_after_move_skips_replaced_section(qapp, detail):
    old_section = detail.section_widget

    detail.kind_combo.setCurrentIndex(1)
    QCoreApplication.sendPostedEvents(None, QEvent.DeferredDelete)

    # the old widget is gone; a queued refresh must be a no-op
    old_section._refresh_after_move()
    assert isinstance(detail.section_widget, DoHSectionWidget)


def test_doh_url_committed_on_focus_loss(qapp, doh_resolver):
    binding = Binding.constant(doh_resolver)
    widget = ResolverDetailWidget(binding, Binding.constant(False))
    try:
        section = widget.section_widget
        assert section.server_url_edit.text() == "https://dns.google/dns-query"

        widget._on_focus_changed(None, section.server_url_edit)
        section.server_url_edit.textEdited.emit("https://dns.example/q")
        leave_fields(widget)

        assert binding.get().configuration.server_url == "https://dns.example/q"
    finally:
        widget.detach()


def test_rule_list_add_move_delete(detail, resolver_binding):
    detail.add_rule()
    assert detail.displayed_rule_names() == ["Home", "Office", DEFAULT_RULE_NAME]

    detail.rule_list.setCurrentRow(2)
    detail.move_rule_up()
    assert detail.displayed_rule_names() == ["Home", DEFAULT_RULE_NAME, "Office"]

    detail.rule_list.setCurrentRow(0)
    detail.delete_selected_rule()
    assert [r.name for r in resolver_binding.get().on_demand_rules] == [DEFAULT_RULE_NAME, "Office"]


# ---------------------------------------------------------------------------
# Rule dialog
# ---------------------------------------------------------------------------


def test_rule_dialog_writes_through_binding(detail, resolver_binding):
    rule_id = detail.editor.rules[1].id
    dialog = detail.open_rule_dialog(rule_id)

    dialog.name_edit.setText("Work")
    dialog.action_combo.setCurrentIndex(dialog.action_combo.findData(OnDemandRuleAction.IGNORE.value))
    dialog.interface_combo.setCurrentIndex(dialog.interface_combo.findData(InterfaceType.WIFI.value))
    dialog.ssid_edit.setPlainText("office-wifi\n\n  guest  ")
    dialog.probe_url_edit.setText("not a url")
    dialog.accept()

    rule = resolver_binding.get().on_demand_rules[1]
    assert rule.id == rule_id
    assert rule.name == "Work"
    assert rule.action is OnDemandRuleAction.IGNORE
    assert rule.interface_type is InterfaceType.WIFI
    assert rule.ssid_match == ["office-wifi", "guest"]
    assert rule.probe_url is None


def test_rule_dialog_reject_keeps_rule(qapp, dot_resolver):
    binding = Binding.constant(dot_resolver.on_demand_rules[0])
    dialog = RuleEditDialog(binding)

    dialog.name_edit.setText("Changed")
    dialog.reject()

    assert binding.get().name == "Home"


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------


@pytest.fixture
def window(store, store_signals):
    win = ResolverListWindow(store, store_signals)
    yield win
    win.show_detail(None)
    win.deleteLater()


def test_add_resolver_selects_it(window, store):
    resolver = window.add_resolver(ConfigurationKind.DNS_OVER_HTTPS)

    assert resolver.id in store
    assert window.current_resolver_id == resolver.id
    assert window.detail_widget is not None
    assert isinstance(window.detail_widget.section_widget, DoHSectionWidget)


def test_preset_resolver_added(window, store):
    resolver = window.add_preset_resolver("Quad9", ConfigurationKind.DNS_OVER_TLS)

    assert store.get(resolver.id).configuration.server_name == "dns.quad9.net"
    assert window.list_widget.count() == 1


def test_enable_marks_list_item(window, store):
    resolver = window.add_resolver(ConfigurationKind.DNS_OVER_TLS)

    window.detail_widget.enable_check.setChecked(True)

    item = window.list_widget.item(0)
    assert item.data(Qt.UserRole) == resolver.id
    assert item.text().startswith("✅")
    assert store.used_id == resolver.id


def test_rename_updates_list_item(window):
    window.add_resolver(ConfigurationKind.DNS_OVER_TLS)

    window.detail_widget.on_name_edited("Home DNS")

    assert window.list_widget.item(0).text().endswith("Home DNS")


def test_remove_resolver_clears_detail(window, store):
    resolver = window.add_resolver(ConfigurationKind.DNS_OVER_TLS)

    window.remove_resolver(resolver.id)

    assert resolver.id not in store
    assert window.detail_widget is None
    assert window.list_widget.count() == 0


# ---------------------------------------------------------------------------
# Error dialog
# ---------------------------------------------------------------------------


def test_error_dialog_copy(qapp):
    dialog = ErrorDialog("Traceback: boom")
    dialog.copy_error()

    assert dialog.error_text.toPlainText() == "Traceback: boom"
    assert dialog.copy_btn.text() == "已复制"
