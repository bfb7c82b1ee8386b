# -*- coding: utf-8 -*-
"""
Module: main_window.py
Author: Takeshi
Date: 2026-01-12

Description:
    主窗口：左侧解析器列表，右侧解析器详情页
"""

import functools
import logging
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QListWidget, QListWidgetItem, QAbstractItemView, QSplitter, QToolButton,
    QMenu, QMessageBox,
)
from PySide6.QtCore import Qt

from defaults.app_info import AppInfo
from defaults.resolver_default import (
    PRESETS, ConfigurationKind, Resolver, default_configuration, preset_resolver,
)
from defaults.ui_default import MAIN_WINDOW_SIZE, RESOLVER_LIST_MIN_WIDTH, HINT_LABEL_STYLE
from managers.resolver_store import ResolverStore
from managers.signals import StoreSignals

from .detail_view import ResolverDetailWidget

logger = logging.getLogger(__name__)


class ResolverListWindow(QMainWindow):
    """解析器列表主窗口"""

    def __init__(self, store: ResolverStore, signals: StoreSignals, parent=None):
        super().__init__(parent)
        self.store = store
        self.signals = signals
        self.detail_widget: Optional[ResolverDetailWidget] = None
        self.current_resolver_id: Optional[str] = None

        self.setWindowTitle(AppInfo.window_title())
        self.resize(*MAIN_WINDOW_SIZE)

        self.init_ui()
        self._connect_signals()
        self._update_list()

    def init_ui(self):
        splitter = QSplitter(Qt.Horizontal)

        # 左侧列表
        left_widget = QWidget()
        left_layout = QVBoxLayout(left_widget)
        left_layout.setContentsMargins(10, 10, 10, 10)

        btn_layout = QHBoxLayout()

        self.add_dot_btn = QPushButton("新增DoT")
        self.add_dot_btn.clicked.connect(
            lambda: self.add_resolver(ConfigurationKind.DNS_OVER_TLS))

        self.add_doh_btn = QPushButton("新增DoH")
        self.add_doh_btn.clicked.connect(
            lambda: self.add_resolver(ConfigurationKind.DNS_OVER_HTTPS))

        self.preset_btn = QToolButton()
        self.preset_btn.setText("预设")
        self.preset_btn.setPopupMode(QToolButton.InstantPopup)
        self.preset_btn.setMenu(self._create_preset_menu())

        self.delete_btn = QPushButton("删除")
        self.delete_btn.clicked.connect(self.delete_selected_resolver)
        self.delete_btn.setEnabled(False)

        btn_layout.addWidget(self.add_dot_btn)
        btn_layout.addWidget(self.add_doh_btn)
        btn_layout.addWidget(self.preset_btn)
        btn_layout.addWidget(self.delete_btn)
        left_layout.addLayout(btn_layout)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QAbstractItemView.SingleSelection)
        self.list_widget.setMinimumWidth(RESOLVER_LIST_MIN_WIDTH)
        self.list_widget.currentItemChanged.connect(self.on_current_item_changed)
        left_layout.addWidget(self.list_widget)

        hint_label = QLabel("✅ 表示当前使用的解析器")
        hint_label.setStyleSheet(HINT_LABEL_STYLE)
        left_layout.addWidget(hint_label)

        # 右侧详情
        self.detail_container = QWidget()
        self.detail_layout = QVBoxLayout(self.detail_container)
        self.detail_layout.setContentsMargins(0, 0, 0, 0)

        self.placeholder_label = QLabel("请选择或新增一个解析器")
        self.placeholder_label.setAlignment(Qt.AlignCenter)
        self.placeholder_label.setStyleSheet(HINT_LABEL_STYLE)
        self.detail_layout.addWidget(self.placeholder_label)

        splitter.addWidget(left_widget)
        splitter.addWidget(self.detail_container)
        splitter.setStretchFactor(1, 1)

        self.setCentralWidget(splitter)
        self.statusBar().showMessage(f"共 {len(self.store)} 个解析器")

    def _create_preset_menu(self) -> QMenu:
        menu = QMenu(self)
        for preset_name in PRESETS:
            for kind in (ConfigurationKind.DNS_OVER_TLS, ConfigurationKind.DNS_OVER_HTTPS):
                action = menu.addAction(f"{preset_name} ({kind.display_name})")
                action.triggered.connect(
                    functools.partial(self.add_preset_resolver, preset_name, kind))
        return menu

    def _connect_signals(self):
        self.signals.resolvers_changed.connect(self._update_list)
        self.signals.resolver_changed.connect(self.on_resolver_changed)
        self.signals.used_resolver_changed.connect(self.on_used_resolver_changed)

    # ============== 列表 ==============

    def _item_text(self, resolver: Resolver) -> str:
        icon = "✅" if self.store.is_enabled(resolver.id) else "⚪"
        return f"{icon} {resolver.name}"

    def _update_list(self):
        self.list_widget.blockSignals(True)
        try:
            self.list_widget.clear()
            selected_row = -1
            for i, resolver in enumerate(self.store.resolvers):
                item = QListWidgetItem(self._item_text(resolver))
                item.setData(Qt.UserRole, resolver.id)
                self.list_widget.addItem(item)
                if resolver.id == self.current_resolver_id:
                    selected_row = i
            self.list_widget.setCurrentRow(selected_row)
        finally:
            self.list_widget.blockSignals(False)

        if self.current_resolver_id is not None and self.current_resolver_id not in self.store:
            self.show_detail(None)

        self.delete_btn.setEnabled(self.current_resolver_id is not None)
        self.statusBar().showMessage(f"共 {len(self.store)} 个解析器")

    def _find_item(self, resolver_id: str) -> Optional[QListWidgetItem]:
        for i in range(self.list_widget.count()):
            item = self.list_widget.item(i)
            if item.data(Qt.UserRole) == resolver_id:
                return item
        return None

    def on_resolver_changed(self, resolver_id: str):
        item = self._find_item(resolver_id)
        if item is not None:
            item.setText(self._item_text(self.store.get(resolver_id)))

    def on_used_resolver_changed(self, resolver_id: str):
        for i in range(self.list_widget.count()):
            item = self.list_widget.item(i)
            item.setText(self._item_text(self.store.get(item.data(Qt.UserRole))))
        if self.detail_widget is not None:
            self.detail_widget.refresh_enabled()

    def on_current_item_changed(self, current: Optional[QListWidgetItem], previous):
        resolver_id = current.data(Qt.UserRole) if current is not None else None
        self.show_detail(resolver_id)

    # ============== 详情页 ==============

    def show_detail(self, resolver_id: Optional[str]):
        if resolver_id == self.current_resolver_id and self.detail_widget is not None:
            return

        if self.detail_widget is not None:
            self.detail_widget.detach()
            self.detail_layout.removeWidget(self.detail_widget)
            self.detail_widget.deleteLater()
            self.detail_widget = None

        self.current_resolver_id = resolver_id
        self.delete_btn.setEnabled(resolver_id is not None)

        if resolver_id is None:
            self.placeholder_label.show()
            self.setWindowTitle(AppInfo.window_title())
            return

        self.placeholder_label.hide()
        self.detail_widget = ResolverDetailWidget(
            self.store.resolver_binding(resolver_id),
            self.store.enabled_binding(resolver_id),
            functools.partial(self.store.rule_index, resolver_id),
        )
        self.detail_widget.title_changed.connect(
            lambda title: self.setWindowTitle(AppInfo.window_title(title)))
        self.detail_layout.addWidget(self.detail_widget)
        self.setWindowTitle(AppInfo.window_title(self.detail_widget.editor.title))

    # ============== 增删 ==============

    def add_resolver(self, kind: ConfigurationKind) -> Resolver:
        resolver = Resolver(name="新解析器", configuration=default_configuration(kind))
        return self._add_and_select(resolver)

    def add_preset_resolver(self, preset_name: str, kind: ConfigurationKind) -> Resolver:
        return self._add_and_select(preset_resolver(preset_name, kind))

    def _add_and_select(self, resolver: Resolver) -> Resolver:
        self.store.add(resolver)
        item = self._find_item(resolver.id)
        if item is not None:
            self.list_widget.setCurrentItem(item)
        return resolver

    def delete_selected_resolver(self):
        if self.current_resolver_id is None:
            return

        resolver = self.store.get(self.current_resolver_id)
        reply = QMessageBox.question(
            self, "确认删除",
            f"确定要删除解析器 '{resolver.name}' 吗？",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.remove_resolver(resolver.id)

    def remove_resolver(self, resolver_id: str):
        if resolver_id == self.current_resolver_id:
            self.show_detail(None)
        self.store.remove(resolver_id)

    def closeEvent(self, event):
        if self.detail_widget is not None:
            self.detail_widget.detach()
        self.store.save()
        super().closeEvent(event)
