# -*- coding: utf-8 -*-
"""
Module: detail_view.py
Author: Takeshi
Date: 2026-01-12

Description:
    解析器详情页：启用开关、名称、DoT/DoH配置区、按需规则列表
"""

import logging
from typing import Callable, List, Optional

from PySide6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QCheckBox, QPushButton, QGroupBox, QComboBox, QScrollArea,
    QListWidget, QListWidgetItem, QAbstractItemView,
)
from PySide6.QtCore import Qt, Signal

from core.binding import Binding
from core.resolver_editor import ResolverEditor
from defaults.resolver_default import ConfigurationKind, Resolver
from defaults.ui_default import GROUP_BOX_STYLE, HINT_LABEL_STYLE, LIST_MAX_HEIGHT

from .rule_dialog import RuleEditDialog
from .server_section import ServerSectionWidget, create_section_widget

logger = logging.getLogger(__name__)


_KIND_ORDER = [ConfigurationKind.DNS_OVER_TLS, ConfigurationKind.DNS_OVER_HTTPS]


class ResolverDetailWidget(QWidget):
    """解析器详情页"""

    title_changed = Signal(str)

    def __init__(self,
                 resolver: Binding[Resolver],
                 is_on: Binding[bool],
                 rule_index: Optional[Callable[[str], Optional[int]]] = None,
                 parent=None):
        super().__init__(parent)
        self.editor = ResolverEditor(resolver, is_on, rule_index)
        self.section_widget: Optional[ServerSectionWidget] = None
        self._is_loading = True

        self.init_ui()
        self.load_from_editor()
        self._is_loading = False

        self._app = QApplication.instance()
        if self._app is not None:
            self._app.focusChanged.connect(self._on_focus_changed)

    def init_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)

        main_widget = QWidget()
        main_layout = QVBoxLayout(main_widget)
        main_layout.setSpacing(15)
        main_layout.setContentsMargins(10, 10, 10, 10)

        main_layout.addWidget(self.create_enable_group())
        main_layout.addWidget(self.create_basic_group())

        self.section_container = QVBoxLayout()
        self.section_container.setContentsMargins(0, 0, 0, 0)
        main_layout.addLayout(self.section_container)

        main_layout.addWidget(self.create_rules_group())
        main_layout.addStretch()

        scroll_area.setWidget(main_widget)
        layout.addWidget(scroll_area)
        self.setLayout(layout)

    def create_enable_group(self) -> QGroupBox:
        group = QGroupBox("启用")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()

        self.enable_check = QCheckBox("使用此服务器")
        self.enable_check.toggled.connect(self.on_enable_toggled)
        layout.addWidget(self.enable_check)

        group.setLayout(layout)
        return group

    def create_basic_group(self) -> QGroupBox:
        group = QGroupBox("基本设置")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()
        layout.setSpacing(10)

        name_layout = QHBoxLayout()
        name_layout.addWidget(QLabel("名称"))
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("名称")
        self.name_edit.setAlignment(Qt.AlignRight)
        self.name_edit.textEdited.connect(self.on_name_edited)
        name_layout.addWidget(self.name_edit)
        layout.addLayout(name_layout)

        kind_layout = QHBoxLayout()
        kind_layout.addWidget(QLabel("类型"))
        self.kind_combo = QComboBox()
        for kind in _KIND_ORDER:
            self.kind_combo.addItem(kind.display_name, kind.value)
        self.kind_combo.currentIndexChanged.connect(self.on_kind_changed)
        kind_layout.addStretch()
        kind_layout.addWidget(self.kind_combo)
        layout.addLayout(kind_layout)

        group.setLayout(layout)
        return group

    def create_rules_group(self) -> QGroupBox:
        group = QGroupBox("按需规则")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()
        layout.setSpacing(10)

        btn_layout = QHBoxLayout()

        self.add_rule_btn = QPushButton("新增规则")
        self.add_rule_btn.clicked.connect(self.add_rule)

        self.edit_rule_btn = QPushButton("编辑")
        self.edit_rule_btn.clicked.connect(self.edit_selected_rule)
        self.edit_rule_btn.setEnabled(False)

        self.delete_rule_btn = QPushButton("删除")
        self.delete_rule_btn.clicked.connect(self.delete_selected_rule)
        self.delete_rule_btn.setEnabled(False)

        self.rule_up_btn = QPushButton("上移")
        self.rule_up_btn.clicked.connect(self.move_rule_up)
        self.rule_up_btn.setEnabled(False)

        self.rule_down_btn = QPushButton("下移")
        self.rule_down_btn.clicked.connect(self.move_rule_down)
        self.rule_down_btn.setEnabled(False)

        for btn in (self.add_rule_btn, self.edit_rule_btn, self.delete_rule_btn,
                    self.rule_up_btn, self.rule_down_btn):
            btn_layout.addWidget(btn)
        btn_layout.addStretch()
        layout.addLayout(btn_layout)

        self.rule_list = QListWidget()
        self.rule_list.setSelectionMode(QAbstractItemView.SingleSelection)
        self.rule_list.setMaximumHeight(LIST_MAX_HEIGHT)
        self.rule_list.itemSelectionChanged.connect(self.on_rule_selection_changed)
        self.rule_list.itemDoubleClicked.connect(self.on_rule_double_clicked)
        layout.addWidget(self.rule_list)

        footer = QLabel("规则按顺序匹配，决定何时自动启用此解析器。")
        footer.setWordWrap(True)
        footer.setStyleSheet(HINT_LABEL_STYLE)
        layout.addWidget(footer)

        group.setLayout(layout)
        return group

    # ============== 加载 ==============

    def load_from_editor(self):
        """根据编辑器当前状态刷新整个页面"""
        was_loading = self._is_loading
        self._is_loading = True
        try:
            self.refresh_enabled()
            self.name_edit.setText(self.editor.name)
            self.kind_combo.setCurrentIndex(_KIND_ORDER.index(self.editor.configuration_kind))
            self._rebuild_section()
            self._update_rule_list()
        finally:
            self._is_loading = was_loading

    def refresh_enabled(self):
        """外部修改了启用状态时刷新复选框"""
        self.enable_check.blockSignals(True)
        try:
            self.enable_check.setChecked(self.editor.enabled)
        finally:
            self.enable_check.blockSignals(False)

    def _rebuild_section(self):
        if self.section_widget is not None:
            self.section_widget.dispose()
            self.section_container.removeWidget(self.section_widget)
            self.section_widget.deleteLater()

        self.section_widget = create_section_widget(self.editor.section)
        self.section_container.addWidget(self.section_widget)

    # ============== 基本设置 ==============

    def on_enable_toggled(self, checked: bool):
        if self._is_loading:
            return
        self.editor.enabled = checked

    def on_name_edited(self, text: str):
        self.editor.set_name(text)
        self.title_changed.emit(self.editor.title)

    def on_kind_changed(self, index: int):
        if self._is_loading or index < 0:
            return
        kind = _KIND_ORDER[index]
        if kind is self.editor.configuration_kind:
            return
        self.editor.switch_configuration(kind)
        self._rebuild_section()

    # ============== 焦点 ==============

    def _on_focus_changed(self, old: Optional[QWidget], new: Optional[QWidget]):
        field = None
        if self.section_widget is not None:
            field = self.section_widget.focused_field_for(new)
        self.editor.focus_changed(field)

    def detach(self):
        """详情页被移除前调用：提交暂存的编辑并断开焦点信号"""
        self.editor.focus_changed(None)
        if self.section_widget is not None:
            self.section_widget.dispose()
        if self._app is not None:
            self._app.focusChanged.disconnect(self._on_focus_changed)
            self._app = None

    # ============== 按需规则 ==============

    def _update_rule_list(self):
        current_row = self.rule_list.currentRow()
        self.rule_list.clear()
        for rule in self.editor.rules:
            item = QListWidgetItem(rule.name)
            item.setData(Qt.UserRole, rule.id)
            self.rule_list.addItem(item)
        if 0 <= current_row < self.rule_list.count():
            self.rule_list.setCurrentRow(current_row)
        self.on_rule_selection_changed()

    def displayed_rule_names(self) -> List[str]:
        return [self.rule_list.item(i).text() for i in range(self.rule_list.count())]

    def add_rule(self):
        self.editor.add_rule()
        self._update_rule_list()
        self.rule_list.setCurrentRow(self.rule_list.count() - 1)

    def open_rule_dialog(self, rule_id: str) -> RuleEditDialog:
        """创建规则编辑对话框（不显示）"""
        return RuleEditDialog(self.editor.rule_binding(rule_id), self)

    def edit_selected_rule(self):
        item = self.rule_list.currentItem()
        if item is None:
            return
        dialog = self.open_rule_dialog(item.data(Qt.UserRole))
        if dialog.exec():
            self._update_rule_list()

    def on_rule_double_clicked(self, item: QListWidgetItem):
        self.edit_selected_rule()

    def delete_selected_rule(self):
        current_row = self.rule_list.currentRow()
        if current_row < 0:
            return
        self.editor.delete_rules({current_row})
        self._update_rule_list()

    def move_rule_up(self):
        current_row = self.rule_list.currentRow()
        if current_row <= 0:
            return
        self.editor.move_rules({current_row}, current_row - 1)
        self.rule_list.setCurrentRow(current_row - 1)
        self._update_rule_list()

    def move_rule_down(self):
        current_row = self.rule_list.currentRow()
        if current_row < 0 or current_row >= self.rule_list.count() - 1:
            return
        self.editor.move_rules({current_row}, current_row + 2)
        self.rule_list.setCurrentRow(current_row + 1)
        self._update_rule_list()

    def on_rule_selection_changed(self):
        current_row = self.rule_list.currentRow()
        has_selection = current_row >= 0
        self.edit_rule_btn.setEnabled(has_selection)
        self.delete_rule_btn.setEnabled(has_selection)
        self.rule_up_btn.setEnabled(has_selection and current_row > 0)
        self.rule_down_btn.setEnabled(has_selection and current_row < self.rule_list.count() - 1)
