# -*- coding: utf-8 -*-
"""
Module: server_section.py
Author: Takeshi
Date: 2026-01-12

Description:
    DoT / DoH 配置区界面：服务器地址列表 + 服务器名称或URL
"""

import logging
from typing import List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QGroupBox, QListWidget, QListWidgetItem, QAbstractItemView,
)
from PySide6.QtCore import Qt, QTimer

from core.focus import FocusedField
from core.section_editor import ServerSectionEditor, DoTSectionEditor, DoHSectionEditor
from defaults.ui_default import GROUP_BOX_STYLE, HINT_LABEL_STYLE, LIST_MAX_HEIGHT

logger = logging.getLogger(__name__)


class ServerSectionWidget(QWidget):
    """配置区基类，负责服务器地址列表"""

    ADDRESS_FIELD: FocusedField

    def __init__(self, section: ServerSectionEditor, parent=None):
        super().__init__(parent)
        self.section = section
        self._updating = False
        self._disposed = False
        self.init_ui()
        self._update_list()

    def init_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(15)

        layout.addWidget(self.create_servers_group())
        layout.addWidget(self.create_settings_group())

        self.setLayout(layout)

    def create_servers_group(self) -> QGroupBox:
        group = QGroupBox("服务器")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()
        layout.setSpacing(10)

        btn_layout = QHBoxLayout()

        self.add_btn = QPushButton("新增服务器")
        self.add_btn.clicked.connect(self.add_server)

        self.delete_btn = QPushButton("删除")
        self.delete_btn.clicked.connect(self.delete_server)
        self.delete_btn.setEnabled(False)

        self.up_btn = QPushButton("上移")
        self.up_btn.clicked.connect(self.move_server_up)
        self.up_btn.setEnabled(False)

        self.down_btn = QPushButton("下移")
        self.down_btn.clicked.connect(self.move_server_down)
        self.down_btn.setEnabled(False)

        btn_layout.addWidget(self.add_btn)
        btn_layout.addWidget(self.delete_btn)
        btn_layout.addWidget(self.up_btn)
        btn_layout.addWidget(self.down_btn)
        btn_layout.addStretch()
        layout.addLayout(btn_layout)

        self.list_widget = QListWidget()
        self.list_widget.setSelectionMode(QAbstractItemView.SingleSelection)
        self.list_widget.setEditTriggers(
            QAbstractItemView.DoubleClicked
            | QAbstractItemView.EditKeyPressed
            | QAbstractItemView.SelectedClicked
        )
        self.list_widget.setDragDropMode(QAbstractItemView.InternalMove)
        self.list_widget.setMaximumHeight(LIST_MAX_HEIGHT)
        self.list_widget.itemChanged.connect(self.on_item_changed)
        self.list_widget.itemSelectionChanged.connect(self.on_selection_changed)
        self.list_widget.model().rowsMoved.connect(self.on_rows_moved)
        layout.addWidget(self.list_widget)

        footer = QLabel("DNS服务器的IP地址。双击编辑，拖动排序。")
        footer.setWordWrap(True)
        footer.setStyleSheet(HINT_LABEL_STYLE)
        layout.addWidget(footer)

        group.setLayout(layout)
        return group

    def create_settings_group(self) -> QGroupBox:
        raise NotImplementedError

    # ============== 列表 ==============

    def _update_list(self):
        self._updating = True
        try:
            self.list_widget.clear()
            for server in self.section.servers:
                item = QListWidgetItem(server)
                item.setFlags(item.flags() | Qt.ItemIsEditable)
                self.list_widget.addItem(item)
        finally:
            self._updating = False
        self.on_selection_changed()

    def displayed_servers(self) -> List[str]:
        return [self.list_widget.item(i).text() for i in range(self.list_widget.count())]

    def add_server(self):
        self.section.add_server()
        self._update_list()
        row = self.list_widget.count() - 1
        self.list_widget.setCurrentRow(row)
        self.list_widget.editItem(self.list_widget.item(row))

    def delete_server(self):
        current_row = self.list_widget.currentRow()
        if current_row < 0:
            return
        self.section.delete_servers({current_row})
        self._update_list()

    def move_server_up(self):
        current_row = self.list_widget.currentRow()
        if current_row <= 0:
            return
        self.section.move_servers({current_row}, current_row - 1)
        self._update_list()
        self.list_widget.setCurrentRow(current_row - 1)

    def move_server_down(self):
        current_row = self.list_widget.currentRow()
        if current_row < 0 or current_row >= self.list_widget.count() - 1:
            return
        self.section.move_servers({current_row}, current_row + 2)
        self._update_list()
        self.list_widget.setCurrentRow(current_row + 1)

    def on_item_changed(self, item: QListWidgetItem):
        if self._updating:
            return
        row = self.list_widget.row(item)
        if row < 0 or row >= len(self.section.servers):
            return

        self.section.set_server(row, item.text())
        trimmed = self.section.servers[row]
        if item.text() != trimmed:
            self._updating = True
            try:
                item.setText(trimmed)
            finally:
                self._updating = False

    def on_rows_moved(self, parent, start: int, end: int, destination, row: int):
        """拖动排序完成，row 为移动前的目标位置"""
        if self._updating:
            return
        self.section.move_servers(range(start, end + 1), row)
        # 在拖放事件结束后再重建列表
        QTimer.singleShot(0, self._refresh_after_move)

    def _refresh_after_move(self):
        # 延迟回调可能晚于 dispose，此时控件已在等待删除
        if self._disposed:
            return
        self._update_list()

    def dispose(self):
        """从详情页移除前调用，之后不再刷新列表"""
        self._disposed = True

    def on_selection_changed(self):
        current_row = self.list_widget.currentRow()
        has_selection = current_row >= 0
        self.delete_btn.setEnabled(has_selection)
        self.up_btn.setEnabled(has_selection and current_row > 0)
        self.down_btn.setEnabled(has_selection and current_row < self.list_widget.count() - 1)

    # ============== 焦点 ==============

    def focused_field_for(self, widget: Optional[QWidget]) -> Optional[FocusedField]:
        """把获得焦点的控件映射为 FocusedField，不属于本配置区时返回 None"""
        if widget is None:
            return None
        if widget is self.list_widget or self.list_widget.isAncestorOf(widget):
            return self.ADDRESS_FIELD
        return None


class DoTSectionWidget(ServerSectionWidget):
    """DNS-over-TLS 配置区"""

    ADDRESS_FIELD = FocusedField.DOT_ADDRESS

    def __init__(self, section: DoTSectionEditor, parent=None):
        super().__init__(section, parent)

    def create_settings_group(self) -> QGroupBox:
        group = QGroupBox("DNS-over-TLS设置")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()

        row_layout = QHBoxLayout()
        row_layout.addWidget(QLabel("服务器名称"))
        self.server_name_edit = QLineEdit()
        self.server_name_edit.setPlaceholderText("服务器名称")
        self.server_name_edit.setAlignment(Qt.AlignRight)
        self.server_name_edit.setText(self.section.server_name_text)
        self.server_name_edit.textEdited.connect(self.section.set_server_name)
        row_layout.addWidget(self.server_name_edit)
        layout.addLayout(row_layout)

        footer = QLabel("DNS-over-TLS服务器的TLS名称。")
        footer.setStyleSheet(HINT_LABEL_STYLE)
        layout.addWidget(footer)

        group.setLayout(layout)
        return group

    def focused_field_for(self, widget: Optional[QWidget]) -> Optional[FocusedField]:
        if widget is not None and widget is self.server_name_edit:
            return FocusedField.DOT_SERVER_NAME
        return super().focused_field_for(widget)


class DoHSectionWidget(ServerSectionWidget):
    """DNS-over-HTTPS 配置区"""

    ADDRESS_FIELD = FocusedField.DOH_ADDRESS

    def __init__(self, section: DoHSectionEditor, parent=None):
        super().__init__(section, parent)

    def create_settings_group(self) -> QGroupBox:
        group = QGroupBox("DNS-over-HTTPS设置")
        group.setStyleSheet(GROUP_BOX_STYLE)
        layout = QVBoxLayout()

        row_layout = QHBoxLayout()
        row_layout.addWidget(QLabel("服务器URL"))
        self.server_url_edit = QLineEdit()
        self.server_url_edit.setPlaceholderText("服务器URL")
        self.server_url_edit.setAlignment(Qt.AlignRight)
        self.server_url_edit.setText(self.section.server_url_text)
        self.server_url_edit.textEdited.connect(self.section.set_server_url_text)
        row_layout.addWidget(self.server_url_edit)
        layout.addLayout(row_layout)

        footer = QLabel("DNS-over-HTTPS服务器的URL。")
        footer.setStyleSheet(HINT_LABEL_STYLE)
        layout.addWidget(footer)

        group.setLayout(layout)
        return group

    def focused_field_for(self, widget: Optional[QWidget]) -> Optional[FocusedField]:
        if widget is not None and widget is self.server_url_edit:
            return FocusedField.DOH_SERVER_URL
        return super().focused_field_for(widget)


def create_section_widget(section: ServerSectionEditor, parent=None) -> ServerSectionWidget:
    """按配置区类型创建界面"""
    if isinstance(section, DoTSectionEditor):
        return DoTSectionWidget(section, parent)
    elif isinstance(section, DoHSectionEditor):
        return DoHSectionWidget(section, parent)
    raise TypeError(f"未知的配置区类型: {type(section).__name__}")
