# -*- coding: utf-8 -*-
"""
Module: rule_dialog.py
Author: Takeshi
Date: 2026-01-12

Description:
    按需规则编辑对话框，点击"确定"时才写回绑定的规则
"""

import logging
from typing import List

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QLineEdit,
    QComboBox, QPushButton, QPlainTextEdit,
)

from core.binding import Binding
from defaults.resolver_default import OnDemandRule, OnDemandRuleAction, InterfaceType
from defaults.ui_default import RULE_DIALOG_SIZE, HINT_LABEL_STYLE
from utils.url_utils import parse_url

logger = logging.getLogger(__name__)


ACTION_LABELS = {
    OnDemandRuleAction.CONNECT: "连接",
    OnDemandRuleAction.DISCONNECT: "断开",
    OnDemandRuleAction.EVALUATE_CONNECTION: "按连接评估",
    OnDemandRuleAction.IGNORE: "忽略",
}

INTERFACE_LABELS = {
    InterfaceType.ANY: "任意",
    InterfaceType.ETHERNET: "以太网",
    InterfaceType.WIFI: "Wi-Fi",
    InterfaceType.CELLULAR: "蜂窝网络",
}


def _split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class RuleEditDialog(QDialog):
    """按需规则编辑对话框"""

    def __init__(self, rule: Binding[OnDemandRule], parent=None):
        super().__init__(parent)
        self.binding = rule
        self.rule = rule.get()
        self.setWindowTitle(f"编辑规则 - {self.rule.name}")
        self.resize(*RULE_DIALOG_SIZE)
        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout()
        layout.setSpacing(10)

        grid = QGridLayout()
        grid.setSpacing(10)
        grid.setColumnStretch(1, 1)

        grid.addWidget(QLabel("名称:"), 0, 0)
        self.name_edit = QLineEdit(self.rule.name)
        self.name_edit.setPlaceholderText("规则名称")
        grid.addWidget(self.name_edit, 0, 1)

        grid.addWidget(QLabel("动作:"), 1, 0)
        self.action_combo = QComboBox()
        for action, label in ACTION_LABELS.items():
            self.action_combo.addItem(label, action.value)
        self.action_combo.setCurrentIndex(self.action_combo.findData(self.rule.action.value))
        grid.addWidget(self.action_combo, 1, 1)

        grid.addWidget(QLabel("接口类型:"), 2, 0)
        self.interface_combo = QComboBox()
        for interface_type, label in INTERFACE_LABELS.items():
            self.interface_combo.addItem(label, interface_type.value)
        self.interface_combo.setCurrentIndex(self.interface_combo.findData(self.rule.interface_type.value))
        grid.addWidget(self.interface_combo, 2, 1)

        layout.addLayout(grid)

        self.ssid_edit = self._add_list_editor(layout, "SSID匹配:", self.rule.ssid_match)
        self.search_domain_edit = self._add_list_editor(
            layout, "DNS搜索域匹配:", self.rule.dns_search_domain_match)
        self.server_address_edit = self._add_list_editor(
            layout, "DNS服务器地址匹配:", self.rule.dns_server_address_match)

        probe_layout = QHBoxLayout()
        probe_layout.addWidget(QLabel("探测URL:"))
        self.probe_url_edit = QLineEdit(self.rule.probe_url or "")
        self.probe_url_edit.setPlaceholderText("https://example.com/probe")
        probe_layout.addWidget(self.probe_url_edit)
        layout.addLayout(probe_layout)

        hint_label = QLabel("列表每行一项，空行会被忽略；无效的探测URL会被清空。")
        hint_label.setWordWrap(True)
        hint_label.setStyleSheet(HINT_LABEL_STYLE)
        layout.addWidget(hint_label)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()

        self.ok_btn = QPushButton("确定")
        self.ok_btn.clicked.connect(self.accept)
        self.ok_btn.setDefault(True)

        self.cancel_btn = QPushButton("取消")
        self.cancel_btn.clicked.connect(self.reject)

        btn_layout.addWidget(self.ok_btn)
        btn_layout.addWidget(self.cancel_btn)
        layout.addLayout(btn_layout)

        self.setLayout(layout)

    def _add_list_editor(self, layout: QVBoxLayout, title: str, values: List[str]) -> QPlainTextEdit:
        layout.addWidget(QLabel(title))
        edit = QPlainTextEdit()
        edit.setPlainText("\n".join(values))
        edit.setMaximumHeight(70)
        layout.addWidget(edit)
        return edit

    def get_rule(self) -> OnDemandRule:
        """根据界面内容生成规则，保留原 id"""
        return OnDemandRule(
            id=self.rule.id,
            name=self.name_edit.text(),
            action=OnDemandRuleAction(self.action_combo.currentData()),
            interface_type=InterfaceType(self.interface_combo.currentData()),
            ssid_match=_split_lines(self.ssid_edit.toPlainText()),
            dns_search_domain_match=_split_lines(self.search_domain_edit.toPlainText()),
            dns_server_address_match=_split_lines(self.server_address_edit.toPlainText()),
            probe_url=parse_url(self.probe_url_edit.text()),
        )

    def accept(self):
        rule = self.get_rule()
        self.binding.set(rule)
        logger.debug(f"规则已更新: {rule.name}")
        super().accept()
