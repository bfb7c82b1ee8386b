# -*- coding: utf-8 -*-
"""
Module: error_dialog.py
Author: Takeshi
Date: 2026-01-12

Description:
    启动错误对话框
"""


from PySide6.QtWidgets import (QDialog, QVBoxLayout, QPushButton,
                              QHBoxLayout, QLabel, QTextEdit, QApplication)
from PySide6.QtGui import QFont

from defaults.app_info import AppInfo
from defaults.ui_default import ERROR_DIALOG_SIZE


class ErrorDialog(QDialog):
    def __init__(self, error_message: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(AppInfo.window_title("启动错误"))
        self.resize(*ERROR_DIALOG_SIZE)

        layout = QVBoxLayout(self)

        # 错误图标和标题
        title_layout = QHBoxLayout()
        error_icon = QLabel("❌")
        error_icon.setFont(QFont("Arial", 24))
        title_layout.addWidget(error_icon)

        title_label = QLabel("程序启动失败")
        title_label.setFont(QFont("Microsoft YaHei", 12, QFont.Bold))
        title_label.setStyleSheet("color: red;")
        title_layout.addWidget(title_label)
        title_layout.addStretch()
        layout.addLayout(title_layout)

        info_label = QLabel(f"{AppInfo.NAME}启动时遇到错误，请检查配置文件后重新启动：")
        layout.addWidget(info_label)

        self.error_text = QTextEdit()
        self.error_text.setFont(QFont("Consolas", 9))
        self.error_text.setPlainText(error_message)
        self.error_text.setReadOnly(True)
        layout.addWidget(self.error_text)

        # 按钮栏
        button_layout = QHBoxLayout()

        self.copy_btn = QPushButton("复制错误信息")
        self.copy_btn.clicked.connect(self.copy_error)
        button_layout.addWidget(self.copy_btn)

        button_layout.addStretch()

        exit_btn = QPushButton("退出程序")
        exit_btn.clicked.connect(self.reject)
        exit_btn.setStyleSheet("background-color: #ff4444; color: white;")
        button_layout.addWidget(exit_btn)

        layout.addLayout(button_layout)

    def copy_error(self):
        """复制错误信息到剪贴板"""
        QApplication.clipboard().setText(self.error_text.toPlainText())
        self.copy_btn.setText("已复制")
