# -*- coding: utf-8 -*-
"""
Module: app_info.py
Author: Takeshi
Date: 2026-01-12

Description:
    应用信息
"""


class AppInfo:
    """应用信息类"""

    # 基本信息
    NAME = "SecureDNSEditor"
    DESCRIPTION = "加密DNS（DoT/DoH）解析器配置编辑工具"
    VERSION = "1.0.0"
    AUTHOR = "Takeshi"
    COPYRIGHT = "Copyright © 2026 Takeshi. GPL v3 License"

    @classmethod
    def window_title(cls, subtitle: str = '') -> str:
        """窗口标题"""
        if subtitle:
            return f"{cls.NAME} - {subtitle}"
        return cls.NAME
