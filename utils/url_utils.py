# -*- coding: utf-8 -*-
"""
Module: url_utils.py
Author: Takeshi
Date: 2026-01-12

Description:
    URL文本解析，无效文本返回None
"""

from typing import Optional

from PySide6.QtCore import QUrl


def parse_url(text: Optional[str]) -> Optional[str]:
    """解析URL文本

    去掉首尾空白后按严格模式解析，必须同时包含协议和主机名，
    否则视为没有URL。

    Args:
        text: 用户输入的文本

    Returns:
        规范化后的URL字符串，无效或为空时返回None

    Example:
        >>> parse_url(' https://dns.example/dns-query ')
        'https://dns.example/dns-query'
        >>> parse_url('not a url') is None
        True
    """
    if text is None:
        return None

    text = text.strip()
    if not text:
        return None

    url = QUrl(text, QUrl.StrictMode)
    if not url.isValid() or not url.scheme() or not url.host():
        return None

    return url.toString()
