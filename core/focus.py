# -*- coding: utf-8 -*-
"""
Module: focus.py
Author: Takeshi
Date: 2026-01-12

Description:
    输入框焦点跟踪：焦点离开所有输入框时提交暂存的编辑
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class FocusedField(Enum):
    """可获得焦点的输入框"""
    DOT_ADDRESS = 'dot_address'
    DOT_SERVER_NAME = 'dot_server_name'
    DOH_ADDRESS = 'doh_address'
    DOH_SERVER_URL = 'doh_server_url'


class FocusTracker:
    """焦点状态机

    状态为 None（无焦点）或某个 FocusedField，同一时间只有一个焦点。
    从任意输入框进入无焦点状态时需要提交，其余切换只更新当前焦点。
    """

    def __init__(self):
        self._current: Optional[FocusedField] = None

    @property
    def current(self) -> Optional[FocusedField]:
        return self._current

    def transition(self, new_field: Optional[FocusedField]) -> bool:
        """切换焦点

        Args:
            new_field: 新获得焦点的输入框，None 表示没有输入框获得焦点

        Returns:
            是否需要提交暂存的编辑
        """
        old_field = self._current
        self._current = new_field

        if old_field == new_field:
            return False

        logger.debug(f"焦点切换: {old_field} -> {new_field}")
        return old_field is not None and new_field is None
