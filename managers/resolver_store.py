# -*- coding: utf-8 -*-
"""
Module: resolver_store.py
Author: Takeshi
Date: 2026-01-12

Description:
    解析器存储：持有所有解析器和当前启用的解析器，
    为编辑器提供绑定，并维护规则 id 到下标的映射
"""

import copy
import logging
from typing import Dict, Iterable, List, Optional

from PySide6.QtCore import QTimer

from defaults.config_manager import ConfigManager
from defaults.resolver_default import Resolver, ResolversConfig
from defaults.user_default import AUTOSAVE_ENABLED, AUTOSAVE_DELAY_MS
from core.binding import Binding
from utils.list_ops import move_offsets

from .signals import StoreSignals

logger = logging.getLogger(__name__)


class ResolverStore:
    """解析器存储

    所有读取都返回深拷贝，修改必须通过 add / remove / move / replace 等方法，
    修改后发出信号。启用自动保存时，增删、排序和启用状态立即写入配置文件，
    replace（逐字输入的名称等）在 save_delay_ms 内没有新的修改后才写入。
    """

    def __init__(self,
                 config_manager: ConfigManager,
                 signals: Optional[StoreSignals] = None,
                 autosave: bool = AUTOSAVE_ENABLED,
                 save_delay_ms: int = AUTOSAVE_DELAY_MS):
        self.config_manager = config_manager
        self.signals = signals
        self.autosave = autosave

        self._save_timer = QTimer()
        self._save_timer.setSingleShot(True)
        self._save_timer.setInterval(save_delay_ms)
        self._save_timer.timeout.connect(self.save)

        config: ResolversConfig = config_manager.get_config('RESOLVERS_CONFIG')
        self._resolvers: List[Resolver] = config.resolvers
        self._used_id: Optional[str] = config.used_id
        self._rule_indexes: Dict[str, Dict[str, int]] = {}
        self._rebuild_rule_indexes()

        logger.info(f"解析器存储已加载: {len(self._resolvers)} 个解析器")

    # ============== 内部工具 ==============

    def _rebuild_rule_indexes(self):
        self._rule_indexes = {resolver.id: resolver.rule_indexes()
                              for resolver in self._resolvers}

    def _position(self, resolver_id: str) -> int:
        for i, resolver in enumerate(self._resolvers):
            if resolver.id == resolver_id:
                return i
        raise KeyError(f"未知解析器: {resolver_id}")

    def _changed(self, deferred: bool = False):
        self._rebuild_rule_indexes()
        if not self.autosave:
            return
        if deferred:
            self._save_timer.start()
        else:
            self.save()

    @property
    def has_pending_save(self) -> bool:
        return self._save_timer.isActive()

    # ============== 查询 ==============

    @property
    def resolvers(self) -> List[Resolver]:
        return copy.deepcopy(self._resolvers)

    @property
    def used_id(self) -> Optional[str]:
        return self._used_id

    def __len__(self) -> int:
        return len(self._resolvers)

    def __contains__(self, resolver_id: str) -> bool:
        return any(resolver.id == resolver_id for resolver in self._resolvers)

    def get(self, resolver_id: str) -> Resolver:
        """
        Raises:
            KeyError: 解析器不存在
        """
        return copy.deepcopy(self._resolvers[self._position(resolver_id)])

    def rule_index(self, resolver_id: str, rule_id: str) -> Optional[int]:
        """规则 id 对应的下标，不存在时返回 None"""
        return self._rule_indexes.get(resolver_id, {}).get(rule_id)

    def is_enabled(self, resolver_id: str) -> bool:
        return resolver_id == self._used_id

    # ============== 修改 ==============

    def add(self, resolver: Resolver) -> Resolver:
        """在末尾追加解析器"""
        if resolver.id in self:
            raise ValueError(f"解析器已存在: {resolver.id}")

        self._resolvers.append(copy.deepcopy(resolver))
        self._changed()
        logger.info(f"新增解析器: {resolver.name}")
        if self.signals:
            self.signals.resolvers_changed.emit()
        return copy.deepcopy(resolver)

    def remove(self, resolver_id: str):
        position = self._position(resolver_id)
        removed = self._resolvers.pop(position)

        was_used = self._used_id == resolver_id
        if was_used:
            self._used_id = None

        self._changed()
        logger.info(f"删除解析器: {removed.name}")
        if self.signals:
            self.signals.resolvers_changed.emit()
            if was_used:
                self.signals.used_resolver_changed.emit("")

    def move(self, offsets: Iterable[int], to_offset: int):
        self._resolvers = move_offsets(self._resolvers, offsets, to_offset)
        self._changed()
        if self.signals:
            self.signals.resolvers_changed.emit()

    def replace(self, resolver: Resolver):
        """用新的值整体替换同 id 的解析器

        Raises:
            KeyError: 解析器不存在
        """
        position = self._position(resolver.id)
        self._resolvers[position] = copy.deepcopy(resolver)
        self._changed(deferred=True)
        if self.signals:
            self.signals.resolver_changed.emit(resolver.id)

    def set_enabled(self, resolver_id: str, enabled: bool):
        """启用或停用解析器，同一时间最多启用一个"""
        self._position(resolver_id)

        if enabled:
            new_used_id = resolver_id
        elif self._used_id == resolver_id:
            new_used_id = None
        else:
            return

        if new_used_id == self._used_id:
            return

        self._used_id = new_used_id
        self._changed()
        logger.info(f"启用的解析器: {new_used_id or '无'}")
        if self.signals:
            self.signals.used_resolver_changed.emit(new_used_id or "")

    # ============== 绑定 ==============

    def resolver_binding(self, resolver_id: str) -> Binding[Resolver]:
        return Binding(lambda: self.get(resolver_id), self.replace)

    def enabled_binding(self, resolver_id: str) -> Binding[bool]:
        return Binding(lambda: self.is_enabled(resolver_id),
                       lambda value: self.set_enabled(resolver_id, value))

    # ============== 持久化 ==============

    def to_config(self) -> ResolversConfig:
        return ResolversConfig(resolvers=copy.deepcopy(self._resolvers),
                               used_id=self._used_id)

    def save(self) -> bool:
        """写入配置管理器并保存到文件"""
        self._save_timer.stop()
        self.config_manager.set_config('RESOLVERS_CONFIG', self.to_config())
        return self.config_manager.save()
