# -*- coding: utf-8 -*-
"""
Module: resolver_editor.py
Author: Takeshi
Date: 2026-01-12

Description:
    解析器详情页的编辑逻辑（与界面无关）

    - 启用开关、名称：立即写回
    - DoT / DoH 配置区：见 section_editor
    - 按需规则：按 id 查找，增删、排序立即写回
"""

import copy
import logging
from typing import Callable, Dict, Iterable, List, Optional

from defaults.resolver_default import (
    DEFAULT_RULE_NAME, Configuration, ConfigurationKind, OnDemandRule, Resolver,
    configuration_kind, default_configuration,
)
from utils.list_ops import remove_offsets, move_offsets

from .binding import Binding
from .focus import FocusedField, FocusTracker
from .section_editor import ServerSectionEditor, create_section_editor

logger = logging.getLogger(__name__)


class RuleNotFoundError(RuntimeError):
    """要显示或编辑的规则不在规则列表中

    属于调用方违反约定，不应被捕获。
    """
    pass


class ResolverEditor:
    """解析器编辑器

    通过两个绑定工作：解析器本身和"启用"开关。
    对解析器的每次修改都是复制、修改、整体写回。

    Example:
        >>> resolver = Binding.constant(Resolver(name='My Server'))
        >>> editor = ResolverEditor(resolver, Binding.constant(True))
        >>> rule = editor.add_rule()
        >>> rule.name
        'New Rule'
    """

    def __init__(self,
                 resolver: Binding[Resolver],
                 is_on: Binding[bool],
                 rule_index: Optional[Callable[[str], Optional[int]]] = None):
        """
        Args:
            resolver: 解析器绑定
            is_on: 启用开关绑定
            rule_index: 规则 id 到下标的查找函数（由外部存储维护），
                为 None 时根据当前解析器计算
        """
        self._resolver = resolver
        self._is_on = is_on
        self._rule_index = rule_index
        self._focus = FocusTracker()
        self._section: Optional[ServerSectionEditor] = None
        # 切换配置类型时暂存另一种配置，切换回来时恢复
        self._stashed: Dict[ConfigurationKind, Configuration] = {}

    # ============== 基本信息 ==============

    @property
    def resolver(self) -> Resolver:
        return copy.deepcopy(self._resolver.get())

    def _update(self, mutate: Callable[[Resolver], None]):
        resolver = copy.deepcopy(self._resolver.get())
        mutate(resolver)
        self._resolver.set(resolver)

    @property
    def enabled(self) -> bool:
        return self._is_on.get()

    @enabled.setter
    def enabled(self, value: bool):
        self._is_on.set(bool(value))

    @property
    def name(self) -> str:
        return self._resolver.get().name

    def set_name(self, text: str):
        def mutate(resolver: Resolver):
            resolver.name = text
        self._update(mutate)

    @property
    def title(self) -> str:
        return self.name

    # ============== DoT / DoH 配置 ==============

    @property
    def configuration_kind(self) -> ConfigurationKind:
        return configuration_kind(self._resolver.get().configuration)

    @property
    def section(self) -> ServerSectionEditor:
        """当前配置类型对应的配置区编辑器"""
        kind = self.configuration_kind
        if self._section is None or self._section.kind is not kind:
            self._section = create_section_editor(
                copy.deepcopy(self._resolver.get().configuration),
                self._replace_configuration,
            )
        return self._section

    def _replace_configuration(self, configuration: Configuration):
        def mutate(resolver: Resolver):
            resolver.configuration = configuration
        self._update(mutate)

    def switch_configuration(self, kind: ConfigurationKind):
        """切换 DoT / DoH

        离开的配置被暂存，未编辑的一方在切换回来时保持原样。
        """
        current_kind = self.configuration_kind
        if kind is current_kind:
            return

        if self._section is not None:
            self._section.commit()

        self._stashed[current_kind] = copy.deepcopy(self._resolver.get().configuration)
        new_configuration = self._stashed.pop(kind, None) or default_configuration(kind)

        self._section = None
        self._focus.transition(None)
        self._replace_configuration(new_configuration)
        logger.info(f"解析器 '{self.name}' 切换为 {kind.display_name}")

    # ============== 焦点 ==============

    @property
    def focused_field(self) -> Optional[FocusedField]:
        return self._focus.current

    def focus_changed(self, new_field: Optional[FocusedField]):
        """焦点变化，离开所有输入框时提交暂存的编辑"""
        if self._focus.transition(new_field) and self._section is not None:
            self._section.commit()

    # ============== 按需规则 ==============

    @property
    def rules(self) -> List[OnDemandRule]:
        return copy.deepcopy(self._resolver.get().on_demand_rules)

    def _index_of_rule(self, rule_id: str) -> int:
        if self._rule_index is not None:
            index = self._rule_index(rule_id)
        else:
            index = self._resolver.get().rule_indexes().get(rule_id)

        if index is None:
            logger.critical(f"规则不在规则列表中: {rule_id}")
            raise RuleNotFoundError(f"Can't find rule in array: {rule_id}")
        return index

    def rule_binding(self, rule_id: str) -> Binding[OnDemandRule]:
        """单条规则的绑定，交给规则编辑对话框

        Raises:
            RuleNotFoundError: 规则 id 不在当前列表中
        """
        self._index_of_rule(rule_id)

        def getter() -> OnDemandRule:
            resolver = self._resolver.get()
            return copy.deepcopy(resolver.on_demand_rules[self._index_of_rule(rule_id)])

        def setter(rule: OnDemandRule):
            def mutate(resolver: Resolver):
                resolver.on_demand_rules[self._index_of_rule(rule_id)] = copy.deepcopy(rule)
            self._update(mutate)

        return Binding(getter, setter)

    def delete_rules(self, offsets: Iterable[int]):
        offsets = set(offsets)

        def mutate(resolver: Resolver):
            resolver.on_demand_rules = remove_offsets(resolver.on_demand_rules, offsets)
        self._update(mutate)

    def move_rules(self, offsets: Iterable[int], to_offset: int):
        offsets = set(offsets)

        def mutate(resolver: Resolver):
            resolver.on_demand_rules = move_offsets(resolver.on_demand_rules, offsets, to_offset)
        self._update(mutate)

    def add_rule(self) -> OnDemandRule:
        """在末尾追加一条默认名称的规则"""
        rule = OnDemandRule(name=DEFAULT_RULE_NAME)

        def mutate(resolver: Resolver):
            resolver.on_demand_rules.append(copy.deepcopy(rule))
        self._update(mutate)
        return rule
