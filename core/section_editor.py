# -*- coding: utf-8 -*-
"""
Module: section_editor.py
Author: Takeshi
Date: 2026-01-12

Description:
    DoT / DoH 配置区的编辑逻辑

    每个配置区持有一份工作副本：
    - 服务器列表的增删、排序立即写回
    - 地址、服务器名称、服务器URL的输入只改工作副本，由焦点离开时的 commit() 写回
"""

import copy
import logging
from typing import Callable, Iterable, List, Optional

from defaults.resolver_default import (
    Configuration, ConfigurationKind, DoTConfiguration, DoHConfiguration,
)
from utils.list_ops import remove_offsets, move_offsets
from utils.url_utils import parse_url

logger = logging.getLogger(__name__)


class ServerSectionEditor:
    """配置区编辑器基类"""

    kind: ConfigurationKind

    def __init__(self, configuration: Configuration,
                 commit_callback: Callable[[Configuration], None]):
        """
        Args:
            configuration: 当前已提交的配置，会复制一份作为工作副本
            commit_callback: 写回配置的回调，每次传入完整的新配置
        """
        self._servers: List[str] = list(configuration.servers)
        self._commit_callback = commit_callback

    @property
    def servers(self) -> List[str]:
        return self._servers.copy()

    def set_server(self, index: int, text: str):
        """修改某个地址（去掉首尾空白），只更新工作副本"""
        self._servers[index] = text.strip()

    def add_server(self):
        """追加一个空地址并立即写回"""
        self._servers.append("")
        self.commit()

    def delete_servers(self, offsets: Iterable[int]):
        """删除指定下标的地址并立即写回"""
        self._servers = remove_offsets(self._servers, offsets)
        self.commit()

    def move_servers(self, offsets: Iterable[int], to_offset: int):
        """移动指定下标的地址并立即写回"""
        self._servers = move_offsets(self._servers, offsets, to_offset)
        self.commit()

    def snapshot(self) -> Configuration:
        """根据工作副本生成完整配置"""
        raise NotImplementedError

    def commit(self):
        """把工作副本整体写回绑定的配置"""
        configuration = self.snapshot()
        logger.debug(f"提交{self.kind.display_name}配置: {configuration}")
        self._commit_callback(copy.deepcopy(configuration))


class DoTSectionEditor(ServerSectionEditor):
    """DNS-over-TLS 配置区"""

    kind = ConfigurationKind.DNS_OVER_TLS

    def __init__(self, configuration: DoTConfiguration,
                 commit_callback: Callable[[Configuration], None]):
        super().__init__(configuration, commit_callback)
        self._server_name: Optional[str] = configuration.server_name

    @property
    def server_name(self) -> Optional[str]:
        return self._server_name

    @property
    def server_name_text(self) -> str:
        return self._server_name or ""

    def set_server_name(self, text: str):
        self._server_name = text.strip()

    def snapshot(self) -> DoTConfiguration:
        return DoTConfiguration(servers=self.servers, server_name=self._server_name)


class DoHSectionEditor(ServerSectionEditor):
    """DNS-over-HTTPS 配置区

    URL输入保存原始文本，提交时才解析，无效文本提交为 None。
    """

    kind = ConfigurationKind.DNS_OVER_HTTPS

    def __init__(self, configuration: DoHConfiguration,
                 commit_callback: Callable[[Configuration], None]):
        super().__init__(configuration, commit_callback)
        self._server_url_text: str = configuration.server_url or ""

    @property
    def server_url_text(self) -> str:
        return self._server_url_text

    @property
    def server_url(self) -> Optional[str]:
        return parse_url(self._server_url_text)

    def set_server_url_text(self, text: str):
        self._server_url_text = text

    def snapshot(self) -> DoHConfiguration:
        return DoHConfiguration(servers=self.servers, server_url=self.server_url)


def create_section_editor(configuration: Configuration,
                          commit_callback: Callable[[Configuration], None]) -> ServerSectionEditor:
    """按配置类型创建对应的配置区编辑器"""
    if isinstance(configuration, DoTConfiguration):
        return DoTSectionEditor(configuration, commit_callback)
    elif isinstance(configuration, DoHConfiguration):
        return DoHSectionEditor(configuration, commit_callback)
    raise TypeError(f"未知的解析器配置类型: {type(configuration).__name__}")
