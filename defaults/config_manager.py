# -*- coding: utf-8 -*-
"""
Module: config_manager.py
Author: Takeshi
Date: 2026-01-12

Description:
    配置管理器，中心化管理配置信息
"""


import copy
import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# 导入所有配置类
from .resolver_default import ResolversConfig
from .log_default import LogConfig
from .user_default import USER_CONFIG_FILE


class ConfigError(Exception):
    """配置相关错误"""
    pass


# 配置类型映射
_CONFIG_CLASSES = {
    'RESOLVERS_CONFIG': ResolversConfig,
    'LOG_CONFIG': LogConfig,
}

# 配置保存顺序
CONFIG_SAVE_ORDER = [
    'RESOLVERS_CONFIG',
    'LOG_CONFIG',
]


class ConfigManager:
    """配置管理器 - 使用dataclass自带的转换方法

        Config Types:
            - RESOLVERS_CONFIG: 解析器列表及当前启用的解析器
            - LOG_CONFIG: 日志配置

        Example:
            >>> manager = get_config_manager()
            >>> resolvers_config = manager.get_config('RESOLVERS_CONFIG')
            >>> manager.set_config('RESOLVERS_CONFIG', resolvers_config)
            >>> manager.save()
        """

    def __init__(self, config_path: str = USER_CONFIG_FILE):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，默认为用户配置路径
        """
        self.config_path = Path(config_path)
        self.config_dir = self.config_path.parent
        self.backup_path = self.config_path.with_name(self.config_path.name + '.bak')

        self._configs = {}
        # 配置文件有内容无法解析时为 True，首次保存前先备份原文件
        self.load_failed = False
        self._load_configs()

    def _load_configs(self):
        """加载所有配置

        先设置默认值，配置文件存在时再覆盖。
        文件或某个配置项无法解析时只记录日志，对应部分保留默认值。
        """
        for name, cls in _CONFIG_CLASSES.items():
            self._configs[name] = cls.get_default_config()

        if not self.config_path.exists():
            logger.info(f"配置文件不存在，使用默认配置: {self.config_path}")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                file_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"加载配置失败: {e}")
            self.load_failed = True
            return

        if not isinstance(file_data, dict):
            logger.error(f"配置文件格式错误，期望字典，得到 {type(file_data).__name__}")
            self.load_failed = True
            return

        for config_name in CONFIG_SAVE_ORDER:
            if config_name in file_data:
                self._apply_config_data(config_name, file_data[config_name])
            else:
                logger.warning(f"配置文件中缺少配置项: {config_name}")

        for config_name in file_data:
            if config_name not in _CONFIG_CLASSES:
                logger.warning(f"未知配置项: {config_name}")

        logger.info(f"配置加载完成: {self.config_path}")

    def _apply_config_data(self, config_name: str, config_data: Any):
        """应用配置数据，解析失败保留默认值"""
        try:
            self._configs[config_name] = _CONFIG_CLASSES[config_name].from_dict(config_data)
        except Exception as e:
            logger.error(f"解析配置 {config_name} 失败，使用默认值: {e}")
            self.load_failed = True

    # ============== 核心公共接口 ==============

    def get_config(self, config_name: str) -> Any:
        """获取配置对象的深拷贝

        Raises:
            ConfigError: 当配置名不存在时
        """
        if config_name not in self._configs:
            raise ConfigError(f"未知配置: {config_name}")

        return copy.deepcopy(self._configs[config_name])

    def set_config(self, config_name: str, config: Any):
        """设置配置对象

        Raises:
            ConfigError: 当配置名不存在或类型不匹配时

        Note:
            此方法不自动保存，需要调用save()方法持久化
        """
        if config_name not in self._configs:
            raise ConfigError(f"未知配置: {config_name}")

        expected_cls = _CONFIG_CLASSES[config_name]
        if not isinstance(config, expected_cls):
            raise ConfigError(f"{config_name} 必须是 {expected_cls.__name__}，"
                              f"得到 {type(config).__name__}")

        self._configs[config_name] = copy.deepcopy(config)

    def _backup_unreadable_file(self):
        """原文件无法解析时，覆盖前先复制为 .bak"""
        if not self.load_failed or not self.config_path.exists():
            return
        shutil.copy2(self.config_path, self.backup_path)
        logger.warning(f"原配置文件无法解析，已备份到: {self.backup_path}")

    def save(self) -> bool:
        """按照指定顺序保存所有配置到文件

        Returns:
            bool: 保存是否成功，失败会记录错误但不抛出异常
        """
        try:
            save_data = {name: self._configs[name].to_dict()
                         for name in CONFIG_SAVE_ORDER}

            self.config_dir.mkdir(parents=True, exist_ok=True)
            self._backup_unreadable_file()
            self.load_failed = False
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(save_data, f, ensure_ascii=False, indent=4)

            logger.debug(f"配置已保存: {self.config_path}")
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"保存配置失败: {e}")
            return False


# ============== 全局单例 ==============

_config_manager_instance = None

def get_config_manager(config_path: str = USER_CONFIG_FILE) -> ConfigManager:
    """获取配置管理器单例"""
    global _config_manager_instance
    if _config_manager_instance is None:
        _config_manager_instance = ConfigManager(config_path)
    return _config_manager_instance
