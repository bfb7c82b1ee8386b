# -*- coding: utf-8 -*-
"""
Module: log_default.py
Author: Takeshi
Date: 2026-01-12

Description:
    日志配置：控制台输出 + 若干个轮转日志文件
"""

import logging
from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Any, List

# 允许的日志级别
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _level_no(level: str) -> int:
    """级别名转换为 logging 常量，无效名称按 INFO 处理"""
    name = str(level).upper()
    if name not in LOG_LEVELS:
        return logging.INFO
    return logging.getLevelName(name)


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """只保留 dataclass 中定义过的键，缺失的字段由默认值补齐"""
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass
class ConsoleLogConfig:
    """
    控制台日志

    Attributes:
        enabled (bool): 是否输出到控制台
        level (str): 日志级别，取值见 LOG_LEVELS
        format (str): 日志格式
        date_format (str): 时间格式，控制台只显示月日和时间
        color_enabled (bool): 是否使用 colorlog 彩色输出
        log_color (Dict[str, str]): 级别名 -> colorlog 颜色
    """

    enabled: bool = True
    level: str = 'DEBUG'
    format: str = DEFAULT_LOG_FORMAT
    date_format: str = '%m-%d %H:%M:%S'
    color_enabled: bool = True
    log_color: Dict[str, str] = field(default_factory=lambda: {
        'DEBUG': 'cyan',
        'INFO': 'green',
        'WARNING': 'yellow',
        'ERROR': 'red',
        'CRITICAL': 'red,bg_white',
    })

    @property
    def level_no(self) -> int:
        return _level_no(self.level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConsoleLogConfig':
        config = cls(**_known_fields(cls, data))
        if not config.log_color:
            config.log_color = cls().log_color
        return config


@dataclass
class FileLogConfig:
    """
    文件日志，写满 max_size_mb 后轮转，保留 backup_count 个旧文件

    目录不存在时由 LoggingManager 创建。
    """

    enabled: bool = True
    level: str = 'INFO'
    format: str = DEFAULT_LOG_FORMAT
    date_format: str = '%Y-%m-%d %H:%M:%S'
    filename: str = 'logs/secure_dns_info.log'
    max_size_mb: int = 10
    backup_count: int = 3

    @property
    def level_no(self) -> int:
        return _level_no(self.level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileLogConfig':
        return cls(**_known_fields(cls, data))


@dataclass
class LogConfig:
    """
    日志配置（对应配置文件中的 LOG_CONFIG）

    Example:
        >>> config = LogConfig(file=[FileLogConfig(filename='logs/editor_error.log', level='ERROR')])
        >>> config.to_dict()['file'][0]['level']
        'ERROR'
    """

    console: ConsoleLogConfig = field(default_factory=ConsoleLogConfig)
    file: List[FileLogConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'console': self.console.to_dict(),
            'file': [item.to_dict() for item in self.file],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LogConfig':
        return cls(
            console=ConsoleLogConfig.from_dict(data.get('console', {})),
            file=[FileLogConfig.from_dict(item) for item in data.get('file', [])],
        )

    @classmethod
    def get_default_config(cls) -> 'LogConfig':
        """调试日志默认关闭，只写 INFO 日志"""
        return cls(
            console=ConsoleLogConfig(),
            file=[
                FileLogConfig(enabled=False, level='DEBUG',
                              filename='logs/secure_dns_debug.log',
                              max_size_mb=50, backup_count=1),
                FileLogConfig(filename='logs/secure_dns_info.log',
                              max_size_mb=20),
            ],
        )
