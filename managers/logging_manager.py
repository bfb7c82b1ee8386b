# -*- coding: utf-8 -*-
"""
Module: logging_manager.py
Author: Takeshi
Date: 2026-01-12

Description:
    日志管理器：根据 LOG_CONFIG 配置控制台和文件日志
"""

import logging
import logging.handlers
import os
import sys
from typing import List

import colorlog

from defaults.log_default import LogConfig, ConsoleLogConfig, FileLogConfig


logger = logging.getLogger(__name__)


class LoggingManager:
    """日志管理器

    控制台处理器全局只保留一个，文件处理器由本管理器创建和回收，
    重复调用 setup_logging 不会叠加文件处理器。
    """

    def __init__(self):
        self.is_initialized = False
        self._file_handlers: List[logging.Handler] = []

    def setup_logging(self, log_config: LogConfig):
        root_logger = logging.getLogger()
        # 根日志放行全部级别，由各处理器过滤
        root_logger.setLevel(logging.DEBUG)

        self._remove_file_handlers()
        self._cleanup_duplicate_handlers()

        if log_config.console.enabled:
            self._setup_console_logging(log_config.console)

        for file_config in log_config.file:
            if file_config.enabled:
                self._add_file_handler(file_config)

        self.is_initialized = True
        logger.info(f"日志系统初始化完成，文件日志 {len(self._file_handlers)} 个")

    # ============== 文件日志 ==============

    def _add_file_handler(self, config: FileLogConfig):
        try:
            log_dir = os.path.dirname(config.filename)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            handler = logging.handlers.RotatingFileHandler(
                filename=config.filename,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding='utf-8',
            )
        except OSError as e:
            # 文件日志不可用时继续运行，只丢失这一路日志
            logger.error(f"❌ 无法打开日志文件 {config.filename}: {e}")
            return

        handler.setLevel(config.level_no)
        handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
        logging.getLogger().addHandler(handler)
        self._file_handlers.append(handler)
        logger.debug(f"文件日志: {config.filename} ({config.level})")

    def _remove_file_handlers(self):
        root_logger = logging.getLogger()
        for handler in self._file_handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._file_handlers.clear()

    # ============== 控制台日志 ==============

    @staticmethod
    def _is_console_handler(handler: logging.Handler) -> bool:
        if isinstance(handler, logging.FileHandler):
            return False
        if not isinstance(handler, logging.StreamHandler):
            return False
        stream = getattr(handler, 'stream', None)
        return stream in (sys.stdout, sys.stderr) or stream is None

    def _cleanup_duplicate_handlers(self):
        """控制台处理器只保留第一个"""
        root_logger = logging.getLogger()
        console_handlers = [h for h in root_logger.handlers if self._is_console_handler(h)]
        for handler in console_handlers[1:]:
            root_logger.removeHandler(handler)
            logger.debug(f"移除重复的控制台处理器: {type(handler).__name__}")

    def _find_existing_console_handler(self):
        for handler in logging.getLogger().handlers:
            if self._is_console_handler(handler):
                return handler
        return None

    def _setup_console_logging(self, console_config: ConsoleLogConfig):
        console_handler = self._find_existing_console_handler()
        if console_handler is None:
            console_handler = logging.StreamHandler()
            logging.getLogger().addHandler(console_handler)

        if console_config.color_enabled:
            formatter = colorlog.ColoredFormatter(
                '%(log_color)s' + console_config.format,
                datefmt=console_config.date_format,
                log_colors=console_config.log_color,
            )
        else:
            formatter = logging.Formatter(console_config.format,
                                          datefmt=console_config.date_format)

        console_handler.setFormatter(formatter)
        console_handler.setLevel(console_config.level_no)

    def shutdown(self):
        """关闭日志系统"""
        self._remove_file_handlers()
        logging.shutdown()
