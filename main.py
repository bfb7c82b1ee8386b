# -*- coding: utf-8 -*-
"""
Module: main.py
Author: Takeshi
Date: 2026-01-12

Description:
    SecureDNSEditor 主程序入口
    此程序是自由软件：您可以根据自由软件基金会发布的 GNU 通用公共许可证条款重新发布和/或修改它；
    可以是该许可证的第3版，也可以是（在您的选择下）任何更新的版本。

    本程序是基于希望它有用而发布的，但没有任何保证；甚至没有对适销性或特定用途适用性的暗示保证。
    有关更多详细信息，请参阅 GNU 通用公共许可证。

    您应该已经收到一份 GNU 通用公共许可证的副本以及此程序。
    如果没有，请参阅 <http://www.gnu.org/licenses/>。
"""

import sys
import os
import logging
import traceback

from PySide6.QtWidgets import QApplication

from defaults.app_info import AppInfo
from defaults.config_manager import get_config_manager
from managers import LoggingManager, ResolverStore, StoreSignals
from ui import ErrorDialog, ResolverListWindow

logger = logging.getLogger(__name__)


# === 主应用类 ===
class MainApp:
    def __init__(self):
        self.app = QApplication.instance()
        if self.app is None:
            self.app = QApplication(sys.argv)
        self.app.setApplicationName(AppInfo.NAME)
        self.app.setApplicationVersion(AppInfo.VERSION)

        # 1. 加载配置
        self.config_manager = get_config_manager()

        # 2. 初始化日志管理器
        log_config = self.config_manager.get_config('LOG_CONFIG')
        self.logging_manager = LoggingManager()
        self.logging_manager.setup_logging(log_config)

        # 3. 初始化解析器存储
        self.store_signals = StoreSignals()
        self.store = ResolverStore(self.config_manager, self.store_signals)

        # 4. 初始化主窗口
        self.main_window = ResolverListWindow(self.store, self.store_signals)
        self.app.aboutToQuit.connect(self.quit_app)

        logger.info(f"✅ {AppInfo.NAME} {AppInfo.VERSION} 启动完成，共 {len(self.store)} 个解析器")

    def quit_app(self):
        """标准退出流程"""
        logger.info("正在退出程序...")
        try:
            if self.store.save():
                logger.info("✓ 配置已保存")
        finally:
            logger.info("✓ 退出日志系统……")
            self.logging_manager.shutdown()

    def run(self):
        """显示主窗口并启动事件循环"""
        self.main_window.show()
        return self.app.exec()


# === 主函数 ===
def main():
    # 配置文件和日志使用相对路径
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [PID:%(process)d] %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"🚀 应用程序启动，当前进程 PID: {os.getpid()}")

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)

    exit_code = 0
    try:
        app_instance = MainApp()
        exit_code = app_instance.run()

    except Exception:
        error_msg = traceback.format_exc()
        logger.error(f"主程序发生未处理异常:\n{error_msg}")

        error_dialog = ErrorDialog(error_msg)
        error_dialog.exec()
        exit_code = 1

    finally:
        logger.info("👋 应用已退出")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
