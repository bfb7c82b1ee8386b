
from PySide6.QtCore import QObject, Signal

class StoreSignals(QObject):
    """解析器存储的变化信号"""
    resolvers_changed = Signal()          # 增删或排序，为 ui.main_window 刷新列表
    resolver_changed = Signal(str)        # 单个解析器内容变化，参数为解析器 id
    used_resolver_changed = Signal(str)   # 启用的解析器变化，参数为 id，未启用时为空字符串
