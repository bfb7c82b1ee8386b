"""
UI 模块包
"""

from .error_dialog import ErrorDialog
from .rule_dialog import RuleEditDialog
from .server_section import DoTSectionWidget, DoHSectionWidget
from .detail_view import ResolverDetailWidget
from .main_window import ResolverListWindow

__all__ = [
    'ErrorDialog',
    'RuleEditDialog',
    'DoTSectionWidget',
    'DoHSectionWidget',
    'ResolverDetailWidget',
    'ResolverListWindow',
    ]
