"""
核心功能模块包
"""

from .binding import Binding
from .focus import FocusedField, FocusTracker
from .section_editor import ServerSectionEditor, DoTSectionEditor, DoHSectionEditor
from .resolver_editor import ResolverEditor, RuleNotFoundError


__all__ = [
    'Binding',
    'FocusedField',
    'FocusTracker',
    'ServerSectionEditor',
    'DoTSectionEditor',
    'DoHSectionEditor',
    'ResolverEditor',
    'RuleNotFoundError',
]
