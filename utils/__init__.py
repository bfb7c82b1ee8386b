"""
工具模块包
"""

from .list_ops import remove_offsets, move_offsets
from .url_utils import parse_url


__all__ = [
    'remove_offsets',
    'move_offsets',
    'parse_url',
]
