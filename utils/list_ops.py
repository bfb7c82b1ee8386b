# -*- coding: utf-8 -*-
"""
Module: list_ops.py
Author: Takeshi
Date: 2026-01-12

Description:
    按下标集合删除、移动列表元素（列表编辑器的删除/拖动排序语义）
"""

from typing import Iterable, List, TypeVar

T = TypeVar('T')


def _normalize_offsets(items: List[T], offsets: Iterable[int]) -> List[int]:
    result = sorted(set(offsets))
    for index in result:
        if index < 0 or index >= len(items):
            raise IndexError(f"下标 {index} 超出范围 (0-{len(items) - 1})")
    return result


def remove_offsets(items: List[T], offsets: Iterable[int]) -> List[T]:
    """删除指定下标的元素，返回新列表

    Args:
        items: 原列表（不会被修改）
        offsets: 要删除的下标集合

    Returns:
        删除后的新列表
    """
    removed = set(_normalize_offsets(items, offsets))
    return [item for i, item in enumerate(items) if i not in removed]


def move_offsets(items: List[T], offsets: Iterable[int], to_offset: int) -> List[T]:
    """移动指定下标的元素，返回新列表

    被移动的元素保持相对顺序，插入到原列表中 to_offset 位置的元素之前，
    to_offset 等于列表长度时表示移到末尾。

    Example:
        >>> move_offsets(['a', 'b', 'c', 'd'], {0}, 3)
        ['b', 'c', 'a', 'd']
        >>> move_offsets(['a', 'b', 'c', 'd'], {3}, 0)
        ['d', 'a', 'b', 'c']
    """
    if to_offset < 0 or to_offset > len(items):
        raise IndexError(f"目标位置 {to_offset} 超出范围 (0-{len(items)})")

    indexes = _normalize_offsets(items, offsets)
    moving_set = set(indexes)
    moving = [items[i] for i in indexes]
    remaining = [item for i, item in enumerate(items) if i not in moving_set]

    # 目标位置之前被移走的元素不再占位
    insert_at = to_offset - sum(1 for i in indexes if i < to_offset)
    return remaining[:insert_at] + moving + remaining[insert_at:]
