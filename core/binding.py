# -*- coding: utf-8 -*-
"""
Module: binding.py
Author: Takeshi
Date: 2026-01-12

Description:
    双向绑定：把外部持有的值以 get/set 的形式交给编辑器
"""

from typing import Callable, Generic, TypeVar

T = TypeVar('T')


class Binding(Generic[T]):
    """双向绑定

    编辑器只通过绑定读写数据，数据本身由外部（如 ResolverStore）持有。

    Example:
        >>> flag = Binding.constant(False)
        >>> flag.set(True)
        >>> flag.get()
        True
    """

    def __init__(self, getter: Callable[[], T], setter: Callable[[T], None]):
        self._getter = getter
        self._setter = setter

    def get(self) -> T:
        return self._getter()

    def set(self, value: T):
        self._setter(value)

    @classmethod
    def constant(cls, value: T) -> 'Binding[T]':
        """使用自身存储的绑定，用于预览和测试"""
        box = [value]

        def setter(new_value):
            box[0] = new_value

        return cls(lambda: box[0], setter)
