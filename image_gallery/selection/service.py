# -*- coding: utf-8 -*-
"""
selection.service
=================
选择广播服务：选择提供方（如目录树）调用 ``set_selection``，
已注册的监听者按注册顺序收到 ``listener(source, selection)`` 回调。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from image_gallery.log import get_logger

_log = get_logger("selection")

SelectionListener = Callable[[Any, Any], None]


@dataclass(frozen=True)
class StructuredSelection:
    """有序、不可变的节点选择。"""

    elements: tuple = ()

    @classmethod
    def of(cls, *nodes) -> "StructuredSelection":
        return cls(tuple(nodes))

    @property
    def first_element(self):
        return self.elements[0] if self.elements else None

    def is_empty(self) -> bool:
        return not self.elements

    def __iter__(self) -> Iterator:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


EMPTY_SELECTION = StructuredSelection()


class SelectionService:
    def __init__(self) -> None:
        self._listeners: list[SelectionListener] = []
        self._selection: Any = None
        self._source: Any = None

    def add_selection_listener(self, listener: SelectionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_selection_listener(self, listener: SelectionListener) -> bool:
        """移除监听者；未注册时返回 False。"""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listener_count(self) -> int:
        return len(self._listeners)

    def get_selection(self) -> Any:
        return self._selection

    def get_source(self) -> Any:
        return self._source

    def set_selection(self, source: Any, selection: Any) -> None:
        """记录当前选择并广播；单个监听者出错不影响其它监听者。"""
        self._source = source
        self._selection = selection
        for listener in list(self._listeners):
            try:
                listener(source, selection)
            except Exception as exc:
                _log.error("[set_selection] listener %r failed", listener, exc_info=exc)
