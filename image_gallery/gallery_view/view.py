# -*- coding: utf-8 -*-
"""
gallery_view.view
=================
图库视图（GalleryView）：监听选择服务，把选中节点下的图片渲染为缩略图网格。

一次选择变化即一次完整的渲染：
解析选择 → 去重 → 扩展名过滤 → 排序 → 清空旧条目（释放位图）→ 逐个解码 → 重绘。
单个资源解码失败只记录日志并跳过，不影响同批其它资源。
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

try:
    from PyQt6.QtWidgets import QVBoxLayout, QWidget
    from PyQt6.QtCore import pyqtSignal
except ImportError:
    from PyQt5.QtWidgets import QVBoxLayout, QWidget
    from PyQt5.QtCore import pyqtSignal

from image_gallery.gallery_view.config import GallerySettings, load_gallery_settings
from image_gallery.gallery_view.decoder import Bitmap, DecodeError, ImageDecoder
from image_gallery.gallery_view.grid import ThumbnailGrid
from image_gallery.gallery_view.items import (
    SizeClass,
    ThumbnailItem,
    choose_size_class,
    format_status,
    pixel_size_for,
)
from image_gallery.launcher import launch_with_default_app
from image_gallery.log import get_logger
from image_gallery.resources import FileResource, StorageResource, collect_gallery_resources
from image_gallery.selection import SelectionService, StructuredSelection

_log = get_logger("gallery_view")


class PanelState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class GalleryView(QWidget):
    """
    缩略图视图。

    :param selection_service: 宿主的选择广播服务；构造时注册，``dispose()`` 时注销
    :param settings: 可选，图库配置（默认读取 gallery.cfg）
    :param decoder: 可选，图像解码器（默认按配置创建，并探测一次 SVG 支持）
    :param launcher: 可选，双击普通文件时调用 ``launcher(path)``
    """

    status_changed = pyqtSignal(str)

    def __init__(
        self,
        selection_service: SelectionService,
        parent=None,
        *,
        settings: GallerySettings | None = None,
        decoder: ImageDecoder | None = None,
        launcher: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or load_gallery_settings()
        self._decoder = decoder or ImageDecoder(max_edge=self._settings.decode_max_edge)
        self._launcher = launcher or launch_with_default_app
        self._service = selection_service
        self._items: dict[int, ThumbnailItem] = {}
        self._order: list[int] = []
        self._next_id = 1
        self._size_class = SizeClass.SMALL
        self._status = ""
        self._disposed = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self._grid = ThumbnailGrid(
            self,
            item_size=self._settings.small_size,
            min_margin=self._settings.min_margin,
        )
        self._grid.item_hovered.connect(self._on_item_hovered)
        self._grid.currentItemChanged.connect(self._on_current_item_changed)
        self._grid.item_double_clicked.connect(self.handle_double_click)
        layout.addWidget(self._grid)
        self.destroyed.connect(lambda *_: self._release_after_destroy())

        self._service.add_selection_listener(self.selection_changed)
        self.selection_changed(self._service.get_source(), self._service.get_selection())

    # ── 查询 ──────────────────────────────────────────────────────────────────
    @property
    def grid(self) -> ThumbnailGrid:
        return self._grid

    @property
    def settings(self) -> GallerySettings:
        return self._settings

    @property
    def size_class(self) -> SizeClass:
        return self._size_class

    @property
    def state(self) -> PanelState:
        return PanelState.POPULATED if self._items else PanelState.EMPTY

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def thumbnail_items(self) -> list[ThumbnailItem]:
        return [self._items[i] for i in self._order]

    def displayed_names(self) -> list[str]:
        return [item.name for item in self.thumbnail_items()]

    def status_text(self) -> str:
        return self._status

    def set_focus(self) -> None:
        if not self._disposed:
            self._grid.setFocus()

    # ── 选择变化 ──────────────────────────────────────────────────────────────
    def selection_changed(self, source: Any, selection: Any) -> None:
        if self._disposed:
            return
        if selection is None:
            nodes: tuple = ()
        elif isinstance(selection, StructuredSelection):
            nodes = selection.elements
        else:
            self._set_status("")
            return

        resources = collect_gallery_resources(nodes, self._settings.extensions)
        size_class = choose_size_class(self._settings.size_policy, nodes, resources)
        _log.debug(
            "[selection_changed] source=%r nodes=%d images=%d size=%s",
            source, len(nodes), len(resources), size_class.value,
        )
        self._render(resources, size_class)
        self._set_status("")

    def _render(self, resources: list[StorageResource], size_class: SizeClass) -> None:
        self._clear_items()
        self._size_class = size_class
        self._grid.set_item_size(pixel_size_for(size_class, self._settings))
        for resource in resources:
            if not self._decoder.can_decode(resource):
                _log.debug("[_render] unsupported format skipped name=%r", resource.name)
                continue
            try:
                bitmap = self._decoder.decode(resource)
            except DecodeError as exc:
                _log.error("[_render] decode failed path=%r", resource.full_path, exc_info=exc)
                continue
            self._add_thumbnail(resource, bitmap, size_class)
        self._grid.redraw()

    def _add_thumbnail(self, resource: StorageResource, bitmap: Bitmap, size_class: SizeClass) -> None:
        item_id = self._next_id
        self._next_id += 1
        try:
            self._grid.add_item(resource.name, bitmap, item_id)
        except Exception as exc:
            bitmap.dispose()
            _log.error("[_add_thumbnail] cannot add item path=%r", resource.full_path, exc_info=exc)
            return
        self._items[item_id] = ThumbnailItem(item_id, resource, bitmap, size_class)
        self._order.append(item_id)

    def _clear_items(self) -> None:
        """清空网格条目并释放全部位图。"""
        held = list(self._items.values())
        self._items.clear()
        self._order.clear()
        try:
            self._grid.clear_items()
        finally:
            for item in held:
                item.bitmap.dispose()

    # ── 悬停 / 选中 / 双击 ────────────────────────────────────────────────────
    def _thumbnail_for(self, grid_item) -> ThumbnailItem | None:
        item_id = ThumbnailGrid.item_id_of(grid_item)
        return self._items.get(item_id) if item_id is not None else None

    def _set_status(self, text: str) -> None:
        if text != self._status:
            self._status = text
            self.status_changed.emit(text)

    def _on_item_hovered(self, grid_item) -> None:
        if grid_item is None:
            grid_item = self._grid.currentItem()
        self._set_status(format_status(self._thumbnail_for(grid_item)))

    def _on_current_item_changed(self, current, _previous) -> None:
        self._set_status(format_status(self._thumbnail_for(current)))

    def handle_double_click(self, point) -> None:
        """双击普通文件时用系统默认程序打开；空白处或虚拟资源不做处理。"""
        if self._disposed:
            return
        item = self._thumbnail_for(self._grid.item_at(point))
        if item is None:
            return
        resource = item.resource
        if isinstance(resource, FileResource) and resource.location:
            _log.info("[handle_double_click] launch path=%r", resource.location)
            self._launcher(resource.location)

    # ── 释放 ──────────────────────────────────────────────────────────────────
    def dispose(self) -> None:
        """注销选择监听，先释放全部位图，再销毁网格控件。可重复调用。"""
        if self._disposed:
            return
        self._disposed = True
        self._service.remove_selection_listener(self.selection_changed)
        self._clear_items()
        self._grid.item_hovered.disconnect(self._on_item_hovered)
        self._grid.currentItemChanged.disconnect(self._on_current_item_changed)
        self._grid.item_double_clicked.disconnect(self.handle_double_click)
        self._grid.setParent(None)
        self._grid.deleteLater()
        self._set_status("")

    def _release_after_destroy(self) -> None:
        """Qt 对象已被父控件销毁而未调用 dispose()：注销监听并释放位图，不再访问任何 Qt 对象。"""
        if self._disposed:
            return
        self._disposed = True
        self._service.remove_selection_listener(self.selection_changed)
        held = list(self._items.values())
        self._items.clear()
        self._order.clear()
        for item in held:
            item.bitmap.dispose()
