# -*- coding: utf-8 -*-
"""
gallery_view.grid
=================
缩略图网格（QListWidget 图标模式 + 自定义 delegate）。

对外接口：
- ``set_item_size(px)`` / ``add_item(label, bitmap, item_id)`` / ``clear_items()``
- ``redraw()`` / ``item_at(point)`` / ``item_id_of(item)``
- 信号 ``item_hovered(object)``：鼠标下的条目变化（离开条目时为 None）
- 信号 ``item_double_clicked(object)``：双击位置（viewport 坐标 QPoint）
"""
from __future__ import annotations

try:
    from PyQt6.QtWidgets import (
        QAbstractItemView, QListView, QListWidget, QListWidgetItem,
        QStyle, QStyledItemDelegate, QStyleOptionViewItem,
    )
    from PyQt6.QtCore import QPoint, QRect, QSize, Qt, pyqtSignal
    from PyQt6.QtGui import QBrush, QColor, QPainter, QPixmap
except ImportError:
    from PyQt5.QtWidgets import (
        QAbstractItemView, QListView, QListWidget, QListWidgetItem,
        QStyle, QStyledItemDelegate, QStyleOptionViewItem,
    )
    from PyQt5.QtCore import QPoint, QRect, QSize, Qt, pyqtSignal
    from PyQt5.QtGui import QBrush, QColor, QPainter, QPixmap

from image_gallery.gallery_view.decoder import TILE_BACKGROUND, Bitmap

# ── Qt 兼容常量 ────────────────────────────────────────────────────────────────
try:
    _AlignCenter = Qt.AlignmentFlag.AlignCenter
except AttributeError:
    _AlignCenter = Qt.AlignCenter  # type: ignore[attr-defined]

try:
    _UserRole = Qt.ItemDataRole.UserRole
except AttributeError:
    _UserRole = Qt.UserRole  # type: ignore[attr-defined]

try:
    _ElideRight = Qt.TextElideMode.ElideRight
except AttributeError:
    _ElideRight = Qt.ElideRight  # type: ignore[attr-defined]

try:
    _StateSelected = QStyle.StateFlag.State_Selected
    _StateMouseOver = QStyle.StateFlag.State_MouseOver
except AttributeError:
    _StateSelected = QStyle.State_Selected  # type: ignore[attr-defined]
    _StateMouseOver = QStyle.State_MouseOver  # type: ignore[attr-defined]

try:
    _ViewModeIcon = QListView.ViewMode.IconMode
    _ResizeAdjust = QListView.ResizeMode.Adjust
    _MovementStatic = QListView.Movement.Static
except AttributeError:
    _ViewModeIcon = QListView.IconMode  # type: ignore[attr-defined]
    _ResizeAdjust = QListView.Adjust  # type: ignore[attr-defined]
    _MovementStatic = QListView.Static  # type: ignore[attr-defined]

try:
    _SingleSelection = QAbstractItemView.SelectionMode.SingleSelection
    _ScrollPerPixel = QAbstractItemView.ScrollMode.ScrollPerPixel
except AttributeError:
    _SingleSelection = QAbstractItemView.SingleSelection  # type: ignore[attr-defined]
    _ScrollPerPixel = QAbstractItemView.ScrollPerPixel  # type: ignore[attr-defined]

try:
    _PainterSmoothPixmap = QPainter.RenderHint.SmoothPixmapTransform
except AttributeError:
    _PainterSmoothPixmap = QPainter.SmoothPixmapTransform  # type: ignore[attr-defined]

_ThumbPixmapRole = int(_UserRole) + 20
_ItemIdRole = int(_UserRole) + 21

_LABEL_HEIGHT = 18


def fit_without_upscale(src_w: int, src_h: int, max_w: int, max_h: int) -> tuple[int, int]:
    """等比缩放到 max 框内，小图保持原尺寸不放大。"""
    if src_w <= 0 or src_h <= 0 or max_w <= 0 or max_h <= 0:
        return 0, 0
    scale = min(max_w / float(src_w), max_h / float(src_h), 1.0)
    return max(1, int(src_w * scale)), max(1, int(src_h * scale))


class ThumbnailItemDelegate(QStyledItemDelegate):
    """缩略图 delegate：圆角底板 + 等比居中的图像 + 省略的文件名。"""

    def sizeHint(self, option, index):
        widget = option.widget
        if widget is not None:
            grid = widget.gridSize()
            if grid.isValid():
                return grid
        return super().sizeHint(option, index)

    def paint(self, painter: QPainter, option, index) -> None:
        opt = QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        selected = bool(opt.state & _StateSelected)
        hovered = bool(opt.state & _StateMouseOver)
        name = str(index.data() or "")
        pixmap = index.data(_ThumbPixmapRole)
        if not isinstance(pixmap, QPixmap):
            pixmap = None

        painter.save()
        try:
            if selected:
                painter.fillRect(opt.rect, opt.palette.highlight())
            elif hovered:
                painter.fillRect(opt.rect, QColor(255, 255, 255, 16))

            margin = getattr(opt.widget, "min_margin", 2) if opt.widget is not None else 2
            cell = opt.rect.adjusted(margin, margin, -margin, -margin)
            thumb_rect = QRect(cell.left(), cell.top(), cell.width(), max(8, cell.height() - _LABEL_HEIGHT))

            painter.setBrush(QBrush(QColor(*TILE_BACKGROUND)))
            painter.setPen(QColor(70, 70, 70))
            painter.drawRoundedRect(thumb_rect, 4, 4)

            if pixmap is not None and not pixmap.isNull():
                draw_w, draw_h = fit_without_upscale(
                    pixmap.width(), pixmap.height(), thumb_rect.width() - 4, thumb_rect.height() - 4
                )
                draw_rect = QRect(
                    thumb_rect.left() + (thumb_rect.width() - draw_w) // 2,
                    thumb_rect.top() + (thumb_rect.height() - draw_h) // 2,
                    draw_w,
                    draw_h,
                )
                painter.setRenderHint(_PainterSmoothPixmap)
                painter.drawPixmap(draw_rect, pixmap)

            text_rect = QRect(cell.left(), thumb_rect.bottom() + 2, cell.width(), _LABEL_HEIGHT)
            text_color = opt.palette.highlightedText().color() if selected else opt.palette.text().color()
            painter.setPen(text_color)
            painter.setFont(opt.font)
            elided = painter.fontMetrics().elidedText(name, _ElideRight, text_rect.width())
            painter.drawText(text_rect, _AlignCenter, elided)
        finally:
            painter.restore()


class ThumbnailGrid(QListWidget):
    item_hovered = pyqtSignal(object)
    item_double_clicked = pyqtSignal(object)

    def __init__(self, parent=None, *, item_size: int = 64, min_margin: int = 2) -> None:
        super().__init__(parent)
        self.min_margin = max(0, int(min_margin))
        self._item_size = item_size
        self._hovered: QListWidgetItem | None = None

        self.setViewMode(_ViewModeIcon)
        self.setItemDelegate(ThumbnailItemDelegate(self))
        self.setSelectionMode(_SingleSelection)
        self.setResizeMode(_ResizeAdjust)
        self.setMovement(_MovementStatic)
        self.setUniformItemSizes(True)
        self.setVerticalScrollMode(_ScrollPerPixel)
        self.setWrapping(True)
        self.setMouseTracking(True)
        self.setStyleSheet("QListWidget { font-size: 11px; }")
        self.set_item_size(item_size)

    # ── 网格操作 ──────────────────────────────────────────────────────────────
    def item_size(self) -> int:
        return self._item_size

    def _cell_size(self) -> QSize:
        s = self._item_size
        pad = 2 * self.min_margin + 4
        return QSize(s + pad, s + pad + _LABEL_HEIGHT)

    def set_item_size(self, size: int) -> None:
        self._item_size = max(1, int(size))
        self.setIconSize(QSize(self._item_size, self._item_size))
        cell = self._cell_size()
        self.setGridSize(cell)
        for i in range(self.count()):
            it = self.item(i)
            if it is not None:
                it.setSizeHint(cell)

    def add_item(self, label: str, bitmap: Bitmap, item_id: int) -> QListWidgetItem:
        item = QListWidgetItem(label)
        if bitmap.image is not None:
            item.setData(_ThumbPixmapRole, QPixmap.fromImage(bitmap.image))
        item.setData(_ItemIdRole, int(item_id))
        item.setSizeHint(self._cell_size())
        self.addItem(item)
        return item

    def clear_items(self) -> None:
        self._hovered = None
        self.clear()

    def redraw(self) -> None:
        self.doItemsLayout()
        self.viewport().update()

    def item_at(self, point: QPoint) -> QListWidgetItem | None:
        return self.itemAt(point)

    @staticmethod
    def item_id_of(item: QListWidgetItem | None) -> int | None:
        if item is None:
            return None
        value = item.data(_ItemIdRole)
        return int(value) if value is not None else None

    # ── 鼠标事件 ──────────────────────────────────────────────────────────────
    @staticmethod
    def _event_point(event) -> QPoint:
        position = getattr(event, "position", None)
        if position is not None:
            return position().toPoint()
        return event.pos()

    def mouseMoveEvent(self, event) -> None:
        super().mouseMoveEvent(event)
        item = self.itemAt(self._event_point(event))
        if item is not self._hovered:
            self._hovered = item
            self.item_hovered.emit(item)

    def leaveEvent(self, event) -> None:
        super().leaveEvent(event)
        if self._hovered is not None:
            self._hovered = None
            self.item_hovered.emit(None)

    def mouseDoubleClickEvent(self, event) -> None:
        super().mouseDoubleClickEvent(event)
        self.item_double_clicked.emit(self._event_point(event))
