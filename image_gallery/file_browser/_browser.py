# -*- coding: utf-8 -*-
"""
file_browser._browser
=====================
资源树浏览器（ResourceTreeWidget）。

树上每一项保存一个资源模型节点（``node_for_path`` 的结果或 zip 包内条目），
展开时通过资源模型列出子节点；选择变化时把选中节点原样打包成
``StructuredSelection`` 广播到 ``SelectionService``。
"""
from __future__ import annotations

import os
import sys

try:
    from PyQt6.QtWidgets import (
        QAbstractItemView, QLabel, QMenu, QTreeWidget, QTreeWidgetItem,
        QVBoxLayout, QWidget,
    )
    from PyQt6.QtCore import Qt, pyqtSignal
except ImportError:
    from PyQt5.QtWidgets import (
        QAbstractItemView, QLabel, QMenu, QTreeWidget, QTreeWidgetItem,
        QVBoxLayout, QWidget,
    )
    from PyQt5.QtCore import Qt, pyqtSignal

from image_gallery.launcher import launch_with_default_app, reveal_in_file_manager
from image_gallery.log import get_logger
from image_gallery.resources import (
    ArchiveEntry,
    Folder,
    NodeKind,
    ResourceError,
    StorageResource,
    classify,
    node_for_path,
)
from image_gallery.selection import SelectionService, StructuredSelection

_log = get_logger("file_browser")

# ── Qt 兼容常量 ────────────────────────────────────────────────────────────────
try:
    _NodeRole = Qt.ItemDataRole.UserRole
except AttributeError:
    _NodeRole = Qt.UserRole  # type: ignore[attr-defined]

try:
    _CustomContextMenu = Qt.ContextMenuPolicy.CustomContextMenu
except AttributeError:
    _CustomContextMenu = Qt.CustomContextMenu  # type: ignore[attr-defined]

try:
    _ExtendedSelection = QAbstractItemView.SelectionMode.ExtendedSelection
except AttributeError:
    _ExtendedSelection = QAbstractItemView.ExtendedSelection  # type: ignore[attr-defined]

_EXPANDABLE_KINDS = (NodeKind.CONTAINER, NodeKind.GROUPING)


def _exec_menu(menu: "QMenu", global_pos) -> None:
    """兼容 PyQt5/6 的 QMenu.exec() 调用。"""
    try:
        menu.exec(global_pos)
    except TypeError:
        menu.exec_(global_pos)  # type: ignore[attr-defined]


def node_path(node) -> str:
    """节点的显示路径：可浏览资源用 full_path，其余节点用其目录/文件路径。"""
    if isinstance(node, StorageResource):
        return node.full_path
    return node.path


def _disk_path(node) -> str:
    """节点在磁盘上的位置；zip 包内条目落到包文件本身。"""
    if isinstance(node, ArchiveEntry):
        return node.archive_path
    return node.location if isinstance(node, StorageResource) else node.path


def _is_expandable(node) -> bool:
    return classify(node).kind in _EXPANDABLE_KINDS


def _child_nodes(node) -> list:
    """展开时显示的子节点：目录类节点列出全部直接成员，zip 包列出包内条目。"""
    resolved = classify(node)
    if resolved.kind is NodeKind.CONTAINER:
        children = resolved.node.members()
    else:
        # 分组节点在树上仍显示源码文件与子包
        children = Folder(node.path).members()
    return [c for c in children if not c.name.startswith(".")]


class ResourceTreeWidget(QWidget):
    """
    本机资源树（QTreeWidget + 懒加载），支持 Shift/Command 多选。

    未指定 roots 时以用户主目录为唯一根节点。
    """

    paths_selected = pyqtSignal(object)  # list[str]
    _PLACEHOLDER = "__ph__"

    def __init__(
        self,
        selection_service: SelectionService | None = None,
        parent=None,
        *,
        roots: list[str] | None = None,
    ) -> None:
        super().__init__(parent)
        self._service = selection_service
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        lbl = QLabel("  资源")
        lbl.setStyleSheet(
            "color: #aaa; font-size: 11px; padding: 4px 6px 2px 6px; background: #252525;"
        )
        layout.addWidget(lbl)

        self._tree = QTreeWidget()
        self._tree.setHeaderHidden(True)
        self._tree.setColumnCount(1)
        self._tree.setIndentation(14)
        self._tree.setSelectionMode(_ExtendedSelection)
        self._tree.setStyleSheet(
            "QTreeWidget { font-size: 12px; border: none; background: #2a2a2a; }"
            "QTreeWidget::item:selected { background: #3a5a8a; color: #fff; }"
            "QTreeWidget::item:hover { background: #333; }"
        )
        self._tree.itemExpanded.connect(self._on_expanded)
        self._tree.itemSelectionChanged.connect(self._on_selection_changed)
        self._tree.setContextMenuPolicy(_CustomContextMenu)
        self._tree.customContextMenuRequested.connect(self._on_context_menu)
        layout.addWidget(self._tree)

        for root in roots or [os.path.expanduser("~")]:
            node = node_for_path(root)
            self._tree.addTopLevelItem(self._make_item(node, node.name or node.path))
        if self._tree.topLevelItemCount() == 1:
            self._tree.expandItem(self._tree.topLevelItem(0))

    @property
    def tree(self) -> QTreeWidget:
        return self._tree

    def _make_item(self, node, label: str) -> QTreeWidgetItem:
        item = QTreeWidgetItem([label])
        item.setData(0, _NodeRole, node)
        if _is_expandable(node):
            item.addChild(QTreeWidgetItem([self._PLACEHOLDER]))
        return item

    @staticmethod
    def _node_of(item: QTreeWidgetItem | None):
        return None if item is None else item.data(0, _NodeRole)

    def _root_for(self, target: str) -> tuple[QTreeWidgetItem | None, list[str]]:
        """找包含 target 的最深根节点，返回 (根节点, 相对路径各段)。"""
        best: tuple[QTreeWidgetItem | None, list[str]] = (None, [])
        best_len = -1
        for i in range(self._tree.topLevelItemCount()):
            item = self._tree.topLevelItem(i)
            root_path = node_path(self._node_of(item))
            try:
                rel = os.path.relpath(target, root_path)
            except ValueError:  # Windows 下跨盘符
                continue
            if rel == os.pardir or rel.startswith(os.pardir + os.sep):
                continue
            if len(root_path) > best_len:
                parts = [] if rel == os.curdir else rel.split(os.sep)
                best, best_len = (item, parts), len(root_path)
        return best

    def select_path(self, path: str) -> bool:
        """
        按路径逐级展开资源树并选中对应节点（目录或文件），选中后会广播选择。
        返回是否成功定位到目标节点。
        """
        if not path:
            return False
        target = os.path.normpath(os.path.abspath(path))
        if not os.path.exists(target):
            return False
        current, parts = self._root_for(target)
        if current is None:
            return False

        cur_path = node_path(self._node_of(current))
        for part in parts:
            cur_path = os.path.join(cur_path, part)
            wanted = node_for_path(cur_path)
            self._load_children(current)
            self._tree.expandItem(current)
            current = next(
                (current.child(i) for i in range(current.childCount())
                 if self._node_of(current.child(i)) == wanted),
                None,
            )
            if current is None:
                return False

        self._tree.setCurrentItem(current)
        self._tree.clearSelection()
        current.setSelected(True)
        self._tree.scrollToItem(current)
        return True

    def selected_nodes(self) -> list:
        nodes = []
        for item in self._tree.selectedItems():
            node = self._node_of(item)
            if node is not None:
                nodes.append(node)
        return nodes

    def selected_paths(self) -> list[str]:
        return [node_path(n) for n in self.selected_nodes()]

    def _load_children(self, item: QTreeWidgetItem) -> None:
        if item.childCount() != 1 or item.child(0).text(0) != self._PLACEHOLDER:
            return
        item.takeChildren()
        node = self._node_of(item)
        try:
            children = _child_nodes(node)
        except ResourceError as e:
            _log.warning("[_load_children] cannot list node=%r: %s", node, e)
            return
        children.sort(key=lambda n: (not _is_expandable(n), n.name.lower()))
        for child in children:
            item.addChild(self._make_item(child, child.name))

    def _on_expanded(self, item: QTreeWidgetItem) -> None:
        self._load_children(item)

    def _on_selection_changed(self) -> None:
        nodes = self.selected_nodes()
        self.paths_selected.emit([node_path(n) for n in nodes])
        if self._service is not None:
            self._service.set_selection(self, StructuredSelection(tuple(nodes)))

    def _on_context_menu(self, pos) -> None:
        node = self._node_of(self._tree.itemAt(pos))
        if node is None:
            return
        menu = QMenu(self)
        if isinstance(node, StorageResource) and node.location:
            open_act = menu.addAction("用默认程序打开")
            open_act.triggered.connect(lambda: launch_with_default_app(node.location))
        reveal_label = "在Finder中显示" if sys.platform == "darwin" else "在资源管理器中显示"
        reveal_act = menu.addAction(reveal_label)
        reveal_act.triggered.connect(lambda: reveal_in_file_manager(_disk_path(node)))
        _exec_menu(menu, self._tree.viewport().mapToGlobal(pos))
