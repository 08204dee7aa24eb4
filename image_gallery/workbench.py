# -*- coding: utf-8 -*-
"""
最小宿主窗口：左侧资源树（选择提供方），右侧图库视图，底部状态栏。

命令行::

    python -m image_gallery [DIR] [--config gallery.json]
"""
from __future__ import annotations

import argparse
import os
import sys

try:
    from PyQt6.QtWidgets import QApplication, QMainWindow, QSplitter
    from PyQt6.QtCore import Qt
    _Horizontal = Qt.Orientation.Horizontal
except ImportError:
    from PyQt5.QtWidgets import QApplication, QMainWindow, QSplitter
    from PyQt5.QtCore import Qt
    _Horizontal = Qt.Horizontal

from image_gallery.file_browser import ResourceTreeWidget
from image_gallery.gallery_view import GalleryView, load_gallery_settings
from image_gallery.log import get_logger
from image_gallery.selection import SelectionService

_log = get_logger("workbench")


class GalleryWindow(QMainWindow):
    def __init__(self, parent=None, *, settings=None, start_path: str | None = None, roots=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Image Gallery")
        self.resize(1000, 640)

        self._service = SelectionService()
        self._tree = ResourceTreeWidget(self._service, roots=roots)
        self._gallery = GalleryView(self._service, settings=settings)
        self._gallery.status_changed.connect(self._show_status)

        splitter = QSplitter(_Horizontal)
        splitter.addWidget(self._tree)
        splitter.addWidget(self._gallery)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        self.setCentralWidget(splitter)
        self.statusBar()

        if start_path and not self._tree.select_path(start_path):
            _log.warning("[GalleryWindow] cannot select start path=%r", start_path)

    @property
    def selection_service(self) -> SelectionService:
        return self._service

    @property
    def tree(self) -> ResourceTreeWidget:
        return self._tree

    @property
    def gallery(self) -> GalleryView:
        return self._gallery

    def _show_status(self, text: str) -> None:
        self.statusBar().showMessage(text)

    def closeEvent(self, event) -> None:
        self._gallery.dispose()
        super().closeEvent(event)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="image-gallery", description="Browse image thumbnails under a folder.")
    parser.add_argument("path", nargs="?", default=None, help="folder or file to select on start")
    parser.add_argument("--config", default=None, help="JSON file overriding gallery.cfg")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_gallery_settings(args.config)
    app = QApplication.instance() or QApplication(sys.argv[:1])
    start = os.path.abspath(args.path) if args.path else None
    roots = None
    if start and not start.startswith(os.path.expanduser("~")):
        roots = [os.path.dirname(start) if os.path.isfile(start) else start]
    window = GalleryWindow(settings=settings, start_path=start, roots=roots)
    window.show()
    try:
        return app.exec()
    except AttributeError:
        return app.exec_()  # type: ignore[attr-defined]
