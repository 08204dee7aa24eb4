# -*- coding: utf-8 -*-
"""
image_gallery.file_browser
==========================
资源树浏览器，作为选择提供方把选中节点广播给 ``SelectionService``。

用法::

    from image_gallery.file_browser import ResourceTreeWidget

    tree = ResourceTreeWidget(selection_service)
    tree.select_path("/path/to/icons")
"""
from __future__ import annotations

from image_gallery.file_browser._browser import ResourceTreeWidget

__all__ = ["ResourceTreeWidget"]
