# -*- coding: utf-8 -*-
"""
image_gallery：监听资源选择并显示图片缩略图的图库视图。

用法:
    from image_gallery import SelectionService, GalleryView, node_for_path
    service = SelectionService()
    view = GalleryView(service)
    service.set_selection(None, StructuredSelection.of(node_for_path("/path/to/icons")))
"""

from image_gallery.resources import (
    NodeKind,
    ResourceError,
    collect_gallery_resources,
    node_for_path,
)
from image_gallery.selection import SelectionService, StructuredSelection

__version__ = "1.0.0"

__all__ = [
    "NodeKind",
    "ResourceError",
    "collect_gallery_resources",
    "node_for_path",
    "SelectionService",
    "StructuredSelection",
]

try:
    from image_gallery.gallery_view import GalleryView, load_gallery_settings
    __all__.extend(["GalleryView", "load_gallery_settings"])
except ModuleNotFoundError as exc:
    if not str(getattr(exc, "name", "")).startswith(("PyQt", "PIL")):
        raise

try:
    from image_gallery.file_browser import ResourceTreeWidget
    __all__.append("ResourceTreeWidget")
except ModuleNotFoundError as exc:
    if not str(getattr(exc, "name", "")).startswith("PyQt"):
        raise
