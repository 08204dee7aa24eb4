# -*- coding: utf-8 -*-
"""
image_gallery.resources
=======================
宿主资源模型与选择解析。

用法::

    from image_gallery.resources import node_for_path, collect_gallery_resources

    nodes = [node_for_path("/path/to/icons")]
    images = collect_gallery_resources(nodes, {"png", "gif"})
"""
from __future__ import annotations

from image_gallery.resources.adapter import (
    NodeKind,
    ResolvedNode,
    classify,
    collect_gallery_resources,
    is_single_resource_selection,
    resolve_node,
)
from image_gallery.resources.model import (
    ArchiveEntry,
    ArchiveFile,
    FileResource,
    Folder,
    PackageNode,
    ProjectNode,
    ResourceError,
    SourceRoot,
    StorageResource,
    node_for_path,
)

__all__ = [
    "NodeKind",
    "ResolvedNode",
    "classify",
    "collect_gallery_resources",
    "is_single_resource_selection",
    "resolve_node",
    "ArchiveEntry",
    "ArchiveFile",
    "FileResource",
    "Folder",
    "PackageNode",
    "ProjectNode",
    "ResourceError",
    "SourceRoot",
    "StorageResource",
    "node_for_path",
]
