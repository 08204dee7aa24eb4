# -*- coding: utf-8 -*-
"""
resources.adapter
=================
把任意被选中的宿主节点归类为 {单文件, 容器, 分组节点}，并解析为可浏览资源列表。

解析优先级：
1. 分组节点（包 / 源码根）→ 向宿主请求其非源码子项；
2. 否则若为工程 → 替换为其底层文件夹；
3. 若（替换后的）节点是容器 → 列出直接成员；
4. 若节点本身就是可浏览资源 → 直接使用。
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from image_gallery.log import get_logger
from image_gallery.resources.model import (
    ArchiveFile,
    Folder,
    PackageNode,
    ProjectNode,
    ResourceError,
    SourceRoot,
    StorageResource,
)

_log = get_logger("resources")

_GROUPING_TYPES = (PackageNode, SourceRoot)
_CONTAINER_TYPES = (Folder, ArchiveFile)


class NodeKind(Enum):
    SINGLE_FILE = "single_file"
    CONTAINER = "container"
    GROUPING = "grouping"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ResolvedNode:
    kind: NodeKind
    node: Any


def classify(node: Any) -> ResolvedNode:
    """节点归类；工程节点先替换成底层文件夹再归类。"""
    if isinstance(node, _GROUPING_TYPES):
        return ResolvedNode(NodeKind.GROUPING, node)
    if isinstance(node, ProjectNode):
        node = node.folder
    if isinstance(node, _CONTAINER_TYPES):
        return ResolvedNode(NodeKind.CONTAINER, node)
    if isinstance(node, StorageResource):
        return ResolvedNode(NodeKind.SINGLE_FILE, node)
    return ResolvedNode(NodeKind.UNKNOWN, node)


def resolve_node(node: Any) -> list:
    """
    解析单个节点为候选资源列表（可能含子文件夹等非资源节点，由调用方过滤）。
    宿主抛出的 ResourceError 视为"无资源"并记录 warning。
    """
    resolved = classify(node)
    try:
        if resolved.kind is NodeKind.GROUPING:
            return list(resolved.node.non_source_resources())
        if resolved.kind is NodeKind.CONTAINER:
            return list(resolved.node.members())
    except ResourceError as exc:
        _log.warning("[resolve_node] listing failed node=%r: %s", node, exc)
        return []
    if resolved.kind is NodeKind.SINGLE_FILE:
        return [resolved.node]
    return []


def is_single_resource_selection(nodes) -> bool:
    """原始选择是否恰好为一个可浏览资源（文件）。"""
    nodes = list(nodes or ())
    return len(nodes) == 1 and classify(nodes[0]).kind is NodeKind.SINGLE_FILE


def collect_gallery_resources(nodes, extensions) -> list[StorageResource]:
    """
    解析所有选中节点 → 合并去重 → 按扩展名白名单过滤 → 按名称排序（不区分大小写）。
    同名时保持解析顺序（sorted 稳定）。
    """
    allowed = frozenset(e.lower().lstrip(".") for e in extensions)
    seen: set = set()
    merged: list[StorageResource] = []
    for node in nodes or ():
        for candidate in resolve_node(node):
            if not isinstance(candidate, StorageResource):
                continue
            if candidate in seen:
                continue
            seen.add(candidate)
            merged.append(candidate)
    matched = [r for r in merged if r.extension.lower() in allowed]
    return sorted(matched, key=lambda r: r.name.lower())
