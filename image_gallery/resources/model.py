# -*- coding: utf-8 -*-
"""
resources.model
===============
基于本地文件系统的宿主资源模型。

节点类型：

- ``FileResource``  — 普通文件（有真实路径，可被外部程序打开）
- ``ArchiveEntry``  — zip 包内条目（虚拟文件，无真实路径）
- ``Folder`` / ``ArchiveFile`` — 容器，可列出直接成员
- ``ProjectNode``   — 工程目录，对应一个底层 ``Folder``
- ``PackageNode`` / ``SourceRoot`` — 分组节点，只暴露非源码子项

所有节点都是 frozen dataclass，按规范化路径比较相等，便于去重。
"""
from __future__ import annotations

import io
import os
import zipfile
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import BinaryIO

ARCHIVE_EXTENSIONS = frozenset({".zip"})
PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg")
SOURCE_ROOT_NAMES = frozenset({"src", "lib"})
SOURCE_SUFFIXES = frozenset({".py", ".pyc", ".pyo", ".pyi", ".pyd"})


class ResourceError(Exception):
    """宿主资源模型无法列出成员或读取内容时抛出。"""


def _norm(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


# ── 可浏览资源 ────────────────────────────────────────────────────────────────

class StorageResource:
    """可读取字节流的文件类资源（名称 / 扩展名 / 完整路径 / 字节流）。"""

    @property
    def name(self) -> str:
        raise NotImplementedError

    @property
    def full_path(self) -> str:
        raise NotImplementedError

    @property
    def extension(self) -> str:
        """
        最后一个点之后的部分，保持原始大小写；没有点时为空串。
        以点开头的名称同样按此规则处理（``.png`` 的扩展名为 ``png``）。
        """
        _, dot, suffix = self.name.rpartition(".")
        return suffix if dot else ""

    @property
    def location(self) -> str | None:
        """本地文件系统路径；虚拟资源返回 None。"""
        return None

    def open_stream(self) -> BinaryIO:
        raise NotImplementedError


@dataclass(frozen=True)
class FileResource(StorageResource):
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def full_path(self) -> str:
        return self.path

    @property
    def location(self) -> str | None:
        return self.path

    def open_stream(self) -> BinaryIO:
        try:
            return open(self.path, "rb")
        except OSError as exc:
            raise ResourceError(f"cannot open {self.path!r}: {exc}") from exc


@dataclass(frozen=True)
class ArchiveEntry(StorageResource):
    archive_path: str
    member: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.member).name

    @property
    def full_path(self) -> str:
        return f"{self.archive_path}!/{self.member}"

    def open_stream(self) -> BinaryIO:
        try:
            with zipfile.ZipFile(self.archive_path) as zf:
                return io.BytesIO(zf.read(self.member))
        except (OSError, KeyError, zipfile.BadZipFile) as exc:
            raise ResourceError(f"cannot read {self.full_path!r}: {exc}") from exc


# ── 容器 ──────────────────────────────────────────────────────────────────────

def _scan_dir(path: str) -> list:
    try:
        entries = sorted(os.scandir(path), key=lambda e: e.name.lower())
    except OSError as exc:
        raise ResourceError(f"cannot list {path!r}: {exc}") from exc
    return [node_for_path(e.path) for e in entries]


@dataclass(frozen=True)
class Folder:
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path) or self.path

    def members(self) -> list:
        return _scan_dir(self.path)


@dataclass(frozen=True)
class ArchiveFile:
    """zip 包：作为容器时列出包内全部文件条目。"""

    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def members(self) -> list:
        try:
            with zipfile.ZipFile(self.path) as zf:
                names = [info.filename for info in zf.infolist() if not info.is_dir()]
        except (OSError, zipfile.BadZipFile) as exc:
            raise ResourceError(f"cannot list archive {self.path!r}: {exc}") from exc
        return [ArchiveEntry(self.path, n) for n in names]


@dataclass(frozen=True)
class ProjectNode:
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def folder(self) -> Folder:
        return Folder(self.path)


# ── 分组节点 ──────────────────────────────────────────────────────────────────

def _non_source_children(path: str) -> list:
    result = []
    for node in _scan_dir(path):
        if isinstance(node, PackageNode):
            continue
        if isinstance(node, FileResource) and os.path.splitext(node.path)[1].lower() in SOURCE_SUFFIXES:
            continue
        result.append(node)
    return result


@dataclass(frozen=True)
class PackageNode:
    """Python 包（含 ``__init__.py`` 的目录）。"""

    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def non_source_resources(self) -> list:
        return _non_source_children(self.path)


@dataclass(frozen=True)
class SourceRoot:
    """工程内的源码根目录（``src`` / ``lib``）。"""

    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def non_source_resources(self) -> list:
        return _non_source_children(self.path)


def _is_project_dir(path: str) -> bool:
    return any(os.path.isfile(os.path.join(path, m)) for m in PROJECT_MARKERS)


def node_for_path(path: str):
    """将文件系统路径映射为资源模型节点。"""
    path = _norm(path)
    if os.path.isdir(path):
        if os.path.isfile(os.path.join(path, "__init__.py")):
            return PackageNode(path)
        if _is_project_dir(path):
            return ProjectNode(path)
        parent = os.path.dirname(path)
        if os.path.basename(path).lower() in SOURCE_ROOT_NAMES and _is_project_dir(parent):
            return SourceRoot(path)
        return Folder(path)
    if os.path.splitext(path)[1].lower() in ARCHIVE_EXTENSIONS:
        return ArchiveFile(path)
    return FileResource(path)
