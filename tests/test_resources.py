"""
Tests for the file-system resource model.
"""
from __future__ import annotations

import os
import zipfile

import pytest

from conftest import png_bytes, write_image
from image_gallery.resources import (
    ArchiveEntry,
    ArchiveFile,
    FileResource,
    Folder,
    PackageNode,
    ProjectNode,
    ResourceError,
    SourceRoot,
    collect_gallery_resources,
    node_for_path,
)


class TestNodeForPath:
    def test_plain_file(self, tmp_path):
        path = write_image(tmp_path / "a.png")
        node = node_for_path(str(path))
        assert isinstance(node, FileResource)
        assert node.name == "a.png"
        assert node.location == os.path.normpath(str(path))

    def test_plain_folder(self, tmp_path):
        assert isinstance(node_for_path(str(tmp_path)), Folder)

    def test_package_dir(self, tmp_path):
        pkg = tmp_path / "pkg"
        pkg.mkdir()
        (pkg / "__init__.py").write_text("")
        assert isinstance(node_for_path(str(pkg)), PackageNode)

    def test_project_dir(self, tmp_path):
        proj = tmp_path / "proj"
        proj.mkdir()
        (proj / "pyproject.toml").write_text("[project]\n")
        node = node_for_path(str(proj))
        assert isinstance(node, ProjectNode)
        assert node.folder == Folder(os.path.normpath(str(proj)))

    def test_source_root_inside_project(self, tmp_path):
        (tmp_path / "setup.py").write_text("")
        src = tmp_path / "src"
        src.mkdir()
        assert isinstance(node_for_path(str(src)), SourceRoot)

    def test_src_outside_project_is_folder(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        assert isinstance(node_for_path(str(src)), Folder)

    def test_zip_is_archive(self, tmp_path):
        archive = tmp_path / "icons.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("x.png", png_bytes())
        assert isinstance(node_for_path(str(archive)), ArchiveFile)

    def test_equal_paths_give_equal_nodes(self, tmp_path):
        path = write_image(tmp_path / "a.png")
        assert node_for_path(str(path)) == node_for_path(str(tmp_path / "." / "a.png"))
        assert FileResource(os.path.normpath(str(path))) == node_for_path(str(path))


class TestStorageResource:
    def test_extension_keeps_case(self, tmp_path):
        node = node_for_path(str(tmp_path / "b.PNG"))
        assert node.extension == "PNG"

    def test_no_extension(self, tmp_path):
        assert node_for_path(str(tmp_path / "README")).extension == ""

    def test_extension_after_last_dot(self, tmp_path):
        assert FileResource(str(tmp_path / "photo.tar.gz")).extension == "gz"
        assert FileResource(str(tmp_path / "trailing.")).extension == ""

    def test_dot_file_extension(self, tmp_path):
        (tmp_path / ".png").write_bytes(png_bytes())
        node = node_for_path(str(tmp_path / ".png"))
        assert node.extension == "png"
        assert collect_gallery_resources([node], {"png"}) == [node]

    def test_open_stream_reads_bytes(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"abc")
        with node_for_path(str(path)).open_stream() as stream:
            assert stream.read() == b"abc"

    def test_open_missing_file_raises_resource_error(self, tmp_path):
        with pytest.raises(ResourceError):
            FileResource(str(tmp_path / "missing.png")).open_stream()


class TestContainers:
    def test_folder_members_sorted_case_insensitively(self, tmp_path):
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "A.txt").write_text("")
        (tmp_path / "sub").mkdir()
        names = [m.name for m in Folder(str(tmp_path)).members()]
        assert names == ["A.txt", "b.txt", "sub"]

    def test_folder_members_missing_dir(self, tmp_path):
        with pytest.raises(ResourceError):
            Folder(str(tmp_path / "nope")).members()

    def test_archive_members_are_virtual_entries(self, tmp_path):
        archive = tmp_path / "icons.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("x.png", png_bytes())
            zf.writestr("nested/y.gif", b"GIF89a")
            zf.writestr("nested/", b"")
        members = ArchiveFile(str(archive)).members()
        assert [m.name for m in members] == ["x.png", "y.gif"]
        entry = members[0]
        assert isinstance(entry, ArchiveEntry)
        assert entry.location is None
        assert entry.full_path.endswith("icons.zip!/x.png")
        with entry.open_stream() as stream:
            assert stream.read() == png_bytes()

    def test_bad_archive_raises_resource_error(self, tmp_path):
        archive = tmp_path / "broken.zip"
        archive.write_bytes(b"not a zip")
        with pytest.raises(ResourceError):
            ArchiveFile(str(archive)).members()

    def test_missing_archive_entry(self, tmp_path):
        archive = tmp_path / "icons.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("x.png", png_bytes())
        with pytest.raises(ResourceError):
            ArchiveEntry(str(archive), "gone.png").open_stream()


class TestGroupingNodes:
    def _make_package(self, root):
        pkg = root / "pkg"
        pkg.mkdir()
        (pkg / "__init__.py").write_text("")
        (pkg / "module.py").write_text("")
        (pkg / "types.pyi").write_text("")
        write_image(pkg / "logo.png")
        (pkg / "icons").mkdir()
        sub = pkg / "subpkg"
        sub.mkdir()
        (sub / "__init__.py").write_text("")
        return pkg

    def test_package_non_source_resources(self, tmp_path):
        pkg = self._make_package(tmp_path)
        children = PackageNode(str(pkg)).non_source_resources()
        assert [c.name for c in children] == ["icons", "logo.png"]

    def test_source_root_non_source_resources(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("")
        src = tmp_path / "src"
        src.mkdir()
        (src / "main.py").write_text("")
        write_image(src / "splash.jpg")
        children = SourceRoot(str(src)).non_source_resources()
        assert [c.name for c in children] == ["splash.jpg"]
