"""Tests for the path writer and filesystem implementations."""

from __future__ import annotations

from pathlib import Path

import pytest

from saas_scaffold.filesystem import LocalFileSystem, MemoryFileSystem, write_file


class TestWriteFileLocal:
    def test_creates_missing_ancestors(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c.txt"
        write_file(LocalFileSystem(), target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"

    def test_existing_ancestors_are_fine(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        write_file(LocalFileSystem(), tmp_path / "a" / "x.txt", "1")
        write_file(LocalFileSystem(), tmp_path / "a" / "y.txt", "2")
        assert sorted(p.name for p in (tmp_path / "a").iterdir()) == ["x.txt", "y.txt"]

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "f.txt"
        target.write_text("old content that is longer", encoding="utf-8")
        write_file(LocalFileSystem(), target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_writes_utf8(self, tmp_path: Path) -> None:
        target = tmp_path / "u.txt"
        write_file(LocalFileSystem(), target, "café – ok")
        assert target.read_bytes() == "café – ok".encode()

    def test_empty_content_creates_empty_file(self, tmp_path: Path) -> None:
        target = tmp_path / "public" / "hero.jpg"
        write_file(LocalFileSystem(), target, "")
        assert target.is_file()
        assert target.stat().st_size == 0


class TestLocalFileSystem:
    def test_symlink_to_dir_is_not_a_dir(self, tmp_path: Path) -> None:
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)
        fs = LocalFileSystem()
        assert fs.is_symlink(link)
        assert not fs.is_dir(link)
        assert fs.is_dir(real)

    def test_dangling_symlink_exists(self, tmp_path: Path) -> None:
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "nowhere")
        assert LocalFileSystem().exists(link)


class TestMemoryFileSystem:
    def test_write_and_read(self) -> None:
        fs = MemoryFileSystem()
        write_file(fs, Path("/proj/src/a.txt"), "data")
        assert fs.read_text(Path("/proj/src/a.txt")) == "data"
        assert fs.is_dir(Path("/proj/src"))
        assert fs.is_dir(Path("/proj"))

    def test_write_without_parent_fails(self) -> None:
        fs = MemoryFileSystem()
        with pytest.raises(FileNotFoundError):
            fs.write_text(Path("/missing/file.txt"), "x")

    def test_iterdir_lists_direct_children_only(self) -> None:
        fs = MemoryFileSystem()
        write_file(fs, Path("/p/a.txt"), "")
        write_file(fs, Path("/p/sub/b.txt"), "")
        children = sorted(str(p) for p in fs.iterdir(Path("/p")))
        assert children == ["/p/a.txt", "/p/sub"]

    def test_rmdir_refuses_non_empty(self) -> None:
        fs = MemoryFileSystem()
        write_file(fs, Path("/p/a.txt"), "")
        with pytest.raises(OSError):
            fs.rmdir(Path("/p"))

    def test_unlink_directory_fails(self) -> None:
        fs = MemoryFileSystem()
        fs.mkdir(Path("/p"))
        with pytest.raises(IsADirectoryError):
            fs.unlink(Path("/p"))

    def test_symlink_is_not_resolved(self) -> None:
        fs = MemoryFileSystem()
        fs.mkdir(Path("/outside"))
        fs.mkdir(Path("/p"))
        fs.symlink(Path("/p/link"), Path("/outside"))
        assert fs.is_symlink(Path("/p/link"))
        assert not fs.is_dir(Path("/p/link"))
        assert fs.exists(Path("/p/link"))

    def test_mkdir_over_file_fails(self) -> None:
        fs = MemoryFileSystem()
        write_file(fs, Path("/p/a"), "")
        with pytest.raises(FileExistsError):
            fs.mkdir(Path("/p/a/b"))
