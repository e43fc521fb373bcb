import zipfile
from pathlib import Path

import pytest

from worldfs.adapters import (
    GLOBAL_DATA_PATH,
    DirectoryWorldReader,
    MemoryWorldReader,
    ZipWorldReader,
    open_world,
)
from worldfs.exceptions import ContainerOpenFailed, TreeUnavailable
from worldfs.nodes import File, Folder


def _make_world_dir(base: Path) -> Path:
    world = base / "world"
    (world / "World" / "0").mkdir(parents=True)
    (world / "World" / "0" / "GlobalData.json").write_text('{"types": ["Guid"]}')
    (world / "World" / "0" / "Bricks.mps").write_bytes(b"\x00\x01")
    (world / "Meta").mkdir()
    (world / "Meta" / "World.json").write_text('{"name": "demo"}')
    (world / "Empty").mkdir()
    return world


def _make_world_zip(base: Path) -> Path:
    archive = base / "world.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("Meta/", "")
        zf.writestr("Meta/World.json", '{"name": "demo"}')
        zf.writestr(GLOBAL_DATA_PATH, '{"types": []}')
    return archive


def test_memory_reader_tree_and_bytes() -> None:
    reader = MemoryWorldReader({"/a/b.json": b"{}", "c.mps": b"\x01"})
    root = reader.tree_root()
    assert set(root.children) == {"a", "c.mps"}
    assert root.children["a"].children["b.json"] == File({"size": 2})
    assert reader.read_bytes("a/b.json") == b"{}"
    assert reader.read_bytes("/a/b.json") == b"{}"
    with pytest.raises(FileNotFoundError):
        reader.read_bytes("a")


def test_directory_reader(tmp_path: Path) -> None:
    world = _make_world_dir(tmp_path)
    with DirectoryWorldReader(world) as reader:
        root = reader.tree_root()
        assert set(root.children) == {"World", "Meta", "Empty"}
        assert root.children["Empty"] == Folder()
        assert reader.read_bytes("World/0/Bricks.mps") == b"\x00\x01"
        assert reader.global_data().types == frozenset({"Guid"})
        with pytest.raises(FileNotFoundError):
            reader.read_bytes("Meta")
        with pytest.raises(FileNotFoundError):
            reader.read_bytes("../outside.json")


def test_directory_reader_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(ContainerOpenFailed):
        DirectoryWorldReader(tmp_path / "missing")


def test_zip_reader(tmp_path: Path) -> None:
    archive = _make_world_zip(tmp_path)
    with ZipWorldReader(archive) as reader:
        root = reader.tree_root()
        assert set(root.children) == {"Meta", "World"}
        assert reader.read_bytes("/Meta/World.json") == b'{"name": "demo"}'
        assert reader.global_data().types == frozenset()
        with pytest.raises(FileNotFoundError):
            reader.read_bytes("Meta/ghost.json")


def test_zip_reader_rejects_clashing_entries(tmp_path: Path) -> None:
    archive = tmp_path / "bad.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("a", "file")
        zf.writestr("a/b.json", "{}")
    with ZipWorldReader(archive) as reader:
        with pytest.raises(TreeUnavailable):
            reader.tree_root()


def test_open_world_dispatch(tmp_path: Path) -> None:
    world = _make_world_dir(tmp_path)
    archive = _make_world_zip(tmp_path)
    assert isinstance(open_world(world), DirectoryWorldReader)
    reader = open_world(str(archive))
    assert isinstance(reader, ZipWorldReader)
    reader.close()


def test_open_world_failures(tmp_path: Path) -> None:
    with pytest.raises(ContainerOpenFailed):
        open_world(tmp_path / "missing.brdb")
    garbage = tmp_path / "garbage.brdb"
    garbage.write_bytes(b"definitely not a world")
    with pytest.raises(ContainerOpenFailed):
        open_world(garbage)
    fake_zip = tmp_path / "fake.zip"
    fake_zip.write_bytes(b"nope")
    with pytest.raises(ContainerOpenFailed):
        open_world(fake_zip)


def test_zip_reader_normalizes_dot_entries(tmp_path: Path) -> None:
    archive = tmp_path / "dotted.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("./Meta/World.json", "{}")
    with ZipWorldReader(archive) as reader:
        assert set(reader.tree_root().children) == {"Meta"}
        assert reader.read_bytes("Meta/World.json") == b"{}"
