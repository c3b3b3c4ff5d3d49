import pytest

from assoofs.filesystem import AssooFS, InvalidMagicError, NoSpaceError
from assoofs.mkfs import WELCOMEFILE_BODY, format_image


@pytest.fixture
def fs(tmp_path):
    path = tmp_path / "disk.img"
    path.write_bytes(b"")
    format_image(path)
    with AssooFS.open(path) as opened:
        yield opened


def test_root_is_directory(fs):
    root = fs.root()
    assert root.is_dir()
    assert root.dir_children_count == 1


def test_iterate_root(fs):
    names = [record.filename for record in fs.iterate(fs.root())]
    assert names == ["README.txt"]


def test_lookup_and_read_readme(fs):
    readme = fs.lookup(fs.root(), "README.txt")
    assert readme is not None and not readme.is_dir()
    assert fs.read(readme) == WELCOMEFILE_BODY


def test_read_partial_and_past_end(fs):
    readme = fs.lookup(fs.root(), "README.txt")
    assert fs.read(readme, 0, 4) == WELCOMEFILE_BODY[:4]
    assert fs.read(readme, 5) == WELCOMEFILE_BODY[5:]
    assert fs.read(readme, readme.file_size) == b""


def test_lookup_missing(fs):
    assert fs.lookup(fs.root(), "nothing") is None


def test_create_adds_entry(fs):
    root = fs.root()
    inode = fs.create(root, "notes.txt")
    assert not inode.is_dir()
    assert inode.inode_no == 2
    assert root.dir_children_count == 2
    assert [r.filename for r in fs.iterate(root)] == ["README.txt", "notes.txt"]
    assert fs.superblock.free_inodes == 2
    assert fs.superblock.inodes_count == 3


def test_mkdir(fs):
    inode = fs.mkdir(fs.root(), "sub")
    assert inode.is_dir()
    assert "sub" in [r.filename for r in fs.iterate(fs.root())]


def test_write_then_read(fs):
    inode = fs.create(fs.root(), "data.bin")
    payload = b"some bytes"
    assert fs.write(inode, payload) == len(payload)
    assert inode.file_size == len(payload)
    assert fs.read(inode) == payload


def test_write_at_offset_truncates_size(fs):
    inode = fs.create(fs.root(), "f")
    fs.write(inode, b"abcdef")
    fs.write(inode, b"XY", 2)
    assert fs.read(inode) == b"abXY"


def test_write_beyond_block(fs):
    inode = fs.create(fs.root(), "big")
    with pytest.raises(NoSpaceError):
        fs.write(inode, b"z" * 5000)


def test_no_free_inodes(fs):
    root = fs.root()
    for name in ("a", "b", "c"):
        fs.create(root, name)
    with pytest.raises(NoSpaceError):
        fs.create(root, "d")
    assert fs.superblock.free_inodes == 0


def test_invalid_magic(tmp_path):
    path = tmp_path / "blank.img"
    path.write_bytes(b"\0" * 4096 * 4)
    with pytest.raises(InvalidMagicError):
        AssooFS.open(path)