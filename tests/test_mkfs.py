import pytest

from assoofs.layout import BLOCK_SIZE, MAGIC, DirRecord, InodeInfo, SuperBlock
from assoofs.mkfs import WELCOMEFILE_BODY, format_image, main


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "disk.img"
    path.write_bytes(b"")
    format_image(path)
    return path.read_bytes()


def test_superblock_written(image):
    sb = SuperBlock.unpack(image[:BLOCK_SIZE])
    assert sb.magic == MAGIC
    assert sb.block_size == BLOCK_SIZE
    assert sb.inodes_count == 2
    assert sb.free_inodes == 3
    assert sb.free_blocks == 15


def test_inode_store_written(image):
    store = image[BLOCK_SIZE : 2 * BLOCK_SIZE]
    root = InodeInfo.unpack(store[: InodeInfo.SIZE])
    welcome = InodeInfo.unpack(store[InodeInfo.SIZE : 2 * InodeInfo.SIZE])
    assert root.is_dir()
    assert root.dir_children_count == 1
    assert root.data_block_number == 2
    assert not welcome.is_dir()
    assert welcome.inode_no == 1
    assert welcome.file_size == len(WELCOMEFILE_BODY)


def test_root_directory_entry(image):
    record = DirRecord.unpack(image[2 * BLOCK_SIZE : 3 * BLOCK_SIZE])
    assert record.filename == "README.txt"
    assert record.inode_no == 1
    assert record.entry_removed is False


def test_welcome_body(image):
    assert image[3 * BLOCK_SIZE :] == WELCOMEFILE_BODY
    assert WELCOMEFILE_BODY.startswith(b"Hola mundo")


def test_main_formats(tmp_path, capsys):
    path = tmp_path / "disk.img"
    path.write_bytes(b"")
    assert main([str(path)]) == 0
    assert "Super block written successfully." in capsys.readouterr().out
    assert SuperBlock.unpack(path.read_bytes()[:BLOCK_SIZE]).magic == MAGIC


def test_main_usage(capsys):
    assert main([]) == -1
    assert "Usage: mkassoofs <device>" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.img")]) == -1


def test_format_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        format_image(tmp_path / "absent.img")