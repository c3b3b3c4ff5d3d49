"""On-disk constants and structures of an ASSOOFS image."""

from __future__ import annotations

import stat
import struct
from dataclasses import dataclass

MAGIC = 0x20200406
BLOCK_SIZE = 4096
FILENAME_MAXLEN = 255

SUPERBLOCK_BLOCK_NUMBER = 0
INODESTORE_BLOCK_NUMBER = 1
ROOTDIR_BLOCK_NUMBER = 2
ROOTDIR_INODE_NUMBER = 0

MAX_FILESYSTEM_OBJECTS_SUPPORTED = 64

LAST_RESERVED_BLOCK = ROOTDIR_BLOCK_NUMBER
LAST_RESERVED_INODE = ROOTDIR_INODE_NUMBER

_SUPERBLOCK = struct.Struct(f"<6Q{BLOCK_SIZE - 6 * 8}x")
_INODE = struct.Struct("<I4xQQQ")
_DIR_RECORD = struct.Struct(f"<{FILENAME_MAXLEN}sxQQ")


def _check_length(data: bytes, layout: struct.Struct, what: str) -> None:
    if len(data) < layout.size:
        raise ValueError(
            f"{what} needs {layout.size} bytes, got {len(data)}"
        )


@dataclass
class SuperBlock:
    """The superblock stored in block 0."""

    version: int = 1
    magic: int = MAGIC
    block_size: int = BLOCK_SIZE
    inodes_count: int = 0
    free_blocks: int = 0
    free_inodes: int = 0

    SIZE = _SUPERBLOCK.size

    def pack(self) -> bytes:
        return _SUPERBLOCK.pack(
            self.version,
            self.magic,
            self.block_size,
            self.inodes_count,
            self.free_blocks,
            self.free_inodes,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "SuperBlock":
        _check_length(data, _SUPERBLOCK, "superblock")
        return cls(*_SUPERBLOCK.unpack_from(data))


@dataclass
class InodeInfo:
    """An inode record; ``size`` is the file size or the child count."""

    mode: int = 0
    inode_no: int = 0
    data_block_number: int = 0
    size: int = 0

    SIZE = _INODE.size

    @property
    def file_size(self) -> int:
        return self.size

    @file_size.setter
    def file_size(self, value: int) -> None:
        self.size = value

    @property
    def dir_children_count(self) -> int:
        return self.size

    @dir_children_count.setter
    def dir_children_count(self, value: int) -> None:
        self.size = value

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def pack(self) -> bytes:
        return _INODE.pack(
            self.mode, self.inode_no, self.data_block_number, self.size
        )

    @classmethod
    def unpack(cls, data: bytes) -> "InodeInfo":
        _check_length(data, _INODE, "inode")
        return cls(*_INODE.unpack_from(data))


@dataclass
class DirRecord:
    """A directory entry: a name bound to an inode number."""

    filename: str = ""
    inode_no: int = 0
    entry_removed: bool = False

    SIZE = _DIR_RECORD.size

    def encoded_name(self) -> bytes:
        name = self.filename.encode("utf-8")
        if len(name) >= FILENAME_MAXLEN:
            raise ValueError(
                f"file name longer than {FILENAME_MAXLEN - 1} bytes: "
                f"{self.filename!r}"
            )
        return name

    def pack(self) -> bytes:
        return _DIR_RECORD.pack(
            self.encoded_name(), self.inode_no, int(self.entry_removed)
        )

    @classmethod
    def unpack(cls, data: bytes) -> "DirRecord":
        _check_length(data, _DIR_RECORD, "directory record")
        raw_name, inode_no, removed = _DIR_RECORD.unpack_from(data)
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(name, inode_no, bool(removed))