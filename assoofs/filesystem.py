"""Operations on a mounted ASSOOFS image."""

from __future__ import annotations

import os
import stat
from typing import BinaryIO, Iterator

from assoofs.layout import (
    BLOCK_SIZE,
    INODESTORE_BLOCK_NUMBER,
    LAST_RESERVED_BLOCK,
    MAGIC,
    SUPERBLOCK_BLOCK_NUMBER,
    DirRecord,
    InodeInfo,
    SuperBlock,
)


class AssooFSError(Exception):
    """Base error for filesystem operations."""


class InvalidMagicError(AssooFSError):
    """The image does not carry the ASSOOFS magic number."""


class NoSpaceError(AssooFSError):
    """No free inode or room left in a data block."""


class AssooFS:
    """An ASSOOFS image opened for reading and writing."""

    def __init__(
        self, image: BinaryIO, superblock: SuperBlock, root: InodeInfo
    ) -> None:
        self._image = image
        self.superblock = superblock
        self._root = root

    @classmethod
    def open(cls, path: str | os.PathLike) -> "AssooFS":
        image = open(path, "r+b")
        try:
            superblock = SuperBlock.unpack(
                _read_block(image, SUPERBLOCK_BLOCK_NUMBER)
            )
            if superblock.magic != MAGIC:
                raise InvalidMagicError(
                    f"Invalid magic number: {superblock.magic}"
                )
            store = _read_block(image, INODESTORE_BLOCK_NUMBER)
            root = InodeInfo.unpack(store[: InodeInfo.SIZE])
        except BaseException:
            image.close()
            raise
        return cls(image, superblock, root)

    def close(self) -> None:
        self._image.close()

    def __enter__(self) -> "AssooFS":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def root(self) -> InodeInfo:
        return self._root

    def _read_block(self, number: int) -> bytes:
        return _read_block(self._image, number)

    def _write_block(self, number: int, data: bytes) -> None:
        self._image.seek(number * BLOCK_SIZE)
        self._image.write(data)
        self._image.flush()

    def _records(self, directory: InodeInfo) -> Iterator[DirRecord]:
        block = self._read_block(directory.data_block_number)
        for index in range(directory.dir_children_count):
            start = index * DirRecord.SIZE
            yield DirRecord.unpack(block[start : start + DirRecord.SIZE])

    def iterate(self, directory: InodeInfo) -> Iterator[DirRecord]:
        """Yield the live entries of *directory*."""
        for record in self._records(directory):
            if not record.entry_removed:
                yield record

    def lookup(self, directory: InodeInfo, name: str) -> InodeInfo | None:
        """Return the inode named *name* in *directory*, or None."""
        for record in self.iterate(directory):
            if record.filename == name:
                store = self._read_block(INODESTORE_BLOCK_NUMBER)
                start = record.inode_no * InodeInfo.SIZE
                return InodeInfo.unpack(store[start : start + InodeInfo.SIZE])
        return None

    def _new_entry(
        self, directory: InodeInfo, name: str, mode: int
    ) -> InodeInfo:
        if self.superblock.free_inodes == 0:
            raise NoSpaceError("No free inodes")
        record_offset = directory.dir_children_count * DirRecord.SIZE
        if record_offset + DirRecord.SIZE > BLOCK_SIZE:
            raise NoSpaceError("Directory block is full")

        inode_no = directory.dir_children_count + 1
        inode = InodeInfo(
            mode=mode,
            inode_no=inode_no,
            data_block_number=LAST_RESERVED_BLOCK + inode_no,
            size=0,
        )
        record = DirRecord(name, inode_no, False).pack()

        block = bytearray(self._read_block(directory.data_block_number))
        block[record_offset : record_offset + DirRecord.SIZE] = record
        self._write_block(directory.data_block_number, bytes(block))

        directory.dir_children_count += 1
        self.superblock.inodes_count += 1
        self.superblock.free_inodes -= 1
        return inode

    def create(self, directory: InodeInfo, name: str, mode: int = 0o644) -> InodeInfo:
        """Create a regular file named *name* in *directory*."""
        return self._new_entry(directory, name, stat.S_IFREG | mode)

    def mkdir(self, directory: InodeInfo, name: str, mode: int = 0o755) -> InodeInfo:
        """Create a directory named *name* in *directory*."""
        return self._new_entry(directory, name, stat.S_IFDIR | mode)

    def read(self, inode: InodeInfo, offset: int = 0, length: int = BLOCK_SIZE) -> bytes:
        """Read up to *length* bytes of the file from *offset*."""
        if offset >= inode.file_size:
            return b""
        length = min(length, inode.file_size - offset)
        block = self._read_block(inode.data_block_number)
        return block[offset : offset + length]

    def write(self, inode: InodeInfo, data: bytes, offset: int = 0) -> int:
        """Write *data* at *offset*; the file then ends after it."""
        end = offset + len(data)
        if end > BLOCK_SIZE:
            raise NoSpaceError("Write exceeds the file's data block")
        block = bytearray(self._read_block(inode.data_block_number))
        block[offset:end] = data
        self._write_block(inode.data_block_number, bytes(block))
        inode.file_size = end
        return len(data)


def _read_block(image: BinaryIO, number: int) -> bytes:
    image.seek(number * BLOCK_SIZE)
    data = image.read(BLOCK_SIZE)
    return data.ljust(BLOCK_SIZE, b"\0")