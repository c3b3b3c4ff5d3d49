"""Formatting of an ASSOOFS image."""

from __future__ import annotations

import os
import stat
import sys

from assoofs.layout import (
    BLOCK_SIZE,
    LAST_RESERVED_BLOCK,
    LAST_RESERVED_INODE,
    ROOTDIR_BLOCK_NUMBER,
    ROOTDIR_INODE_NUMBER,
    DirRecord,
    InodeInfo,
    SuperBlock,
)

WELCOMEFILE_DATABLOCK_NUMBER = LAST_RESERVED_BLOCK + 1
WELCOMEFILE_INODE_NUMBER = LAST_RESERVED_INODE + 1
WELCOMEFILE_NAME = "README.txt"
WELCOMEFILE_BODY = (
    b"Hola mundo, os saludo desde un sistema de ficheros ASSOOFS.\n\0"
)


def format_image(path: str | os.PathLike) -> None:
    """Write a fresh ASSOOFS layout into the existing file at *path*."""
    superblock = SuperBlock(
        version=1,
        inodes_count=2,
        free_blocks=15,
        free_inodes=3,
    )
    root = InodeInfo(
        mode=stat.S_IFDIR,
        inode_no=ROOTDIR_INODE_NUMBER,
        data_block_number=ROOTDIR_BLOCK_NUMBER,
        size=1,
    )
    welcome = InodeInfo(
        mode=stat.S_IFREG,
        inode_no=WELCOMEFILE_INODE_NUMBER,
        data_block_number=WELCOMEFILE_DATABLOCK_NUMBER,
        size=len(WELCOMEFILE_BODY),
    )
    record = DirRecord(WELCOMEFILE_NAME, WELCOMEFILE_INODE_NUMBER, False)

    with open(path, "r+b") as image:
        image.write(superblock.pack())
        print("Super block written successfully.")

        image.write(root.pack())
        print("Root directory inode written successfully.")

        image.write(welcome.pack())
        print("Welcomefile inode written successfully.")
        image.seek(BLOCK_SIZE - 2 * InodeInfo.SIZE, os.SEEK_CUR)
        print("Inode store padding bytes (after two inodes) written successfully.")

        image.write(record.pack())
        print("Root directory datablocks written successfully.")
        image.seek(BLOCK_SIZE - DirRecord.SIZE, os.SEEK_CUR)
        print("Padding after the rootdirectory children written successfully.")

        image.write(WELCOMEFILE_BODY[: welcome.file_size])
        print("Block has been written successfully.")


def main(argv: list[str] | None = None) -> int:
    """Format the image named on the command line."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: mkassoofs <device>")
        return -1
    try:
        format_image(args[0])
    except OSError as exc:
        print(f"Error opening the device: {exc}", file=sys.stderr)
        return -1
    return 0


if __name__ == "__main__":
    sys.exit(main())