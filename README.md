# assoofs

Tools for ASSOOFS, a very small filesystem that keeps everything in fixed
4096-byte blocks:

- block 0: the superblock (magic number `0x20200406`, block size, inode counters)
- block 1: the inode store
- block 2: the root directory's entries
- blocks 3 and later: file and directory data, one block per object

## Installing

```
pip install .
```

## Formatting an image

The formatter opens the image for update, so the file must exist already.
Make an empty file for the image first. Then format it:

```
mkassoofs disk.img
```

The formatter writes a superblock, the root directory inode, and a
`README.txt` file inode with its directory entry and its contents. It prints
one line for each step. It prints a usage line and exits with a non-zero
status if it is not given exactly one argument, and it exits with a non-zero
status if the image cannot be opened or written.

From Python:

```python
from assoofs.mkfs import format_image

format_image("disk.img")
```

`format_image` raises `OSError` if the file cannot be opened or written.

## Working with an image

`assoofs.filesystem.AssooFS` opens a formatted image. It supports listing a
directory, looking up a name, creating files and directories, and reading
and writing file contents. It can be used as a context manager.

```python
from assoofs.filesystem import AssooFS

with AssooFS.open("disk.img") as fs:
    root = fs.root()

    for record in fs.iterate(root):
        print(record.inode_no, record.filename)

    readme = fs.lookup(root, "README.txt")
    print(fs.read(readme, 0, 4096).decode())

    notes = fs.create(root, "notes.txt", 0o644)
    fs.write(notes, b"hello\n", 0)
    print(fs.read(notes))
```

- `iterate(directory)` yields the `DirRecord` entries of a directory that are
  not marked as removed.
- `lookup(directory, name)` returns the `InodeInfo` for `name` from the inode
  store, or `None` if there is no such entry.
- `create(directory, name, mode=0o644)` and `mkdir(directory, name, mode=0o755)`
  add a directory entry and return the new `InodeInfo`. The new inode's number
  is the parent's child count plus one, and its data block is that number plus
  two.
- `read(inode, offset=0, length=4096)` returns at most `length` bytes, never
  past the file's size; it returns `b""` when `offset` is at or past the end.
- `write(inode, data, offset=0)` writes into the file's data block, sets the
  file's size to end just after the written bytes, and returns the number of
  bytes written.

Errors, all derived from `AssooFSError`:

- `InvalidMagicError` when the superblock does not carry the magic number.
- `NoSpaceError` when no inodes are free, when the directory's data block has
  no room for another entry, or when a write would run past the end of the
  file's 4096-byte data block.

## What is kept on disk

Directory entries and file contents are written to the image. The new inodes
made by `create` and `mkdir`, the updated child counts and file sizes, and the
superblock counters are kept only on the `InodeInfo` and `SuperBlock` objects
in memory; they are not written back to the inode store or the superblock.
After the image is reopened, `lookup` reads inodes from the inode store as it
was when formatted. The package does not mount images into the operating
system; it only reads and writes the image file.

## On-disk structures

`assoofs.layout` has the three on-disk records, `SuperBlock`, `InodeInfo` and
`DirRecord`, and the layout constants (`MAGIC`, `BLOCK_SIZE`,
`FILENAME_MAXLEN` and the reserved block and inode numbers). Each record has
`pack()`, which gives its bytes, and the class method `unpack(data)`, which
reads it back from bytes and raises `ValueError` if the data is too short.
`InodeInfo.is_dir()` tells whether the mode is a directory, and its
`file_size` and `dir_children_count` are two names for the same field.
`DirRecord.pack()` raises `ValueError` for a name of 255 bytes or more in
UTF-8.

## Running the tests

```
pip install ".[test]"
pytest
```