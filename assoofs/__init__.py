"""Formatter, on-disk layout and image access for the ASSOOFS block filesystem."""

__version__ = "0.1.0"
__all__ = ["layout", "mkfs", "filesystem"]