"""
Compression of package archives.

makepkg picks the compressor from PKGEXT; the archive itself is identified
by its leading magic bytes rather than by its file name:

    .pkg.tar.zst   zstd (default since pacman 5.2)
    .pkg.tar.xz    xz (former default)
    .pkg.tar.gz    gzip
    .pkg.tar.bz2   bzip2
    .pkg.tar       no compression
"""

import bz2
import gzip
import lzma
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Tuple, Type, Union

MAGIC_SIZE = 6


class PackageCompression(Enum):
    """Compressor of a package archive, with its magic bytes and suffix."""
    ZSTD = ('zstd', b'\x28\xb5\x2f\xfd', '.pkg.tar.zst')
    XZ = ('xz', b'\xfd7zXZ\x00', '.pkg.tar.xz')
    GZIP = ('gzip', b'\x1f\x8b', '.pkg.tar.gz')
    BZIP2 = ('bzip2', b'BZh', '.pkg.tar.bz2')
    NONE = ('none', b'', '.pkg.tar')

    def __init__(self, label: str, magic: bytes, suffix: str):
        self.label = label
        self.magic = magic
        self.suffix = suffix

    def __str__(self) -> str:
        return self.label


def detect_format(head: bytes) -> PackageCompression:
    """Identify the compressor from the first bytes of a file.

    Anything without a known magic is treated as an uncompressed tar.
    """
    for compression in PackageCompression:
        if compression.magic and head.startswith(compression.magic):
            return compression
    return PackageCompression.NONE


def sniff(path: Union[str, Path]) -> PackageCompression:
    with open(path, 'rb') as f:
        return detect_format(f.read(MAGIC_SIZE))


def _zstandard():
    try:
        import zstandard
    except ImportError:
        raise ImportError(
            "Reading .pkg.tar.zst needs the 'zstandard' module "
            "(pip install zstandard)"
        )
    return zstandard


def decompression_errors() -> Tuple[Type[BaseException], ...]:
    """Exceptions the decompressors raise on corrupt input.

    gzip and bz2 raise OSError subclasses; lzma and zstandard have their own.
    """
    errors = [OSError, EOFError, lzma.LZMAError]
    try:
        errors.append(_zstandard().ZstdError)
    except ImportError:
        pass
    return tuple(errors)


def open_stream(path: Union[str, Path]) -> BinaryIO:
    """Open a package archive as a stream of decompressed tar data.

    zstd streams are not seekable, so the result must be read front to back
    (``tarfile`` mode ``'r|'``).

    Raises:
        ImportError: If the archive is zstd and zstandard is not installed
        OSError: If the file cannot be opened
    """
    compression = sniff(path)

    if compression is PackageCompression.ZSTD:
        decompressor = _zstandard().ZstdDecompressor()
        return decompressor.stream_reader(open(path, 'rb'), closefd=True)
    if compression is PackageCompression.XZ:
        return lzma.open(path, 'rb')
    if compression is PackageCompression.GZIP:
        return gzip.open(path, 'rb')
    if compression is PackageCompression.BZIP2:
        return bz2.open(path, 'rb')
    return open(path, 'rb')
