"""
Read metadata files out of built package archives.

A package is a (usually zstd-compressed) tar archive with .PKGINFO, and
.BUILDINFO for packages built by recent makepkg, at its root.
"""

import logging
import tarfile
from pathlib import Path
from typing import Dict, Iterable, Union

from .buildinfo import BUILDINFO_FILE, BuildInfo, parse_buildinfo
from .compression import decompression_errors, open_stream
from .errors import ArchiveError
from .metadata import decode_content
from .pkginfo import PKGINFO_FILE, PackageInfo, parse_pkginfo

logger = logging.getLogger(__name__)

METADATA_FILES = (PKGINFO_FILE, BUILDINFO_FILE)


def read_metadata(path: Union[str, Path],
                  members: Iterable[str] = METADATA_FILES) -> Dict[str, str]:
    """Extract metadata files from a package archive.

    The archive is read as a stream and reading stops once every requested
    member has been found.

    Args:
        path: Path to the package file
        members: Member names to extract (e.g. '.PKGINFO')

    Returns:
        Dict mapping member name to its text; members absent from the
        archive are left out

    Raises:
        ArchiveError: If the file is not a readable tar archive
        MetadataError: If a requested member is not valid UTF-8
    """
    wanted = set(members)
    read_errors = (tarfile.TarError,) + decompression_errors()
    found = {}
    try:
        with open_stream(path) as stream:
            with tarfile.open(fileobj=stream, mode='r|') as tar:
                for member in tar:
                    name = member.name[2:] if member.name.startswith('./') else member.name
                    if name not in wanted or not member.isfile():
                        continue
                    f = tar.extractfile(member)
                    if f is None:
                        continue
                    found[name] = decode_content(f.read(), name)
                    if len(found) == len(wanted):
                        break
    except read_errors as e:
        raise ArchiveError(f"Cannot read package archive {path}: {e}") from e

    logger.debug("Read %s from %s", ', '.join(sorted(found)) or 'nothing', path)
    return found


def _read_member(path: Union[str, Path], member: str) -> str:
    content = read_metadata(path, (member,))
    if member not in content:
        raise ArchiveError(f"{member} not found in {path}")
    return content[member]


def read_pkginfo(path: Union[str, Path]) -> PackageInfo:
    """Parse the .PKGINFO of a package archive."""
    return parse_pkginfo(_read_member(path, PKGINFO_FILE))


def read_buildinfo(path: Union[str, Path]) -> BuildInfo:
    """Parse the .BUILDINFO of a package archive."""
    return parse_buildinfo(_read_member(path, BUILDINFO_FILE))


def is_package_archive(path: Union[str, Path]) -> bool:
    """Check if a path looks like a package archive rather than a bare metadata file."""
    path = Path(path)
    if path.name in METADATA_FILES:
        return False
    return '.pkg.tar' in path.name or tarfile.is_tarfile(path)
