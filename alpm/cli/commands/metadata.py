"""PKGINFO / BUILDINFO inspection and host configuration commands."""

import json
import logging
from pathlib import Path

from ...core import config
from ...core.archive import is_package_archive, read_buildinfo, read_pkginfo
from ...core.buildinfo import read_buildinfo_file
from ...core.pkginfo import read_pkginfo_file
from .. import colors

logger = logging.getLogger(__name__)


def _print_metadata(info, as_json: bool):
    if as_json:
        print(json.dumps(info.to_dict(), indent=2))
    else:
        print(info.to_text(), end='')


def cmd_pkginfo(args) -> int:
    """Handle pkginfo command - parse a .PKGINFO file or package archive."""
    path = Path(args.path)
    if is_package_archive(path):
        logger.debug("Reading .PKGINFO from package archive %s", path)
        info = read_pkginfo(path)
    else:
        info = read_pkginfo_file(path)

    _print_metadata(info, args.json)

    if args.check_arch:
        host = config.get_host_architecture()
        if not info.arch.is_compatible_with(host):
            print(colors.warning(
                f"Warning: {info.pkgname} is built for {info.arch}, host is {host}"
            ))
            return 1
    return 0


def cmd_buildinfo(args) -> int:
    """Handle buildinfo command - parse a .BUILDINFO file or package archive."""
    path = Path(args.path)
    if is_package_archive(path):
        logger.debug("Reading .BUILDINFO from package archive %s", path)
        info = read_buildinfo(path)
    else:
        info = read_buildinfo_file(path)

    _print_metadata(info, args.json)
    return 0


def cmd_config(args) -> int:
    """Handle config command - show detected host settings."""
    host = config.get_host_architecture()
    packager = config.get_packager()

    print(f"makepkg.conf: {config.get_makepkg_conf_path()}")
    print(f"Architecture: {colors.bold(str(host))}")
    if not host.is_known:
        print(colors.warning("  (not a known pacman architecture)"))
    print(f"Packager:     {packager or colors.dim('(not set)')}")
    return 0
