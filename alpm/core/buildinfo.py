"""
BUILDINFO parser.

The .BUILDINFO file records the environment a package was built in, for
reproducible builds. The ``format`` key selects the schema:

    format 1 - pkgname, pkgbase, pkgver, pkgarch, pkgbuild_sha256sum,
               packager, builddate, builddir, buildenv*, options*, installed*
    format 2 - adds startdir, buildtool and buildtoolver
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .env import BuildEnvironmentOption, InstalledPackage, PackageOption
from .fields import (
    Packager,
    SchemaVersion,
    parse_absolute_path,
    parse_sha256,
    parse_unsigned,
)
from .metadata import Fields, decode_content, format_lines
from .name import Name
from .system import Architecture
from .version import Version

logger = logging.getLogger(__name__)

BUILDINFO_FILE = '.BUILDINFO'


@dataclass(frozen=True)
class BuildToolVersion:
    """Version of the build tool, optionally suffixed with its architecture.

    ``6.1.0-3-x86_64`` has an architecture, ``6.1.0`` does not.
    """
    version: Version
    architecture: Optional[Architecture] = None

    @classmethod
    def parse(cls, text: str) -> 'BuildToolVersion':
        if text.count('-') >= 2:
            version_text, arch = text.rsplit('-', 1)
            return cls(Version.with_pkgrel(version_text), Architecture(arch))
        return cls(Version.parse(text))

    def __str__(self) -> str:
        if self.architecture is None:
            return str(self.version)
        return f"{self.version}-{self.architecture}"


@dataclass
class BuildInfo:
    """Parsed contents of a .BUILDINFO file."""
    format: SchemaVersion
    pkgname: Name
    pkgbase: Name
    pkgver: Version
    pkgarch: Architecture
    pkgbuild_sha256sum: str
    packager: Packager
    builddate: int
    builddir: str
    buildenv: List[BuildEnvironmentOption] = field(default_factory=list)
    options: List[PackageOption] = field(default_factory=list)
    installed: List[InstalledPackage] = field(default_factory=list)
    startdir: Optional[str] = None
    buildtool: Optional[Name] = None
    buildtoolver: Optional[BuildToolVersion] = None
    extra: Dict[str, List[str]] = field(default_factory=OrderedDict)

    def to_text(self) -> str:
        """Render back to BUILDINFO format."""
        pairs = [
            ('format', self.format.value),
            ('pkgname', self.pkgname),
            ('pkgbase', self.pkgbase),
            ('pkgver', self.pkgver),
            ('pkgarch', self.pkgarch),
            ('pkgbuild_sha256sum', self.pkgbuild_sha256sum),
            ('packager', self.packager),
            ('builddate', self.builddate),
            ('builddir', self.builddir),
        ]
        if self.format is SchemaVersion.V2:
            pairs += [
                ('startdir', self.startdir),
                ('buildtool', self.buildtool),
                ('buildtoolver', self.buildtoolver),
            ]
        pairs += [('buildenv', v) for v in self.buildenv]
        pairs += [('options', v) for v in self.options]
        pairs += [('installed', v) for v in self.installed]
        return format_lines(pairs)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'format': self.format.value,
            'pkgname': str(self.pkgname),
            'pkgbase': str(self.pkgbase),
            'pkgver': str(self.pkgver),
            'pkgarch': str(self.pkgarch),
            'pkgbuild_sha256sum': self.pkgbuild_sha256sum,
            'packager': str(self.packager),
            'builddate': self.builddate,
            'builddir': self.builddir,
            'buildenv': [str(o) for o in self.buildenv],
            'options': [str(o) for o in self.options],
            'installed': [str(p) for p in self.installed],
            'extra': dict(self.extra),
        }
        if self.format is SchemaVersion.V2:
            data['startdir'] = self.startdir
            data['buildtool'] = str(self.buildtool)
            data['buildtoolver'] = str(self.buildtoolver)
        return data


def parse_buildinfo(content: str) -> BuildInfo:
    """Parse the contents of a .BUILDINFO file.

    Args:
        content: File contents

    Returns:
        BuildInfo

    Raises:
        MetadataError: On missing or repeated keys, an unsupported format
            and malformed values
    """
    fields = Fields(content, 'BUILDINFO')
    schema = fields.single('format', SchemaVersion.parse)

    info = BuildInfo(
        format=schema,
        pkgname=fields.single('pkgname', Name),
        pkgbase=fields.single('pkgbase', Name),
        pkgver=fields.single('pkgver', Version.with_pkgrel),
        pkgarch=fields.single('pkgarch', Architecture),
        pkgbuild_sha256sum=fields.single('pkgbuild_sha256sum',
                                         lambda v: parse_sha256('pkgbuild_sha256sum', v)),
        packager=fields.single('packager', Packager.parse),
        builddate=fields.single('builddate', lambda v: parse_unsigned('builddate', v)),
        builddir=fields.single('builddir', lambda v: parse_absolute_path('builddir', v)),
        buildenv=fields.multi('buildenv', BuildEnvironmentOption.parse),
        options=fields.multi('options', PackageOption.parse),
        installed=fields.multi('installed', InstalledPackage.parse),
    )

    if schema is SchemaVersion.V2:
        info.startdir = fields.single('startdir', lambda v: parse_absolute_path('startdir', v))
        info.buildtool = fields.single('buildtool', Name)
        info.buildtoolver = fields.single('buildtoolver', BuildToolVersion.parse)

    if not info.pkgarch.is_known:
        logger.warning("BUILDINFO: unknown architecture %r for %s", str(info.pkgarch), info.pkgname)
    for package in info.installed:
        if not package.architecture.is_known:
            logger.warning("BUILDINFO: installed package %s has unknown architecture %r",
                           package.name, str(package.architecture))

    info.extra = fields.leftovers()
    logger.debug("Parsed BUILDINFO v%d for %s %s", schema.value, info.pkgname, info.pkgver)
    return info


def read_buildinfo_file(path: Union[str, Path]) -> BuildInfo:
    """Parse a .BUILDINFO file from disk."""
    return parse_buildinfo(decode_content(Path(path).read_bytes(), 'BUILDINFO'))
