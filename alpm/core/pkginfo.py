"""
PKGINFO parser.

The .PKGINFO file sits at the root of every built package and describes
it with ``key = value`` lines:

    pkgname = example
    pkgbase = example
    pkgver = 1:1.0.0-1
    depend = glibc>=2.38
    optdepend = python: for the helper scripts
    xdata = pkgtype=pkg

Schema v2 adds ``xdata`` entries, of which ``pkgtype`` is required. The
schema is detected from the presence of ``xdata`` unless given explicitly.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import MetadataError
from .fields import (
    PackageType,
    Packager,
    SchemaVersion,
    parse_relative_path,
    parse_unsigned,
)
from .metadata import Fields, decode_content, format_lines
from .name import Name
from .relation import OptionalDependency, PackageRelation
from .system import Architecture
from .version import Version

logger = logging.getLogger(__name__)

PKGINFO_FILE = '.PKGINFO'

# Relation lists, in the order makepkg writes them
RELATION_KEYS = ('replaces', 'conflict', 'provides')
DEPEND_KEYS = ('depend', 'makedepend', 'checkdepend')


def parse_xdata(text: str):
    """Split an ``xdata`` entry; a ``pkgtype`` value must be a PackageType."""
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise ValueError(f"expected 'key=value', got {text!r}")
    if key == 'pkgtype':
        PackageType.parse(value)
    return key, value


@dataclass
class PackageInfo:
    """Parsed contents of a .PKGINFO file."""
    schema: SchemaVersion
    pkgname: Name
    pkgbase: Name
    pkgver: Version
    pkgdesc: str
    url: str
    builddate: int
    packager: Packager
    size: int
    arch: Architecture
    license: List[str] = field(default_factory=list)
    replaces: List[PackageRelation] = field(default_factory=list)
    group: List[str] = field(default_factory=list)
    conflict: List[PackageRelation] = field(default_factory=list)
    provides: List[PackageRelation] = field(default_factory=list)
    backup: List[str] = field(default_factory=list)
    depend: List[PackageRelation] = field(default_factory=list)
    optdepend: List[OptionalDependency] = field(default_factory=list)
    makedepend: List[PackageRelation] = field(default_factory=list)
    checkdepend: List[PackageRelation] = field(default_factory=list)
    xdata: Dict[str, str] = field(default_factory=OrderedDict)
    extra: Dict[str, List[str]] = field(default_factory=OrderedDict)

    @property
    def pkgtype(self) -> Optional[PackageType]:
        value = self.xdata.get('pkgtype')
        return PackageType(value) if value is not None else None

    def to_text(self) -> str:
        """Render back to PKGINFO format."""
        pairs = [
            ('pkgname', self.pkgname),
            ('pkgbase', self.pkgbase),
            ('pkgver', self.pkgver),
            ('pkgdesc', self.pkgdesc),
            ('url', self.url),
            ('builddate', self.builddate),
            ('packager', self.packager),
            ('size', self.size),
            ('arch', self.arch),
        ]
        pairs += [('license', v) for v in self.license]
        pairs += [('replaces', v) for v in self.replaces]
        pairs += [('group', v) for v in self.group]
        pairs += [('conflict', v) for v in self.conflict]
        pairs += [('provides', v) for v in self.provides]
        pairs += [('backup', v) for v in self.backup]
        pairs += [('depend', v) for v in self.depend]
        pairs += [('optdepend', v) for v in self.optdepend]
        pairs += [('makedepend', v) for v in self.makedepend]
        pairs += [('checkdepend', v) for v in self.checkdepend]
        if self.schema is SchemaVersion.V2:
            pairs += [('xdata', f"{k}={v}") for k, v in self.xdata.items()]
        return format_lines(pairs)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation."""
        return {
            'schema': self.schema.value,
            'pkgname': str(self.pkgname),
            'pkgbase': str(self.pkgbase),
            'pkgver': str(self.pkgver),
            'pkgdesc': self.pkgdesc,
            'url': self.url,
            'builddate': self.builddate,
            'packager': str(self.packager),
            'size': self.size,
            'arch': str(self.arch),
            'license': list(self.license),
            'replaces': [str(r) for r in self.replaces],
            'group': list(self.group),
            'conflict': [str(r) for r in self.conflict],
            'provides': [str(r) for r in self.provides],
            'backup': list(self.backup),
            'depend': [str(r) for r in self.depend],
            'optdepend': [str(r) for r in self.optdepend],
            'makedepend': [str(r) for r in self.makedepend],
            'checkdepend': [str(r) for r in self.checkdepend],
            'xdata': dict(self.xdata),
            'extra': dict(self.extra),
        }


def parse_pkginfo(content: str, schema: Optional[SchemaVersion] = None) -> PackageInfo:
    """Parse the contents of a .PKGINFO file.

    Args:
        content: File contents
        schema: Force a schema version instead of detecting it

    Returns:
        PackageInfo

    Raises:
        MetadataError: On missing or repeated keys and malformed values
    """
    fields = Fields(content, 'PKGINFO')
    if schema is None:
        schema = SchemaVersion.V2 if fields.has('xdata') else SchemaVersion.V1

    xdata = OrderedDict()
    if schema is SchemaVersion.V2:
        for key, value in fields.multi('xdata', parse_xdata):
            xdata[key] = value
        if 'pkgtype' not in xdata:
            raise MetadataError("PKGINFO: schema v2 requires 'xdata = pkgtype=...'")

    info = PackageInfo(
        schema=schema,
        pkgname=fields.single('pkgname', Name),
        pkgbase=fields.single('pkgbase', Name),
        pkgver=fields.single('pkgver', Version.with_pkgrel),
        pkgdesc=fields.single('pkgdesc', str),
        url=fields.single('url', str),
        builddate=fields.single('builddate', lambda v: parse_unsigned('builddate', v)),
        packager=fields.single('packager', Packager.parse),
        size=fields.single('size', lambda v: parse_unsigned('size', v)),
        arch=fields.single('arch', Architecture),
        license=fields.multi('license', str),
        group=fields.multi('group', str),
        backup=fields.multi('backup', lambda v: parse_relative_path('backup', v)),
        optdepend=fields.multi('optdepend', OptionalDependency.parse),
        xdata=xdata,
    )
    for key in RELATION_KEYS + DEPEND_KEYS:
        setattr(info, key, fields.multi(key, PackageRelation.parse))

    if not info.arch.is_known:
        logger.warning("PKGINFO: unknown architecture %r for %s", str(info.arch), info.pkgname)

    info.extra = fields.leftovers()
    logger.debug("Parsed PKGINFO v%d for %s %s", schema.value, info.pkgname, info.pkgver)
    return info


def read_pkginfo_file(path: Union[str, Path], schema: Optional[SchemaVersion] = None) -> PackageInfo:
    """Parse a .PKGINFO file from disk."""
    return parse_pkginfo(decode_content(Path(path).read_bytes(), 'PKGINFO'), schema)
