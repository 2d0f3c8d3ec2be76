"""Core modules for alpm"""

from .errors import (
    ArchitectureError,
    ArchiveError,
    Error,
    FieldError,
    InstalledPackageError,
    MetadataError,
    OptionError,
    PackageNameError,
    RelationError,
    VersionError,
)
from .name import Name, validate_name
from .system import Architecture, validate_architecture
from .version import Pkgrel, Version, VersionComparison, VersionRequirement, vercmp
from .relation import OptionalDependency, PackageRelation
from .env import BuildEnvironmentOption, InstalledPackage, MakepkgOption, PackageOption

__all__ = [
    'ArchitectureError', 'ArchiveError', 'Error', 'FieldError', 'InstalledPackageError',
    'MetadataError', 'OptionError', 'PackageNameError', 'RelationError', 'VersionError',
    'Name', 'validate_name',
    'Architecture', 'validate_architecture',
    'Pkgrel', 'Version', 'VersionComparison', 'VersionRequirement', 'vercmp',
    'OptionalDependency', 'PackageRelation',
    'BuildEnvironmentOption', 'InstalledPackage', 'MakepkgOption', 'PackageOption',
]
