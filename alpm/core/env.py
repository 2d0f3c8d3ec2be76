"""Build environment types: makepkg options and installed packages."""

from dataclasses import dataclass

from .errors import InstalledPackageError, OptionError
from .name import Name
from .system import Architecture
from .version import Version

OPTION_EXTRA_CHARS = frozenset('-._')
OPTION_OFF_PREFIX = '!'


@dataclass(frozen=True)
class MakepkgOption:
    """A makepkg option, switched off when prefixed with '!'.

    Example:
        MakepkgOption.parse("!strip")  # name="strip", on=False
    """
    name: str
    on: bool = True

    @classmethod
    def parse(cls, text: str) -> 'MakepkgOption':
        """Parse an option string.

        Raises:
            OptionError: If the name has a character other than an
                alphanumeric or one of '-._'
        """
        name, on = text, True
        if text.startswith(OPTION_OFF_PREFIX):
            name, on = text[1:], False
        for char in name:
            if not (char.isalnum() or char in OPTION_EXTRA_CHARS):
                raise OptionError(text, char)
        return cls(name, on)

    def __str__(self) -> str:
        return self.name if self.on else f"{OPTION_OFF_PREFIX}{self.name}"


# BUILDINFO "buildenv" and "options" entries share the makepkg option syntax
BuildEnvironmentOption = MakepkgOption
PackageOption = MakepkgOption


@dataclass(frozen=True)
class InstalledPackage:
    """A package present in the build environment: ``name-version-arch``.

    The version must carry a pkgrel. The string is split from the right,
    since names may contain '-'.
    """
    name: Name
    version: Version
    architecture: Architecture

    @classmethod
    def parse(cls, text: str) -> 'InstalledPackage':
        """Parse e.g. ``foo-bar-1:1.0.0-1-any``.

        Raises:
            InstalledPackageError: If a component is missing
            PackageNameError, VersionError, ArchitectureError: If a
                component is malformed
        """
        parts = text.rsplit('-', 3)
        if len(parts) < 4:
            # components are taken from the right: arch, pkgrel, epoch_pkgver, name
            missing = {1: 'pkgrel', 2: 'epoch_pkgver', 3: 'name'}[len(parts)]
            raise InstalledPackageError(text, missing)
        name, epoch_pkgver, pkgrel, arch = parts
        if not name:
            raise InstalledPackageError(text, 'name')
        return cls(
            Name(name),
            Version.with_pkgrel(f"{epoch_pkgver}-{pkgrel}"),
            Architecture(arch),
        )

    def __str__(self) -> str:
        return f"{self.name}-{self.version}-{self.architecture}"
