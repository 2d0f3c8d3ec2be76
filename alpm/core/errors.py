"""
Exceptions raised by alpm parsers.

Every parse error carries a ``kind`` (an enum member naming what went
wrong), the offending ``value`` and, where it can be pinned down, the
``offset`` of the offending segment in the input string.
"""

from enum import Enum
from typing import Optional


class NameErrorKind(Enum):
    EMPTY = "empty"
    INVALID_CHARACTER = "invalid character"
    INVALID_LEADING_CHARACTER = "invalid leading character"


class ArchitectureErrorKind(Enum):
    EMPTY = "empty"
    INVALID_CHARACTER = "invalid character"


class VersionErrorKind(Enum):
    EMPTY_PKGVER = "empty pkgver"
    INVALID_PKGVER = "invalid pkgver"
    INVALID_EPOCH = "invalid epoch"
    INVALID_PKGREL = "invalid pkgrel"
    TRAILING_SEPARATOR = "trailing separator"
    MISSING_PKGREL = "missing pkgrel"


class RelationErrorKind(Enum):
    INVALID_NAME = "invalid name"
    INVALID_COMPARATOR = "invalid comparator"
    MISSING_VERSION = "missing version"
    INVALID_VERSION = "invalid version"


class Error(ValueError):
    """Base class of all alpm parse errors."""

    def __init__(self, kind: Enum, value: str, offset: Optional[int] = None,
                 detail: str = ''):
        self.kind = kind
        self.value = value
        self.offset = offset
        self.detail = detail
        message = f"{kind.value}: {value!r}"
        if offset is not None:
            message += f" (at offset {offset})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class PackageNameError(Error):
    """Raised when a package name fails validation."""


class ArchitectureError(Error):
    """Raised for malformed architecture tokens."""


class VersionError(Error):
    """Raised when a version string cannot be parsed."""


class RelationError(Error):
    """Raised when a relation string cannot be parsed.

    For ``INVALID_VERSION`` the underlying :class:`VersionError` is kept in
    ``version_error`` and its offset is translated to the relation string.
    """

    def __init__(self, kind: RelationErrorKind, value: str,
                 offset: Optional[int] = None, detail: str = '',
                 version_error: Optional[VersionError] = None):
        self.version_error = version_error
        super().__init__(kind, value, offset, detail)


class OptionError(ValueError):
    """Raised when a makepkg option contains a forbidden character."""

    def __init__(self, value: str, invalid_char: str):
        self.value = value
        self.invalid_char = invalid_char
        super().__init__(f"Invalid character {invalid_char!r} in option {value!r}")


class InstalledPackageError(ValueError):
    """Raised when an installed package string is incomplete."""

    def __init__(self, value: str, component: str):
        self.value = value
        self.component = component
        super().__init__(f"Missing {component} in installed package {value!r}")


class FieldError(ValueError):
    """Raised when a metadata field value is malformed."""

    def __init__(self, field: str, value: str, reason: str = ''):
        self.field = field
        self.value = value
        message = f"Invalid {field}: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MetadataError(ValueError):
    """Raised when a PKGINFO or BUILDINFO file is invalid."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ArchiveError(Exception):
    """Raised when a package archive cannot be read."""
