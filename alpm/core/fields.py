"""
Scalar metadata fields shared by PKGINFO and BUILDINFO.

Each parser takes the raw value string and either returns the parsed value
or raises FieldError naming the field.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .errors import FieldError

SHA256_PATTERN = re.compile(r'^[0-9a-f]{64}$')
# "Full Name <email@host>"
PACKAGER_PATTERN = re.compile(r'^(?P<name>[^<>]*?)\s*<(?P<email>[^<>\s@]+@[^<>\s@]+)>$')


class SchemaVersion(Enum):
    V1 = 1
    V2 = 2

    @classmethod
    def parse(cls, text: str) -> 'SchemaVersion':
        try:
            return cls(int(text))
        except ValueError:
            raise FieldError('format', text, "supported formats are 1 and 2") from None


class PackageType(Enum):
    """Package type carried by the PKGINFO v2 ``pkgtype`` xdata."""
    PACKAGE = 'pkg'
    DEBUG = 'debug'
    SOURCE = 'src'
    SPLIT = 'split'

    @classmethod
    def parse(cls, text: str) -> 'PackageType':
        try:
            return cls(text)
        except ValueError:
            raise FieldError('pkgtype', text, "expected pkg, debug, src or split") from None


@dataclass(frozen=True)
class Packager:
    name: str
    email: str

    @classmethod
    def parse(cls, text: str) -> 'Packager':
        match = PACKAGER_PATTERN.match(text.strip())
        if not match or not match.group('name'):
            raise FieldError('packager', text, "expected 'Name <email>'")
        return cls(match.group('name'), match.group('email'))

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


def parse_unsigned(field: str, text: str) -> int:
    """Parse a non-negative integer field such as ``size`` or ``builddate``."""
    if not text.isascii() or not text.isdigit():
        raise FieldError(field, text, "expected a non-negative integer")
    return int(text)


def parse_sha256(field: str, text: str) -> str:
    if not SHA256_PATTERN.match(text):
        raise FieldError(field, text, "expected 64 lowercase hex digits")
    return text


def parse_absolute_path(field: str, text: str) -> str:
    if not text.startswith('/'):
        raise FieldError(field, text, "expected an absolute path")
    return text


def parse_relative_path(field: str, text: str) -> str:
    if not text or text.startswith('/'):
        raise FieldError(field, text, "expected a relative path")
    return text
