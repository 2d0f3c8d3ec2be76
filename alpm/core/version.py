"""
Package versions: parsing, ordering and requirements.

A version has the form ``[epoch:]pkgver[-pkgrel]``:

    epoch   - optional non-negative integer, absent sorts as 0
    pkgver  - upstream version: ASCII alphanumerics and ``._+~``,
              starting with an alphanumeric
    pkgrel  - packaging release, ``N`` or ``N.M``

Ordering follows pacman's vercmp (itself derived from rpmvercmp), with
``~`` sorting before everything, the end of the string included.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from string import ascii_letters, digits
from typing import Optional, Tuple

from .errors import RelationError, RelationErrorKind, VersionError, VersionErrorKind

DIGITS = frozenset(digits)
LETTERS = frozenset(ascii_letters)
ALNUM = DIGITS | LETTERS
TILDE = '~'
PKGVER_CHARS = ALNUM | frozenset('._+~')

EPOCH_SEPARATOR = ':'
PKGREL_SEPARATOR = '-'
COMPARATOR_CHARS = frozenset('<>=')


def _is_digits(text: str) -> bool:
    return bool(text) and all(c in DIGITS for c in text)


def _is_separator(char: str) -> bool:
    return char not in ALNUM and char != TILDE


# Segment kinds. At equal separator length they sort in this order, so a
# remaining letter segment loses to the end of the other string and a digit
# segment wins over both. '~' sorts lowest whatever separators precede it.
_TILDE_SEGMENT = -1
_LETTER_SEGMENT = 0
_END_SEGMENT = 1
_DIGIT_SEGMENT = 2


def _next_segment(text: str, pos: int) -> Tuple[int, int, str, int]:
    """Read the separator run and the segment that follows it.

    Returns:
        (separator length, segment kind, segment value, next position).
        Digit values have their leading zeros stripped.
    """
    start = pos
    while pos < len(text) and _is_separator(text[pos]):
        pos += 1
    separators = pos - start

    if pos == len(text):
        return separators, _END_SEGMENT, '', pos
    if text[pos] == TILDE:
        return separators, _TILDE_SEGMENT, TILDE, pos + 1

    chars = DIGITS if text[pos] in DIGITS else LETTERS
    end = pos
    while end < len(text) and text[end] in chars:
        end += 1
    if chars is DIGITS:
        return separators, _DIGIT_SEGMENT, text[pos:end].lstrip('0'), end
    return separators, _LETTER_SEGMENT, text[pos:end], end


def vercmp(a: str, b: str) -> int:
    """Compare two pkgver strings.

    Both strings are walked with two cursors, one segment at a time. At each
    step the separator runs before the segments are compared first (longer
    wins), then the kinds of the segments, then their values: digit
    segments as numbers (leading zeros ignored), letter segments byte-wise.

    The end of a string counts as a segment that beats letters and loses to
    digits, and ``~`` sorts before anything, the end included::

        1.0~beta < 1.0a < 1.0 < 1.0.a < 1.0.1

    A trailing separator run is ranked like any other (``1.0 < 1.0.``).

    Args:
        a: First pkgver
        b: Second pkgver

    Returns:
        -1 if a is older than b, 0 if equal, 1 if a is newer
    """
    if a == b:
        return 0

    one = two = 0
    while True:
        sep_one, kind_one, value_one, one = _next_segment(a, one)
        sep_two, kind_two, value_two, two = _next_segment(b, two)

        if kind_one == _TILDE_SEGMENT or kind_two == _TILDE_SEGMENT:
            if kind_one != kind_two:
                return -1 if kind_one == _TILDE_SEGMENT else 1
            continue

        if sep_one != sep_two:
            return -1 if sep_one < sep_two else 1
        if kind_one != kind_two:
            return -1 if kind_one < kind_two else 1
        if kind_one == _END_SEGMENT:
            return 0

        if kind_one == _DIGIT_SEGMENT and len(value_one) != len(value_two):
            return -1 if len(value_one) < len(value_two) else 1
        if value_one != value_two:
            return -1 if value_one < value_two else 1


def _pkgver_key(pkgver: str) -> Tuple:
    """Segment tuple equal for all pkgvers that vercmp() considers equal."""
    key = []
    pos = 0
    while True:
        _, kind, value, pos = _next_segment(pkgver, pos)
        if kind == _END_SEGMENT:
            return tuple(key)
        key.append((kind, value))


def check_pkgver(text: str, offset: int = 0) -> str:
    """Validate a pkgver string.

    Args:
        text: The pkgver
        offset: Position of text in the enclosing string, used in errors

    Returns:
        text, unchanged

    Raises:
        VersionError: EMPTY_PKGVER or INVALID_PKGVER
    """
    if not text:
        raise VersionError(VersionErrorKind.EMPTY_PKGVER, text, offset)
    if text[0] not in ALNUM:
        raise VersionError(VersionErrorKind.INVALID_PKGVER, text, offset,
                           "pkgver must start with an alphanumeric character")
    for index, char in enumerate(text):
        if char not in PKGVER_CHARS:
            raise VersionError(VersionErrorKind.INVALID_PKGVER, text, offset + index,
                               f"character {char!r} is not allowed")
    return text


@dataclass(frozen=True)
class Pkgrel:
    """Package release: ``major`` with an optional ``.minor``."""
    major: int
    minor: Optional[int] = None

    def __post_init__(self):
        if self.major < 0 or (self.minor is not None and self.minor < 0):
            raise VersionError(VersionErrorKind.INVALID_PKGREL, str(self))

    @classmethod
    def parse(cls, text: str, offset: int = 0) -> 'Pkgrel':
        """Parse ``N`` or ``N.M``.

        Raises:
            VersionError: INVALID_PKGREL
        """
        major, dot, minor = text.partition('.')
        if not _is_digits(major) or (dot and not _is_digits(minor)):
            raise VersionError(VersionErrorKind.INVALID_PKGREL, text, offset,
                               "pkgrel must be an integer, optionally followed by '.' and an integer")
        return cls(int(major), int(minor) if dot else None)

    def compare(self, other: 'Pkgrel') -> int:
        if self.major != other.major:
            return 1 if self.major > other.major else -1
        if self.minor == other.minor:
            return 0
        if self.minor is None:
            return -1
        if other.minor is None:
            return 1
        return 1 if self.minor > other.minor else -1

    def __str__(self) -> str:
        if self.minor is None:
            return str(self.major)
        return f"{self.major}.{self.minor}"


def _compare_pkgrel(one: Optional[Pkgrel], two: Optional[Pkgrel]) -> int:
    if one is None and two is None:
        return 0
    if one is None:
        return -1
    if two is None:
        return 1
    return one.compare(two)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A package version.

    Equality and hashing follow :meth:`compare`, so ``1.0 == 1.00`` and
    ``0:1.0 == 1.0``, while ``str()`` keeps the form the version was
    written in (an absent epoch stays absent).
    """
    pkgver: str
    pkgrel: Optional[Pkgrel] = None
    epoch: Optional[int] = None

    def __post_init__(self):
        check_pkgver(self.pkgver)
        if self.epoch is not None and self.epoch < 0:
            raise VersionError(VersionErrorKind.INVALID_EPOCH, str(self.epoch), 0)

    @classmethod
    def parse(cls, text: str) -> 'Version':
        """Parse ``[epoch:]pkgver[-pkgrel]``.

        The epoch is split off at the first ':' and the pkgrel at the last
        '-'. A '-' with nothing after it is an error, not an absent pkgrel.

        Raises:
            VersionError: EMPTY_PKGVER, INVALID_PKGVER, INVALID_EPOCH,
                INVALID_PKGREL or TRAILING_SEPARATOR
        """
        epoch = None
        rest = text
        offset = 0
        if EPOCH_SEPARATOR in text:
            epoch_text, rest = text.split(EPOCH_SEPARATOR, 1)
            if not _is_digits(epoch_text):
                raise VersionError(VersionErrorKind.INVALID_EPOCH, text, 0,
                                   "epoch must be a non-negative integer")
            epoch = int(epoch_text)
            offset = len(epoch_text) + 1

        pkgrel = None
        pkgver = rest
        if PKGREL_SEPARATOR in rest:
            pkgver, pkgrel_text = rest.rsplit(PKGREL_SEPARATOR, 1)
            pkgrel_offset = offset + len(pkgver) + 1
            if not pkgrel_text:
                raise VersionError(VersionErrorKind.TRAILING_SEPARATOR, text, pkgrel_offset - 1,
                                   "'-' must be followed by a pkgrel")
            pkgrel = Pkgrel.parse(pkgrel_text, pkgrel_offset)

        check_pkgver(pkgver, offset)
        return cls(pkgver, pkgrel, epoch)

    @classmethod
    def with_pkgrel(cls, text: str) -> 'Version':
        """Parse a full package version, which must carry a pkgrel.

        Raises:
            VersionError: any parse error, or MISSING_PKGREL
        """
        version = cls.parse(text)
        if version.pkgrel is None:
            raise VersionError(VersionErrorKind.MISSING_PKGREL, text, len(text),
                               "a full package version requires a pkgrel")
        return version

    def compare(self, other: 'Version') -> int:
        """Compare with another version.

        Epochs first (absent is 0), then pkgver with :func:`vercmp`, then
        pkgrel (absent sorts before any pkgrel).

        Returns:
            -1, 0 or 1
        """
        epoch_one = self.epoch or 0
        epoch_two = other.epoch or 0
        if epoch_one != epoch_two:
            return 1 if epoch_one > epoch_two else -1

        result = vercmp(self.pkgver, other.pkgver)
        if result:
            return result

        return _compare_pkgrel(self.pkgrel, other.pkgrel)

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        pkgrel = None
        if self.pkgrel is not None:
            pkgrel = (self.pkgrel.major, self.pkgrel.minor)
        return hash((self.epoch or 0, _pkgver_key(self.pkgver), pkgrel))

    def __str__(self) -> str:
        text = self.pkgver
        if self.epoch is not None:
            text = f"{self.epoch}{EPOCH_SEPARATOR}{text}"
        if self.pkgrel is not None:
            text = f"{text}{PKGREL_SEPARATOR}{self.pkgrel}"
        return text


class VersionComparison(Enum):
    """Comparator of a version requirement."""
    LESS = '<'
    LESS_OR_EQUAL = '<='
    EQUAL = '='
    GREATER_OR_EQUAL = '>='
    GREATER = '>'

    @classmethod
    def parse(cls, token: str) -> 'VersionComparison':
        """Parse one of the five comparator tokens.

        Raises:
            RelationError: INVALID_COMPARATOR (e.g. for '==')
        """
        try:
            return cls(token)
        except ValueError:
            raise RelationError(RelationErrorKind.INVALID_COMPARATOR, token, 0,
                                "expected one of <, <=, =, >=, >") from None

    def matches(self, ordering: int) -> bool:
        """Tell whether an ordering (candidate vs bound) satisfies this comparator."""
        if self is VersionComparison.LESS:
            return ordering < 0
        if self is VersionComparison.LESS_OR_EQUAL:
            return ordering <= 0
        if self is VersionComparison.EQUAL:
            return ordering == 0
        if self is VersionComparison.GREATER_OR_EQUAL:
            return ordering >= 0
        return ordering > 0

    def __str__(self) -> str:
        return self.value


def scan_requirement(text: str, start: int) -> 'VersionRequirement':
    """Parse a comparator and version starting at ``start`` in text.

    Error offsets refer to positions in ``text``.

    Raises:
        RelationError: INVALID_COMPARATOR, MISSING_VERSION or INVALID_VERSION
    """
    end = start
    while end < len(text) and text[end] in COMPARATOR_CHARS:
        end += 1
    token = text[start:end]
    try:
        comparison = VersionComparison(token)
    except ValueError:
        raise RelationError(RelationErrorKind.INVALID_COMPARATOR, text, start,
                            f"{token!r} is not one of <, <=, =, >=, >") from None

    tail = text[end:]
    if not tail:
        raise RelationError(RelationErrorKind.MISSING_VERSION, text, end,
                            f"no version after {token!r}")
    try:
        version = Version.parse(tail)
    except VersionError as e:
        raise RelationError(RelationErrorKind.INVALID_VERSION, text, end + (e.offset or 0),
                            str(e), version_error=e) from e
    return VersionRequirement(comparison, version)


@dataclass(frozen=True)
class VersionRequirement:
    """A comparator paired with a version, e.g. ``>=1.2-1``."""
    comparison: VersionComparison
    version: Version

    @classmethod
    def parse(cls, text: str) -> 'VersionRequirement':
        """Parse a requirement such as ``>=1:2.0-1``.

        Raises:
            RelationError: INVALID_COMPARATOR, MISSING_VERSION or INVALID_VERSION
        """
        return scan_requirement(text, 0)

    def is_satisfied_by(self, candidate: Version) -> bool:
        return self.comparison.matches(candidate.compare(self.version))

    def __str__(self) -> str:
        return f"{self.comparison}{self.version}"
