"""
Package name validation.

A package name is made of lowercase ASCII letters, digits and ``@._+-``,
and must not start with a hyphen or a dot.
"""

from dataclasses import dataclass

from .errors import NameErrorKind, PackageNameError

NAME_CHARS = frozenset('abcdefghijklmnopqrstuvwxyz0123456789@._+-')
FORBIDDEN_LEADING_CHARS = frozenset('-.')


@dataclass(frozen=True, order=True)
class Name:
    """A validated package name.

    Only :meth:`parse` (or :func:`validate_name`) should be used to build
    one; the constructor validates as well, so an invalid ``Name`` cannot
    exist.
    """
    value: str

    def __post_init__(self):
        _check_name(self.value)

    @classmethod
    def parse(cls, text: str) -> 'Name':
        return cls(text)

    def __str__(self) -> str:
        return self.value


def _check_name(text: str):
    if not text:
        raise PackageNameError(NameErrorKind.EMPTY, text, 0)
    if text[0] in FORBIDDEN_LEADING_CHARS:
        raise PackageNameError(NameErrorKind.INVALID_LEADING_CHARACTER, text, 0,
                               f"names must not start with {text[0]!r}")
    for offset, char in enumerate(text):
        if char not in NAME_CHARS:
            raise PackageNameError(NameErrorKind.INVALID_CHARACTER, text, offset,
                                   f"character {char!r} is not allowed")


def validate_name(text: str) -> Name:
    """Validate a package name.

    Args:
        text: Candidate name (e.g. "python-requests")

    Returns:
        The validated Name

    Raises:
        PackageNameError: If the name is empty, starts with '-' or '.',
            or contains a character outside [a-z0-9@._+-]
    """
    return Name(text)


def is_valid_name(text: str) -> bool:
    """Return True if text is a valid package name."""
    try:
        _check_name(text)
    except PackageNameError:
        return False
    return True
