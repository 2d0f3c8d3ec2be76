"""
CPU architectures.

Known architectures are listed in KNOWN_ARCHITECTURES. Tokens that are
well formed but unknown are accepted so that metadata produced for newer
architectures can still be read; callers decide whether to warn.
"""

from dataclasses import dataclass

from .errors import ArchitectureError, ArchitectureErrorKind

ANY = 'any'

KNOWN_ARCHITECTURES = frozenset([
    'aarch64',
    ANY,
    'arm',
    'armv6h',
    'armv7h',
    'i386',
    'i486',
    'i686',
    'pentium4',
    'riscv32',
    'riscv64',
    'x86_64',
    'x86_64_v2',
    'x86_64_v3',
    'x86_64_v4',
])

_ARCH_CHARS = frozenset('abcdefghijklmnopqrstuvwxyz0123456789_')


@dataclass(frozen=True, order=True)
class Architecture:
    """An architecture token such as ``x86_64`` or ``any``."""
    value: str

    def __post_init__(self):
        if not self.value:
            raise ArchitectureError(ArchitectureErrorKind.EMPTY, self.value, 0)
        if self.value[0] == '_':
            raise ArchitectureError(ArchitectureErrorKind.INVALID_CHARACTER, self.value, 0)
        for offset, char in enumerate(self.value):
            if char not in _ARCH_CHARS:
                raise ArchitectureError(ArchitectureErrorKind.INVALID_CHARACTER,
                                        self.value, offset)

    @classmethod
    def parse(cls, text: str) -> 'Architecture':
        return cls(text)

    @property
    def is_known(self) -> bool:
        """False for the forward-compatible "other" variant."""
        return self.value in KNOWN_ARCHITECTURES

    @property
    def is_any(self) -> bool:
        return self.value == ANY

    def is_compatible_with(self, host: 'Architecture') -> bool:
        """Check if a package built for this architecture runs on host."""
        return self.is_any or host.is_any or self.value == host.value

    def __str__(self) -> str:
        return self.value


def validate_architecture(text: str) -> Architecture:
    """Parse an architecture token.

    Args:
        text: Architecture string (e.g. "x86_64")

    Returns:
        Architecture; check ``is_known`` to tell known tokens from others

    Raises:
        ArchitectureError: If the token is empty or malformed
    """
    return Architecture(text)
