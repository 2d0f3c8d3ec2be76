"""
Common reader for ``key = value`` metadata files (PKGINFO, BUILDINFO).

Blank lines and lines starting with '#' are skipped. Keys may repeat; the
parsers decide which keys are single-valued.
"""

import logging
from collections import OrderedDict
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from .errors import MetadataError

logger = logging.getLogger(__name__)

T = TypeVar('T')

Entry = Tuple[int, str]  # (line number, value)


def iter_entries(content: str) -> Iterator[Tuple[int, str, str]]:
    """Yield (line number, key, value) for each assignment in content.

    Raises:
        MetadataError: For a line that is not a comment and has no '='
    """
    for line_no, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        key, sep, value = stripped.partition('=')
        key = key.strip()
        if not sep or not key:
            raise MetadataError(f"expected 'key = value', got {stripped!r}", line_no)
        yield line_no, key, value.strip()


class Fields:
    """Values of a metadata file grouped by key."""

    def __init__(self, content: str, file_type: str):
        self.file_type = file_type
        self.entries: Dict[str, List[Entry]] = OrderedDict()
        for line_no, key, value in iter_entries(content):
            self.entries.setdefault(key, []).append((line_no, value))
        self._consumed = set()

    def has(self, key: str) -> bool:
        return key in self.entries

    def single(self, key: str, convert: Callable[[str], T],
               required: bool = True) -> Optional[T]:
        """Return the converted value of a key that may appear once.

        Raises:
            MetadataError: If the key is missing (and required), repeated,
                or its value does not convert
        """
        self._consumed.add(key)
        entries = self.entries.get(key, [])
        if not entries:
            if required:
                raise MetadataError(f"{self.file_type}: missing required key {key!r}")
            return None
        if len(entries) > 1:
            raise MetadataError(f"{self.file_type}: key {key!r} may only appear once",
                                entries[1][0])
        line_no, value = entries[0]
        return _convert(key, value, line_no, convert)

    def multi(self, key: str, convert: Callable[[str], T]) -> List[T]:
        """Return the converted values of a repeatable key, in file order."""
        self._consumed.add(key)
        return [_convert(key, value, line_no, convert)
                for line_no, value in self.entries.get(key, [])]

    def leftovers(self) -> Dict[str, List[str]]:
        """Return keys nobody asked for, logging a warning for each."""
        extra = OrderedDict()
        for key, entries in self.entries.items():
            if key in self._consumed:
                continue
            logger.warning("%s: unknown key %r (line %d)", self.file_type, key, entries[0][0])
            extra[key] = [value for _, value in entries]
        return extra


def _convert(key: str, value: str, line_no: int, convert: Callable[[str], T]) -> T:
    try:
        return convert(value)
    except ValueError as e:
        raise MetadataError(f"invalid value for {key!r}: {e}", line_no) from e


def format_lines(pairs: List[Tuple[str, object]]) -> str:
    """Render (key, value) pairs back to ``key = value`` lines."""
    return ''.join(f"{key} = {value}\n" for key, value in pairs)


def decode_content(data: bytes, file_type: str) -> str:
    """Decode raw metadata file contents, which must be UTF-8.

    Raises:
        MetadataError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MetadataError(f"{file_type}: not valid UTF-8 at byte {e.start}") from e
