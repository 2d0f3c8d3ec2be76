"""
Package relations: depends, conflicts, provides and replaces.

Textual form: ``name[comparator version]`` where comparator is one of
``<``, ``<=``, ``=``, ``>=``, ``>``. Comparator characters cannot appear in a
valid name, so the name ends at the first of them.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .errors import PackageNameError, RelationError, RelationErrorKind
from .name import Name
from .version import COMPARATOR_CHARS, Version, VersionComparison, VersionRequirement, scan_requirement

OPTDEPEND_SEPARATOR = ':'


@dataclass(frozen=True)
class PackageRelation:
    """A package name with an optional version requirement."""
    name: Name
    requirement: Optional[VersionRequirement] = None

    @classmethod
    def parse(cls, text: str) -> 'PackageRelation':
        """Parse a relation such as ``pacman>=6:6.0.1-2``.

        Args:
            text: Relation string

        Returns:
            PackageRelation

        Raises:
            RelationError: INVALID_NAME, INVALID_COMPARATOR, MISSING_VERSION
                or INVALID_VERSION (the latter exposes ``version_error``)
        """
        split = len(text)
        for index, char in enumerate(text):
            if char in COMPARATOR_CHARS:
                split = index
                break

        try:
            name = Name(text[:split])
        except PackageNameError as e:
            raise RelationError(RelationErrorKind.INVALID_NAME, text, e.offset, str(e)) from e

        requirement = None
        if split < len(text):
            requirement = scan_requirement(text, split)
        return cls(name, requirement)

    def is_satisfied_by(self, name: Union[Name, str], version: Version) -> bool:
        """Check if a package called ``name`` at ``version`` satisfies this relation.

        Names must match exactly. A relation without a requirement accepts
        any version.
        """
        if str(name) != self.name.value:
            return False
        if self.requirement is None:
            return True
        return self.requirement.is_satisfied_by(version)

    def is_provided_by(self, provision: 'PackageRelation') -> bool:
        """Check if a ``provides`` entry satisfies this relation.

        An unversioned provision only satisfies unversioned relations; a
        versioned one must be written with '=' and satisfy the requirement.
        """
        if provision.name != self.name:
            return False
        if self.requirement is None:
            return True
        provided = provision.requirement
        if provided is None or provided.comparison is not VersionComparison.EQUAL:
            return False
        return self.requirement.is_satisfied_by(provided.version)

    def __str__(self) -> str:
        if self.requirement is None:
            return str(self.name)
        return f"{self.name}{self.requirement}"


@dataclass(frozen=True)
class OptionalDependency:
    """An optional dependency: ``name[: description]``."""
    relation: PackageRelation
    description: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> 'OptionalDependency':
        """Parse an optdepend entry, e.g. ``python-pip: for plugins``.

        The description starts after the first ':' followed by whitespace
        or the end of the string, so epochs in versions are left alone.

        Raises:
            RelationError: If the relation part is invalid
        """
        relation_text = text
        description = None
        start = 0
        while True:
            index = text.find(OPTDEPEND_SEPARATOR, start)
            if index < 0:
                break
            after = text[index + 1:index + 2]
            if not after or after.isspace():
                relation_text = text[:index]
                description = text[index + 1:].strip() or None
                break
            start = index + 1
        return cls(PackageRelation.parse(relation_text.rstrip()), description)

    @property
    def name(self) -> Name:
        return self.relation.name

    def __str__(self) -> str:
        if self.description is None:
            return str(self.relation)
        return f"{self.relation}: {self.description}"
