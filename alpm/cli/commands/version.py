"""Version comparison and validation commands."""

import sys

from ...core.errors import Error
from ...core.name import Name
from ...core.relation import PackageRelation
from ...core.system import Architecture
from ...core.version import Version
from .. import colors

VALIDATORS = {
    'name': Name.parse,
    'version': Version.parse,
    'relation': PackageRelation.parse,
    'arch': Architecture.parse,
}


def cmd_vercmp(args) -> int:
    """Handle vercmp command - print -1, 0 or 1 like pacman's vercmp."""
    try:
        one = Version.parse(args.version1)
        two = Version.parse(args.version2)
    except Error as e:
        print(colors.error(f"Invalid version: {e}"), file=sys.stderr)
        return 1

    print(one.compare(two))
    return 0


def cmd_satisfies(args) -> int:
    """Handle satisfies command.

    Exit code 0 when the package satisfies the relation, 1 otherwise.
    """
    try:
        relation = PackageRelation.parse(args.relation)
        name = Name.parse(args.name)
        version = Version.parse(args.version)
    except Error as e:
        print(colors.error(f"Error: {e}"), file=sys.stderr)
        return 2

    if relation.is_satisfied_by(name, version):
        if not args.quiet:
            print(colors.success(f"{name} {version} satisfies {relation}"))
        return 0

    if not args.quiet:
        print(colors.warning(f"{name} {version} does not satisfy {relation}"))
    return 1


def cmd_validate(args) -> int:
    """Handle validate command - check each value, exit 1 if any is invalid."""
    parse = VALIDATORS[args.kind]
    failed = 0

    for value in args.values:
        try:
            parsed = parse(value)
        except Error as e:
            failed += 1
            print(f"{colors.error('invalid')} {value}: {e.kind.value}"
                  + (f" at offset {e.offset}" if e.offset is not None else ''))
            continue

        line = f"{colors.success('ok')} {value}"
        if isinstance(parsed, Architecture) and not parsed.is_known:
            line += colors.warning(" (unknown architecture)")
        elif str(parsed) != value:
            line += colors.dim(f" ({parsed})")
        print(line)

    return 1 if failed else 0
