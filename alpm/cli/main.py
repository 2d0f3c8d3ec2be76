"""
Main CLI entry point for alpm

Commands:
- alpm vercmp <v1> <v2>                      (like pacman's vercmp)
- alpm satisfies <relation> <name> <version>
- alpm validate {name,version,relation,arch} <value>...
- alpm pkginfo <file-or-package>
- alpm buildinfo <file-or-package>
- alpm config
"""

import argparse
import logging
import sys

from .. import __version__
from ..core.errors import ArchiveError
from .commands import (
    cmd_buildinfo,
    cmd_config,
    cmd_pkginfo,
    cmd_satisfies,
    cmd_validate,
    cmd_vercmp,
)
from .commands.version import VALIDATORS


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all commands."""

    parser = argparse.ArgumentParser(
        prog='alpm',
        description='Arch Linux package metadata tool',
        epilog='Use "alpm <command> --help" for command-specific help.'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'alpm {__version__}'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output (debug logging on stderr)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Quiet output'
    )

    parser.add_argument(
        '--nocolor',
        action='store_true',
        help='Disable colored output'
    )

    # Parent parser for output options (inherited by metadata subparsers)
    output_parent = argparse.ArgumentParser(add_help=False)
    output_parent.add_argument(
        '--json',
        action='store_true',
        help='JSON output for scripting'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        title='commands',
        metavar='<command>'
    )

    # =========================================================================
    # vercmp
    # =========================================================================
    vercmp_parser = subparsers.add_parser(
        'vercmp',
        help='Compare two versions (prints -1, 0 or 1)'
    )
    vercmp_parser.add_argument('version1', help='First version')
    vercmp_parser.add_argument('version2', help='Second version')

    # =========================================================================
    # satisfies
    # =========================================================================
    satisfies_parser = subparsers.add_parser(
        'satisfies',
        help='Check if a package version satisfies a relation'
    )
    satisfies_parser.add_argument('relation', help='Relation, e.g. "pacman>=6:6.0.1-2"')
    satisfies_parser.add_argument('name', help='Package name')
    satisfies_parser.add_argument('version', help='Package version')

    # =========================================================================
    # validate
    # =========================================================================
    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate names, versions, relations or architectures'
    )
    validate_parser.add_argument('kind', choices=sorted(VALIDATORS), help='What to validate')
    validate_parser.add_argument('values', nargs='+', help='Values to validate')

    # =========================================================================
    # pkginfo / buildinfo
    # =========================================================================
    pkginfo_parser = subparsers.add_parser(
        'pkginfo',
        parents=[output_parent],
        help='Parse a .PKGINFO file or the .PKGINFO of a package'
    )
    pkginfo_parser.add_argument('path', help='.PKGINFO file or package archive')
    pkginfo_parser.add_argument(
        '--check-arch',
        action='store_true',
        help='Fail if the package architecture does not match the host'
    )

    buildinfo_parser = subparsers.add_parser(
        'buildinfo',
        parents=[output_parent],
        help='Parse a .BUILDINFO file or the .BUILDINFO of a package'
    )
    buildinfo_parser.add_argument('path', help='.BUILDINFO file or package archive')

    # =========================================================================
    # config
    # =========================================================================
    subparsers.add_parser(
        'config',
        help='Show host architecture and packager'
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on verbose flag
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s',
            stream=sys.stderr
        )
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)

    # Initialize color support
    from . import colors
    colors.init(nocolor=args.nocolor)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'vercmp':
            return cmd_vercmp(args)

        elif args.command == 'satisfies':
            return cmd_satisfies(args)

        elif args.command == 'validate':
            return cmd_validate(args)

        elif args.command == 'pkginfo':
            return cmd_pkginfo(args)

        elif args.command == 'buildinfo':
            return cmd_buildinfo(args)

        elif args.command == 'config':
            return cmd_config(args)

        parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    except (ValueError, ArchiveError, OSError) as e:
        if args.verbose:
            import traceback
            traceback.print_exc()
        print(colors.error(f"Error: {e}"), file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
