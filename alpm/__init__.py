"""
alpm - Arch Linux package metadata types

Shared data model for package builders, repository tooling and installers:
- Package names, architectures and versions
- pacman-compatible version ordering and relation satisfaction
- PKGINFO and BUILDINFO parsing
"""

__version__ = "0.1.0"
__author__ = "Arch Linux Package Tooling Contributors"
