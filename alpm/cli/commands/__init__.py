"""CLI command modules."""

from .version import (
    cmd_vercmp,
    cmd_satisfies,
    cmd_validate,
)
from .metadata import (
    cmd_pkginfo,
    cmd_buildinfo,
    cmd_config,
)

__all__ = [
    'cmd_vercmp',
    'cmd_satisfies',
    'cmd_validate',
    'cmd_pkginfo',
    'cmd_buildinfo',
    'cmd_config',
]
