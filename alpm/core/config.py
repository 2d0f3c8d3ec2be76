"""
Host configuration for alpm.

Detection order for the host architecture:
    1. ALPM_CARCH environment variable
    2. CARCH from makepkg.conf (/etc/makepkg.conf, or ALPM_MAKEPKG_CONF)
    3. platform.machine()

makepkg.conf is a shell fragment; only plain assignments are read:
    CARCH="x86_64"
    PACKAGER="John Doe <john@doe.com>"
    # Comments start with #
"""

import logging
import os
import platform
import shlex
from pathlib import Path
from typing import Dict, Optional

from .system import Architecture

logger = logging.getLogger(__name__)

DEFAULT_MAKEPKG_CONF = Path("/etc/makepkg.conf")
ENV_MAKEPKG_CONF = "ALPM_MAKEPKG_CONF"
ENV_CARCH = "ALPM_CARCH"

# platform.machine() names that differ from pacman's
_MACHINE_ALIASES = {
    'amd64': 'x86_64',
    'arm64': 'aarch64',
}

# Cache for detected config (avoid repeated filesystem checks)
_cached_config: Optional[dict] = None


def get_makepkg_conf_path() -> Path:
    return Path(os.environ.get(ENV_MAKEPKG_CONF, DEFAULT_MAKEPKG_CONF))


def read_makepkg_conf(path: Path) -> Optional[Dict[str, str]]:
    """Read plain ``KEY=value`` assignments from a makepkg.conf file.

    Returns:
        Dict with the assignments, or None if the file can't be read
    """
    if not path.exists():
        return None

    config = {}
    try:
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                key, sep, value = line.partition('=')
                key = key.strip()
                if not sep or not key.isidentifier():
                    continue
                try:
                    words = shlex.split(value, comments=True)
                except ValueError:
                    logger.debug("Skipping unparsable line in %s: %s", path, line)
                    continue
                config[key] = words[0] if words else ''
    except (OSError, IOError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None

    return config


def _detect_config() -> dict:
    """Detect host configuration.

    Returns:
        Dict with 'carch', 'packager', 'source'
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    conf_path = get_makepkg_conf_path()
    makepkg_conf = read_makepkg_conf(conf_path) or {}
    packager = makepkg_conf.get('PACKAGER') or None

    # 1. Explicit override
    carch = os.environ.get(ENV_CARCH)
    if carch:
        _cached_config = {'carch': carch, 'packager': packager, 'source': ENV_CARCH}
        return _cached_config

    # 2. makepkg.conf
    if makepkg_conf.get('CARCH'):
        _cached_config = {'carch': makepkg_conf['CARCH'], 'packager': packager,
                          'source': str(conf_path)}
        return _cached_config

    # 3. Running machine
    machine = platform.machine().lower()
    _cached_config = {'carch': _MACHINE_ALIASES.get(machine, machine), 'packager': packager,
                      'source': 'platform'}
    return _cached_config


def reset_cache():
    """Forget the detected configuration (environment or files changed)."""
    global _cached_config
    _cached_config = None


def get_host_architecture() -> Architecture:
    """Get the architecture packages are installed for on this host.

    Raises:
        ArchitectureError: If the configured value is malformed
    """
    config = _detect_config()
    logger.debug("Host architecture %s (from %s)", config['carch'], config['source'])
    return Architecture(config['carch'])


def get_packager() -> Optional[str]:
    """Get PACKAGER from makepkg.conf, if set."""
    return _detect_config()['packager']
