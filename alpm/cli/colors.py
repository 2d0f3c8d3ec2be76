"""Terminal styling for alpm output.

Styles map to what the CLI reports:
  - invalid: parse failures and errors (red)
  - notice: unknown architectures, unsatisfied relations (yellow)
  - valid: accepted values, satisfied relations (green)
  - muted: normalized forms and unset settings (dim)

Styling is off with --nocolor, when NO_COLOR is set (https://no-color.org/)
or when stdout is not a terminal.
"""

import os
import sys

_RESET = '\033[0m'

_STYLES = {
    'invalid': '\033[91m',
    'notice': '\033[93m',
    'valid': '\033[92m',
    'muted': '\033[2m',
    'strong': '\033[1m',
}

_active = False


def init(nocolor: bool = False):
    """Decide once per run whether output is styled."""
    global _active
    _active = not (nocolor or os.environ.get('NO_COLOR') or not sys.stdout.isatty())


def style(text: str, name: str) -> str:
    """Wrap text in the escape codes of a style, if styling is on."""
    if not _active:
        return text
    return f"{_STYLES[name]}{text}{_RESET}"


def error(text: str) -> str:
    return style(text, 'invalid')


def warning(text: str) -> str:
    return style(text, 'notice')


def success(text: str) -> str:
    return style(text, 'valid')


def dim(text: str) -> str:
    return style(text, 'muted')


def bold(text: str) -> str:
    return style(text, 'strong')
