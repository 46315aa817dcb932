from __future__ import annotations
import os
import re
from typing import TextIO

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

def colors_enabled(stream: TextIO | None = None, force: bool = False) -> bool:
    """Whether ANSI colors should be written to ``stream``."""
    if os.environ.get('SAFESCRIPT_COLOR_DISABLED') == '1' or 'NO_COLOR' in os.environ:
        return False
    if force:
        return True
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())

def strip_ansi(s: str) -> str:
    return ANSI_ESCAPE_RE.sub('', s)
