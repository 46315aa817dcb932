from __future__ import annotations
import os
from pathlib import Path

MAX_LINK_HOPS = 40

def resolve_script_path(path: str | os.PathLike) -> Path:
    """Follow a chain of symlinks to the real script file.

    Relative link targets are taken relative to the directory holding the
    link, the same way the kernel resolves them.
    """
    current = Path(path)
    for _ in range(MAX_LINK_HOPS):
        if not current.is_symlink():
            break
        target = Path(os.readlink(current))
        if not target.is_absolute():
            target = current.parent / target
        current = target
    else:
        raise OSError(f"Too many levels of symbolic links: {path}")
    # parent may itself sit behind a link (cd -P)
    return current.parent.resolve() / current.name

def script_dir(path: str | os.PathLike) -> Path:
    return resolve_script_path(path).parent
