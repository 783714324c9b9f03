"""Path handling for config-relative inputs and report files."""

import re
from pathlib import Path
from typing import Union

from seqstats_pkg.exceptions import ConfigurationError

__all__ = [
    'resolve_filepath',
    'get_incremented_path'
]

MAX_REPORT_INCREMENT = 9999
_NUMBERED_STEM = re.compile(r'^(?P<base>.+)_(?P<number>\d+)$')


def resolve_filepath(base_dir: Union[str, Path], filename: Union[str, Path]) -> Path:
    """Resolve a config entry against the config directory, refusing anything outside it.

    Symlinks are followed before the check, so a link pointing out of the
    directory is rejected as well.
    """
    root = Path(base_dir).resolve()
    candidate = (root / filename).resolve()

    if candidate != root and root not in candidate.parents:
        raise ConfigurationError(
            f"Path traversal detected: '{filename}' resolves outside config directory.\n"
            f"Resolved path: {candidate}\n"
            f"Config directory: {root}"
        )
    return candidate


def get_incremented_path(path: Union[str, Path], separator: str = "_") -> Path:
    """Return ``path`` if free, else the next free ``<stem>_NNN<suffix>`` beside it."""
    path = Path(path)
    if not path.exists():
        return path

    match = _NUMBERED_STEM.match(path.stem)
    if match:
        base_stem, first = match.group('base'), int(match.group('number')) + 1
    else:
        base_stem, first = path.stem, 1

    for counter in range(first, MAX_REPORT_INCREMENT + 1):
        candidate = path.with_name(f"{base_stem}{separator}{counter:03d}{path.suffix}")
        if not candidate.exists():
            return candidate

    raise RuntimeError(f"Too many incremented files for {path}. Maximum is {MAX_REPORT_INCREMENT}.")
