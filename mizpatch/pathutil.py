from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple, Union

from .errors import PathCollisionError


PathLike = Union[str, "os.PathLike[str]"]


def resolve_path(p: PathLike) -> Path:
    """Absolute form of ``p`` with ``~`` expanded and symlinks followed.

    The path does not need to exist yet.
    """
    return Path(p).expanduser().resolve(strict=False)


def check_distinct_paths(input_path: PathLike, output_path: PathLike) -> Tuple[Path, Path]:
    """Ensure input and output name different files.

    Compares resolved absolute paths and, when the output already exists,
    also the device/inode pair (catches hard links).

    Returns:
        The resolved (input, output) paths.

    Raises:
        PathCollisionError: If both paths refer to the same file.
    """
    src = resolve_path(input_path)
    dst = resolve_path(output_path)
    same = src == dst
    if not same and src.exists() and dst.exists():
        same = os.path.samefile(src, dst)
    if same:
        raise PathCollisionError(f"input and output .miz must be different files: {src}")
    return src, dst
