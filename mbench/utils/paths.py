# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for mbench.

Directory creation is always explicit: nothing in the harness writes to disk,
only the report writer does, and it goes through here.
"""

from pathlib import Path


def ensure_directory(path: Path) -> Path:
    """
    Create a directory (and parents) if it doesn't exist. Returns the path for chaining.

    Args:
        path: Directory path to create.

    Returns:
        The same path, now guaranteed to exist.

    Raises:
        NotADirectoryError: If the path exists and is a file.
    """
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Output path exists and is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_output_directory(raw: str, base: Path | None = None) -> Path:
    """
    Turn a configured output directory into an absolute path.

    Relative paths are taken relative to `base` (usually the directory the
    config file lives in), falling back to the current working directory.
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    return path.resolve()
