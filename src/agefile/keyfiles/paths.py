#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from pathlib import Path

from ..core.errors import PathError, PathErrorKind


def resolve_path(raw: str | Path) -> Path:
    """Turn a user-supplied key path into a canonical path to a regular file.

    A leading ``~`` is expanded and relative paths are taken against the
    current working directory.
    """
    text = str(raw)
    if not text.strip():
        raise PathError(kind=PathErrorKind.NOT_FOUND, detail="empty key path")
    path = Path(text).expanduser()
    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as exc:
        raise PathError(kind=PathErrorKind.NOT_FOUND, detail=f"key file not found: {path}") from exc
    except (OSError, RuntimeError) as exc:
        # RuntimeError covers symlink loops on older interpreters.
        raise PathError(
            kind=PathErrorKind.CANONICALIZE_FAILED,
            detail=f"cannot resolve {path}: {exc}",
        ) from exc
    if not resolved.is_file():
        raise PathError(
            kind=PathErrorKind.NOT_A_FILE,
            detail=f"key path is not a regular file: {resolved}",
        )
    return resolved
