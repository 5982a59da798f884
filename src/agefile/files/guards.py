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

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import PathError, PathErrorKind, StateError, StateErrorKind

AGE_EXTENSION = ".age"


def has_age_extension(path: Path) -> bool:
    """Whether the file name carries the ciphertext marker, ignoring case."""
    name = path.name
    return len(name) > len(AGE_EXTENSION) and name.lower().endswith(AGE_EXTENSION)


def _existing(path: str | Path) -> Path:
    candidate = Path(path).expanduser()
    if not str(path) or not candidate.exists():
        raise PathError(kind=PathErrorKind.NOT_FOUND, detail=f"file not found: {candidate}")
    # Symlinks are kept so the counterpart sits next to the name the user gave.
    return candidate.absolute()


@dataclass(frozen=True)
class AgeFile:
    """An existing path whose name ends in the ``.age`` marker."""

    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> AgeFile:
        resolved = _existing(path)
        if not has_age_extension(resolved):
            raise StateError(
                kind=StateErrorKind.WRONG_EXTENSION,
                detail=f"{resolved.name} is not an {AGE_EXTENSION} file",
            )
        return cls(path=resolved)

    def counterpart_path(self) -> Path:
        return self.path.with_name(self.path.name[: -len(AGE_EXTENSION)])


@dataclass(frozen=True)
class PlainFile:
    """An existing path whose name does not carry the ``.age`` marker."""

    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> PlainFile:
        resolved = _existing(path)
        if has_age_extension(resolved):
            raise StateError(
                kind=StateErrorKind.WRONG_EXTENSION,
                detail=f"{resolved.name} is already an {AGE_EXTENSION} file",
            )
        return cls(path=resolved)

    def counterpart_path(self) -> Path:
        return self.path.with_name(self.path.name + AGE_EXTENSION)
