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
from enum import Enum


class PathErrorKind(Enum):
    NOT_FOUND = "not found"
    NOT_A_FILE = "not a regular file"
    CANONICALIZE_FAILED = "cannot canonicalize"
    READ_FAILED = "read failed"
    WRITE_FAILED = "write failed"


class KeyErrorKind(Enum):
    EMPTY_KEY_SET = "no usable keys"
    PARSE_FAILURE = "parse failure"


class CryptoErrorKind(Enum):
    ENCRYPT_FAILURE = "encryption failed"
    DECRYPT_FAILURE = "decryption failed"
    NO_MATCHING_IDENTITY = "no matching identity"


class StateErrorKind(Enum):
    WRONG_EXTENSION = "wrong extension"
    ALREADY_EXISTS = "already exists"


@dataclass
class AgeFileError(RuntimeError):
    """Base for every failure raised by agefile.

    ``str()`` renders a single line naming the failing stage, which is what the
    command line shows to the user.
    """

    kind: Enum
    detail: str

    @property
    def stage(self) -> str:
        return "agefile"

    def __str__(self) -> str:
        message = self.detail.strip() or self.kind.value
        return f"{self.stage}: {message}"


@dataclass
class PathError(AgeFileError):
    kind: PathErrorKind

    @property
    def stage(self) -> str:
        return "path"


@dataclass
class KeyMaterialError(AgeFileError):
    kind: KeyErrorKind

    @property
    def stage(self) -> str:
        return "key loading"


@dataclass
class CryptoError(AgeFileError):
    kind: CryptoErrorKind

    @property
    def stage(self) -> str:
        if self.kind is CryptoErrorKind.ENCRYPT_FAILURE:
            return "encryption"
        return "decryption"


@dataclass
class StateError(AgeFileError):
    kind: StateErrorKind

    @property
    def stage(self) -> str:
        return "file check"


def decrypt_failure(detail: str) -> CryptoError:
    return CryptoError(kind=CryptoErrorKind.DECRYPT_FAILURE, detail=detail)


def parse_failure(detail: str) -> KeyMaterialError:
    return KeyMaterialError(kind=KeyErrorKind.PARSE_FAILURE, detail=detail)
