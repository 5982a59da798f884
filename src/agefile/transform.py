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

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import AgeFileConfig
from .core.errors import PathError, PathErrorKind, StateError, StateErrorKind
from .crypto import decrypt, encrypt
from .files import AgeFile, PlainFile
from .keyfiles import load_identities, load_recipients


class Command(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    @classmethod
    def parse(cls, name: str) -> Command:
        normalized = name.strip().lower()
        command = _ALIASES.get(normalized)
        if command is None:
            raise ValueError(f"unknown command: {name}")
        return command


_ALIASES = {
    "encrypt": Command.ENCRYPT,
    "e": Command.ENCRYPT,
    "decrypt": Command.DECRYPT,
    "d": Command.DECRYPT,
}


@dataclass(frozen=True)
class TransformResult:
    operation: Command
    source: Path
    target: Path
    removed_source: bool = False
    replaced_target: bool = False


def _key_paths(raw_key_paths: Sequence[str] | None, config: AgeFileConfig) -> Sequence[str]:
    if raw_key_paths:
        return raw_key_paths
    return config.default_key_paths()


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise PathError(
            kind=PathErrorKind.READ_FAILED, detail=f"cannot read {path}: {exc}"
        ) from exc


def _write(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise PathError(
            kind=PathErrorKind.WRITE_FAILED, detail=f"cannot write {path}: {exc}"
        ) from exc


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise PathError(
            kind=PathErrorKind.WRITE_FAILED, detail=f"cannot remove {path}: {exc}"
        ) from exc


def encrypt_current_file(
    active_file: str | Path,
    raw_key_paths: Sequence[str] | None,
    config: AgeFileConfig,
) -> TransformResult:
    """Encrypt ``active_file`` into ``<name>.age`` next to it.

    The plaintext is only removed after the ciphertext has been written, and
    only when the config asks for it.
    """
    plain = PlainFile.from_path(active_file)
    recipients = load_recipients(_key_paths(raw_key_paths, config))
    ciphertext = encrypt(_read(plain.path), recipients)
    target = plain.counterpart_path()
    replaced = target.exists()
    if replaced and not config.overwrite_ciphertext:
        raise StateError(
            kind=StateErrorKind.ALREADY_EXISTS,
            detail=f"{target.name} already exists",
        )
    _write(target, ciphertext)
    removed = False
    if config.encrypt_and_delete:
        _remove(plain.path)
        removed = True
    return TransformResult(
        operation=Command.ENCRYPT,
        source=plain.path,
        target=target,
        removed_source=removed,
        replaced_target=replaced,
    )


def decrypt_current_file(
    active_file: str | Path,
    raw_key_paths: Sequence[str] | None,
    config: AgeFileConfig,
) -> TransformResult:
    """Decrypt ``active_file`` into the same name without ``.age``.

    An existing plaintext at the target is replaced. The ciphertext is kept.
    """
    age_file = AgeFile.from_path(active_file)
    identities = load_identities(_key_paths(raw_key_paths, config))
    plaintext = decrypt(_read(age_file.path), identities)
    target = age_file.counterpart_path()
    replaced = target.exists()
    if replaced:
        _remove(target)
    _write(target, plaintext)
    return TransformResult(
        operation=Command.DECRYPT,
        source=age_file.path,
        target=target,
        replaced_target=replaced,
    )


def dispatch(
    command: Command | str,
    active_file: str | Path,
    raw_key_paths: Sequence[str] | None,
    config: AgeFileConfig,
) -> TransformResult:
    if isinstance(command, str):
        command = Command.parse(command)
    if command is Command.ENCRYPT:
        return encrypt_current_file(active_file, raw_key_paths, config)
    return decrypt_current_file(active_file, raw_key_paths, config)
