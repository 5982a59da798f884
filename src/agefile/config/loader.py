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

import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .installer import resolve_config_path


@dataclass(frozen=True)
class AgeFileConfig:
    key_file: str = ""
    key_files: tuple[str, ...] = ()
    encrypt_and_delete: bool = False
    overwrite_ciphertext: bool = True

    def default_key_paths(self) -> tuple[str, ...]:
        """Configured key files in order, skipping blanks and repeats."""
        paths: list[str] = []
        for raw in (self.key_file, *self.key_files):
            candidate = raw.strip()
            if candidate and candidate not in paths:
                paths.append(candidate)
        return tuple(paths)


def load_config(path: str | Path | None = None) -> AgeFileConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    keys_cfg = _get_dict(data, "keys")
    encrypt_cfg = _get_dict(data, "encrypt")
    return AgeFileConfig(
        key_file=_parse_str(keys_cfg.get("key_file"), field="keys.key_file", default=""),
        key_files=_parse_str_list(keys_cfg.get("key_files"), field="keys.key_files"),
        encrypt_and_delete=_parse_bool(
            encrypt_cfg.get("delete_plaintext"),
            field="encrypt.delete_plaintext",
            default=False,
        ),
        overwrite_ciphertext=_parse_bool(
            encrypt_cfg.get("overwrite"),
            field="encrypt.overwrite",
            default=True,
        ),
    )


def config_from_mapping(options: Mapping[str, object]) -> AgeFileConfig:
    """Build a config from flat plugin-style options.

    Recognizes ``key_file``, ``key_files``, ``encrypt_and_del`` and
    ``overwrite``; anything else is ignored.
    """
    return AgeFileConfig(
        key_file=_parse_str(options.get("key_file"), field="key_file", default=""),
        key_files=_parse_str_list(options.get("key_files"), field="key_files"),
        encrypt_and_delete=_parse_bool(
            options.get("encrypt_and_del"), field="encrypt_and_del", default=False
        ),
        overwrite_ciphertext=_parse_bool(options.get("overwrite"), field="overwrite", default=True),
    )


def apply_overrides(
    config: AgeFileConfig,
    *,
    key_file: str | None = None,
    key_files: Iterable[str] | None = None,
    encrypt_and_delete: bool | None = None,
    overwrite_ciphertext: bool | None = None,
) -> AgeFileConfig:
    changes: dict[str, object] = {}
    if key_file is not None:
        changes["key_file"] = key_file
    if key_files is not None:
        changes["key_files"] = tuple(key_files)
    if encrypt_and_delete is not None:
        changes["encrypt_and_delete"] = encrypt_and_delete
    if overwrite_ciphertext is not None:
        changes["overwrite_ciphertext"] = overwrite_ciphertext
    if not changes:
        return config
    return replace(config, **changes)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_str(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value.strip()


def _parse_str_list(value: object, *, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{field} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field} must be a list of strings")
        if item.strip():
            items.append(item.strip())
    return tuple(items)


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")
