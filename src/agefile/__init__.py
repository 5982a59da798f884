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

from .config import AgeFileConfig, load_config
from .core.errors import AgeFileError, CryptoError, KeyMaterialError, PathError, StateError
from .crypto import decrypt, encrypt
from .keyfiles import load_identities, load_recipients
from .transform import (
    Command,
    TransformResult,
    decrypt_current_file,
    dispatch,
    encrypt_current_file,
)

__all__ = [
    "AgeFileConfig",
    "AgeFileError",
    "Command",
    "CryptoError",
    "KeyMaterialError",
    "PathError",
    "StateError",
    "TransformResult",
    "decrypt",
    "decrypt_current_file",
    "dispatch",
    "encrypt",
    "encrypt_current_file",
    "load_config",
    "load_identities",
    "load_recipients",
]
