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

from typing import BinaryIO

import pyrage

from ..core.errors import (
    CryptoError,
    CryptoErrorKind,
    KeyErrorKind,
    KeyMaterialError,
    decrypt_failure,
)
from .keys import IdentitySet, RecipientSet

ARMOR_BEGIN = b"-----BEGIN AGE ENCRYPTED FILE-----"
NO_MATCHING_KEYS = "no matching keys"

CiphertextSource = bytes | bytearray | memoryview | BinaryIO


def _detail(exc: Exception) -> str:
    return str(exc).strip() or exc.__class__.__name__


def _require_recipients(recipients: RecipientSet) -> None:
    if recipients is None or len(recipients) == 0:
        raise KeyMaterialError(kind=KeyErrorKind.EMPTY_KEY_SET, detail="no recipients given")


def _require_identities(identities: IdentitySet) -> None:
    if identities is None or len(identities) == 0:
        raise KeyMaterialError(kind=KeyErrorKind.EMPTY_KEY_SET, detail="no identities given")


def _encrypt_with_pyrage(plaintext: bytes, recipients: RecipientSet, *, armored: bool) -> bytes:
    _require_recipients(recipients)
    try:
        return pyrage.encrypt(bytes(plaintext), recipients.backends(), armored=armored)
    except (pyrage.EncryptError, ValueError, TypeError, RuntimeError) as exc:
        raise CryptoError(kind=CryptoErrorKind.ENCRYPT_FAILURE, detail=_detail(exc)) from exc


def encrypt_binary(plaintext: bytes, recipients: RecipientSet) -> bytes:
    """Encrypt to every recipient and return the binary age v1 encoding."""
    return _encrypt_with_pyrage(plaintext, recipients, armored=False)


def encrypt(plaintext: bytes, recipients: RecipientSet) -> bytes:
    """Encrypt to every recipient; the result is always ASCII-armored."""
    return _encrypt_with_pyrage(plaintext, recipients, armored=True)


def decrypt(data: CiphertextSource, identities: IdentitySet) -> bytes:
    """Decrypt armored or binary age data with the first identity that matches.

    Identities are tried in order. Nothing is returned unless the header MAC
    and every payload chunk verified.
    """
    _require_identities(identities)
    raw = _read_all(data)
    stripped = raw.lstrip()
    if stripped.startswith(ARMOR_BEGIN):
        raw = stripped
    try:
        return pyrage.decrypt(raw, identities.backends())
    except pyrage.DecryptError as exc:
        detail = _detail(exc)
        if NO_MATCHING_KEYS in detail.lower():
            raise CryptoError(
                kind=CryptoErrorKind.NO_MATCHING_IDENTITY,
                detail=f"none of {len(identities)} identities matched",
            ) from exc
        raise decrypt_failure(detail) from exc
    except (ValueError, TypeError, RuntimeError) as exc:
        # pyrage raises plain exceptions for some malformed inputs
        raise decrypt_failure(_detail(exc)) from exc


def _read_all(data: CiphertextSource) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    read = getattr(data, "read", None)
    if read is None:
        raise TypeError("expected bytes or a binary stream")
    chunk = read()
    if not isinstance(chunk, (bytes, bytearray)):
        raise TypeError("stream must be opened in binary mode")
    return bytes(chunk)
