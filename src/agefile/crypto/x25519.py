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

from dataclasses import dataclass, field
from typing import ClassVar

import pyrage
from pyrage import x25519 as pyrage_x25519

RECIPIENT_PREFIX = "age1"
IDENTITY_PREFIX = "AGE-SECRET-KEY-1"

_KEY_ERRORS = (pyrage.IdentityError, pyrage.RecipientError, ValueError, TypeError)


def _detail(exc: Exception) -> str:
    return str(exc).strip() or exc.__class__.__name__


@dataclass(frozen=True)
class X25519Recipient:
    kind: ClassVar[str] = "x25519"
    text: str
    backend: pyrage_x25519.Recipient = field(repr=False, compare=False)

    @classmethod
    def from_string(cls, text: str) -> X25519Recipient:
        try:
            backend = pyrage_x25519.Recipient.from_str(text.strip())
        except _KEY_ERRORS as exc:
            raise ValueError(f"invalid age recipient: {_detail(exc)}") from exc
        return cls(text=str(backend), backend=backend)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class X25519Identity:
    kind: ClassVar[str] = "x25519"
    recipient: X25519Recipient
    backend: pyrage_x25519.Identity = field(repr=False, compare=False)

    @classmethod
    def _from_backend(cls, backend: pyrage_x25519.Identity) -> X25519Identity:
        public = backend.to_public()
        return cls(recipient=X25519Recipient(text=str(public), backend=public), backend=backend)

    @classmethod
    def generate(cls) -> X25519Identity:
        return cls._from_backend(pyrage_x25519.Identity.generate())

    @classmethod
    def from_string(cls, text: str) -> X25519Identity:
        try:
            backend = pyrage_x25519.Identity.from_str(text.strip())
        except _KEY_ERRORS as exc:
            raise ValueError(f"invalid age secret key: {_detail(exc)}") from exc
        return cls._from_backend(backend)

    def __str__(self) -> str:
        return str(self.backend)

    def to_recipient(self) -> X25519Recipient:
        return self.recipient
