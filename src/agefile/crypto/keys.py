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

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..core.errors import KeyErrorKind, KeyMaterialError
from .ssh import (
    SSH_ED25519,
    SSH_RSA,
    SshEd25519Identity,
    SshEd25519Recipient,
    SshRsaIdentity,
    SshRsaRecipient,
)
from .x25519 import IDENTITY_PREFIX, RECIPIENT_PREFIX, X25519Identity, X25519Recipient

Identity = X25519Identity | SshEd25519Identity | SshRsaIdentity
Recipient = X25519Recipient | SshEd25519Recipient | SshRsaRecipient


@dataclass(frozen=True)
class IdentitySet:
    """Ordered private keys; the order is the trial order during decryption."""

    identities: tuple[Identity, ...]

    def __post_init__(self) -> None:
        if not self.identities:
            raise KeyMaterialError(kind=KeyErrorKind.EMPTY_KEY_SET, detail="no identities given")

    def __iter__(self) -> Iterator[Identity]:
        return iter(self.identities)

    def __len__(self) -> int:
        return len(self.identities)

    def backends(self) -> list:
        return [identity.backend for identity in self.identities]


@dataclass(frozen=True)
class RecipientSet:
    """Ordered public keys; each member can decrypt the result on its own."""

    recipients: tuple[Recipient, ...]

    def __post_init__(self) -> None:
        if not self.recipients:
            raise KeyMaterialError(kind=KeyErrorKind.EMPTY_KEY_SET, detail="no recipients given")

    def __iter__(self) -> Iterator[Recipient]:
        return iter(self.recipients)

    def __len__(self) -> int:
        return len(self.recipients)

    def backends(self) -> list:
        return [recipient.backend for recipient in self.recipients]


def identity_set(identities: Iterable[Identity]) -> IdentitySet:
    return IdentitySet(identities=tuple(identities))


def recipient_set(recipients: Iterable[Recipient]) -> RecipientSet:
    return RecipientSet(recipients=tuple(recipients))


def generate_identity() -> X25519Identity:
    return X25519Identity.generate()


def parse_identity_token(token: str) -> Identity:
    if token.startswith(IDENTITY_PREFIX):
        return X25519Identity.from_string(token)
    raise ValueError("not an age secret key")


def parse_recipient_token(token: str) -> Recipient:
    if token.startswith(RECIPIENT_PREFIX):
        return X25519Recipient.from_string(token)
    if token.startswith(SSH_ED25519 + " "):
        return SshEd25519Recipient.from_line(token)
    if token.startswith(SSH_RSA + " "):
        return SshRsaRecipient.from_line(token)
    raise ValueError("not a recognized recipient")
