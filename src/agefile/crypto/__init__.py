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

from .engine import decrypt, encrypt, encrypt_binary
from .keys import (
    Identity,
    IdentitySet,
    Recipient,
    RecipientSet,
    generate_identity,
    identity_set,
    recipient_set,
)
from .ssh import SshEd25519Identity, SshEd25519Recipient, SshRsaIdentity, SshRsaRecipient
from .x25519 import X25519Identity, X25519Recipient

__all__ = [
    "Identity",
    "IdentitySet",
    "Recipient",
    "RecipientSet",
    "SshEd25519Identity",
    "SshEd25519Recipient",
    "SshRsaIdentity",
    "SshRsaRecipient",
    "X25519Identity",
    "X25519Recipient",
    "decrypt",
    "encrypt",
    "encrypt_binary",
    "generate_identity",
    "identity_set",
    "recipient_set",
]
