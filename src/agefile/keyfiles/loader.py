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

from collections.abc import Iterable
from pathlib import Path

from ..core.errors import PathError, PathErrorKind, parse_failure
from ..crypto.keys import (
    Identity,
    IdentitySet,
    Recipient,
    RecipientSet,
    identity_set,
    parse_identity_token,
    parse_recipient_token,
    recipient_set,
)
from ..crypto.ssh import SSH_PUBLIC_PREFIXES, is_ssh_private_key, parse_ssh_private_key
from ..crypto.x25519 import IDENTITY_PREFIX, RECIPIENT_PREFIX
from .paths import resolve_path


def _content_lines(text: str) -> Iterable[tuple[int, str]]:
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        yield lineno, line


def _ssh_identity(text: str, source: str) -> Identity:
    try:
        return parse_ssh_private_key(text)
    except ValueError as exc:
        raise parse_failure(f"{source}: {exc}") from exc


def parse_identities(text: str, *, source: str = "<input>") -> list[Identity]:
    """Parse identity file text: native secret keys or a single SSH private key."""
    if is_ssh_private_key(text):
        return [_ssh_identity(text, source)]
    identities: list[Identity] = []
    for lineno, line in _content_lines(text):
        try:
            identities.append(parse_identity_token(line))
        except ValueError as exc:
            raise parse_failure(f"{source}:{lineno}: invalid identity ({exc})") from exc
    return identities


def parse_recipients(text: str, *, source: str = "<input>") -> list[Recipient]:
    """Parse recipient file text.

    Besides public keys, identity material contributes its derived recipient,
    so an identity file can be used to encrypt as well.
    """
    if is_ssh_private_key(text):
        return [_ssh_identity(text, source).to_recipient()]
    recipients: list[Recipient] = []
    for lineno, line in _content_lines(text):
        try:
            if line.startswith(IDENTITY_PREFIX):
                recipients.append(parse_identity_token(line).to_recipient())
            elif line.startswith(RECIPIENT_PREFIX) or line.startswith(SSH_PUBLIC_PREFIXES):
                recipients.append(parse_recipient_token(line))
            else:
                raise ValueError("unrecognized key format")
        except ValueError as exc:
            raise parse_failure(f"{source}:{lineno}: invalid recipient ({exc})") from exc
    return recipients


def _read_key_file(raw: str | Path) -> tuple[Path, str]:
    path = resolve_path(raw)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PathError(
            kind=PathErrorKind.READ_FAILED, detail=f"cannot read {path}: {exc}"
        ) from exc
    try:
        return path, data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise parse_failure(f"{path}: key file is not valid UTF-8") from exc


def load_identities(paths: Iterable[str | Path]) -> IdentitySet:
    """Load private keys from every path, keeping file and line order."""
    identities: list[Identity] = []
    for raw in paths:
        path, text = _read_key_file(raw)
        identities.extend(parse_identities(text, source=str(path)))
    return identity_set(identities)


def load_recipients(paths: Iterable[str | Path]) -> RecipientSet:
    recipients: list[Recipient] = []
    for raw in paths:
        path, text = _read_key_file(raw)
        recipients.extend(parse_recipients(text, source=str(path)))
    return recipient_set(recipients)
