#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    decrypt as decrypt_command,
    encrypt as encrypt_command,
)


def register(app: typer.Typer) -> None:
    encrypt_command.register(app)
    decrypt_command.register(app)
