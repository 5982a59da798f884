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

import typer
from rich.markup import escape

from ...config import apply_overrides
from ...transform import encrypt_current_file
from ..core.common import _ctx_flag, _ctx_value, _load_cli_config, _run_cli
from ..core.log import _warn
from ..ui import console


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Encrypt FILE into FILE.age next to it.\n\n"
            "Examples:\n"
            "  agefile encrypt notes.txt -k ~/.config/agefile/key.txt\n"
            "  agefile encrypt notes.txt -k recipients.txt -k backup.pub --delete\n"
        )
    )(encrypt)
    app.command("e", hidden=True, help="Alias for encrypt.")(encrypt)


def encrypt(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Plaintext file to encrypt."),
    key: list[str] | None = typer.Option(
        None,
        "--key",
        "-k",
        help="Recipient or identity file (repeatable). Defaults to the configured keys.",
        rich_help_panel="Keys",
    ),
    delete: bool = typer.Option(
        False,
        "--delete",
        help="Remove the plaintext after the .age file is written.",
        rich_help_panel="Behavior",
    ),
    keep: bool = typer.Option(
        False,
        "--keep",
        help="Keep the plaintext even if the config says to delete it.",
        rich_help_panel="Behavior",
    ),
    no_overwrite: bool = typer.Option(
        False,
        "--no-overwrite",
        help="Fail instead of replacing an existing .age file.",
        rich_help_panel="Behavior",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config file.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Output",
    ),
) -> None:
    if delete and keep:
        raise typer.BadParameter("use either --delete or --keep, not both")
    quiet = _ctx_flag(ctx, "quiet", quiet)
    debug = bool(_ctx_value(ctx, "debug"))

    def _encrypt() -> None:
        settings = _load_cli_config(ctx, config)
        settings = apply_overrides(
            settings,
            encrypt_and_delete=True if delete else False if keep else None,
            overwrite_ciphertext=False if no_overwrite else None,
        )
        result = encrypt_current_file(file, key or None, settings)
        if result.replaced_target:
            _warn(f"replaced existing {result.target.name}", quiet=quiet)
        if quiet:
            return
        console.print(
            f"[success]Encrypted[/success] {escape(str(result.source))} -> "
            f"{escape(str(result.target))}"
        )
        if result.removed_source:
            console.print(f"[muted]Removed {escape(str(result.source))}[/muted]")

    _run_cli(_encrypt, debug=debug)
