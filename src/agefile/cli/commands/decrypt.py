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

from ...transform import decrypt_current_file
from ..core.common import _ctx_flag, _ctx_value, _load_cli_config, _run_cli
from ..core.log import _warn
from ..ui import console


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Decrypt FILE.age into FILE next to it.\n\n"
            "Examples:\n"
            "  agefile decrypt notes.txt.age -k ~/.config/agefile/key.txt\n"
            "  agefile decrypt notes.txt.age -k ~/.ssh/id_ed25519\n"
        )
    )(decrypt)
    app.command("d", hidden=True, help="Alias for decrypt.")(decrypt)


def decrypt(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Encrypted .age file."),
    key: list[str] | None = typer.Option(
        None,
        "--key",
        "-k",
        help="Identity file (repeatable, tried in order). Defaults to the configured keys.",
        rich_help_panel="Keys",
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
    quiet = _ctx_flag(ctx, "quiet", quiet)
    debug = bool(_ctx_value(ctx, "debug"))

    def _decrypt() -> None:
        settings = _load_cli_config(ctx, config)
        result = decrypt_current_file(file, key or None, settings)
        if result.replaced_target:
            _warn(f"replaced existing {result.target.name}", quiet=quiet)
        if not quiet:
            console.print(
                f"[success]Decrypted[/success] {escape(str(result.source))} -> "
                f"{escape(str(result.target))}"
            )

    _run_cli(_decrypt, debug=debug)
