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

import os
import shutil
import sys
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "agefile"
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config/default.toml"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV = "AGEFILE_CONFIG"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"


def user_config_path() -> Path:
    return _user_config_dir() / CONFIG_FILENAME


def _user_config_dir() -> Path:
    xdg_override = os.environ.get(XDG_CONFIG_ENV)
    if xdg_override:
        return Path(xdg_override) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / ".config" / APP_NAME
    return Path(user_config_dir(APP_NAME, appauthor=False))


def init_user_config() -> Path:
    """Copy the bundled config into the user config dir; existing files are kept."""
    dest = user_config_path()
    try:
        _copy_if_missing(DEFAULT_CONFIG_PATH, dest)
    except OSError as exc:
        raise OSError(f"unable to create config at {dest}: {exc}") from exc
    return dest


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    user_path = user_config_path()
    if user_path.is_file():
        return user_path
    return DEFAULT_CONFIG_PATH


def _copy_if_missing(source: Path, dest: Path) -> None:
    if dest.exists():
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
