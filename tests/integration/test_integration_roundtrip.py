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

import tempfile
import unittest
from pathlib import Path

from test_support import (
    make_rsa_key,
    rsa_private_pem,
    rsa_public_line,
    temp_env,
    write_identity_file,
    write_recipient_file,
)
from typer.testing import CliRunner

from agefile.cli import app
from agefile.config import load_config
from agefile.crypto import X25519Identity
from agefile.transform import decrypt_current_file, encrypt_current_file


class TestIntegrationRoundTrip(unittest.TestCase):
    def test_team_file_with_recovery_key(self) -> None:
        """Encrypt to a personal key, an RSA key and a recovery key from config."""
        personal = X25519Identity.generate()
        recovery = X25519Identity.generate()
        rsa_key = make_rsa_key()
        payload = bytes(range(256)) * 600
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            personal_file = write_identity_file(root / "key.txt", personal)
            recovery_file = write_recipient_file(
                root / "recovery.txt", str(recovery.to_recipient())
            )
            team_file = write_recipient_file(root / "team.pub", rsa_public_line(rsa_key))
            rsa_private = root / "id_rsa"
            rsa_private.write_text(rsa_private_pem(rsa_key), encoding="utf-8")
            config_path = root / "config.toml"
            config_path.write_text(
                "[keys]\n"
                f"key_file = '{personal_file.as_posix()}'\n"
                f"key_files = ['{recovery_file.as_posix()}', '{team_file.as_posix()}']\n"
                "[encrypt]\n"
                "delete_plaintext = true\n",
                encoding="utf-8",
            )
            config = load_config(config_path)
            document = root / "ledger.csv"
            document.write_bytes(payload)

            result = encrypt_current_file(document, None, config)
            self.assertFalse(document.exists())

            recovery_identity = write_identity_file(root / "recovery-key.txt", recovery)
            for key_path in (personal_file, recovery_identity, rsa_private):
                with self.subTest(key=key_path.name):
                    decrypt_current_file(result.target, [str(key_path)], config)
                    self.assertEqual(document.read_bytes(), payload)

    def test_cli_round_trip_with_env_config(self) -> None:
        identity = X25519Identity.generate()
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            key_file = write_identity_file(root / "key.txt", identity)
            config_path = root / "agefile.toml"
            config_path.write_text(
                f"[keys]\nkey_file = '{key_file.as_posix()}'\n", encoding="utf-8"
            )
            document = root / "notes.txt"
            document.write_bytes(b"Hello world")
            with temp_env({"AGEFILE_CONFIG": str(config_path)}):
                encrypted = runner.invoke(app, ["encrypt", str(document), "--delete"])
                self.assertEqual(encrypted.exit_code, 0, encrypted.output)
                self.assertFalse(document.exists())
                decrypted = runner.invoke(app, ["decrypt", str(root / "notes.txt.age")])
                self.assertEqual(decrypted.exit_code, 0, decrypted.output)
            self.assertEqual(document.read_bytes(), b"Hello world")


if __name__ == "__main__":
    unittest.main()
