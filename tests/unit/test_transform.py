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
from unittest import mock

from test_support import (
    TEST_PLAINTEXT,
    ed25519_openssh_private,
    ed25519_public_line,
    make_ed25519_key,
    write_identity_file,
    write_recipient_file,
)

from agefile.config import AgeFileConfig
from agefile.core.errors import (
    CryptoError,
    CryptoErrorKind,
    PathError,
    PathErrorKind,
    StateError,
    StateErrorKind,
)
from agefile.crypto import X25519Identity
from agefile.crypto.engine import ARMOR_BEGIN
from agefile.transform import (
    Command,
    decrypt_current_file,
    dispatch,
    encrypt_current_file,
)


class TransformTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.identity = X25519Identity.generate()
        self.key_file = write_identity_file(self.root / "key.txt", self.identity)
        self.config = AgeFileConfig(key_file=str(self.key_file))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, data: bytes = TEST_PLAINTEXT) -> Path:
        path = self.root / name
        path.write_bytes(data)
        return path


class TestEncryptCurrentFile(TransformTestCase):
    def test_hello_world_round_trip(self) -> None:
        plain = self._write("foo.txt")
        result = encrypt_current_file(str(plain), [str(self.key_file)], AgeFileConfig())
        target = self.root / "foo.txt.age"
        self.assertEqual(result.operation, Command.ENCRYPT)
        self.assertEqual(result.target, target)
        self.assertFalse(result.removed_source)
        self.assertTrue(plain.exists())
        self.assertTrue(target.read_bytes().startswith(ARMOR_BEGIN))

        plain.unlink()
        result = decrypt_current_file(str(target), [str(self.key_file)], AgeFileConfig())
        self.assertEqual(result.target, plain)
        self.assertEqual(plain.read_bytes(), TEST_PLAINTEXT)
        self.assertTrue(target.exists())

    def test_uses_configured_key_when_none_given(self) -> None:
        plain = self._write("notes.md")
        result = encrypt_current_file(plain, None, self.config)
        self.assertTrue(result.target.exists())

    def test_delete_after_encrypt(self) -> None:
        plain = self._write("secret.txt")
        config = AgeFileConfig(key_file=str(self.key_file), encrypt_and_delete=True)
        result = encrypt_current_file(plain, [], config)
        self.assertTrue(result.removed_source)
        self.assertFalse(plain.exists())
        self.assertTrue((self.root / "secret.txt.age").exists())

    def test_failed_write_keeps_plaintext(self) -> None:
        plain = self._write("keep.txt")
        config = AgeFileConfig(key_file=str(self.key_file), encrypt_and_delete=True)
        with mock.patch("agefile.transform.Path.write_bytes", side_effect=OSError("disk full")):
            with self.assertRaises(PathError) as ctx:
                encrypt_current_file(plain, None, config)
        self.assertIs(ctx.exception.kind, PathErrorKind.WRITE_FAILED)
        self.assertTrue(plain.exists())
        self.assertFalse((self.root / "keep.txt.age").exists())

    def test_existing_ciphertext(self) -> None:
        plain = self._write("dup.txt")
        target = self._write("dup.txt.age", b"old")
        result = encrypt_current_file(plain, None, self.config)
        self.assertTrue(result.replaced_target)
        self.assertNotEqual(target.read_bytes(), b"old")

        target.write_bytes(b"old")
        strict = AgeFileConfig(key_file=str(self.key_file), overwrite_ciphertext=False)
        with self.assertRaises(StateError) as ctx:
            encrypt_current_file(plain, None, strict)
        self.assertIs(ctx.exception.kind, StateErrorKind.ALREADY_EXISTS)
        self.assertEqual(target.read_bytes(), b"old")

    def test_already_encrypted_file_is_rejected(self) -> None:
        age_file = self._write("double.txt.age", b"ciphertext")
        with self.assertRaises(StateError) as ctx:
            encrypt_current_file(age_file, None, self.config)
        self.assertIs(ctx.exception.kind, StateErrorKind.WRONG_EXTENSION)
        self.assertFalse((self.root / "double.txt.age.age").exists())

    def test_ssh_public_key_file(self) -> None:
        ed_key = make_ed25519_key()
        pub = write_recipient_file(self.root / "id_ed25519.pub", ed25519_public_line(ed_key))
        private = self.root / "id_ed25519"
        private.write_text(ed25519_openssh_private(ed_key), encoding="utf-8")
        plain = self._write("ssh.txt")
        result = encrypt_current_file(plain, [str(pub)], AgeFileConfig())
        plain.unlink()
        decrypt_current_file(result.target, [str(private)], AgeFileConfig())
        self.assertEqual(plain.read_bytes(), TEST_PLAINTEXT)


class TestDecryptCurrentFile(TransformTestCase):
    def _encrypted(self, name: str, data: bytes = TEST_PLAINTEXT) -> Path:
        plain = self._write(name, data)
        result = encrypt_current_file(plain, None, self.config)
        plain.unlink()
        return result.target

    def test_wrong_extension_performs_no_writes(self) -> None:
        plain = self._write("foo.txt")
        before = sorted(path.name for path in self.root.iterdir())
        with mock.patch("agefile.transform.Path.write_bytes") as write_bytes:
            with mock.patch("agefile.transform.Path.unlink") as unlink:
                with self.assertRaises(StateError) as ctx:
                    decrypt_current_file(plain, None, self.config)
        self.assertIs(ctx.exception.kind, StateErrorKind.WRONG_EXTENSION)
        write_bytes.assert_not_called()
        unlink.assert_not_called()
        self.assertEqual(sorted(path.name for path in self.root.iterdir()), before)

    def test_existing_plaintext_is_replaced(self) -> None:
        target = self._encrypted("data.bin", b"new contents")
        stale = self._write("data.bin", b"stale")
        result = decrypt_current_file(target, None, self.config)
        self.assertTrue(result.replaced_target)
        self.assertEqual(stale.read_bytes(), b"new contents")

    def test_wrong_key_leaves_existing_plaintext(self) -> None:
        target = self._encrypted("data.bin")
        stale = self._write("data.bin", b"stale")
        other = write_identity_file(self.root / "other.txt", X25519Identity.generate())
        with self.assertRaises(CryptoError) as ctx:
            decrypt_current_file(target, [str(other)], self.config)
        self.assertIs(ctx.exception.kind, CryptoErrorKind.NO_MATCHING_IDENTITY)
        self.assertEqual(stale.read_bytes(), b"stale")

    def test_fallback_key_order(self) -> None:
        target = self._encrypted("fallback.txt")
        other = write_identity_file(self.root / "other.txt", X25519Identity.generate())
        decrypt_current_file(target, [str(other), str(self.key_file)], self.config)
        self.assertEqual((self.root / "fallback.txt").read_bytes(), TEST_PLAINTEXT)

    def test_missing_file(self) -> None:
        with self.assertRaises(PathError) as ctx:
            decrypt_current_file(self.root / "gone.age", None, self.config)
        self.assertIs(ctx.exception.kind, PathErrorKind.NOT_FOUND)


class TestDispatch(TransformTestCase):
    def test_command_aliases(self) -> None:
        self.assertIs(Command.parse("e"), Command.ENCRYPT)
        self.assertIs(Command.parse(" Encrypt "), Command.ENCRYPT)
        self.assertIs(Command.parse("d"), Command.DECRYPT)
        self.assertIs(Command.parse("decrypt"), Command.DECRYPT)
        with self.assertRaises(ValueError):
            Command.parse("genkey")

    def test_dispatch_runs_named_operation(self) -> None:
        plain = self._write("dispatch.txt")
        encrypted = dispatch("e", plain, None, self.config)
        self.assertEqual(encrypted.operation, Command.ENCRYPT)
        plain.unlink()
        decrypted = dispatch(Command.DECRYPT, encrypted.target, None, self.config)
        self.assertEqual(decrypted.target.read_bytes(), TEST_PLAINTEXT)


if __name__ == "__main__":
    unittest.main()
