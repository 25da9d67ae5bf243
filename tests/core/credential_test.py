# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for SshKeyValidator."""

import os
from pathlib import Path

import pytest

from conftest import FakeRunner
from lxc_templates.core.execution.credential import SshKeyValidator
from lxc_templates.core.execution.exceptions import CredentialInvalidError
from lxc_templates.core.models.command import CommandResult


class TestSshKeyValidator:
    """Tests for key presence, permissions and format checks."""

    @pytest.mark.parametrize("mode", [0o600, 0o400])
    def test_accepted_modes(self, fake_runner: FakeRunner, key_file: Path, mode: int) -> None:
        os.chmod(key_file, mode)
        assert SshKeyValidator(fake_runner).validate(str(key_file)) == mode
        assert fake_runner.local_commands == [["ssh-keygen", "-l", "-f", str(key_file)]]

    @pytest.mark.parametrize("mode", [0o644, 0o640, 0o604, 0o700, 0o660, 0o666, 0o755, 0o200])
    def test_rejected_modes(self, fake_runner: FakeRunner, key_file: Path, mode: int) -> None:
        os.chmod(key_file, mode)
        with pytest.raises(CredentialInvalidError) as excinfo:
            SshKeyValidator(fake_runner).validate(str(key_file))

        err = excinfo.value
        assert f"({mode:o})" in str(err)
        assert err.remediation == [f"Fix with: chmod 600 {key_file}"]
        assert fake_runner.local_commands == []

    def test_missing_file(self, fake_runner: FakeRunner, tmp_path: Path) -> None:
        with pytest.raises(CredentialInvalidError, match="not found"):
            SshKeyValidator(fake_runner).validate(str(tmp_path / "nope"))

    def test_directory_is_not_a_key(self, fake_runner: FakeRunner, tmp_path: Path) -> None:
        with pytest.raises(CredentialInvalidError, match="not found"):
            SshKeyValidator(fake_runner).validate(str(tmp_path))

    def test_malformed_key(self, fake_runner: FakeRunner, key_file: Path) -> None:
        fake_runner.local_result = CommandResult(255, "", "is not a key file.")
        with pytest.raises(CredentialInvalidError, match="invalid or corrupted"):
            SshKeyValidator(fake_runner).validate(str(key_file))

    def test_tilde_is_expanded(
        self, fake_runner: FakeRunner, key_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOME", str(key_file.parent))
        SshKeyValidator(fake_runner).validate(f"~/{key_file.name}")
        assert fake_runner.local_commands[0][-1] == str(key_file)

    def test_permission_bits(self, key_file: Path) -> None:
        os.chmod(key_file, 0o400)
        assert SshKeyValidator.permission_bits(key_file) == 0o400
