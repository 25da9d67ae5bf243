# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for .env configuration loading."""

import os
from pathlib import Path

import pytest

from lxc_templates.core.config import (
    find_env_file,
    load_settings,
    missing_required,
    read_env_file,
)
from lxc_templates.core.execution.exceptions import ConfigInvalidError


def _write_env(directory: Path, body: str) -> Path:
    env = directory / ".env"
    env.write_text(body)
    return env


class TestLoadSettings:
    """
    Tests for load_settings.
    """

    def test_minimal_file(self, tmp_path: Path) -> None:
        env = _write_env(tmp_path, "PROXMOX_HOST=h\nPROXMOX_USER=u\n")
        settings = load_settings(env_file=env, environ={})
        assert settings.connection.host == "h"
        assert settings.connection.user == "u"
        assert settings.connection.key_path is None
        assert settings.force_download is False
        assert settings.cleanup_old_templates is False

    def test_all_keys(self, tmp_path: Path) -> None:
        env = _write_env(
            tmp_path,
            'PROXMOX_HOST="10.0.0.5"\n'
            "PROXMOX_USER=root\n"
            "PROXMOX_SSH_KEY_PATH=/keys/id\n"
            "FORCE_DOWNLOAD=true\n"
            "CLEANUP_OLD_TEMPLATES=True\n",
        )
        settings = load_settings(env_file=env, environ={})
        assert settings.connection.destination == "root@10.0.0.5"
        assert settings.connection.key_path == "/keys/id"
        assert settings.force_download is True
        assert settings.cleanup_old_templates is True

    @pytest.mark.parametrize(
        "body,missing",
        [
            ("PROXMOX_USER=u\n", ["PROXMOX_HOST"]),
            ("PROXMOX_HOST=h\n", ["PROXMOX_USER"]),
            ("PROXMOX_HOST=\nPROXMOX_USER=  \n", ["PROXMOX_HOST", "PROXMOX_USER"]),
            ("# nothing\n", ["PROXMOX_HOST", "PROXMOX_USER"]),
        ],
    )
    def test_missing_required(self, tmp_path: Path, body: str, missing: list) -> None:
        env = _write_env(tmp_path, body)
        with pytest.raises(ConfigInvalidError) as excinfo:
            load_settings(env_file=env, environ={})
        assert excinfo.value.missing_keys == missing
        assert any(".env.example" in line for line in excinfo.value.remediation)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigInvalidError, match="not found"):
            load_settings(search_dirs=[tmp_path], environ={})

    def test_bad_boolean(self, tmp_path: Path) -> None:
        env = _write_env(tmp_path, "PROXMOX_HOST=h\nPROXMOX_USER=u\nFORCE_DOWNLOAD=maybe\n")
        with pytest.raises(ConfigInvalidError, match="force_download"):
            load_settings(env_file=env, environ={})

    def test_empty_boolean_is_false(self, tmp_path: Path) -> None:
        env = _write_env(tmp_path, "PROXMOX_HOST=h\nPROXMOX_USER=u\nCLEANUP_OLD_TEMPLATES=\n")
        assert load_settings(env_file=env, environ={}).cleanup_old_templates is False

    def test_file_overrides_process_environment(self, tmp_path: Path) -> None:
        env = _write_env(tmp_path, "PROXMOX_HOST=h\nPROXMOX_USER=u\n")
        settings = load_settings(
            env_file=env,
            environ={"PROXMOX_HOST": "other", "FORCE_DOWNLOAD": "true", "UNRELATED": "x"},
        )
        assert settings.connection.host == "h"
        assert settings.force_download is True

    def test_not_exported(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROXMOX_HOST", raising=False)
        env = _write_env(tmp_path, "PROXMOX_HOST=h\nPROXMOX_USER=u\n")
        load_settings(env_file=env, environ={})
        assert "PROXMOX_HOST" not in os.environ


class TestEnvFileDiscovery:
    """
    Tests for find_env_file and helpers.
    """

    def test_prefers_first_directory(self, tmp_path: Path) -> None:
        child = tmp_path / "scripts"
        child.mkdir()
        _write_env(tmp_path, "A=1\n")
        own = _write_env(child, "A=2\n")
        assert find_env_file([child, tmp_path]) == own

    def test_falls_back_to_parent(self, tmp_path: Path) -> None:
        child = tmp_path / "scripts"
        child.mkdir()
        parent_env = _write_env(tmp_path, "A=1\n")
        assert find_env_file([child, tmp_path]) == parent_env

    def test_none_found(self, tmp_path: Path) -> None:
        assert find_env_file([tmp_path]) is None

    def test_read_env_file_keeps_known_environment_keys_only(self, tmp_path: Path) -> None:
        env = _write_env(tmp_path, "PROXMOX_USER=u\n")
        values = read_env_file(env, {"PROXMOX_HOST": "h", "PATH": "/bin"})
        assert values == {"PROXMOX_HOST": "h", "PROXMOX_USER": "u"}

    def test_missing_required_helper(self) -> None:
        assert missing_required({"PROXMOX_HOST": "h", "PROXMOX_USER": " "}) == ["PROXMOX_USER"]
