# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the error taxonomy."""

from pytest_mock import MockerFixture

from lxc_templates.core.execution.exceptions import (
    ConfigInvalidError,
    ConnectivityError,
    CredentialInvalidError,
    NoCandidateFoundError,
    RemoteCommandError,
    TemplateToolError,
    ToolingMissingError,
)


class TestTemplateToolErrors:
    """
    Tests for the exception hierarchy.
    """

    def test_tooling_missing_aggregates(self) -> None:
        err = ToolingMissingError(["ssh", "ssh-keygen"])
        assert err.missing == ["ssh", "ssh-keygen"]
        assert str(err) == "Missing required commands: ssh ssh-keygen"
        assert err.category == "ToolingMissing"

    def test_credential_error_attributes(self) -> None:
        err = CredentialInvalidError("/k", "bad perms", ["Fix with: chmod 600 /k"])
        assert err.key_path == "/k"
        assert err.reason == "bad perms"
        assert err.remediation == ["Fix with: chmod 600 /k"]

    def test_remote_command_error_detail(self) -> None:
        err = RemoteCommandError("Failed", command="pveam download", returncode=2, stderr="boom")
        assert str(err) == "Failed (exit code 2): boom"
        assert err.command == "pveam download"

    def test_remote_command_error_without_code(self) -> None:
        assert str(RemoteCommandError("Template verification failed")) == (
            "Template verification failed"
        )

    def test_categories_are_distinct(self) -> None:
        classes = [
            ToolingMissingError,
            ConfigInvalidError,
            CredentialInvalidError,
            ConnectivityError,
            NoCandidateFoundError,
            RemoteCommandError,
        ]
        assert all(issubclass(cls, TemplateToolError) for cls in classes)
        assert len({cls.category for cls in classes}) == len(classes)

    def test_log_to(self, mocker: MockerFixture) -> None:
        logger = mocker.MagicMock()
        ConnectivityError("unreachable", ["Check:", "  - network"]).log_to(logger)
        logger.error.assert_called_once_with("[%s] %s", "ConnectivityFailure", mocker.ANY)
        assert [c.args[0] for c in logger.info.call_args_list] == ["Check:", "  - network"]
