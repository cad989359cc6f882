from pathlib import Path

import pytest

from common.file_utils import backup_file, cleanup_directory, write_elevated_file


@pytest.fixture
def mock_run_elevated_command(mocker):
    return mocker.patch("common.file_utils.run_elevated_command")


def test_write_elevated_file_uses_tee(mock_run_elevated_command, app_settings, mock_logger):
    write_elevated_file(Path("/etc/x.conf"), "a=1\n", app_settings, current_logger=mock_logger)

    mock_run_elevated_command.assert_called_once_with(
        ["tee", "/etc/x.conf"],
        app_settings,
        cmd_input="a=1\n",
        capture_output=True,
        current_logger=mock_logger,
        secrets=None,
    )


def test_write_elevated_file_with_mode(mock_run_elevated_command, app_settings):
    write_elevated_file("/etc/profile.d/x.sh", "echo", app_settings, mode="755")

    assert mock_run_elevated_command.call_count == 2
    assert mock_run_elevated_command.call_args.args[0] == [
        "chmod",
        "755",
        "/etc/profile.d/x.sh",
    ]


def test_backup_missing_file_returns_none(mock_run_elevated_command, app_settings, tmp_path):
    assert backup_file(tmp_path / "missing", app_settings) is None
    mock_run_elevated_command.assert_not_called()


def test_backup_existing_file(mock_run_elevated_command, app_settings, tmp_path):
    source = tmp_path / "sshd_config"
    source.write_text("PermitRootLogin no\n")

    backup = backup_file(source, app_settings)

    assert backup is not None
    assert backup.name.startswith("sshd_config.bak.")
    command = mock_run_elevated_command.call_args.args[0]
    assert command[:3] == ["cp", "-a", str(source)]


def test_cleanup_directory_removes_tree(app_settings, tmp_path):
    target = tmp_path / "docker"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "file").write_text("x")

    cleanup_directory(target, app_settings)

    assert not target.exists()


def test_cleanup_directory_missing_is_noop(app_settings, tmp_path, mock_logger):
    cleanup_directory(tmp_path / "absent", app_settings, mock_logger)
    assert "does not exist" in mock_logger.info.call_args.args[0]


def test_write_elevated_file_masks_secrets(mocker, app_settings, mock_logger):
    mock_subprocess_run = mocker.patch("common.command_utils.subprocess.run")
    mock_subprocess_run.return_value.stdout = "PAPERLESS_DBPASS=hunter2\n"
    mock_subprocess_run.return_value.stderr = ""
    mocker.patch("common.command_utils.os.geteuid", return_value=0)

    write_elevated_file(
        "/opt/paperless/paperless.conf",
        "PAPERLESS_DBPASS=hunter2\n",
        app_settings,
        current_logger=mock_logger,
        secrets=["hunter2"],
    )

    logged = " ".join(call.args[0] for call in mock_logger.debug.call_args_list)
    assert "PAPERLESS_DBPASS=********" in logged
    assert "hunter2" not in logged
