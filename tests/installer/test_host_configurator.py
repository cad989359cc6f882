import pytest

from installer.components.host.host_configurator import (
    HostConfigurator,
    build_motd_script,
    enable_root_login,
)

MODULE = "installer.components.host.host_configurator"


def test_motd_script():
    script = build_motd_script("Paperless-ngx", "v2.7.2")
    assert script.startswith("#!/usr/bin/env bash\n")
    assert 'echo "    Paperless-ngx (version v2.7.2)"\n' in script
    assert "$(hostname -I" in script
    assert 'echo "    Paperless-ngx"\n' in build_motd_script("Paperless-ngx", None)


@pytest.mark.parametrize(
    "before, after",
    [
        ("Port 22\n#PermitRootLogin prohibit-password\n", "Port 22\nPermitRootLogin yes\n"),
        ("PermitRootLogin no\nX 1\n# PermitRootLogin no\n", "PermitRootLogin yes\nX 1\n"),
        ("Port 22\n", "Port 22\nPermitRootLogin yes\n"),
    ],
)
def test_enable_root_login(before, after):
    assert enable_root_login(before) == after


@pytest.fixture
def mock_write(mocker):
    return mocker.patch(f"{MODULE}.write_elevated_file")


def test_writes_motd_with_marker_version(mock_write, mocker, app_settings, state, mock_logger):
    marker = app_settings.paperless.version_marker_path
    marker.parent.mkdir(parents=True)
    marker.write_text("v2.6.0\n")
    mock_run = mocker.patch(f"{MODULE}.run_elevated_command")
    component = HostConfigurator(app_settings, state, logger=mock_logger)

    assert component.configure() is True

    args = mock_write.call_args.args
    assert args[0] == app_settings.host.motd_script_path
    assert "version v2.6.0" in args[1]
    assert mock_write.call_args.kwargs["mode"] == "755"
    mock_run.assert_not_called()


def test_ssh_root_login(mock_write, mocker, app_settings, state, mock_logger):
    app_settings.host.ssh_root_login = True
    sshd = app_settings.host.sshd_config_path
    sshd.parent.mkdir(parents=True)
    sshd.write_text("#PermitRootLogin prohibit-password\n")
    mock_backup = mocker.patch(f"{MODULE}.backup_file")
    mock_run = mocker.patch(f"{MODULE}.run_elevated_command")
    state.paperless_version = "v2.7.2"
    component = HostConfigurator(app_settings, state, logger=mock_logger)

    assert component.configure() is True

    mock_backup.assert_called_once_with(sshd, app_settings, mock_logger)
    assert mock_write.call_args_list[1].args[:2] == (sshd, "PermitRootLogin yes\n")
    mock_run.assert_called_once_with(
        ["systemctl", "restart", "ssh"], app_settings, current_logger=mock_logger
    )


def test_customize_commands_run_in_shell(mock_write, mocker, app_settings, state, mock_logger):
    app_settings.host.customize_commands = ["timedatectl set-ntp true"]
    mock_run = mocker.patch(f"{MODULE}.run_command")
    component = HostConfigurator(app_settings, state, logger=mock_logger)

    assert component.configure() is True

    mock_run.assert_called_once_with(
        "timedatectl set-ntp true", app_settings, shell=True, current_logger=mock_logger
    )
