import re
import string

from common.system_utils import (
    generate_password,
    generate_secret_key,
    get_primary_ip_address,
    systemd_reload,
)

BASE64_CHARS = set(string.ascii_letters + string.digits + "+/=")


def test_generate_password_shape():
    password = generate_password()
    assert len(password) == 13
    assert set(password) <= BASE64_CHARS


def test_generate_password_is_random():
    assert len({generate_password() for _ in range(20)}) == 20


def test_generate_secret_key_shape():
    key = generate_secret_key()
    assert re.fullmatch(r"[A-Za-z0-9]{32}", key)


def test_systemd_reload(mocker, app_settings, mock_logger):
    mock_run = mocker.patch("common.system_utils.run_elevated_command")

    systemd_reload(app_settings, mock_logger)

    mock_run.assert_called_once_with(
        ["systemctl", "daemon-reload"], app_settings, current_logger=mock_logger
    )


def test_primary_ip_address_unavailable(mocker, app_settings, mock_logger):
    mock_socket = mocker.patch("common.system_utils.socket.socket")
    mock_socket.return_value.connect.side_effect = OSError("unreachable")

    assert get_primary_ip_address(app_settings, mock_logger) is None
    mock_logger.warning.assert_called_once()


def test_primary_ip_address(mocker, app_settings):
    mock_socket = mocker.patch("common.system_utils.socket.socket")
    mock_socket.return_value.getsockname.return_value = ("192.0.2.10", 54321)

    assert get_primary_ip_address(app_settings) == "192.0.2.10"
    mock_socket.return_value.close.assert_called_once()
