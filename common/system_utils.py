# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the installer.

This module includes functions for reloading systemd, determining the
primary IP address and generating the random credentials used when the
operator does not supply their own.
"""

import base64
import logging
import os
import secrets
import socket
import string
from typing import Optional

from common.command_utils import (
    get_symbols,
    log_installer,
    run_elevated_command,
)
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

SECRET_KEY_ALPHABET = string.ascii_letters + string.digits


def require_root() -> bool:
    """True when the current process runs with an effective UID of 0."""
    return os.geteuid() == 0


def generate_password(length: int = 13) -> str:
    """
    Generate a database password: base64 of 18 random bytes, cut to length.
    """
    return base64.b64encode(secrets.token_bytes(18)).decode("ascii")[:length]


def generate_secret_key(length: int = 32) -> str:
    """Generate an alphanumeric Django secret key."""
    return "".join(secrets.choice(SECRET_KEY_ALPHABET) for _ in range(length))


def get_primary_ip_address(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Get the primary IP address of the machine.

    This function determines the address of the interface holding the default
    route by opening a UDP socket towards an external host (no packet is
    sent).

    Returns:
        The primary IP address as a string, or None if it cannot be determined.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            s.connect(("8.8.8.8", 80))
            return str(s.getsockname()[0])
        finally:
            s.close()
    except OSError as e:
        log_installer(
            f"{symbols.get('warning', '!')} Could not determine primary IP address: {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None


def systemd_reload(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Reload the systemd daemon.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_installer(
        f"{symbols.get('gear', '⚙️')} Reloading systemd daemon...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(
        ["systemctl", "daemon-reload"],
        app_settings,
        current_logger=logger_to_use,
    )
    log_installer(
        f"{symbols.get('success', '✅')} Systemd daemon reloaded.",
        "success",
        logger_to_use,
        app_settings,
    )
