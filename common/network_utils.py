# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions: a connectivity check and streamed
downloads, both through requests.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import requests

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer

module_logger = logging.getLogger(__name__)

CONNECTIVITY_CHECK_URL = "https://github.com"
USER_AGENT = "paperless-installer"


def check_connectivity(
    app_settings: AppSettings,
    url: str = CONNECTIVITY_CHECK_URL,
    timeout: int = 10,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """Return True when an HTTP HEAD request to url gets any response."""
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    try:
        requests.head(url, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        log_installer(
            f"{symbols.get('error', '❌')} No network connectivity to {url}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False
    log_installer(
        f"{symbols.get('success', '✅')} Network connectivity to {url} confirmed.",
        "info",
        logger_to_use,
        app_settings,
    )
    return True


def download_file(
    url: str,
    destination: Union[str, Path],
    app_settings: AppSettings,
    timeout: int = 60,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Stream url to destination.

    A partially written destination is removed before an error propagates.

    Raises:
        requests.exceptions.RequestException: On connection errors, timeouts
            and HTTP error statuses.
        OSError: The destination cannot be written.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    download_path = Path(destination)
    download_path.parent.mkdir(parents=True, exist_ok=True)

    log_installer(
        f"{symbols.get('package', '📦')} Downloading {url} -> {download_path}",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        with requests.get(
            url, stream=True, timeout=timeout, headers={"User-Agent": USER_AGENT}
        ) as response:
            response.raise_for_status()
            with open(download_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)
    except (requests.exceptions.RequestException, OSError):
        # Never leave a truncated file behind
        download_path.unlink(missing_ok=True)
        raise
    return download_path
