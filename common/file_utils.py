# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions, such as backing up files, writing root-owned
files and cleaning directories.
"""

import datetime
import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer, run_elevated_command

module_logger = logging.getLogger(__name__)


def backup_file(
    file_path: Union[str, Path],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[Path]:
    """
    Copy a file to '<file>.bak.<timestamp>' before it is modified.

    Returns:
        The backup path, or None when the file does not exist.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    source = Path(file_path)

    if not source.is_file():
        log_installer(
            f"{symbols.get('info', 'ℹ️')} File {source} does not exist or is not a regular file. No backup needed.",
            "info",
            logger_to_use,
            app_settings,
        )
        return None

    timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    backup_path = source.with_name(f"{source.name}.bak.{timestamp}")
    run_elevated_command(
        ["cp", "-a", str(source), str(backup_path)],
        app_settings,
        current_logger=logger_to_use,
    )
    log_installer(
        f"{symbols.get('success', '✅')} Backed up {source} to {backup_path}",
        "success",
        logger_to_use,
        app_settings,
    )
    return backup_path


def write_elevated_file(
    file_path: Union[str, Path],
    content: str,
    app_settings: AppSettings,
    mode: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    secrets: Optional[List[str]] = None,
) -> None:
    """
    Write content to a root-owned path through 'tee', optionally chmod'ing it.

    tee echoes the content, so secrets it contains are masked in the log.
    """
    logger_to_use = current_logger if current_logger else module_logger
    run_elevated_command(
        ["tee", str(file_path)],
        app_settings,
        cmd_input=content,
        capture_output=True,
        current_logger=logger_to_use,
        secrets=secrets,
    )
    if mode:
        run_elevated_command(
            ["chmod", mode, str(file_path)],
            app_settings,
            current_logger=logger_to_use,
        )


def cleanup_directory(
    directory_path: Path,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Remove a directory and everything below it. A missing directory is not
    an error.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not directory_path.exists():
        log_installer(
            f"{symbols.get('info', 'ℹ️')} Directory {directory_path} does not exist. No cleanup needed.",
            "info",
            logger_to_use,
            app_settings,
        )
        return
    if not directory_path.is_dir():
        log_installer(
            f"{symbols.get('warning', '!')} Path {directory_path} exists but is not a directory.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return

    shutil.rmtree(directory_path)
    log_installer(
        f"{symbols.get('success', '✅')} Removed directory and its contents: {directory_path}",
        "info",
        logger_to_use,
        app_settings,
    )
