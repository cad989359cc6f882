# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing external commands and logging their output.

Every provisioning step of the installer is a call into apt, git, make,
psql, systemctl or the Paperless-ngx management commands. All of them go
through run_command() so that each invocation is logged before it runs and
failures are logged with their captured output before being re-raised.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, Iterable, List, Optional, Union

# Import AppSettings for type hinting and SYMBOLS_DEFAULT for fallback
from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)

REDACTED = "********"


def log_installer(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs an installer message at the named level.

    Args:
        message (str): The log message to be recorded.
        level (str): "debug", "info", "success", "warning", "error" or "critical".
            Unknown levels (including "success") are logged at INFO.
        current_logger (Optional[logging.Logger]): Logger to use. Defaults to the
            module logger.
        app_settings (Optional[AppSettings]): Accepted for call-site symmetry with
            the other helpers of this module.
        exc_info (bool): Attach the current exception's traceback.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Return the logging symbols of app_settings, or the defaults."""
    if app_settings is not None and getattr(app_settings, "symbols", None):
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def redact(text: str, secrets: Optional[Iterable[str]]) -> str:
    """Replace every non-empty secret in text with a fixed mask."""
    if not secrets:
        return text
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


def _get_elevated_command_prefix() -> List[str]:
    """
    Return ["sudo"] when the process is not running as root, else [].
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    shell: bool = False,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    secrets: Optional[List[str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a system command, logging the command line, its captured output
    and any failure.

    Args:
        command (Union[List[str], str]): The command. A list is executed
            directly; a string requires shell=True.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        check (bool): Raise CalledProcessError on a non-zero exit code.
        shell (bool): Run through the shell. A list is joined with spaces.
        capture_output (bool): Capture stdout and stderr and log them.
        text (bool): Decode output streams as text.
        cmd_input (Optional[str]): Data sent to the command's stdin. Never logged.
        current_logger (Optional[logging.Logger]): Logger to use.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command.
        secrets (Optional[List[str]]): Values masked in every log line
            (passwords passed on a command line, for example).

    Returns:
        subprocess.CompletedProcess: The completed process.

    Raises:
        subprocess.CalledProcessError: The command failed and check is True.
        FileNotFoundError: The executable does not exist.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_run: Union[List[str], str]

    if shell:
        command_to_run = (
            " ".join(command) if isinstance(command, list) else command
        )
        command_to_log_str = str(command_to_run)
    else:
        if isinstance(command, str):
            raise ValueError(
                f"String command '{redact(command, secrets)}' requires shell=True; pass a list instead."
            )
        command_to_run = list(command)
        command_to_log_str = subprocess.list2cmdline(command_to_run)

    command_to_log_str = redact(command_to_log_str, secrets)
    log_installer(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}",
        "info",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            shell=shell,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=cwd,
            env=env,
        )
        if capture_output:
            if result.stdout and result.stdout.strip():
                log_installer(
                    f"   stdout: {redact(result.stdout.strip(), secrets)}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if result.stderr and result.stderr.strip():
                log_installer(
                    f"   stderr: {redact(result.stderr.strip(), secrets)}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Command `{command_to_log_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        for stream_name, stream in (("stdout", e.stdout), ("stderr", e.stderr)):
            if stream and hasattr(stream, "strip") and stream.strip():
                log_installer(
                    f"   {stream_name}: {redact(stream.strip(), secrets)}",
                    "error",
                    effective_logger,
                    app_settings,
                )
        raise
    except FileNotFoundError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    secrets: Optional[List[str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with root privileges, prefixing it with sudo when the
    installer itself is not running as root. Arguments are those of
    run_command().
    """
    prefix = _get_elevated_command_prefix()
    return run_command(
        prefix + list(command),
        app_settings,
        check=check,
        shell=False,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
        secrets=secrets,
    )


def run_as_user(
    user: str,
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    current_logger: Optional[logging.Logger] = None,
    secrets: Optional[List[str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command as another system user (e.g. psql as 'postgres').
    """
    return run_command(
        ["sudo", "-u", user] + list(command),
        app_settings,
        check=check,
        capture_output=capture_output,
        current_logger=current_logger,
        secrets=secrets,
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.
    """
    return shutil.which(command_name) is not None
