# installer/components/paperless/paperless_conf.py
# -*- coding: utf-8 -*-
"""
Editor for paperless.conf.

paperless.conf is a flat file of KEY=VALUE lines. The upstream example ships
every setting as a commented-out default ('#PAPERLESS_DBHOST=localhost'),
called a sentinel line here. Activating a key replaces its sentinel line with
an active one; when the key is already active its value is replaced instead,
so editing the same key twice never produces a second active line.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from common.file_utils import write_elevated_file
from installer import config as static_config
from installer.config_models import AppSettings
from installer.state import DeploymentState

module_logger = logging.getLogger(__name__)


class PaperlessConf:
    """In-memory copy of paperless.conf with line-level substitution."""

    def __init__(
        self,
        path: Path,
        lines: List[str],
        sentinels: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.path = Path(path)
        self.lines = list(lines)
        self.sentinels = (
            sentinels if sentinels is not None else static_config.CONF_SENTINELS
        )
        self.logger = logger or module_logger

    @classmethod
    def load(
        cls, path: Path, logger: Optional[logging.Logger] = None
    ) -> "PaperlessConf":
        text = Path(path).read_text(encoding="utf-8")
        return cls(path, text.splitlines(), logger=logger)

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    def _active_indexes(self, key: str) -> List[int]:
        prefix = f"{key}="
        return [
            i for i, line in enumerate(self.lines) if line.strip().startswith(prefix)
        ]

    def _sentinel_index(self, key: str) -> Optional[int]:
        sentinel = self.sentinels.get(key)
        if sentinel is None:
            return None
        target = f"#{key}={sentinel}"
        for i, line in enumerate(self.lines):
            if line.strip() == target:
                return i
        return None

    def _replace(self, key: str, value: str) -> bool:
        new_line = f"{key}={value}"
        active = self._active_indexes(key)
        if active:
            self.lines[active[0]] = new_line
            for i in reversed(active[1:]):
                del self.lines[i]
            return True

        index = self._sentinel_index(key)
        if index is None:
            return False
        self.lines[index] = new_line
        return True

    def activate(self, key: str, value: str) -> bool:
        """
        Set key to value by replacing its active line or its sentinel line.

        Returns:
            False (with a warning) when neither line exists.
        """
        if self._replace(key, value):
            self.logger.debug(f"paperless.conf: {key} activated")
            return True
        self.logger.warning(
            f"paperless.conf: no sentinel line for {key} found in {self.path}; setting left unchanged."
        )
        return False

    def set(self, key: str, value: str) -> bool:
        """Like activate(), but appends 'key=value' when nothing matches."""
        if not self._replace(key, value):
            self.lines.append(f"{key}={value}")
        return True

    def get(self, key: str) -> Optional[str]:
        """Value of the active line for key, or None."""
        active = self._active_indexes(key)
        if not active:
            return None
        return self.lines[active[0]].strip().split("=", 1)[1]

    def save(
        self, app_settings: AppSettings, secrets: Optional[List[str]] = None
    ) -> None:
        write_elevated_file(
            self.path,
            self.text(),
            app_settings,
            mode="640",
            current_logger=self.logger,
            secrets=secrets,
        )
        self.logger.info(f"Saved {self.path}")


LOCAL_DB_HOSTS = ("localhost", "127.0.0.1", "::1")


def seed_state_from_install(
    state: DeploymentState,
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Fill state from an existing installation.

    Components that consume run state ('database', 'adminer', 'admin_user'...)
    can be applied on their own after a full run; the values that run decided
    are read back from paperless.conf and the version marker.

    Returns:
        True when paperless.conf was found and read.
    """
    logger_to_use = logger or module_logger
    conf_path = app_settings.paperless.conf_path
    if not conf_path.is_file():
        logger_to_use.debug(f"No existing {conf_path}; run state keeps its defaults.")
        return False

    conf = PaperlessConf.load(conf_path, logger=logger_to_use)
    host = conf.get("PAPERLESS_DBHOST")
    if host:
        state.db_host = host
        state.remote_database = host not in LOCAL_DB_HOSTS
    port = conf.get("PAPERLESS_DBPORT")
    if port:
        try:
            state.db_port = int(port)
        except ValueError:
            logger_to_use.warning(
                f"Ignoring PAPERLESS_DBPORT={port!r} in {conf_path}: not a port number."
            )
    for key, attribute in (
        ("PAPERLESS_DBNAME", "db_name"),
        ("PAPERLESS_DBUSER", "db_user"),
        ("PAPERLESS_DBPASS", "db_password"),
        ("PAPERLESS_SECRET_KEY", "secret_key"),
        ("PAPERLESS_TIMEZONE", "timezone"),
    ):
        value = conf.get(key)
        if value:
            setattr(state, attribute, value)
    ocr_language = conf.get("PAPERLESS_OCR_LANGUAGE")
    if ocr_language:
        state.ocr_languages = ocr_language.split("+")

    marker = app_settings.paperless.version_marker_path
    if state.paperless_version is None and marker.is_file():
        state.paperless_version = marker.read_text(encoding="utf-8").strip() or None

    logger_to_use.info(f"Loaded settings of the existing installation from {conf_path}")
    return True
