# common/debian/apt_manager.py
# -*- coding: utf-8 -*-
import logging
import os
import subprocess
from typing import List, Optional, Union

from common.command_utils import (
    command_exists,
    run_command,
    run_elevated_command,
)
from installer.config_models import AppSettings

NONINTERACTIVE_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


class AptManager:
    """
    A small manager for Debian apt packages using the command-line tools.
    Every install uses --no-install-recommends so that the package set stays
    exactly the one requested.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the AptManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def _run(self, cmd: List[str], app_settings: AppSettings) -> None:
        env = dict(os.environ)
        env.update(NONINTERACTIVE_ENV)
        run_elevated_command(
            cmd, app_settings, current_logger=self.logger, env=env
        )

    def update(
        self, app_settings: AppSettings, raise_error: bool = False
    ) -> bool:
        """
        Updates the list of available packages using 'apt-get update'.

        Args:
            app_settings: The application settings.
            raise_error: Whether to raise an exception on failure.

        Returns:
            True if successful, False otherwise.
        """
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        try:
            self._run(["apt-get", "update", "-yq"], app_settings)
            self.logger.info("Apt package lists updated successfully.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to update apt cache: {e}")
            if raise_error:
                raise
            return False

    def upgrade(self, app_settings: AppSettings) -> bool:
        """Upgrades all installed packages ('apt-get dist-upgrade')."""
        self.logger.info("Upgrading installed packages...")
        try:
            self._run(["apt-get", "dist-upgrade", "-yq"], app_settings)
            self.logger.info("Installed packages upgraded.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to upgrade packages: {e}")
            return False

    def is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        """Returns True if dpkg reports the package as installed."""
        try:
            result = run_command(
                ["dpkg-query", "-W", "-f=${db:Status-Status}", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        return result.stdout.strip() == "installed"

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
        update_first: bool = False,
        no_install_recommends: bool = True,
    ) -> bool:
        """
        Installs one or more packages using 'apt-get install'. Packages that
        are already installed are skipped.

        Args:
            packages: A single package name or a list of package names.
            app_settings: The application settings.
            update_first: Whether to update the package lists before installing.
            no_install_recommends: Pass --no-install-recommends.

        Returns:
            True if successful, False otherwise.
        """
        if not isinstance(packages, list):
            packages = [packages]

        if update_first:
            if not self.update(app_settings):
                return False

        packages_to_install = []
        for pkg_name in packages:
            if self.is_installed(pkg_name, app_settings):
                self.logger.info(
                    f"Package '{pkg_name}' is already installed. Skipping."
                )
            else:
                self.logger.info(
                    f"Marking package for installation: {pkg_name}"
                )
                packages_to_install.append(pkg_name)

        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return True

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        cmd = ["apt-get", "install", "-yq"]
        if no_install_recommends:
            cmd.append("--no-install-recommends")
        try:
            self._run(cmd + packages_to_install, app_settings)
            self.logger.info("Packages installed successfully.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to install packages: {e}")
            return False

    def autoremove(self, app_settings: AppSettings) -> bool:
        """
        Removes automatically installed packages that are no longer needed.
        """
        self.logger.info("Running autoremove to clean up unused packages...")
        try:
            self._run(["apt-get", "autoremove", "-yq"], app_settings)
            self.logger.info("Autoremove completed successfully.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to autoremove packages: {e}")
            return False

    def autoclean(self, app_settings: AppSettings) -> bool:
        """Clears obsolete package files from the local apt cache."""
        self.logger.info("Running autoclean on the apt cache...")
        try:
            self._run(["apt-get", "autoclean", "-yq"], app_settings)
            self.logger.info("Autoclean completed successfully.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to autoclean apt cache: {e}")
            return False
