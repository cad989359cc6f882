# installer/components/prerequisites/prerequisites_installer.py
# -*- coding: utf-8 -*-
"""
Installer for the system packages Paperless-ngx depends on.

This module provides the PrerequisitesInstaller class, which updates the
operating system, checks network connectivity and installs the imaging
libraries, build toolchain, database client libraries and Redis. It is the
first stage of the provisioning pipeline.
"""

from common.debian.apt_manager import AptManager
from common.network_utils import check_connectivity
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="prerequisites",
    metadata={
        "dependencies": [],
        "description": "OS update, network check and system dependencies",
    },
)
class PrerequisitesInstaller(BaseComponent):
    """
    Installer for the system dependencies.

    The package list mirrors what Paperless-ngx needs at build and run time:
    imaging libraries, a C toolchain, PostgreSQL and MySQL client headers and
    the Redis broker.
    """

    def install(self) -> bool:
        """
        Update the OS and install the dependency packages.

        Returns:
            True if the installation was successful, False otherwise.
        """
        symbols = self.symbols
        try:
            apt_manager = AptManager(logger=self.logger)

            if not check_connectivity(
                self.app_settings, current_logger=self.logger
            ):
                self.log(
                    f"{symbols.get('error', '❌')} Network check failed; packages and releases cannot be downloaded.",
                    "error",
                )
                return False

            self.log(f"{symbols.get('gear', '⚙️')} Updating the operating system...")
            if not apt_manager.update(self.app_settings):
                return False
            if not apt_manager.upgrade(self.app_settings):
                return False

            self.log(
                f"{symbols.get('package', '📦')} Installing dependencies (patience)..."
            )
            if not apt_manager.install(
                static_config.DEPENDENCY_PACKAGES, self.app_settings
            ):
                self.log(
                    f"{symbols.get('error', '❌')} Failed to install dependency packages.",
                    "error",
                )
                return False

            self.log(
                f"{symbols.get('success', '✅')} Installed dependencies.",
                "success",
            )
            return True

        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing dependencies: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        """Nothing to configure for the system packages."""
        return True
