"""
PostgreSQL installer module.

This module provides an optional installer for a local PostgreSQL server.
The operator either installs PostgreSQL on this host or connects Paperless-ngx
to an instance that already exists elsewhere.
"""

from common.debian.apt_manager import AptManager
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

INSTALL_PROMPT = (
    "Do you want to install PostgreSQL or connect to an already installed "
    "instance? (yes to install/no to connect)"
)


@ComponentRegistry.register(
    name="postgres",
    metadata={
        "dependencies": ["prerequisites"],
        "description": "Local PostgreSQL server (optional)",
    },
)
class PostgresInstaller(BaseComponent):
    """Installs the PostgreSQL server package when the operator asks for it."""

    def install(self) -> bool:
        symbols = self.symbols
        try:
            install_local = self.confirm(
                self.app_settings.database.install_local, INSTALL_PROMPT
            )
            self.state.postgres_installed_locally = install_local
            if not install_local:
                self.log(
                    f"{symbols.get('info', 'ℹ️')} Skipping PostgreSQL installation; an existing instance will be used."
                )
                return True

            self.log(f"{symbols.get('package', '📦')} Installing PostgreSQL (patience)...")
            apt_manager = AptManager(logger=self.logger)
            if not apt_manager.install(
                static_config.POSTGRES_PACKAGES, self.app_settings
            ):
                self.log(
                    f"{symbols.get('error', '❌')} Failed to install PostgreSQL.",
                    "error",
                )
                return False

            self.log(f"{symbols.get('success', '✅')} Installed PostgreSQL.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing PostgreSQL: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        """Roles and databases are created by the 'database' component."""
        return True
