"""
Adminer installer module.

Optional web UI for the database, served by Apache under /adminer/.
"""

from common.command_utils import run_elevated_command
from common.debian.apt_manager import AptManager
from common.system_utils import get_primary_ip_address
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

ADMINER_PROMPT = "Would you like to add Adminer?"


@ComponentRegistry.register(
    name="adminer",
    metadata={
        "dependencies": ["database"],
        "description": "Adminer database UI (optional)",
    },
)
class AdminerInstaller(BaseComponent):
    """Installs Adminer and enables its Apache configuration when asked to."""

    def install(self) -> bool:
        symbols = self.symbols
        try:
            if not self.confirm(self.app_settings.features.adminer, ADMINER_PROMPT):
                self.log(f"{symbols.get('info', 'ℹ️')} Skipping Adminer.")
                return True

            self.log(f"{symbols.get('package', '📦')} Installing Adminer...")
            apt_manager = AptManager(logger=self.logger)
            # Adminer needs its recommended web server packages
            if not apt_manager.install(
                static_config.ADMINER_PACKAGES,
                self.app_settings,
                no_install_recommends=False,
            ):
                self.log(f"{symbols.get('error', '❌')} Failed to install Adminer.", "error")
                return False

            run_elevated_command(
                ["a2enconf", "adminer"], self.app_settings, current_logger=self.logger
            )
            run_elevated_command(
                ["systemctl", "reload", "apache2"],
                self.app_settings,
                current_logger=self.logger,
            )

            ip_address = get_primary_ip_address(self.app_settings, self.logger) or "localhost"
            self.credentials_log().record(
                static_config.CREDENTIALS_TITLE_ADMINER,
                {
                    "Adminer Interface": f"{ip_address}/adminer/",
                    "Adminer System": "PostgreSQL",
                    "Adminer Server": f"{self.state.db_host}:{self.state.db_port}",
                    "Adminer Username": self.state.db_user,
                    "Adminer Password": self.state.db_password or "",
                    "Adminer Database": self.state.db_name,
                },
            )
            self.log(f"{symbols.get('success', '✅')} Installed Adminer.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing Adminer: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        return True
