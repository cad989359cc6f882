"""
Final cleanup: the unused Docker files of the release and the apt caches.
"""

from common.debian.apt_manager import AptManager
from common.file_utils import cleanup_directory
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="cleanup",
    metadata={
        "dependencies": [],
        "description": "Remove leftovers and clean apt caches",
    },
)
class CleanupInstaller(BaseComponent):
    def install(self) -> bool:
        symbols = self.symbols
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Cleaning up...")
            cleanup_directory(
                self.app_settings.paperless.install_dir / "docker",
                self.app_settings,
                self.logger,
            )
            apt_manager = AptManager(logger=self.logger)
            if not apt_manager.autoremove(self.app_settings):
                return False
            if not apt_manager.autoclean(self.app_settings):
                return False
            self.log(f"{symbols.get('success', '✅')} Cleaned.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error during cleanup: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        return True
