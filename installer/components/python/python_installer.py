"""
Python runtime installer module.
"""

from common.debian.apt_manager import AptManager
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="python",
    metadata={
        "dependencies": ["prerequisites"],
        "description": "Python 3 runtime, pip, headers, setuptools and wheel",
    },
)
class PythonInstaller(BaseComponent):
    """Installs the system Python used to run Paperless-ngx."""

    def install(self) -> bool:
        symbols = self.symbols
        try:
            self.log(
                f"{symbols.get('package', '📦')} Installing Python3 dependencies (patience)..."
            )
            apt_manager = AptManager(logger=self.logger)
            if not apt_manager.install(
                static_config.PYTHON_SYSTEM_PACKAGES, self.app_settings
            ):
                self.log(
                    f"{symbols.get('error', '❌')} Failed to install Python3 dependencies.",
                    "error",
                )
                return False
            self.log(
                f"{symbols.get('success', '✅')} Installed Python3 dependencies.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing Python3 dependencies: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        return True
