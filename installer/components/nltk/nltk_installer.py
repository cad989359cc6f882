"""
NLTK corpus installer module.

Paperless-ngx uses NLTK for its automatic matching; the corpora are fetched
with the nltk downloader that ships with the installed requirements.
"""

from common.command_utils import run_elevated_command
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="nltk",
    metadata={
        "dependencies": ["paperless"],
        "description": "Natural Language Toolkit corpora",
    },
)
class NltkInstaller(BaseComponent):
    def install(self) -> bool:
        symbols = self.symbols
        settings = self.app_settings.nltk
        try:
            self.log(
                f"{symbols.get('package', '📦')} Installing Natural Language Toolkit data (patience)..."
            )
            run_elevated_command(
                [
                    self.app_settings.python.interpreter,
                    "-m",
                    "nltk.downloader",
                    "-d",
                    str(settings.data_dir),
                ]
                + list(settings.packages),
                self.app_settings,
                current_logger=self.logger,
            )
            self.log(
                f"{symbols.get('success', '✅')} Installed Natural Language Toolkit data.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error downloading NLTK data: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        return True
