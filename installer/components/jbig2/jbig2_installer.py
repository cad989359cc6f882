"""
JBIG2 encoder installer module.

Builds jbig2enc from source. OCRmyPDF uses it to shrink scanned PDFs.
"""

from common.command_utils import run_elevated_command
from common.file_utils import cleanup_directory
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="jbig2",
    metadata={
        "dependencies": ["prerequisites"],
        "description": "jbig2enc built from source",
    },
)
class Jbig2Installer(BaseComponent):
    """Clones, builds and installs jbig2enc, then removes the build tree."""

    def install(self) -> bool:
        symbols = self.symbols
        settings = self.app_settings.jbig2
        build_dir = settings.build_dir
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Installing JBIG2 (patience)...")
            # A tree left behind by an interrupted run would make git clone fail
            cleanup_directory(build_dir, self.app_settings, self.logger)

            run_elevated_command(
                ["git", "clone", settings.repo_url, str(build_dir)],
                self.app_settings,
                current_logger=self.logger,
            )
            for step in (
                ["bash", "./autogen.sh"],
                ["bash", "./configure"],
                ["make"],
                ["make", "install"],
            ):
                run_elevated_command(
                    step,
                    self.app_settings,
                    current_logger=self.logger,
                    cwd=str(build_dir),
                )

            cleanup_directory(build_dir, self.app_settings, self.logger)
            self.log(f"{symbols.get('success', '✅')} Installed JBIG2.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error building jbig2enc: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def configure(self) -> bool:
        return True
