"""
Schema migration step: 'manage.py migrate' in the Paperless-ngx source tree.
"""

from common.command_utils import run_elevated_command
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="migrations",
    metadata={
        "dependencies": ["database"],
        "description": "Paperless-ngx database migrations",
    },
)
class MigrationsConfigurator(BaseComponent):
    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        symbols = self.symbols
        src_dir = self.app_settings.paperless.src_dir
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Running database migrations...")
            run_elevated_command(
                [self.app_settings.python.interpreter, "manage.py", "migrate"],
                self.app_settings,
                current_logger=self.logger,
                cwd=str(src_dir),
            )
            self.log(
                f"{symbols.get('success', '✅')} Database migrations completed.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Database migrations failed: {str(e)}",
                "error",
                exc_info=True,
            )
            return False
