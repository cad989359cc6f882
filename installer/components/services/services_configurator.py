# installer/components/services/services_configurator.py
# -*- coding: utf-8 -*-
"""
Configurator for the Paperless-ngx systemd services.

Writes the four unit files, lets ImageMagick read and write PDFs, verifies
the units, reloads systemd and enables the services, starting them right
away unless the operator declines.
"""

from typing import List

from common.command_utils import run_elevated_command
from common.file_utils import write_elevated_file
from common.system_utils import systemd_reload
from installer.base_component import BaseComponent
from installer.components.services.units import (
    ServiceUnit,
    build_units,
    verify_unit_text,
)
from installer.registry import ComponentRegistry

POLICY_PDF_SED = 's/rights="none" pattern="PDF"/rights="read|write" pattern="PDF"/'

START_SERVICES_PROMPT = "Do you want to start the Paperless services now (Default: yes)?"

# Units passed to systemctl enable, in this order
ENABLE_ORDER = [
    "paperless-consumer",
    "paperless-webserver",
    "paperless-scheduler",
    "paperless-task-queue.service",
]


@ComponentRegistry.register(
    name="services",
    metadata={
        "dependencies": ["admin_user"],
        "description": "Paperless-ngx systemd services",
    },
)
class ServicesConfigurator(BaseComponent):
    """Configurator for the scheduler, task queue, consumer and webserver units."""

    def install(self) -> bool:
        """Write the unit files and patch the ImageMagick policy."""
        symbols = self.symbols
        unit_dir = self.app_settings.systemd.unit_dir
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Creating services...")
            for unit in build_units(self.app_settings):
                write_elevated_file(
                    unit_dir / unit.filename,
                    unit.render(),
                    self.app_settings,
                    mode="644",
                    current_logger=self.logger,
                )
            self._patch_imagemagick_policy()
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error creating the service units: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _patch_imagemagick_policy(self) -> None:
        patched = 0
        for policy_path in self.app_settings.systemd.imagemagick_policy_paths:
            if not policy_path.is_file():
                self.log(f"ImageMagick policy {policy_path} not present.", "debug")
                continue
            run_elevated_command(
                ["sed", "-i", "-e", POLICY_PDF_SED, str(policy_path)],
                self.app_settings,
                current_logger=self.logger,
            )
            patched += 1
        if not patched:
            self.log(
                "No ImageMagick policy file found; PDF thumbnails may fail.",
                "warning",
            )

    def verify_units(self, units: List[ServiceUnit]) -> List[str]:
        """Problems found in the unit files as written to the unit directory."""
        unit_dir = self.app_settings.systemd.unit_dir
        problems: List[str] = []
        for unit in units:
            path = unit_dir / unit.filename
            if not path.is_file():
                problems.append(f"{unit.filename}: not written to {unit_dir}")
                continue
            problems.extend(
                verify_unit_text(unit.filename, path.read_text(encoding="utf-8"))
            )
        return problems

    def configure(self) -> bool:
        """Verify the units, reload systemd and enable the services."""
        symbols = self.symbols
        try:
            if self.app_settings.systemd.verify_units:
                problems = self.verify_units(build_units(self.app_settings))
                if problems:
                    for problem in problems:
                        self.log(f"{symbols.get('error', '❌')} {problem}", "error")
                    self.log(
                        f"{symbols.get('error', '❌')} Unit verification failed; no service was enabled.",
                        "error",
                    )
                    return False

            systemd_reload(self.app_settings, self.logger)

            start_now = self.confirm(
                self.app_settings.features.start_services,
                START_SERVICES_PROMPT,
                default=True,
            )
            command = ["systemctl", "enable"]
            if start_now:
                command.append("--now")
            run_elevated_command(
                command + ENABLE_ORDER, self.app_settings, current_logger=self.logger
            )
            self.state.services_started = start_now

            if start_now:
                self.log(f"{symbols.get('success', '✅')} Started and enabled services.", "success")
            else:
                self.log(f"{symbols.get('success', '✅')} Services enabled but not started.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error enabling the services: {str(e)}",
                "error",
                exc_info=True,
            )
            return False
