# installer/components/host/host_configurator.py
# -*- coding: utf-8 -*-
"""
Host customization: login banner, optional SSH root login and operator hook
commands.
"""

import re
from typing import Optional

from common.command_utils import run_command, run_elevated_command
from common.file_utils import backup_file, write_elevated_file
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

PERMIT_ROOT_LOGIN_RE = re.compile(r"^\s*#?\s*PermitRootLogin\b.*$")


def build_motd_script(application: str, version: Optional[str]) -> str:
    """
    Login banner shown by /etc/profile.d. Hostname and IP address are
    looked up at login time.
    """
    version_text = f" (version {version})" if version else ""
    return (
        "#!/usr/bin/env bash\n"
        'echo ""\n'
        f'echo "    {application}{version_text}"\n'
        'echo "    Hostname: $(hostname)"\n'
        "echo \"    IP Address: $(hostname -I | awk '{print $1}')\"\n"
        'echo ""\n'
    )


def enable_root_login(sshd_config: str) -> str:
    """
    Set 'PermitRootLogin yes', replacing the first (possibly commented)
    PermitRootLogin line and dropping later ones.
    """
    lines = sshd_config.splitlines()
    result = []
    replaced = False
    for line in lines:
        if PERMIT_ROOT_LOGIN_RE.match(line):
            if not replaced:
                result.append("PermitRootLogin yes")
                replaced = True
            continue
        result.append(line)
    if not replaced:
        result.append("PermitRootLogin yes")
    return "\n".join(result) + "\n"


@ComponentRegistry.register(
    name="host",
    metadata={
        "dependencies": ["services"],
        "description": "Login banner, SSH settings and custom commands",
    },
)
class HostConfigurator(BaseComponent):
    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        symbols = self.symbols
        host = self.app_settings.host
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Customizing MOTD and SSH...")
            write_elevated_file(
                host.motd_script_path,
                build_motd_script(static_config.APPLICATION_NAME, self._installed_version()),
                self.app_settings,
                mode="755",
                current_logger=self.logger,
            )

            if host.ssh_root_login:
                self._enable_ssh_root_login()

            for command in host.customize_commands:
                run_command(
                    command,
                    self.app_settings,
                    shell=True,
                    current_logger=self.logger,
                )

            self.log(f"{symbols.get('success', '✅')} Customized MOTD and SSH.", "success")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error customizing the host: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _installed_version(self) -> Optional[str]:
        if self.state.paperless_version:
            return self.state.paperless_version
        marker = self.app_settings.paperless.version_marker_path
        if marker.is_file():
            return marker.read_text(encoding="utf-8").strip() or None
        return None

    def _enable_ssh_root_login(self) -> None:
        sshd_config_path = self.app_settings.host.sshd_config_path
        backup_file(sshd_config_path, self.app_settings, self.logger)
        current = (
            sshd_config_path.read_text(encoding="utf-8")
            if sshd_config_path.is_file()
            else ""
        )
        write_elevated_file(
            sshd_config_path,
            enable_root_login(current),
            self.app_settings,
            current_logger=self.logger,
        )
        run_elevated_command(
            ["systemctl", "restart", "ssh"],
            self.app_settings,
            current_logger=self.logger,
        )
        self.log("SSH root login enabled.", "warning")
