# installer/components/admin_user/admin_user_configurator.py
# -*- coding: utf-8 -*-
"""
Creates the Paperless-ngx superuser.

The account is created or updated by a short script piped to
'manage.py shell', so re-running the step resets the password instead of
failing on an existing user.
"""

from common.command_utils import run_elevated_command
from common.system_utils import generate_password
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.config_models import ADMIN_USERNAME_DEFAULT
from installer.registry import ComponentRegistry

ADMIN_SCRIPT_TEMPLATE = """\
from django.contrib.auth import get_user_model
UserModel = get_user_model()
user, _ = UserModel.objects.get_or_create(username={username!r})
user.set_password({password!r})
user.is_superuser = True
user.is_staff = True
user.save()
"""


def build_admin_script(username: str, password: str) -> str:
    """Django shell script creating or updating the superuser."""
    return ADMIN_SCRIPT_TEMPLATE.format(username=username, password=password)


@ComponentRegistry.register(
    name="admin_user",
    metadata={
        "dependencies": ["migrations"],
        "description": "Paperless-ngx admin user",
    },
)
class AdminUserConfigurator(BaseComponent):
    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        symbols = self.symbols
        admin = self.app_settings.admin
        src_dir = self.app_settings.paperless.src_dir
        try:
            username = self.ask(
                admin.username,
                f"Enter Paperless admin username (Enter for default: {ADMIN_USERNAME_DEFAULT}):",
                default=ADMIN_USERNAME_DEFAULT,
            )
            password = self.ask(
                admin.password,
                "Enter Paperless admin password (Enter for default: the database password):",
                default=self.state.db_password or "",
                secret=True,
            )
            if not password:
                password = generate_password()
                self.log("Generated a random admin password.")
            self.state.admin_username = username
            self.state.admin_password = password

            self.log(
                f"{symbols.get('gear', '⚙️')} Setting up admin Paperless-ngx user '{username}'..."
            )
            run_elevated_command(
                [
                    self.app_settings.python.interpreter,
                    str(src_dir / "manage.py"),
                    "shell",
                ],
                self.app_settings,
                cmd_input=build_admin_script(username, password),
                current_logger=self.logger,
                cwd=str(src_dir),
                secrets=self.secrets(),
            )

            self.credentials_log().record(
                static_config.CREDENTIALS_TITLE_WEBUI,
                {
                    "Paperless-ngx WebUI User": username,
                    "Paperless-ngx WebUI Password": password,
                },
            )
            self.log(
                f"{symbols.get('success', '✅')} Set up admin Paperless-ngx user.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error creating the admin user: {str(e)}",
                "error",
                exc_info=True,
            )
            return False
