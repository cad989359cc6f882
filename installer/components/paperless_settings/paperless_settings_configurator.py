# installer/components/paperless_settings/paperless_settings_configurator.py
# -*- coding: utf-8 -*-
"""
Configurator for the site-specific settings in paperless.conf.

Gathers the database credentials (generated, or supplied by the operator for
an existing instance), the timezone, the public URL and the optional
features, and writes them into paperless.conf. The database settings are
also kept on the deployment state for the 'database', 'admin_user' and
'adminer' components.
"""

from common.system_utils import generate_password, generate_secret_key
from installer.base_component import BaseComponent
from installer.components.paperless.paperless_conf import PaperlessConf
from installer.config_models import (
    DB_HOST_DEFAULT,
    DB_NAME_DEFAULT,
    DB_PORT_DEFAULT,
    DB_TIMEZONE_DEFAULT,
    DB_USER_DEFAULT,
)
from installer.registry import ComponentRegistry

OCR_USER_ARGS_ALLOW_INVALID_SIGNATURES = '{"invalidate_digital_signatures": true}'

CUSTOM_CREDENTIALS_PROMPT = "Would you like to set your own PostgreSQL credentials?"
TIMEZONE_PROMPT = (
    "Enter your timezone (e.g., 'Europe/Vienna', 'America/New_York' or "
    "leave empty for UTC):"
)
URL_PROMPT = (
    "Enter paperless URL (e.g. https://paperless.yourdomain.com, leave empty "
    "for default setting)?"
)
REMOTE_USER_PROMPT = "Would you like to enable HTTP remote user (Default 'false')?"
REMOTE_USER_HEADER_PROMPT = "Enter Header Name for remote user:"
INVALID_SIGNATURES_PROMPT = (
    "Would you like to allow importing PDFs with invalidated signature "
    "(Default 'false')?"
)
TIKA_PROMPT = "Would you like to enable TIKA (Default 'false')?"


@ComponentRegistry.register(
    name="paperless_settings",
    metadata={
        "dependencies": ["paperless"],
        "description": "Database credentials, timezone, URL and features in paperless.conf",
    },
)
class PaperlessSettingsConfigurator(BaseComponent):
    """
    Configurator for paperless.conf.

    Every question can be pre-answered in the configuration; only the
    unanswered ones are asked.
    """

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        symbols = self.symbols
        conf_path = self.app_settings.paperless.conf_path
        try:
            self._gather_database_settings()
            self.state.timezone = self.ask(
                self.app_settings.database.timezone,
                TIMEZONE_PROMPT,
                default=DB_TIMEZONE_DEFAULT,
            )

            self.log(f"{symbols.get('gear', '⚙️')} Configuring paperless.conf settings...")
            conf = PaperlessConf.load(conf_path, logger=self.logger)
            self._write_database_settings(conf)
            self._write_feature_settings(conf)
            conf.save(self.app_settings, secrets=self.secrets())

            self.log(
                f"{symbols.get('success', '✅')} Configured paperless.conf settings.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error configuring paperless.conf: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _gather_database_settings(self) -> None:
        db = self.app_settings.database
        state = self.state

        custom = self.confirm(db.custom_credentials, CUSTOM_CREDENTIALS_PROMPT)
        state.remote_database = custom

        if custom:
            state.db_host = self.ask(
                db.host, "Host address (FQDN or IP):", default=DB_HOST_DEFAULT, sub=True
            )
            port = self.ask(
                str(db.port) if db.port is not None else None,
                f"Port (leave empty for {DB_PORT_DEFAULT}):",
                default=str(DB_PORT_DEFAULT),
                sub=True,
            )
            try:
                state.db_port = int(port)
            except ValueError as e:
                raise ValueError(f"Database port '{port}' is not a number") from e
            state.db_name = self.ask(
                db.name, "Paperless database name:", default=DB_NAME_DEFAULT, sub=True
            )
            state.db_user = self.ask(
                db.user, "User name:", default=DB_USER_DEFAULT, sub=True
            )
            state.db_password = self.ask(
                db.password, "Password:", sub=True, secret=True
            ) or None
            state.secret_key = self.ask(
                db.secret_key, "Secret key:", sub=True, secret=True
            ) or None
        else:
            state.db_host = DB_HOST_DEFAULT
            state.db_port = DB_PORT_DEFAULT
            state.db_name = DB_NAME_DEFAULT
            state.db_user = DB_USER_DEFAULT
            state.db_password = db.password or None
            state.secret_key = db.secret_key or None

        if not state.db_password:
            state.db_password = generate_password()
            self.log("Generated a random database password.")
        if not state.secret_key:
            state.secret_key = generate_secret_key()
            self.log("Generated a random secret key.")

    def _write_database_settings(self, conf: PaperlessConf) -> None:
        state = self.state
        conf.activate("PAPERLESS_DBHOST", state.db_host)
        conf.activate("PAPERLESS_DBPORT", str(state.db_port))
        conf.activate("PAPERLESS_DBNAME", state.db_name)
        conf.activate("PAPERLESS_DBUSER", state.db_user)
        conf.activate("PAPERLESS_DBPASS", state.db_password)
        conf.activate("PAPERLESS_SECRET_KEY", state.secret_key)
        conf.activate("PAPERLESS_TIMEZONE", state.timezone)

    def _write_feature_settings(self, conf: PaperlessConf) -> None:
        features = self.app_settings.features

        url = self.ask(features.url, URL_PROMPT).strip()
        if url:
            conf.activate("PAPERLESS_URL", url)

        if self.confirm(features.http_remote_user, REMOTE_USER_PROMPT):
            conf.activate("PAPERLESS_ENABLE_HTTP_REMOTE_USER", "true")
            header = self.ask(
                features.remote_user_header, REMOTE_USER_HEADER_PROMPT, sub=True
            ).strip()
            if header:
                conf.set("PAPERLESS_HTTP_REMOTE_USER_HEADER_NAME", header)
            else:
                self.log(
                    "No remote user header name given; Paperless-ngx keeps its default header.",
                    "warning",
                )

        if self.confirm(features.allow_invalid_signatures, INVALID_SIGNATURES_PROMPT):
            conf.activate(
                "PAPERLESS_OCR_USER_ARGS", OCR_USER_ARGS_ALLOW_INVALID_SIGNATURES
            )

        if self.confirm(features.tika, TIKA_PROMPT):
            conf.activate("PAPERLESS_TIKA_ENABLED", "true")
