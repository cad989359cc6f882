# installer/components/database/database_configurator.py
# -*- coding: utf-8 -*-
"""
Database provisioning for Paperless-ngx.

Local mode creates the role and database through 'sudo -u postgres psql'.
Remote mode (the operator supplied credentials of an existing instance)
never touches roles or databases: the operator confirms the database exists
and, unless disabled, a connection check is run with the credentials.
Both modes record the database credentials block.
"""

from typing import List

from common.command_utils import run_as_user
from common.db_utils import check_database_connection, quote_identifier, quote_literal
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry
from installer.state import DeploymentState

REMOTE_CONFIRM_PROMPT = (
    "Make sure the Paperless-ngx database and user exist on the remote "
    "server, then press Enter to continue..."
)


def build_local_provisioning_statements(state: DeploymentState) -> List[str]:
    """
    SQL statements that create the Paperless-ngx role and database.

    Raises:
        ValueError: The user or database name is not a plain identifier, or
            no password has been decided yet.
    """
    if not state.db_password:
        raise ValueError("No database password decided; run 'paperless_settings' first.")
    user = quote_identifier(state.db_user)
    name = quote_identifier(state.db_name)
    return [
        f"CREATE ROLE {user} WITH LOGIN PASSWORD {quote_literal(state.db_password)};",
        f"CREATE DATABASE {name} WITH OWNER {user} ENCODING 'UTF8' TEMPLATE template0;",
        f"ALTER ROLE {user} SET client_encoding TO 'utf8';",
        f"ALTER ROLE {user} SET default_transaction_isolation TO 'read committed';",
        f"ALTER ROLE {user} SET timezone TO {quote_literal(state.timezone)};",
    ]


@ComponentRegistry.register(
    name="database",
    metadata={
        "dependencies": ["paperless_settings"],
        "description": "PostgreSQL role and database for Paperless-ngx",
    },
)
class DatabaseConfigurator(BaseComponent):
    """Creates (local) or confirms (remote) the Paperless-ngx database."""

    def install(self) -> bool:
        return True

    def configure(self) -> bool:
        symbols = self.symbols
        try:
            self.log(f"{symbols.get('gear', '⚙️')} Setting up PostgreSQL database...")
            if self.state.remote_database:
                if not self._confirm_remote_database():
                    return False
            else:
                self._provision_local_database()

            self.credentials_log().record(
                static_config.CREDENTIALS_TITLE_DATABASE,
                {
                    "Paperless-ngx Database Host": f"{self.state.db_host}:{self.state.db_port}",
                    "Paperless-ngx Database User": self.state.db_user,
                    "Paperless-ngx Database Password": self.state.db_password or "",
                    "Paperless-ngx Database Name": self.state.db_name,
                },
            )
            self.log(
                f"{symbols.get('success', '✅')} Configured PostgreSQL database.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error setting up the database: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _provision_local_database(self) -> None:
        for statement in build_local_provisioning_statements(self.state):
            run_as_user(
                "postgres",
                ["psql", "-c", statement],
                self.app_settings,
                current_logger=self.logger,
                secrets=self.secrets(),
            )

    def _confirm_remote_database(self) -> bool:
        state = self.state
        self.log(
            f"{self.symbols.get('info', 'ℹ️')} Using the existing database '{state.db_name}' on {state.db_host}:{state.db_port}."
        )
        self.prompter.pause(REMOTE_CONFIRM_PROMPT)

        if not self.app_settings.database.verify_remote:
            self.log("Remote database connection check disabled.", "warning")
            return True

        if not check_database_connection(
            state.db_host,
            state.db_port,
            state.db_name,
            state.db_user,
            state.db_password or "",
            current_logger=self.logger,
        ):
            self.log(
                f"{self.symbols.get('error', '❌')} Cannot connect to the remote database with the supplied credentials.",
                "error",
            )
            return False
        return True
