"""Applying single components after a full installation."""

import pytest

from installer.credentials import CredentialsLog
from installer.orchestrator import ComponentOrchestrator

INSTALLED_CONF = """\
PAPERLESS_DBHOST=localhost
PAPERLESS_DBPORT=5432
PAPERLESS_DBNAME=paperlessdb
PAPERLESS_DBUSER=paperless
PAPERLESS_DBPASS=s3cret
PAPERLESS_SECRET_KEY=abcdef
PAPERLESS_TIMEZONE=Europe/Vienna
"""


@pytest.fixture
def installed(app_settings):
    conf_path = app_settings.paperless.conf_path
    conf_path.parent.mkdir(parents=True)
    conf_path.write_text(INSTALLED_CONF)
    return conf_path


def test_apply_adminer_alone(installed, mocker, app_settings, state, make_prompter, mock_logger):
    module = "installer.components.adminer.adminer_installer"
    mocker.patch(f"{module}.AptManager").return_value.install.return_value = True
    mocker.patch(f"{module}.run_elevated_command")
    mocker.patch(f"{module}.get_primary_ip_address", return_value="192.0.2.10")
    orchestrator = ComponentOrchestrator(
        app_settings, state, prompter=make_prompter(["y"]), logger=mock_logger
    )

    assert orchestrator.run(["adminer"]) is True

    text = app_settings.credentials_path.read_text()
    assert "Adminer Password: s3cret\n" in text
    assert "Adminer Username: paperless\n" in text


def test_apply_database_alone(installed, mocker, app_settings, state, mock_logger):
    mock_run = mocker.patch("installer.components.database.database_configurator.run_as_user")
    orchestrator = ComponentOrchestrator(app_settings, state, logger=mock_logger)

    assert orchestrator.run(["database"]) is True

    statements = [call.args[1][2] for call in mock_run.call_args_list]
    assert statements[0] == "CREATE ROLE paperless WITH LOGIN PASSWORD 's3cret';"
    assert statements[-1] == "ALTER ROLE paperless SET timezone TO 'Europe/Vienna';"
    assert CredentialsLog(app_settings.credentials_path).titles() == ["Paperless-ngx Database"]


def test_settings_component_in_run_is_not_overridden(installed, mocker, app_settings, state, mock_logger):
    seed = mocker.patch("installer.orchestrator.seed_state_from_install")
    mocker.patch("installer.orchestrator.ComponentOrchestrator._run_component", return_value=True)
    orchestrator = ComponentOrchestrator(app_settings, state, logger=mock_logger)

    assert orchestrator.run(["paperless_settings", "database"]) is True
    seed.assert_not_called()

    assert orchestrator.run(["database"]) is True
    seed.assert_called_once_with(state, app_settings, mock_logger)
