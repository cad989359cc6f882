import pytest

from common.prompt_utils import SPACER
from installer.components.paperless_settings.paperless_settings_configurator import (
    CUSTOM_CREDENTIALS_PROMPT,
    PaperlessSettingsConfigurator,
)
from installer.config import CONF_SENTINELS

MODULE = "installer.components.paperless_settings.paperless_settings_configurator"


@pytest.fixture
def conf_example(app_settings):
    path = app_settings.paperless.conf_path
    path.parent.mkdir(parents=True)
    path.write_text("".join(f"#{key}={value}\n" for key, value in CONF_SENTINELS.items()))
    return path


@pytest.fixture
def saved(mocker):
    """Captures the text handed to write_elevated_file by PaperlessConf.save()."""
    written = {}

    def _write(path, text, app_settings, **kwargs):
        written["path"] = path
        written["text"] = text
        written["secrets"] = kwargs.get("secrets")

    mocker.patch(
        "installer.components.paperless.paperless_conf.write_elevated_file",
        side_effect=_write,
    )
    return written


def _active(text):
    return dict(
        line.split("=", 1) for line in text.splitlines() if line and not line.startswith("#")
    )


def test_generated_credentials_and_defaults(conf_example, saved, app_settings, state, make_prompter, mock_logger, mocker):
    mocker.patch(f"{MODULE}.generate_password", return_value="generatedpw12")
    mocker.patch(f"{MODULE}.generate_secret_key", return_value="k" * 32)
    # custom creds: no; timezone: empty; url: empty; remote user, signatures, tika: no
    prompter = make_prompter(["n", "", "", "n", "n", "n"])
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is True

    assert state.remote_database is False
    assert state.db_password == "generatedpw12"
    assert state.timezone == "UTC"
    assert _active(saved["text"]) == {
        "PAPERLESS_DBHOST": "localhost",
        "PAPERLESS_DBPORT": "5432",
        "PAPERLESS_DBNAME": "paperlessdb",
        "PAPERLESS_DBUSER": "paperless",
        "PAPERLESS_DBPASS": "generatedpw12",
        "PAPERLESS_SECRET_KEY": "k" * 32,
        "PAPERLESS_TIMEZONE": "UTC",
    }
    assert saved["secrets"] == ["generatedpw12", "k" * 32]
    assert "#PAPERLESS_URL=https://example.com" in saved["text"].splitlines()
    assert prompter.scripted.prompts[0].startswith(f"{SPACER}{CUSTOM_CREDENTIALS_PROMPT}")


def test_custom_credentials_mark_remote_database(conf_example, saved, app_settings, state, make_prompter, mock_logger):
    prompter = make_prompter(
        ["yes", "db.example.org", "5433", "docs", "docuser", "dbpw", "secret", "Europe/Vienna", "", "n", "n", "n"]
    )
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is True

    assert state.remote_database is True
    assert (state.db_host, state.db_port, state.db_name, state.db_user) == (
        "db.example.org",
        5433,
        "docs",
        "docuser",
    )
    active = _active(saved["text"])
    assert active["PAPERLESS_DBHOST"] == "db.example.org"
    assert active["PAPERLESS_DBPORT"] == "5433"
    assert active["PAPERLESS_DBPASS"] == "dbpw"
    assert active["PAPERLESS_SECRET_KEY"] == "secret"
    assert active["PAPERLESS_TIMEZONE"] == "Europe/Vienna"


def test_invalid_port_fails(conf_example, saved, app_settings, state, make_prompter, mock_logger):
    prompter = make_prompter(["y", "db", "fivefourthreetwo"])
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is False
    assert "text" not in saved


def test_features_from_configuration(conf_example, saved, app_settings, state, mock_logger, mocker):
    app_settings.database.custom_credentials = False
    app_settings.database.timezone = "UTC"
    app_settings.database.password = "pw"
    app_settings.database.secret_key = "sk"
    app_settings.features.url = "https://paperless.example.org"
    app_settings.features.http_remote_user = True
    app_settings.features.remote_user_header = "HTTP_X_AUTH_USER"
    app_settings.features.allow_invalid_signatures = True
    app_settings.features.tika = True
    prompter = mocker.MagicMock()
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is True

    prompter.confirm.assert_not_called()
    active = _active(saved["text"])
    assert active["PAPERLESS_URL"] == "https://paperless.example.org"
    assert active["PAPERLESS_ENABLE_HTTP_REMOTE_USER"] == "true"
    assert active["PAPERLESS_HTTP_REMOTE_USER_HEADER_NAME"] == "HTTP_X_AUTH_USER"
    assert active["PAPERLESS_OCR_USER_ARGS"] == '{"invalidate_digital_signatures": true}'
    assert active["PAPERLESS_TIKA_ENABLED"] == "true"
    assert active["PAPERLESS_DBPASS"] == "pw"


def test_empty_remote_user_header_is_skipped(conf_example, saved, app_settings, state, make_prompter, mock_logger):
    # custom creds: no; timezone; url; remote user: yes; header: empty; signatures, tika: no
    prompter = make_prompter(["n", "", "", "y", "", "n", "n"])
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is True

    active = _active(saved["text"])
    assert active["PAPERLESS_ENABLE_HTTP_REMOTE_USER"] == "true"
    assert "PAPERLESS_HTTP_REMOTE_USER_HEADER_NAME" not in active
    assert any("header" in call.args[0] for call in mock_logger.warning.call_args_list)


def test_missing_conf_file_fails(saved, app_settings, state, make_prompter, mock_logger):
    prompter = make_prompter(["n", ""])
    component = PaperlessSettingsConfigurator(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.configure() is False
