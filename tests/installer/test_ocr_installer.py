from unittest.mock import MagicMock

import pytest

from installer.components.ocr.ocr_installer import (
    OcrInstaller,
    compose_ocr_language,
    parse_language_codes,
)


def test_parse_language_codes(mock_logger):
    assert parse_language_codes("deu,fra", mock_logger) == ["deu", "fra"]
    assert parse_language_codes(" deu , ,fra,deu,", mock_logger) == ["deu", "fra"]
    assert parse_language_codes("chi_sim", mock_logger) == ["chi_sim"]
    mock_logger.warning.assert_not_called()


def test_parse_language_codes_skips_invalid(mock_logger):
    assert parse_language_codes("deu,fr a,../x,spa", mock_logger) == ["deu", "spa"]
    assert mock_logger.warning.call_count == 2


def test_compose_ocr_language():
    assert compose_ocr_language("eng", ["deu", "fra"]) == ["eng", "deu", "fra"]
    assert compose_ocr_language("eng", ["eng", "deu"]) == ["eng", "deu"]
    assert compose_ocr_language("eng", []) == ["eng"]


@pytest.fixture
def mock_apt(mocker):
    apt_class = mocker.patch("installer.components.ocr.ocr_installer.AptManager")
    apt = apt_class.return_value
    apt.install.return_value = True
    return apt


def test_additional_languages_from_prompt(mock_apt, app_settings, state, make_prompter, mock_logger):
    prompter = make_prompter(["y", "deu,fra"])
    component = OcrInstaller(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.install() is True

    assert state.ocr_language == "eng+deu+fra"
    mock_apt.install.assert_called_with(
        ["tesseract-ocr-deu", "tesseract-ocr-fra"], app_settings
    )


def test_no_additional_languages(mock_apt, app_settings, state, make_prompter, mock_logger):
    prompter = make_prompter([""])
    component = OcrInstaller(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.install() is True

    assert state.ocr_language == "eng"
    assert mock_apt.install.call_count == 1


def test_languages_from_settings_skip_prompt(mock_apt, app_settings, state, mock_logger):
    app_settings.ocr.additional_languages = ["spa"]
    prompter = MagicMock()
    component = OcrInstaller(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.install() is True

    prompter.confirm.assert_not_called()
    assert state.ocr_languages == ["eng", "spa"]


def test_language_pack_failure_is_fatal(mock_apt, app_settings, state, make_prompter, mock_logger):
    mock_apt.install.side_effect = [True, False]
    prompter = make_prompter(["yes", "xyz"])
    component = OcrInstaller(app_settings, state, prompter=prompter, logger=mock_logger)

    assert component.install() is False
    assert state.ocr_languages == ["eng"]
