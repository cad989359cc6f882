# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from common.prompt_utils import Prompter
from installer.config_models import AppSettings
from installer.state import DeploymentState


@pytest.fixture(autouse=True)
def _clean_installer_env(monkeypatch):
    """Keep PAPERLESS_INSTALL_* variables of the test host out of the settings."""
    for key in list(os.environ):
        if key.startswith("PAPERLESS_INSTALL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings(tmp_path):
    """Settings whose every path lives below tmp_path."""
    return AppSettings(
        credentials_file=tmp_path / "home" / "paperless.creds",
        paperless={
            "install_dir": tmp_path / "opt" / "paperless",
            "version_marker_path": tmp_path / "opt" / "Paperless-ngx_version.txt",
        },
        jbig2={"build_dir": tmp_path / "opt" / "jbig2enc"},
        nltk={"data_dir": tmp_path / "nltk_data"},
        systemd={
            "unit_dir": tmp_path / "systemd",
            "imagemagick_policy_paths": [tmp_path / "ImageMagick-6" / "policy.xml"],
        },
        host={
            "motd_script_path": tmp_path / "profile.d" / "00_paperless-details.sh",
            "sshd_config_path": tmp_path / "ssh" / "sshd_config",
        },
    )


@pytest.fixture
def state():
    return DeploymentState()


class ScriptedInput:
    """Replays canned answers; raises EOFError once they run out."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def make_prompter(app_settings):
    """Build a Prompter answering from a list of canned lines."""

    def _make(answers, settings=None):
        scripted = ScriptedInput(answers)
        prompter = Prompter(
            settings or app_settings,
            logger=MagicMock(spec=logging.Logger),
            input_func=scripted,
            secret_input_func=scripted,
        )
        prompter.scripted = scripted
        return prompter

    return _make
