import sys

import pytest

from installer.components.services.services_configurator import (
    ENABLE_ORDER,
    POLICY_PDF_SED,
    ServicesConfigurator,
)
from installer.components.services.units import ServiceUnit

MODULE = "installer.components.services.services_configurator"


@pytest.fixture
def mock_write(mocker, tmp_path):
    """Write unit files directly instead of through sudo tee."""

    def _write(path, text, app_settings, **kwargs):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)

    return mocker.patch(f"{MODULE}.write_elevated_file", side_effect=_write)


@pytest.fixture
def mock_run(mocker):
    return mocker.patch(f"{MODULE}.run_elevated_command")


@pytest.fixture
def mock_reload(mocker):
    return mocker.patch(f"{MODULE}.systemd_reload")


def test_install_writes_four_units_and_patches_policy(mock_write, mock_run, app_settings, state, mock_logger):
    policy = app_settings.systemd.imagemagick_policy_paths[0]
    policy.parent.mkdir(parents=True)
    policy.write_text('<policy domain="coder" rights="none" pattern="PDF" />\n')
    component = ServicesConfigurator(app_settings, state, logger=mock_logger)

    assert component.install() is True

    written = sorted(p.name for p in app_settings.systemd.unit_dir.iterdir())
    assert written == [
        "paperless-consumer.service",
        "paperless-scheduler.service",
        "paperless-task-queue.service",
        "paperless-webserver.service",
    ]
    assert {call.kwargs["mode"] for call in mock_write.call_args_list} == {"644"}
    mock_run.assert_called_once_with(
        ["sed", "-i", "-e", POLICY_PDF_SED, str(policy)],
        app_settings,
        current_logger=mock_logger,
    )


def test_install_without_policy_file_warns(mock_write, mock_run, app_settings, state, mock_logger):
    component = ServicesConfigurator(app_settings, state, logger=mock_logger)

    assert component.install() is True
    mock_run.assert_not_called()
    mock_logger.warning.assert_called_once()


def test_configure_enables_and_starts(mock_run, mock_reload, app_settings, state, make_prompter, mock_logger):
    app_settings.systemd.verify_units = False
    component = ServicesConfigurator(app_settings, state, prompter=make_prompter([""]), logger=mock_logger)

    assert component.configure() is True

    mock_reload.assert_called_once()
    mock_run.assert_called_once_with(
        ["systemctl", "enable", "--now"] + ENABLE_ORDER,
        app_settings,
        current_logger=mock_logger,
    )
    assert state.services_started is True


def test_configure_enables_without_starting(mock_run, mock_reload, app_settings, state, make_prompter, mock_logger):
    app_settings.systemd.verify_units = False
    component = ServicesConfigurator(app_settings, state, prompter=make_prompter(["no"]), logger=mock_logger)

    assert component.configure() is True

    assert mock_run.call_args.args[0] == ["systemctl", "enable"] + ENABLE_ORDER
    assert state.services_started is False


def test_failed_verification_enables_nothing(mock_run, mock_reload, app_settings, state, make_prompter, mock_logger):
    # Units were never written, and the working directory does not exist
    component = ServicesConfigurator(app_settings, state, prompter=make_prompter(["y"]), logger=mock_logger)

    assert component.configure() is False

    mock_reload.assert_not_called()
    mock_run.assert_not_called()
    assert state.services_started is False


def test_verify_units_reads_written_files(app_settings, state, mock_logger, tmp_path):
    workdir = tmp_path / "work"
    workdir.mkdir()
    good = ServiceUnit(
        name="good", description="Good", working_directory=str(workdir), exec_start=f"{sys.executable} -V"
    )
    missing = ServiceUnit(
        name="missing", description="Missing", working_directory=str(workdir), exec_start=f"{sys.executable} -V"
    )
    unit_dir = app_settings.systemd.unit_dir
    unit_dir.mkdir(parents=True)
    (unit_dir / good.filename).write_text(good.render())
    component = ServicesConfigurator(app_settings, state, logger=mock_logger)

    problems = component.verify_units([good, missing])

    assert problems == [f"missing.service: not written to {unit_dir}"]
