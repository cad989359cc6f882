# installer/components/services/units.py
# -*- coding: utf-8 -*-
"""
systemd unit templates for the Paperless-ngx services.

Rendering is a pure function of the unit fields, so the same settings always
produce byte-identical unit files. verify_unit_text() checks a rendered or
written unit before the services are enabled.
"""

import configparser
import shlex
import shutil
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from installer.config_models import AppSettings

REQUIRED_KEYS = {
    "Unit": ["Description"],
    "Service": ["WorkingDirectory", "ExecStart"],
    "Install": ["WantedBy"],
}

# ExecStart= may carry these prefixes before the executable path
EXEC_PREFIX_CHARS = "-@:+!"


class ServiceUnit(BaseModel):
    """A Paperless-ngx systemd service."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    working_directory: str
    exec_start: str
    after: List[str] = Field(default_factory=list)
    wants: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=lambda: ["redis.service"])
    wanted_by: str = "multi-user.target"

    @property
    def filename(self) -> str:
        return f"{self.name}.service"

    def render(self) -> str:
        lines = ["[Unit]", f"Description={self.description}"]
        lines.extend(f"After={target}" for target in self.after)
        lines.extend(f"Wants={target}" for target in self.wants)
        lines.extend(f"Requires={target}" for target in self.requires)
        lines.extend(
            [
                "",
                "[Service]",
                f"WorkingDirectory={self.working_directory}",
                f"ExecStart={self.exec_start}",
                "",
                "[Install]",
                f"WantedBy={self.wanted_by}",
            ]
        )
        return "\n".join(lines) + "\n"


def build_units(app_settings: AppSettings) -> List[ServiceUnit]:
    """The four Paperless-ngx services, in enable order."""
    paperless = app_settings.paperless
    src_dir = str(paperless.src_dir)
    gunicorn_conf = paperless.install_dir / "gunicorn.conf.py"
    return [
        ServiceUnit(
            name="paperless-scheduler",
            description="Paperless Celery beat",
            working_directory=src_dir,
            exec_start="celery --app paperless beat --loglevel INFO",
        ),
        ServiceUnit(
            name="paperless-task-queue",
            description="Paperless Celery Workers",
            working_directory=src_dir,
            exec_start="celery --app paperless worker --loglevel INFO",
        ),
        ServiceUnit(
            name="paperless-consumer",
            description="Paperless consumer",
            working_directory=src_dir,
            exec_start="python3 manage.py document_consumer",
        ),
        ServiceUnit(
            name="paperless-webserver",
            description="Paperless webserver",
            working_directory=src_dir,
            exec_start=(
                f"{app_settings.systemd.gunicorn_path} -c {gunicorn_conf} "
                "paperless.asgi:application"
            ),
            after=["network.target"],
            wants=["network.target"],
        ),
    ]


def resolve_executable(exec_start: str) -> Optional[str]:
    """Absolute path of the program ExecStart= runs, or None."""
    try:
        argv = shlex.split(exec_start)
    except ValueError:
        return None
    if not argv:
        return None
    program = argv[0].lstrip(EXEC_PREFIX_CHARS)
    if Path(program).is_absolute():
        return program if Path(program).exists() else None
    return shutil.which(program)


def verify_unit_text(unit_name: str, text: str) -> List[str]:
    """
    Check one unit file.

    Returns:
        A list of problems; empty when the unit is usable.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # systemd keys are case-sensitive
    try:
        parser.read_string(text, source=unit_name)
    except configparser.Error as e:
        return [f"{unit_name}: not a valid unit file ({e})"]

    problems: List[str] = []
    for section, keys in REQUIRED_KEYS.items():
        if not parser.has_section(section):
            problems.append(f"{unit_name}: missing [{section}] section")
            continue
        for key in keys:
            if not parser.get(section, key, fallback="").strip():
                problems.append(f"{unit_name}: missing {key}= in [{section}]")

    working_directory = parser.get("Service", "WorkingDirectory", fallback="")
    if working_directory and not Path(working_directory).is_dir():
        problems.append(
            f"{unit_name}: WorkingDirectory {working_directory} does not exist"
        )

    exec_start = parser.get("Service", "ExecStart", fallback="")
    if exec_start and resolve_executable(exec_start) is None:
        problems.append(
            f"{unit_name}: executable of ExecStart '{exec_start}' not found"
        )
    return problems
