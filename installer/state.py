# installer/state.py
# -*- coding: utf-8 -*-
"""
Deployment state shared by the installer components.

A single DeploymentState instance is created per run and handed to every
component. Components read what earlier steps decided (database mode,
credentials, OCR languages, release version) and record their own results
on it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from installer.config_models import (
    DB_HOST_DEFAULT,
    DB_NAME_DEFAULT,
    DB_PORT_DEFAULT,
    DB_TIMEZONE_DEFAULT,
    DB_USER_DEFAULT,
    OCR_DEFAULT_LANGUAGE,
)


class DeploymentState(BaseModel):
    """Values decided while the pipeline runs."""

    postgres_installed_locally: bool = False
    remote_database: bool = False

    db_host: str = DB_HOST_DEFAULT
    db_port: int = DB_PORT_DEFAULT
    db_name: str = DB_NAME_DEFAULT
    db_user: str = DB_USER_DEFAULT
    db_password: Optional[str] = Field(default=None, repr=False)
    secret_key: Optional[str] = Field(default=None, repr=False)
    timezone: str = DB_TIMEZONE_DEFAULT

    ocr_languages: List[str] = Field(
        default_factory=lambda: [OCR_DEFAULT_LANGUAGE]
    )

    paperless_version: Optional[str] = None

    admin_username: Optional[str] = None
    admin_password: Optional[str] = Field(default=None, repr=False)

    services_started: bool = False

    @property
    def ocr_language(self) -> str:
        """OCR languages in Tesseract's '+'-joined form, e.g. 'eng+deu'."""
        return "+".join(self.ocr_languages)

    def secrets(self) -> List[str]:
        """Secret values to mask in logged command lines."""
        return [
            value
            for value in (self.db_password, self.secret_key, self.admin_password)
            if value
        ]
