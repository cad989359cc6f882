# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.

Settings whose default is None are "open questions" answered interactively
at runtime; giving them a value in config.yaml, the environment or on the
command line pre-answers the matching prompt.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer import config as static_config

# --- Default Static Values (can be overridden by config file/env/cli) ---
LOG_PREFIX_DEFAULT: str = "[PAPERLESS-SETUP]"

INSTALL_DIR_DEFAULT: str = "/opt/paperless"
VERSION_MARKER_PATH_DEFAULT: str = "/opt/Paperless-ngx_version.txt"
RELEASE_API_URL_DEFAULT: str = (
    "https://api.github.com/repos/paperless-ngx/paperless-ngx/releases/latest"
)
DOWNLOAD_URL_TEMPLATE_DEFAULT: str = (
    "https://github.com/paperless-ngx/paperless-ngx/releases/download/"
    "{version}/paperless-ngx-{version}.tar.xz"
)
CONF_EXAMPLE_URL_DEFAULT: str = (
    "https://raw.githubusercontent.com/paperless-ngx/paperless-ngx/main/"
    "paperless.conf.example"
)
REDIS_URL_DEFAULT: str = "redis://localhost:6379"

DB_HOST_DEFAULT: str = "localhost"
DB_PORT_DEFAULT: int = 5432
DB_NAME_DEFAULT: str = "paperlessdb"
DB_USER_DEFAULT: str = "paperless"
DB_TIMEZONE_DEFAULT: str = "UTC"

OCR_DEFAULT_LANGUAGE: str = "eng"

ADMIN_USERNAME_DEFAULT: str = "admin"

JBIG2_REPO_URL_DEFAULT: str = "https://github.com/agl/jbig2enc"
JBIG2_BUILD_DIR_DEFAULT: str = "/opt/jbig2enc"

NLTK_DATA_DIR_DEFAULT: str = "/usr/share/nltk_data"

SYSTEMD_UNIT_DIR_DEFAULT: str = "/etc/systemd/system"
IMAGEMAGICK_POLICY_PATHS_DEFAULT: List[str] = [
    "/etc/ImageMagick-6/policy.xml",
    "/etc/ImageMagick-7/policy.xml",
]
GUNICORN_PATH_DEFAULT: str = "/usr/local/bin/gunicorn"

MOTD_SCRIPT_PATH_DEFAULT: str = "/etc/profile.d/00_paperless-details.sh"
SSHD_CONFIG_PATH_DEFAULT: str = "/etc/ssh/sshd_config"

CREDENTIALS_FILE_DEFAULT: str = "~/paperless.creds"

SYMBOLS_DEFAULT: Dict[str, str] = dict(static_config.SYMBOLS)


class PaperlessSettings(BaseModel):
    """Where Paperless-ngx comes from and where it is installed."""

    install_dir: Path = Field(default=Path(INSTALL_DIR_DEFAULT), description="Installation directory.")
    version: Optional[str] = Field(default=None,
                                   description="Pinned release tag (e.g. v2.7.2). Resolved from the releases API when unset.")
    release_api_url: str = Field(default=RELEASE_API_URL_DEFAULT, description="Latest-release metadata endpoint.")
    download_url_template: str = Field(default=DOWNLOAD_URL_TEMPLATE_DEFAULT,
                                       description="Release archive URL. Supports placeholder {version}.")
    conf_example_url: str = Field(default=CONF_EXAMPLE_URL_DEFAULT,
                                  description="URL of the upstream paperless.conf.example.")
    version_marker_path: Path = Field(default=Path(VERSION_MARKER_PATH_DEFAULT),
                                      description="File that records the installed release tag.")
    redis_url: str = Field(default=REDIS_URL_DEFAULT, description="Redis broker URL written to paperless.conf.")
    request_timeout: int = Field(default=60, description="HTTP timeout in seconds for release lookups and downloads.")

    @property
    def src_dir(self) -> Path:
        return self.install_dir / "src"

    @property
    def conf_path(self) -> Path:
        return self.install_dir / "paperless.conf"


class DatabaseSettings(BaseModel):
    """PostgreSQL settings. None means 'ask the operator'."""

    install_local: Optional[bool] = Field(default=None,
                                          description="Install PostgreSQL locally (True) or connect to an existing instance (False).")
    custom_credentials: Optional[bool] = Field(default=None,
                                               description="Operator supplies credentials of an existing (remote) database.")
    host: Optional[str] = Field(default=None, description="Database host for custom credentials.")
    port: Optional[int] = Field(default=None, description="Database port for custom credentials.")
    name: Optional[str] = Field(default=None, description="Database name for custom credentials.")
    user: Optional[str] = Field(default=None, description="Database user for custom credentials.")
    password: Optional[str] = Field(default=None, description="Database password.", repr=False)
    secret_key: Optional[str] = Field(default=None, description="Django secret key.", repr=False)
    timezone: Optional[str] = Field(default=None, description="Timezone for Paperless-ngx and the database role.")
    verify_remote: bool = Field(default=True,
                                description="Run a connection check against a remote database after operator confirmation.")


class OcrSettings(BaseModel):
    default_language: str = Field(default=OCR_DEFAULT_LANGUAGE, description="Language installed with the base OCR packages.")
    additional_languages: Optional[List[str]] = Field(default=None,
                                                      description="Extra Tesseract language codes. Prompted when unset.")


class FeatureSettings(BaseModel):
    """Optional paperless.conf features and optional pipeline branches."""

    url: Optional[str] = Field(default=None, description="Public Paperless-ngx URL. Empty string keeps the default.")
    http_remote_user: Optional[bool] = Field(default=None, description="Enable HTTP remote-user authentication.")
    remote_user_header: Optional[str] = Field(default=None, description="Header carrying the remote user name.")
    allow_invalid_signatures: Optional[bool] = Field(default=None,
                                                     description="Allow importing PDFs with digital signatures invalidated by OCR.")
    tika: Optional[bool] = Field(default=None, description="Enable Apache Tika.")
    adminer: Optional[bool] = Field(default=None, description="Install Adminer behind Apache.")
    start_services: Optional[bool] = Field(default=None, description="Start services after enabling them.")


class AdminSettings(BaseModel):
    username: Optional[str] = Field(default=None, description="Paperless-ngx superuser name.")
    password: Optional[str] = Field(default=None, description="Paperless-ngx superuser password.", repr=False)


class PythonSettings(BaseModel):
    interpreter: str = Field(default="python3", description="Interpreter used for pip, manage.py and nltk.")
    pip_extra_args: List[str] = Field(default_factory=list,
                                      description="Extra pip arguments, e.g. ['--break-system-packages'] on PEP 668 systems.")


class Jbig2Settings(BaseModel):
    repo_url: str = Field(default=JBIG2_REPO_URL_DEFAULT, description="jbig2enc git repository.")
    build_dir: Path = Field(default=Path(JBIG2_BUILD_DIR_DEFAULT), description="Temporary build tree.")


class NltkSettings(BaseModel):
    data_dir: Path = Field(default=Path(NLTK_DATA_DIR_DEFAULT), description="NLTK data directory.")
    packages: List[str] = Field(default_factory=lambda: ["all"], description="NLTK corpora to download.")


class SystemdSettings(BaseModel):
    unit_dir: Path = Field(default=Path(SYSTEMD_UNIT_DIR_DEFAULT), description="Directory receiving the unit files.")
    imagemagick_policy_paths: List[Path] = Field(
        default_factory=lambda: [Path(p) for p in IMAGEMAGICK_POLICY_PATHS_DEFAULT],
        description="ImageMagick policy files patched to allow PDF read/write.",
    )
    gunicorn_path: str = Field(default=GUNICORN_PATH_DEFAULT, description="Gunicorn executable for the webserver unit.")
    verify_units: bool = Field(default=True, description="Verify rendered units before enabling them.")


class HostSettings(BaseModel):
    motd_script_path: Path = Field(default=Path(MOTD_SCRIPT_PATH_DEFAULT), description="Login banner script.")
    ssh_root_login: bool = Field(default=False, description="Permit SSH root login.")
    sshd_config_path: Path = Field(default=Path(SSHD_CONFIG_PATH_DEFAULT), description="sshd configuration file.")
    customize_commands: List[str] = Field(default_factory=list,
                                          description="Extra shell commands run during host customization.")


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="PAPERLESS_INSTALL_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix for log messages from the main installer script.")
    non_interactive: bool = Field(default=False,
                                  description="Never read from stdin; every open prompt takes its default.")
    credentials_file: Path = Field(default=Path(CREDENTIALS_FILE_DEFAULT),
                                   description="Plaintext log of generated credentials.")

    paperless: PaperlessSettings = Field(default_factory=PaperlessSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ocr: OcrSettings = Field(default_factory=OcrSettings)
    features: FeatureSettings = Field(default_factory=FeatureSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    python: PythonSettings = Field(default_factory=PythonSettings)
    jbig2: Jbig2Settings = Field(default_factory=Jbig2Settings)
    nltk: NltkSettings = Field(default_factory=NltkSettings)
    systemd: SystemdSettings = Field(default_factory=SystemdSettings)
    host: HostSettings = Field(default_factory=HostSettings)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @property
    def credentials_path(self) -> Path:
        return self.credentials_file.expanduser()
