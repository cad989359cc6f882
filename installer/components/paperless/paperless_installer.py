# installer/components/paperless/paperless_installer.py
# -*- coding: utf-8 -*-
"""
Paperless-ngx application installer.

Downloads the release archive, unpacks it into the install directory,
installs the Python requirements, seeds paperless.conf from the upstream
example and activates the path, Redis and OCR language settings.
"""

from pathlib import Path

from common.command_utils import run_elevated_command
from common.file_utils import cleanup_directory, write_elevated_file
from common.network_utils import download_file
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.components.paperless.paperless_conf import PaperlessConf
from installer.components.paperless.release import (
    ARCHIVE_ROOT_DIR,
    archive_name,
    build_download_url,
    extract_archive,
    resolve_version,
)
from installer.registry import ComponentRegistry

# paperless.conf keys for the data directories below the install directory
DATA_DIR_KEYS = {
    "consume": "PAPERLESS_CONSUMPTION_DIR",
    "data": "PAPERLESS_DATA_DIR",
    "media": "PAPERLESS_MEDIA_ROOT",
    "static": "PAPERLESS_STATICDIR",
}


@ComponentRegistry.register(
    name="paperless",
    metadata={
        "dependencies": ["python", "ocr"],
        "description": "Paperless-ngx release, requirements and base paperless.conf",
    },
)
class PaperlessInstaller(BaseComponent):
    """Fetches and unpacks Paperless-ngx and prepares its configuration file."""

    def install(self) -> bool:
        symbols = self.symbols
        settings = self.app_settings.paperless
        install_dir = settings.install_dir
        try:
            if install_dir.exists():
                self.log(
                    f"{symbols.get('error', '❌')} {install_dir} already exists. Remove it or set paperless.install_dir to another path.",
                    "error",
                )
                return False

            self.log(f"{symbols.get('rocket', '🚀')} Installing Paperless-ngx (patience)...")
            version = resolve_version(settings, current_logger=self.logger)
            self.state.paperless_version = version

            work_dir = install_dir.parent
            archive_path = work_dir / archive_name(version)
            download_file(
                build_download_url(settings.download_url_template, version),
                archive_path,
                self.app_settings,
                timeout=settings.request_timeout,
                current_logger=self.logger,
            )

            # Left over from an interrupted run
            cleanup_directory(work_dir / ARCHIVE_ROOT_DIR, self.app_settings, self.logger)
            extracted = extract_archive(archive_path, work_dir, self.logger)
            extracted.rename(install_dir)
            archive_path.unlink()

            self._install_requirements(install_dir)

            download_file(
                settings.conf_example_url,
                settings.conf_path,
                self.app_settings,
                timeout=settings.request_timeout,
                current_logger=self.logger,
            )
            for subdir in static_config.PAPERLESS_DATA_SUBDIRS:
                (install_dir / subdir).mkdir(parents=True, exist_ok=True)

            write_elevated_file(
                settings.version_marker_path,
                f"{version}\n",
                self.app_settings,
                current_logger=self.logger,
            )

            self.log(
                f"{symbols.get('success', '✅')} Installed Paperless-ngx {version}.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing Paperless-ngx: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _install_requirements(self, install_dir: Path) -> None:
        python = self.app_settings.python
        extra_args = list(python.pip_extra_args)
        run_elevated_command(
            [python.interpreter, "-m", "pip", "install", "--upgrade", "pip"] + extra_args,
            self.app_settings,
            current_logger=self.logger,
            cwd=str(install_dir),
        )
        run_elevated_command(
            [
                python.interpreter,
                "-m",
                "pip",
                "install",
                "-r",
                str(install_dir / "requirements.txt"),
            ]
            + extra_args,
            self.app_settings,
            current_logger=self.logger,
            cwd=str(install_dir),
        )

    def configure(self) -> bool:
        """Activate the Redis, data directory and OCR language settings."""
        symbols = self.symbols
        settings = self.app_settings.paperless
        try:
            conf = PaperlessConf.load(settings.conf_path, logger=self.logger)
            conf.activate("PAPERLESS_REDIS", settings.redis_url)
            for subdir, key in DATA_DIR_KEYS.items():
                conf.activate(key, str(settings.install_dir / subdir))
            conf.activate("PAPERLESS_OCR_LANGUAGE", self.state.ocr_language)
            conf.save(self.app_settings, secrets=self.secrets())
            self.log(
                f"{symbols.get('success', '✅')} Activated paths, Redis and OCR language in {settings.conf_path}.",
                "success",
            )
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error preparing paperless.conf: {str(e)}",
                "error",
                exc_info=True,
            )
            return False
