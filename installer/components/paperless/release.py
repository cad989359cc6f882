# installer/components/paperless/release.py
# -*- coding: utf-8 -*-
"""
Release lookup and unpacking for Paperless-ngx.

The latest release tag comes from the GitHub releases API ('tag_name' of
/releases/latest). Archives are .tar.xz files containing a single top-level
'paperless-ngx' directory.
"""

import logging
import tarfile
from pathlib import Path
from typing import Optional

import requests

from common.network_utils import USER_AGENT
from installer.config_models import PaperlessSettings

module_logger = logging.getLogger(__name__)

ARCHIVE_ROOT_DIR = "paperless-ngx"


class ReleaseError(Exception):
    """The release could not be resolved or unpacked."""


def resolve_latest_release(
    api_url: str,
    timeout: int = 60,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Return the tag of the latest published release.

    Raises:
        requests.exceptions.RequestException: Network or HTTP errors.
        ReleaseError: The response carries no usable 'tag_name'.
    """
    logger_to_use = current_logger if current_logger else module_logger
    logger_to_use.info(f"Resolving latest Paperless-ngx release from {api_url}")
    response = requests.get(
        api_url,
        timeout=timeout,
        headers={
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        },
    )
    response.raise_for_status()
    try:
        payload = response.json()
    except ValueError as e:
        raise ReleaseError(f"Release metadata from {api_url} is not JSON: {e}") from e

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not tag or not isinstance(tag, str):
        raise ReleaseError(f"No 'tag_name' in release metadata from {api_url}")
    logger_to_use.info(f"Latest Paperless-ngx release: {tag}")
    return tag.strip()


def resolve_version(
    settings: PaperlessSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """The pinned version if configured, otherwise the latest release."""
    if settings.version:
        return settings.version
    return resolve_latest_release(
        settings.release_api_url,
        timeout=settings.request_timeout,
        current_logger=current_logger,
    )


def build_download_url(template: str, version: str) -> str:
    return template.format(version=version)


def archive_name(version: str) -> str:
    return f"paperless-ngx-{version}.tar.xz"


def extract_archive(
    archive_path: Path,
    destination: Path,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Unpack archive_path into destination.

    Returns:
        The extracted 'paperless-ngx' directory.

    Raises:
        tarfile.TarError: The archive is corrupt.
        ReleaseError: The archive has no 'paperless-ngx' top-level directory.
    """
    logger_to_use = current_logger if current_logger else module_logger
    logger_to_use.info(f"Extracting {archive_path} into {destination}")
    with tarfile.open(archive_path, "r:xz") as tar:
        if hasattr(tarfile, "data_filter"):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)

    extracted = destination / ARCHIVE_ROOT_DIR
    if not extracted.is_dir():
        raise ReleaseError(
            f"Archive {archive_path} did not contain a '{ARCHIVE_ROOT_DIR}' directory"
        )
    return extracted
