# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the Paperless-ngx installer.

This module defines truly static values for the installer, such as the
apt package lists for every component, logging symbols, the sentinel lines
of paperless.conf and the component pipeline order.

Mutable runtime configuration (database credentials, install paths, feature
answers) is handled by 'installer/config_models.py' and
'installer/config_loader.py'.
"""

from typing import Dict, List

SCRIPT_VERSION: str = "2.0"

APPLICATION_NAME: str = "Paperless-ngx"

SYMBOLS: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

DEPENDENCY_PACKAGES: List[str] = [
    "redis",
    "build-essential",
    "imagemagick",
    "fonts-liberation",
    "optipng",
    "gnupg",
    "libpq-dev",
    "libmagic-dev",
    "mime-support",
    "libzbar0",
    "poppler-utils",
    "default-libmysqlclient-dev",
    "automake",
    "libtool",
    "pkg-config",
    "git",
    "curl",
    "libtiff-dev",
    "libpng-dev",
    "libleptonica-dev",
    "sudo",
    "mc",
]

POSTGRES_PACKAGES: List[str] = ["postgresql"]

PYTHON_SYSTEM_PACKAGES: List[str] = [
    "python3",
    "python3-pip",
    "python3-dev",
    "python3-setuptools",
    "python3-wheel",
]

OCR_PACKAGES: List[str] = [
    "unpaper",
    "ghostscript",
    "icc-profiles-free",
    "qpdf",
    "liblept5",
    "libxml2",
    "pngquant",
    "zlib1g",
    "tesseract-ocr",
    "tesseract-ocr-eng",
]

OCR_LANGUAGE_PACKAGE_PREFIX: str = "tesseract-ocr-"

ADMINER_PACKAGES: List[str] = ["adminer"]

# Commented-out defaults shipped in paperless.conf.example, keyed by setting.
CONF_SENTINELS: Dict[str, str] = {
    "PAPERLESS_REDIS": "redis://localhost:6379",
    "PAPERLESS_CONSUMPTION_DIR": "../consume",
    "PAPERLESS_DATA_DIR": "../data",
    "PAPERLESS_MEDIA_ROOT": "../media",
    "PAPERLESS_STATICDIR": "../static",
    "PAPERLESS_OCR_LANGUAGE": "eng",
    "PAPERLESS_DBHOST": "localhost",
    "PAPERLESS_DBPORT": "5432",
    "PAPERLESS_DBNAME": "paperless",
    "PAPERLESS_DBUSER": "paperless",
    "PAPERLESS_DBPASS": "paperless",
    "PAPERLESS_SECRET_KEY": "change-me",
    "PAPERLESS_TIMEZONE": "UTC",
    "PAPERLESS_URL": "https://example.com",
    "PAPERLESS_ENABLE_HTTP_REMOTE_USER": "false",
    "PAPERLESS_OCR_USER_ARGS": "{}",
    "PAPERLESS_TIKA_ENABLED": "false",
}

PAPERLESS_DATA_SUBDIRS: List[str] = ["consume", "data", "media", "static"]

# Order in which the 'full' command runs the registered components.
FULL_INSTALL_ORDER: List[str] = [
    "prerequisites",
    "postgres",
    "python",
    "ocr",
    "jbig2",
    "paperless",
    "nltk",
    "paperless_settings",
    "database",
    "migrations",
    "admin_user",
    "adminer",
    "services",
    "host",
    "cleanup",
]

CREDENTIALS_TITLE_DATABASE: str = "Paperless-ngx Database"
CREDENTIALS_TITLE_WEBUI: str = "Paperless-ngx WebUI"
CREDENTIALS_TITLE_ADMINER: str = "Adminer"
