# installer/components/ocr/ocr_installer.py
# -*- coding: utf-8 -*-
"""
OCR toolchain installer module.

Installs Tesseract with English language data and the PDF post-processing
tools used by Paperless-ngx, then optionally extra Tesseract language packs.
The installed languages end up, '+'-joined, in PAPERLESS_OCR_LANGUAGE.
"""

import logging
import re
from typing import Iterable, List, Optional

from common.debian.apt_manager import AptManager
from installer import config as static_config
from installer.base_component import BaseComponent
from installer.registry import ComponentRegistry

module_logger = logging.getLogger(__name__)

LANGUAGE_CODE_RE = re.compile(r"^[A-Za-z0-9_]+$")

LANGUAGES_PROMPT = (
    "Would you like to install additional languages for OCR "
    "(English is installed by default)?"
)
LANGUAGE_CODES_HINT = (
    "Set the required OCR language codes (For a list of language codes see "
    "https://tesseract-ocr.github.io/tessdoc/Data-Files.html)"
)
LANGUAGE_CODES_PROMPT = (
    "Enter the required OCR languages separated by commas (e.g. deu,fra,spa):"
)


def parse_language_codes(
    raw: str, current_logger: Optional[logging.Logger] = None
) -> List[str]:
    """
    Split a comma separated answer into Tesseract language codes.

    Blank tokens are dropped, tokens that are not plain codes (letters,
    digits, underscore as in 'chi_sim') are skipped with a warning, and
    repeated codes are kept once in first-seen order.
    """
    logger_to_use = current_logger if current_logger else module_logger
    codes: List[str] = []
    for token in raw.split(","):
        code = token.strip()
        if not code:
            continue
        if not LANGUAGE_CODE_RE.match(code):
            logger_to_use.warning(f"Skipping invalid OCR language code '{code}'.")
            continue
        if code not in codes:
            codes.append(code)
    return codes


def compose_ocr_language(default_language: str, extra: Iterable[str]) -> List[str]:
    """Ordered language set starting with the default language."""
    languages = [default_language]
    for code in extra:
        if code not in languages:
            languages.append(code)
    return languages


@ComponentRegistry.register(
    name="ocr",
    metadata={
        "dependencies": ["prerequisites"],
        "description": "Tesseract OCR, PDF tools and additional OCR languages",
    },
)
class OcrInstaller(BaseComponent):
    """Installer for the OCR toolchain and language packs."""

    def install(self) -> bool:
        symbols = self.symbols
        try:
            apt_manager = AptManager(logger=self.logger)

            self.log(f"{symbols.get('package', '📦')} Installing OCR dependencies (patience)...")
            if not apt_manager.install(static_config.OCR_PACKAGES, self.app_settings):
                self.log(
                    f"{symbols.get('error', '❌')} Failed to install OCR dependencies.",
                    "error",
                )
                return False
            self.log(f"{symbols.get('success', '✅')} Installed OCR dependencies.", "success")

            extra = self._requested_languages()
            languages = compose_ocr_language(
                self.app_settings.ocr.default_language, extra
            )
            # Base packages already carry the English data
            packages = [
                f"{static_config.OCR_LANGUAGE_PACKAGE_PREFIX}{code}"
                for code in languages
                if f"{static_config.OCR_LANGUAGE_PACKAGE_PREFIX}{code}"
                not in static_config.OCR_PACKAGES
            ]
            if packages:
                self.log(
                    f"{symbols.get('package', '📦')} Installing additional OCR languages: {', '.join(packages)}"
                )
                if not apt_manager.install(packages, self.app_settings):
                    self.log(
                        f"{symbols.get('error', '❌')} Failed to install OCR language packs: {', '.join(packages)}",
                        "error",
                    )
                    return False
                self.log(
                    f"{symbols.get('success', '✅')} Installed additional OCR languages.",
                    "success",
                )

            self.state.ocr_languages = languages
            self.log(f"OCR language setting: {self.state.ocr_language}", "debug")
            return True
        except Exception as e:
            self.log(
                f"{symbols.get('error', '❌')} Error installing OCR dependencies: {str(e)}",
                "error",
                exc_info=True,
            )
            return False

    def _requested_languages(self) -> List[str]:
        preset = self.app_settings.ocr.additional_languages
        if preset is not None:
            return parse_language_codes(",".join(preset), self.logger)

        if not self.prompter.confirm(LANGUAGES_PROMPT):
            return []
        self.log(LANGUAGE_CODES_HINT)
        answer = self.prompter.ask(LANGUAGE_CODES_PROMPT, sub=True)
        return parse_language_codes(answer, self.logger)

    def configure(self) -> bool:
        """PAPERLESS_OCR_LANGUAGE is written by the 'paperless' component."""
        return True
