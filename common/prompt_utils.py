# common/prompt_utils.py
# -*- coding: utf-8 -*-
"""
Interactive prompts used by the installer components.

Yes/no questions accept 'y' or 'yes' in any letter case. Anything else is a
"no"; empty input takes the prompt's default. There is no re-prompt loop.
"""

import getpass
import logging
from typing import Callable, Optional

from common.command_utils import get_symbols, log_installer
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})

SPACER = "   > "
SUB_SPACER = "     - "


def is_affirmative(answer: Optional[str], default: bool = False) -> bool:
    """
    Interpret a yes/no answer.

    Args:
        answer: The raw line typed by the operator (None for no input at all).
        default: Result for empty input.

    Returns:
        True for 'y'/'yes' (case-insensitive), the default for empty input,
        False for anything else.
    """
    if answer is None:
        return default
    normalized = answer.strip().casefold()
    if not normalized:
        return default
    return normalized in AFFIRMATIVE_ANSWERS


def yes_no_suffix(default: bool) -> str:
    return "<Y/n>" if default else "<y/N>"


class Prompter:
    """
    Reads operator answers from stdin.

    In non-interactive mode, or when stdin is closed, every prompt returns its
    default and the decision is logged instead.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
        input_func: Callable[[str], str] = input,
        secret_input_func: Callable[[str], str] = getpass.getpass,
    ):
        self.app_settings = app_settings
        self.logger = logger or module_logger
        self.interactive = not app_settings.non_interactive
        self._input = input_func
        self._secret_input = secret_input_func

    def _read(self, prompt: str, secret: bool = False) -> Optional[str]:
        if not self.interactive:
            return None
        reader = self._secret_input if secret else self._input
        try:
            return reader(prompt)
        except EOFError:
            symbols = get_symbols(self.app_settings)
            log_installer(
                f"{symbols.get('warning', '!')} No user input (EOF), using the default for prompt: '{prompt.strip()}'",
                "warning",
                self.logger,
                self.app_settings,
            )
            return None

    def confirm(self, message: str, default: bool = False, sub: bool = False) -> bool:
        """Ask a yes/no question."""
        spacer = SUB_SPACER if sub else SPACER
        answer = self._read(f"{spacer}{message} {yes_no_suffix(default)} ")
        decision = is_affirmative(answer, default=default)
        if answer is None:
            log_installer(
                f"{message} -> {'yes' if decision else 'no'} (default)",
                "info",
                self.logger,
                self.app_settings,
            )
        return decision

    def ask(
        self,
        message: str,
        default: str = "",
        sub: bool = False,
        secret: bool = False,
    ) -> str:
        """Ask for a free-text value; empty input returns the default."""
        spacer = SUB_SPACER if sub else SPACER
        answer = self._read(f"{spacer}{message} ", secret=secret)
        if answer is None:
            return default
        answer = answer.strip()
        return answer if answer else default

    def pause(self, message: str) -> None:
        """Block until the operator presses Enter."""
        if self._read(f"{message} ") is None:
            log_installer(
                f"{message} (skipped, no interactive input)",
                "info",
                self.logger,
                self.app_settings,
            )
