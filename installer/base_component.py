"""
Base component class for all component modules.

This module provides the base class that all installer components must
inherit from. It defines the common interface that all components implement
and the helpers they share for prompting and logging.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from common.command_utils import log_installer
from common.prompt_utils import Prompter
from installer.config_models import AppSettings
from installer.credentials import CredentialsLog
from installer.state import DeploymentState


class BaseComponent(ABC):
    """
    Base class for all component modules.

    A component wraps one provisioning concern. The orchestrator calls
    install() and then configure() on each component of the pipeline; a
    False return value or an exception stops the whole run.
    """

    # Class-level metadata that can be overridden by subclasses or set by the registry decorator
    metadata: Dict[str, Any] = {
        "dependencies": [],  # List of component names that this component depends on
        "description": "",  # Description of the component
    }

    def __init__(
        self,
        app_settings: AppSettings,
        state: DeploymentState,
        prompter: Optional[Prompter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the component.

        Args:
            app_settings: The application settings.
            state: The deployment state shared by all components of the run.
            prompter: Source of operator answers. Defaults to a stdin prompter.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.state = state
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.prompter = prompter or Prompter(app_settings, logger=self.logger)
        self.symbols = app_settings.symbols

    @abstractmethod
    def install(self) -> bool:
        """
        Install the component.

        Returns:
            True if the installation was successful, False otherwise.
        """
        pass

    @abstractmethod
    def configure(self) -> bool:
        """
        Configure the component.

        Returns:
            True if the configuration was successful, False otherwise.
        """
        pass

    def log(self, message: str, level: str = "info", exc_info: bool = False) -> None:
        log_installer(message, level, self.logger, self.app_settings, exc_info=exc_info)

    def confirm(
        self,
        preset: Optional[bool],
        message: str,
        default: bool = False,
        sub: bool = False,
    ) -> bool:
        """Use a pre-answered setting when given, otherwise ask."""
        if preset is not None:
            self.log(f"{message} -> {'yes' if preset else 'no'} (from configuration)", "debug")
            return preset
        return self.prompter.confirm(message, default=default, sub=sub)

    def ask(
        self,
        preset: Optional[str],
        message: str,
        default: str = "",
        sub: bool = False,
        secret: bool = False,
    ) -> str:
        """Use a pre-answered setting when given, otherwise ask."""
        if preset is not None:
            return preset
        return self.prompter.ask(message, default=default, sub=sub, secret=secret)

    def credentials_log(self) -> CredentialsLog:
        return CredentialsLog(self.app_settings.credentials_path, logger=self.logger)

    def secrets(self) -> List[str]:
        return self.state.secrets()

    def get_dependencies(self) -> List[str]:
        """
        Get the dependencies of this component.

        Returns:
            The names of the components that must run before this one.
        """
        return list(self.metadata.get("dependencies", []))

    def get_description(self) -> str:
        """
        Get the description of the component.

        Returns:
            The description of the component.
        """
        return str(self.metadata.get("description", ""))
