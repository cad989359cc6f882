"""
Orchestrator for the installer components.

This module provides the ComponentOrchestrator class, which is responsible for
importing the component modules, resolving the pipeline order and executing
the components one after another.
"""

import importlib
import logging
import pkgutil
from typing import Dict, List, Optional, Type

from common.command_utils import log_installer
from common.prompt_utils import Prompter
from installer.base_component import BaseComponent
from installer.components.paperless.paperless_conf import seed_state_from_install
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry
from installer.state import DeploymentState

# Decides the database settings; without it in a run they come from an
# existing paperless.conf
SETTINGS_COMPONENT = "paperless_settings"


class ComponentOrchestrator:
    """
    Orchestrator for the installer components.

    Components run strictly in sequence, install() then configure(). The first
    component that returns False or raises stops the run; nothing that already
    ran is undone.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        state: Optional[DeploymentState] = None,
        prompter: Optional[Prompter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            app_settings: The application settings.
            state: Deployment state shared by the components. A fresh one is
                   created when not given.
            prompter: Source of operator answers handed to every component.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.state = state if state is not None else DeploymentState()
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.prompter = prompter or Prompter(app_settings, logger=self.logger)

        # Import all component modules to ensure they are registered
        self._import_component_modules()
        ComponentRegistry.check_dependencies()

    def _import_component_modules(self) -> None:
        """
        Import every module below installer.components so that all component
        classes are registered with the ComponentRegistry.
        """
        import installer.components

        for module_info in pkgutil.walk_packages(
            installer.components.__path__, prefix="installer.components."
        ):
            importlib.import_module(module_info.name)
            self.logger.debug(f"Imported component module: {module_info.name}")

    def get_available_components(self) -> Dict[str, Type[BaseComponent]]:
        """
        Get all available components.

        Returns:
            A dictionary mapping component names to component classes.
        """
        return ComponentRegistry.get_all_components()

    def resolve_dependencies(self, component_names: List[str]) -> List[str]:
        return ComponentRegistry.resolve_dependencies(component_names)

    def full_pipeline(self) -> List[str]:
        """The complete provisioning pipeline in execution order."""
        return ComponentRegistry.full_pipeline()

    def run(self, component_names: List[str], with_dependencies: bool = False) -> bool:
        """
        Install and configure the given components in order.

        Runs without the settings component take the database settings of
        an existing installation from its paperless.conf.

        Args:
            component_names: Component names, in the order they should run.
            with_dependencies: Prepend the registered dependencies of the
                               requested components.

        Returns:
            True if every component succeeded, False at the first failure.
        """
        symbols = self.app_settings.symbols
        try:
            names = (
                self.resolve_dependencies(component_names)
                if with_dependencies
                else list(component_names)
            )
            components = [
                (
                    name,
                    ComponentRegistry.get_component(name)(
                        self.app_settings,
                        self.state,
                        prompter=self.prompter,
                        logger=self.logger,
                    ),
                )
                for name in names
            ]
        except (KeyError, ValueError) as e:
            log_installer(
                f"{symbols.get('error', '❌')} Cannot build the component pipeline: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        if SETTINGS_COMPONENT not in names and self.state.db_password is None:
            seed_state_from_install(self.state, self.app_settings, self.logger)

        log_installer(
            f"{symbols.get('info', 'ℹ️')} Running components in order: {', '.join(names)}",
            "info",
            self.logger,
            self.app_settings,
        )

        for name, component in components:
            if not self._run_component(name, component):
                return False

        log_installer(
            f"{symbols.get('sparkles', '✨')} All components completed successfully.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def _run_component(self, name: str, component: BaseComponent) -> bool:
        symbols = self.app_settings.symbols
        description = component.get_description() or name
        log_installer(
            f"--- {symbols.get('step', '➡️')} Executing: {description} ({name}) ---",
            "info",
            self.logger,
            self.app_settings,
        )
        try:
            for phase, action in (
                ("install", component.install),
                ("configure", component.configure),
            ):
                if action() is False:
                    log_installer(
                        f"{symbols.get('error', '❌')} Component {phase} returned False: {description} ({name})",
                        "error",
                        self.logger,
                        self.app_settings,
                    )
                    return False
        except Exception as e:
            log_installer(
                f"{symbols.get('error', '❌')} FAILED: {description} ({name})",
                "error",
                self.logger,
                self.app_settings,
            )
            log_installer(
                f"   Error details: {str(e)}",
                "error",
                self.logger,
                self.app_settings,
                exc_info=True,
            )
            return False

        log_installer(
            f"--- {symbols.get('success', '✅')} Successfully completed: {description} ({name}) ---",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
