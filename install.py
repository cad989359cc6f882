#!/usr/bin/env python3
# filename: install.py
# -*- coding: utf-8 -*-
"""
Entry point for the Paperless-ngx installer.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.logging_config import set_console_prefix, setup_logging
from common.system_utils import require_root
from installer import config as static_config
from installer.components.services.units import build_units
from installer.config_loader import DEFAULT_CONFIG_FILE, load_app_settings
from installer.orchestrator import ComponentOrchestrator

SERVICE_NAME = "paperless_installer"

# Commands that change the host
PROVISIONING_COMMANDS = {"full", "apply"}


def _add_global_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the YAML configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--non-interactive",
        dest="non_interactive",
        action="store_true",
        help="Never prompt; every open question takes its default",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write JSON-formatted logs to this file",
    )
    parser.add_argument(
        "--install-dir",
        dest="install_dir",
        default=None,
        help="Paperless-ngx installation directory",
    )
    parser.add_argument(
        "--paperless-version",
        dest="paperless_version",
        default=None,
        help="Install this release tag instead of the latest release",
    )
    parser.add_argument(
        "--log-prefix",
        dest="log_prefix",
        default=None,
        help="Prefix for console log lines",
    )
    parser.add_argument(
        "--credentials-file",
        dest="credentials_file",
        default=None,
        help="Where generated credentials are recorded",
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    # Global flags may appear anywhere in the command line
    all_args = args if args is not None else sys.argv[1:]
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_arguments(global_parser)
    global_args, remaining_args = global_parser.parse_known_args(all_args)

    parser = argparse.ArgumentParser(
        description="Installer for Paperless-ngx on Debian-family hosts"
    )
    _add_global_arguments(parser)
    subparsers = parser.add_subparsers(
        dest="command", help="Command to execute", required=True
    )

    subparsers.add_parser(
        "list", help="List available components and the full pipeline"
    )
    subparsers.add_parser(
        "full",
        help="Install and configure all components in pipeline order",
    )

    apply_parser = subparsers.add_parser(
        "apply", help="Apply (install and configure) the given components"
    )
    apply_parser.add_argument(
        "components", nargs="+", help="Components to apply, in order"
    )
    apply_parser.add_argument(
        "--with-deps",
        dest="with_deps",
        action="store_true",
        help="Also run the components they depend on",
    )

    subparsers.add_parser(
        "render-units",
        help="Print the systemd unit files that would be written and exit",
    )

    parsed_args = parser.parse_args(remaining_args)

    # Combine the global arguments with the subcommand arguments
    for key, value in vars(global_args).items():
        if value not in (None, False):
            setattr(parsed_args, key, value)

    return parsed_args


def list_components(
    orchestrator: ComponentOrchestrator, logger: logging.Logger
) -> int:
    components = orchestrator.get_available_components()
    if not components:
        logger.info("No components available.")
        return 0

    logger.info("Available components:")
    for name in sorted(components):
        component_class = components[name]
        metadata = getattr(component_class, "metadata", {})
        dependencies = metadata.get("dependencies", [])
        suffix = f" (needs: {', '.join(dependencies)})" if dependencies else ""
        logger.info(f"  - {name}: {metadata.get('description', '')}{suffix}")

    logger.info("Components in group 'full' (in installation order):")
    for i, name in enumerate(orchestrator.full_pipeline(), 1):
        logger.info(f"  {i}. {name}")
    return 0


def render_units(app_settings, out=None) -> int:
    out = out or sys.stdout
    unit_dir = app_settings.systemd.unit_dir
    for unit in build_units(app_settings):
        out.write(f"# {unit_dir / unit.filename}\n")
        out.write(unit.render())
        out.write("\n")
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the Paperless-ngx installer."""
    # Handle 'help' command as a synonym for '--help'
    if args is None:
        if len(sys.argv) > 1 and sys.argv[1] == "help":
            sys.argv[1] = "--help"
    elif args and args[0] == "help":
        args[0] = "--help"

    parsed_args = parse_args(args)
    logger = setup_logging(
        SERVICE_NAME,
        log_level="DEBUG" if parsed_args.verbose else "INFO",
        log_file_path=parsed_args.log_file,
        log_prefix=parsed_args.log_prefix,
    )

    if parsed_args.command in PROVISIONING_COMMANDS and not require_root():
        logger.error(
            f"'{parsed_args.command}' changes the system and must be run as root."
        )
        return 1

    try:
        app_settings = load_app_settings(
            parsed_args,
            config_file_path=parsed_args.config or DEFAULT_CONFIG_FILE,
            current_logger=logger,
        )
        set_console_prefix(app_settings.log_prefix)

        if parsed_args.command == "render-units":
            return render_units(app_settings)

        orchestrator = ComponentOrchestrator(app_settings, logger=logger)

        if parsed_args.command == "list":
            return list_components(orchestrator, logger)

        if parsed_args.command == "full":
            logger.info(
                f"Starting full {static_config.APPLICATION_NAME} installation (installer {static_config.SCRIPT_VERSION})..."
            )
            components = orchestrator.full_pipeline()
            with_deps = False
        else:
            components = list(dict.fromkeys(parsed_args.components))
            with_deps = parsed_args.with_deps

        unknown = [
            name
            for name in components
            if name not in orchestrator.get_available_components()
        ]
        if unknown:
            logger.error(f"Unknown component(s): {', '.join(unknown)}")
            return 1

        if not orchestrator.run(components, with_dependencies=with_deps):
            logger.error("Installation failed. See the log above for the failing step.")
            return 1

        logger.info(
            f"🚀 {static_config.APPLICATION_NAME} installation completed successfully."
        )
        if parsed_args.command == "full":
            logger.info(
                f"Credentials were recorded in {app_settings.credentials_path}."
            )
        return 0

    except KeyboardInterrupt:
        logger.error("Installation interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
