"""Application entry point and CLI for datausage-settings.

Loads a device snapshot from YAML, configures logging, evaluates the
requested settings screens, and prints a plain-text report.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from datausage_settings.core.config import ConfigurationError, EnvironmentVariableError, load_main_config
from datausage_settings.core.recents import RecentsScreenState, load_recents_screen
from datausage_settings.core.summary import DataUsageScreen, DataUsageScreenState
from datausage_settings.platform.snapshot import build_services
from datausage_settings.types.models import MobileAll
from datausage_settings.utils.logging import configure_logging

__all__ = ["main"]

DEFAULT_CONFIG_PATH: Path = Path("config/datausage-settings.yaml")

SCREEN_CHOICES: tuple[str, ...] = ("data-usage", "recents", "all")

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 1


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    CLI Arguments:
        --config, -c: Path to configuration file
        --screen: Which screen(s) to evaluate
        --log-level: Override log level from config
        --no-syslog: Disable syslog integration
    """
    parser = argparse.ArgumentParser(
        prog="datausage-settings",
        description="Evaluate the data usage and recents settings screens for a device snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  datausage-settings
  datausage-settings --config device.yaml --screen data-usage
  datausage-settings --log-level DEBUG --no-syslog
        """,
    )

    _ = parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--screen",
        choices=SCREEN_CHOICES,
        default="all",
        help="Screen to evaluate (default: all)",
    )

    _ = parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration",
        metavar="LEVEL",
    )

    _ = parser.add_argument(
        "--no-syslog",
        action="store_true",
        help="Disable syslog integration",
    )

    return parser.parse_args(argv)


def render_data_usage(state: DataUsageScreenState) -> list[str]:
    """Render the data usage screen state as report lines."""
    lines = ["[data usage]"]
    template = state.default_template
    lines.append(f"default template: {template.kind}")
    if isinstance(template, MobileAll):
        lines.append(f"  matches {len(template.match_subscriber_ids)} subscriber id(s)")
    lines.append(f"title: {state.title_template}")

    if state.header is None:
        lines.append("header: usage unavailable")
    else:
        ratios = state.header.ratios
        lines.append(
            f"header: used={state.header.usage_level} limit={state.header.limit_label_bytes} "
            f"period={state.header.period!r}"
        )
        lines.append(
            f"  ratios: used={ratios.used_fraction:.3f} reserved={ratios.reserved_fraction:.3f} "
            f"remaining={ratios.remaining_fraction:.3f}"
        )
    if state.limit_summary is not None:
        lines.append(
            f"limit summary: {state.limit_summary.kind} "
            f"warning={state.limit_summary.warning_bytes} limit={state.limit_summary.limit_bytes}"
        )

    for section in state.sections:
        suffix = f" (subscription {section.subscription_id})" if isinstance(section.template, MobileAll) else ""
        lines.append(f"section: {section.kind}{suffix}")

    if state.removed_keys:
        lines.append(f"removed: {', '.join(state.removed_keys)}")
    lines.append(f"cellular menu: {'shown' if state.show_cellular_menu else 'hidden'}")
    lines.append(f"dashboard summary: {state.usage_summary.display}")
    return lines


def render_recents(state: RecentsScreenState) -> list[str]:
    """Render the recents screen state as report lines."""
    lines = ["[recents]"]
    status = "enabled" if state.slim_recents_enabled else "disabled"
    lines.append(f"slim recents: {status} ({state.slim_recents_summary})")
    if state.removed_keys:
        lines.append(f"removed: {', '.join(state.removed_keys)}")
    return lines


def run(*, config_path: Path, screen: str, log_level: str | None, enable_syslog: bool) -> list[str]:
    """Load configuration and evaluate the requested screens.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = load_main_config(config_path)

    configure_logging(
        log_level=log_level or config.application.log_level,
        enable_syslog=enable_syslog and config.application.syslog_enabled,
        enable_console=True,
    )
    logger = logging.getLogger(__name__)
    logger.info("Configuration loaded", extra={"config_path": str(config_path), "screen": screen})

    services = build_services(config.device)
    lines: list[str] = []

    if screen in ("data-usage", "all"):
        presenter = DataUsageScreen(services)
        lines.extend(render_data_usage(presenter.refresh()))

    if screen in ("recents", "all"):
        if lines:
            lines.append("")
        lines.extend(render_recents(load_recents_screen(services.settings)))

    return lines


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for datausage-settings.

    Exit Codes:
        0: Report printed
        1: Configuration error or runtime error
    """
    args = parse_arguments(argv)

    try:
        config_path_arg: Path = args.config  # pyright: ignore[reportAny]  # argparse boundary
        screen_arg: str = args.screen  # pyright: ignore[reportAny]  # argparse boundary
        log_level_arg: str | None = args.log_level  # pyright: ignore[reportAny]  # argparse boundary
        no_syslog_arg: bool = args.no_syslog  # pyright: ignore[reportAny]  # argparse boundary

        lines = run(
            config_path=config_path_arg,
            screen=screen_arg,
            log_level=log_level_arg,
            enable_syslog=not no_syslog_arg,
        )

    except ConfigurationError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    except EnvironmentVariableError as exc:
        print(f"Environment variable error:\n{exc}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    except Exception as exc:
        print(f"Unexpected error: {exc}", file=sys.stderr)
        logging.exception("Unexpected error during evaluation")
        sys.exit(EXIT_RUNTIME_ERROR)

    print("\n".join(lines))
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
