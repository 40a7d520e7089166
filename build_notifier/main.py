"""Command-line entry point: preview the notification for one build result."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from build_notifier.config.environment import EnvironmentConfig, load_environment_config
from build_notifier.config.exceptions import ConfigurationError, UnknownBuildStatusError
from build_notifier.config.loader import load_config
from build_notifier.config.models import PublisherConfig
from build_notifier.domain.loader import BuildResultError, load_build_result
from build_notifier.logging import get_logger, log_context
from build_notifier.logging.config import configure_logging
from build_notifier.notifications import NotificationMessage

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[PublisherConfig, EnvironmentConfig]:
    """
    Load the rule configuration and apply environment overrides.

    Log level priority: CLI > environment > config file.

    Args:
        config_path: Path to configuration file (None for default lookup)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (PublisherConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration or environment is invalid
    """
    publisher_config = load_config(config_path)
    env_config = load_environment_config()

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = publisher_config.logging.level

    if not env_config.log_format:
        env_config.log_format = publisher_config.logging.format

    return publisher_config, env_config


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="build-notifier",
        description="Build Notifier - compute recipients and subject for a build notification",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to rule configuration file (default: notifier.yaml or config/notifier.yaml)",
    )
    parser.add_argument(
        "--result",
        type=Path,
        required=True,
        help="Path to a YAML or JSON build-result snapshot",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--output",
        default="text",
        choices=["text", "json"],
        help="Output format for the computed message (default: text)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the build notifier CLI.

    Returns:
        Exit code (0 for success, 1 for configuration or input errors, 130 if interrupted).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        publisher_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "user_count": len(publisher_config.users),
                "group_count": len(publisher_config.groups),
                "converter_count": len(publisher_config.converters),
            },
        )

        result = load_build_result(args.result)
        project = result.properties.get("CCNetProject")

        with log_context(project=project, build_status=result.status.value):
            message = NotificationMessage(
                result, publisher_config, subject_prefix=env_config.subject_prefix
            )
            summary = message.to_dict()

            logger.info(
                "Notification computed",
                extra={
                    "event": "message.computed",
                    "recipient_count": len(summary["recipients"]),
                },
            )

        if args.output == "json":
            print(json.dumps(summary, indent=2))
        else:
            print(f"To: {', '.join(summary['recipients'])}")
            print(f"Subject: {summary['subject']}")
        return 0

    except UnknownBuildStatusError as e:
        print(f"Build Result Error: {e}", file=sys.stderr)
        logger.error(
            "Unknown build status",
            extra={"event": "result.error", "error_type": type(e).__name__},
        )
        return 1
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            "Configuration error",
            extra={"event": "config.error", "error_type": type(e).__name__},
        )
        return 1
    except BuildResultError as e:
        print(f"Build Result Error: {e}", file=sys.stderr)
        logger.error(
            "Invalid build result",
            extra={"event": "result.error", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
