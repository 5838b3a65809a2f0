"""Command-line entry point for the job board notifier."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.exceptions import ConfigurationError
from jobboard.config.loader import load_config
from jobboard.config.models import AppConfig
from jobboard.domain.models import JobPosting
from jobboard.jobs.service import JobService
from jobboard.logging import get_logger
from jobboard.logging.config import configure_logging
from jobboard.matching.engine import PreferenceMatcher
from jobboard.notifications.broadcaster import NotificationBroadcaster
from jobboard.notifications.composer import NotificationComposer
from jobboard.persistence.database import close_database, init_database
from jobboard.persistence.stores import SqlNotificationStore, SqlPreferenceStore, SqlUserDirectory
from jobboard.preferences.service import PreferenceService

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """Load configuration and settle the effective log level.

    Priority for the log level: CLI flag, then LOG_LEVEL, then the config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_broadcaster(app_config: AppConfig, env_config: EnvironmentConfig) -> NotificationBroadcaster:
    """Wire the broadcaster to the SQL stores using the loaded configuration."""
    return NotificationBroadcaster(
        user_directory=SqlUserDirectory(),
        preference_store=SqlPreferenceStore(),
        notification_store=SqlNotificationStore(),
        matcher=PreferenceMatcher(),
        composer=NotificationComposer(
            base_url=env_config.frontend_url, config=app_config.notifications
        ),
        max_workers=app_config.broadcast.max_workers,
        timeout_seconds=app_config.broadcast.timeout_seconds,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-board",
        description="Job board notifier - match new postings to student preferences",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create database tables")

    post_job = subparsers.add_parser(
        "post-job", help="Create a job from a YAML file and notify matching students"
    )
    post_job.add_argument("job_file", type=Path, help="YAML file describing the job")

    test_match = subparsers.add_parser(
        "test-match", help="Check a hypothetical job against a student's preferences"
    )
    test_match.add_argument("--user-id", required=True)
    test_match.add_argument("--title", required=True)
    test_match.add_argument("--type", dest="job_type", default=None)
    test_match.add_argument("--location", default=None)
    test_match.add_argument("--skills", default=None, help="Comma-separated skills")

    stats = subparsers.add_parser("stats", help="Show a student's notification counters")
    stats.add_argument("--user-id", required=True)

    return parser


def _read_job_file(job_file: Path) -> JobPosting:
    with open(job_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{job_file} must contain a mapping at the top level")
    return JobPosting.model_validate(data)


def _cmd_init_db(args, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    print(f"Database ready at {env_config.database_url}")
    return EXIT_OK


def _cmd_post_job(args, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    posting = _read_job_file(args.job_file)
    service = JobService(build_broadcaster(app_config, env_config))
    result = service.create_job(posting)

    broadcast = result.broadcast
    print(f"Created job {result.job.id}: {result.job.title} at {result.job.company}")
    print(
        f"Checked {broadcast.students_checked} students, "
        f"matched {broadcast.matched}, sent {broadcast.notifications_sent} notifications"
    )
    if broadcast.timed_out or broadcast.failed:
        print(f"Broadcast incomplete: {broadcast.error_message}", file=sys.stderr)
    return EXIT_OK


def _cmd_test_match(args, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    skills = [s.strip() for s in args.skills.split(",") if s.strip()] if args.skills else None
    breakdown = PreferenceService().test_match(
        args.user_id,
        args.title,
        job_type=args.job_type,
        location=args.location,
        skills=skills,
    )
    if breakdown.reason:
        print(breakdown.reason)
    for label, value in (
        ("title", breakdown.title_match),
        ("type", breakdown.type_match),
        ("location", breakdown.location_match),
        ("skills", breakdown.skills_match),
        ("overall", breakdown.overall_match),
    ):
        print(f"{label}: {'yes' if value else 'no'}")
    return EXIT_OK


def _cmd_stats(args, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    stats = PreferenceService().notification_stats(args.user_id)
    print(f"total: {stats.total}")
    print(f"unread: {stats.unread}")
    print(f"job_match: {stats.job_match}")
    print(f"preferences_set: {'yes' if stats.preferences_set else 'no'}")
    return EXIT_OK


COMMANDS = {
    "init-db": _cmd_init_db,
    "post-job": _cmd_post_job,
    "test-match": _cmd_test_match,
    "stats": _cmd_stats,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run one CLI command.

    Returns:
        0 on success, 1 for configuration errors, 2 for runtime errors
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.info(
        f"Running command {args.command}",
        extra={"event": "cli.command.started", "command": args.command},
    )

    try:
        init_database(env_config.database_url)
        return COMMANDS[args.command](args, app_config, env_config)
    except (ValidationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Command {args.command} failed: {e}",
            extra={"event": "cli.command.failed", "error_type": type(e).__name__},
        )
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            f"Command {args.command} failed",
            extra={"event": "cli.command.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return EXIT_RUNTIME_ERROR
    finally:
        close_database()


if __name__ == "__main__":
    sys.exit(main())
