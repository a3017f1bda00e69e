"""Command-line entry point: ``sfops-migrate OWNER REPO [TOKEN]``."""

from __future__ import annotations

import argparse
import logging
import logging.config
import sys
from typing import Optional, Sequence

from sfops_migration.config import MigrationConfig, MissingSettingError
from sfops_migration.github import GitHubClient
from sfops_migration.migration import migrate

logger = logging.getLogger(__name__)

USAGE_ERROR = (
    "Please provide a GitHub access token, owner, and repo as command-line arguments "
    "(the token may also be set through GITHUB_TOKEN)."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfops-migrate",
        description="Upgrade *_DEVSBX repository variables into CONTEXT_<issue> records.",
    )
    parser.add_argument("owner", nargs="?", help="Repository owner (user or organization)")
    parser.add_argument("repo", nargs="?", help="Repository name")
    parser.add_argument("token", nargs="?", help="GitHub access token (defaults to $GITHUB_TOKEN)")
    parser.add_argument(
        "--cleanup",
        dest="perform_cleanup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Annotate request issues and delete legacy variables after migrating them",
    )
    parser.add_argument("--api-url", default=None, help="GitHub REST API base URL")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser


def configure_logging(level: str) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = MigrationConfig.resolve(
            owner=args.owner,
            repo=args.repo,
            token=args.token,
            perform_cleanup=args.perform_cleanup,
            api_url=args.api_url,
            timeout=args.timeout,
            log_level=args.log_level,
        )
    except MissingSettingError as exc:
        print(f"{USAGE_ERROR} ({exc})", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except ValueError as exc:
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    client = GitHubClient(token=config.token, base_url=config.api_url, timeout=config.timeout)
    try:
        migrate(config, client, client)
    except Exception:
        logger.exception("SFOPS migration aborted")
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
