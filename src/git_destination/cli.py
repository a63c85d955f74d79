"""CLI entrypoint for publishing to and querying a git destination."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from git_destination import __version__
from git_destination.core.config import (
    ConfigValidationError,
    GeneralOptions,
    GitOptions,
    load_destination_spec,
)
from git_destination.destination.git_destination import GitDestination
from git_destination.git.repository import RepoException
from git_destination.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-destination",
        description="Publish migrated trees to a git repository",
    )
    parser.add_argument("--version", action="version", version=f"git-destination {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        required=True,
        type=Path,
        help="YAML file describing the destination (url, pullFromRef, pushToRef, author)",
    )
    common.add_argument(
        "--first-commit",
        action="store_true",
        default=None,
        help="Allow pushing when the pull ref doesn't exist yet (fails if it does)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Log git commands and their output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    publish = subparsers.add_parser(
        "publish", parents=[common], help="Commit a working tree and push it"
    )
    publish.add_argument("--workdir", required=True, type=Path, help="Transformed working tree")
    publish.add_argument("--origin-ref", required=True, help="Origin reference being migrated")
    publish.add_argument(
        "--timestamp",
        required=True,
        type=int,
        help="Author date in seconds since the epoch (UTC)",
    )
    publish.add_argument("--summary", default="", help="Summary of the migrated changes")

    subparsers.add_parser(
        "previous-ref",
        parents=[common],
        help="Print the origin reference of the last published commit",
    )

    return parser


def _load_destination(args: argparse.Namespace) -> GitDestination:
    overrides = {}
    if args.first_commit is not None:
        overrides["first_commit"] = args.first_commit
    git_options = GitOptions(**overrides)

    general_options = GeneralOptions()
    if args.verbose is not None:
        general_options = general_options.model_copy(update={"verbose": args.verbose})

    spec = load_destination_spec(args.config)
    return GitDestination(spec.with_options(git_options, general_options))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        general_options = GeneralOptions()
    except ValidationError as e:
        # Logging isn't configured yet.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(general_options.log_level)

    try:
        destination = _load_destination(args)

        if args.command == "publish":
            destination.process(
                workdir=args.workdir,
                origin_ref=args.origin_ref,
                timestamp=args.timestamp,
                changes_summary=args.summary,
            )
            print(f"Published {args.origin_ref} to {destination.config.push_to_ref}")
            return 0

        if args.command == "previous-ref":
            previous = destination.get_previous_ref()
            if previous is not None:
                print(previous)
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (ConfigValidationError, ValidationError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    except RepoException as e:
        logger.error(str(e), extra={"kind": e.kind.value})
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
