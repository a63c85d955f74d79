#!/usr/bin/env python3
"""Programmatic export example.

This demonstrates using the destination directly from a migration script:

* load run options (first-commit override, committer) from `.env`
* ask the destination which origin reference it published last
* publish a transformed working tree as the next commit
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Sequence

from git_destination.core.config import DestinationSpec, GeneralOptions, GitOptions
from git_destination.destination.git_destination import GitDestination
from git_destination.git.repository import RepoException
from git_destination.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a directory to a git repository.")
    parser.add_argument("--url", required=True, help="Destination repository URL or path")
    parser.add_argument("--ref", default="master", help="Ref to build on and push to")
    parser.add_argument("--workdir", required=True, type=Path, help="Transformed tree")
    parser.add_argument("--origin-ref", required=True, help="Origin reference being exported")
    parser.add_argument("--author", default="Copy Bot <copybot@example.com>")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    general = GeneralOptions()
    configure_logging(general.log_level)

    spec = DestinationSpec(
        url=args.url,
        pull_from_ref=args.ref,
        push_to_ref=args.ref,
        author=args.author,
    )
    destination = GitDestination(spec.with_options(GitOptions(), general))

    try:
        previous = destination.get_previous_ref()
        summary = f"Export {args.origin_ref}" + (f" (previous: {previous})" if previous else "")
        destination.process(args.workdir, args.origin_ref, int(time.time()), summary)
    except RepoException as exc:
        print(f"Export failed [{exc.kind.value}]: {exc}")
        return 1

    print(f"Exported {args.origin_ref} to {args.url} ({args.ref})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
