"""Thin wrapper around the `git` executable bound to a scratch repository.

All remote/local state changes needed by destinations go through this class so
tests can substitute a mock.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# Substring git prints on stderr (in the C locale) when a fetched ref does not
# exist upstream.
_MISSING_REF_MARKERS = ("couldn't find remote ref",)


class RepoErrorKind(str, Enum):
    """Category of a repository failure."""

    REFERENCE_NOT_FOUND = "reference_not_found"
    POLICY_VIOLATION = "policy_violation"
    OPERATION_FAILED = "operation_failed"


class RepoException(Exception):
    """Raised when a repository operation or destination policy check fails."""

    def __init__(
        self, message: str, kind: RepoErrorKind = RepoErrorKind.OPERATION_FAILED
    ) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured output of a git invocation."""

    stdout: str
    stderr: str


class GitRepository:
    """A git directory plus an optional external work tree.

    Paths are made absolute up front: git runs in the caller's working
    directory, so relative URLs given to fetch/push resolve the way the caller
    expects, while ``--git-dir``/``--work-tree`` pin the repository.
    """

    def __init__(
        self,
        git_dir: Path,
        work_tree: Path | None = None,
        *,
        verbose: bool = False,
        scratch_root: Path | None = None,
    ) -> None:
        self.git_dir = Path(git_dir).absolute()
        self.work_tree = Path(work_tree).absolute() if work_tree is not None else None
        self.verbose = verbose
        self._scratch_root = Path(scratch_root).absolute() if scratch_root is not None else None

    @classmethod
    def init_scratch_repo(
        cls, repo_storage: Path | None = None, verbose: bool = False
    ) -> GitRepository:
        """Create an empty repository in a fresh temporary directory.

        Args:
            repo_storage: Parent directory for the scratch repository; the
                system temp dir when None.
            verbose: Log git commands and their output at INFO.

        Returns:
            Handle whose work tree is the scratch directory itself.
        """
        parent = None
        if repo_storage is not None:
            repo_storage.mkdir(parents=True, exist_ok=True)
            parent = str(repo_storage.absolute())

        root = Path(tempfile.mkdtemp(prefix="git-destination-", dir=parent)).absolute()
        repo = cls(root / ".git", root, verbose=verbose, scratch_root=root)
        try:
            repo._run(["init", "-q", str(root)], bind=False)
        except RepoException:
            repo.cleanup()
            raise
        return repo

    def with_work_tree(self, work_tree: Path) -> GitRepository:
        """Return a handle sharing this git dir but using ``work_tree`` for files."""

        return GitRepository(self.git_dir, Path(work_tree), verbose=self.verbose)

    def simple_command(self, *args: str) -> CommandOutput:
        """Run ``git <args>`` against this repository, raising on failure."""

        return self._run(list(args))

    def fetch(self, url: str, ref: str) -> None:
        try:
            self.simple_command("fetch", url, ref)
        except RepoException as exc:
            if any(marker in str(exc) for marker in _MISSING_REF_MARKERS):
                raise RepoException(
                    f"Cannot find reference '{ref}' in '{url}'",
                    kind=RepoErrorKind.REFERENCE_NOT_FOUND,
                ) from exc
            raise

    def checkout_fetched_head(self) -> None:
        self.simple_command("checkout", "-q", "FETCH_HEAD")

    def set_identity(self, name: str | None = None, email: str | None = None) -> None:
        """Configure committer identity for this clone only."""

        if name:
            self.simple_command("config", "user.name", name)
        if email:
            self.simple_command("config", "user.email", email)

    def stage_all(self) -> None:
        self.simple_command("add", "--all")

    def commit(self, author: str, timestamp: int, message: str) -> None:
        """Commit the index with a fixed UTC author date.

        Args:
            author: Author in ``Name <email>`` form.
            timestamp: Seconds since the epoch.
            message: Full commit message.
        """
        self.simple_command(
            "commit",
            "--author",
            author,
            "--date",
            f"@{timestamp} +0000",
            "-m",
            message,
        )

    def push(self, url: str, local_ref: str, remote_ref: str) -> None:
        self.simple_command("push", url, f"{local_ref}:{_qualify_ref(remote_ref)}")

    def rev_parse(self, ref: str) -> str:
        return self.simple_command("rev-parse", "--verify", ref).stdout.strip()

    def log(self, commit: str, limit: int = 1) -> str:
        return self.simple_command("log", "--pretty=medium", f"-{limit}", commit).stdout

    def write_tree(self) -> str:
        return self.simple_command("write-tree").stdout.strip()

    def cleanup(self) -> None:
        """Remove the scratch directory, if this handle owns one."""

        if self._scratch_root is not None:
            shutil.rmtree(self._scratch_root, ignore_errors=True)
            logger.debug("Removed scratch repository", extra={"path": str(self._scratch_root)})

    def __enter__(self) -> GitRepository:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"GitRepository(git_dir={str(self.git_dir)!r}, work_tree={self.work_tree!s})"

    def _run(self, args: list[str], bind: bool = True) -> CommandOutput:
        cmd = ["git"]
        if bind:
            cmd += ["--git-dir", str(self.git_dir)]
            if self.work_tree is not None:
                cmd += ["--work-tree", str(self.work_tree)]
        cmd += args

        level = logging.INFO if self.verbose else logging.DEBUG
        logger.log(level, "Running git %s", args[0], extra={"git_args": args[1:]})

        # Keep the caller's environment from redirecting us to another repository.
        env = {
            k: v
            for k, v in os.environ.items()
            if k not in ("GIT_DIR", "GIT_WORK_TREE", "LANGUAGE")
        }
        # Error classification matches git's untranslated messages.
        env["LC_ALL"] = "C"

        try:
            result = subprocess.run(
                cmd,
                env=env,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise RepoException(f"Cannot execute git: {exc}") from exc

        if self.verbose and result.stdout.strip():
            logger.info(result.stdout.rstrip())

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise RepoException(
                f"git {args[0]} failed (exit {result.returncode}): {stderr}"
            )

        return CommandOutput(stdout=result.stdout, stderr=result.stderr)


def _qualify_ref(ref: str) -> str:
    if ref.startswith("refs/"):
        return ref
    return f"refs/heads/{ref}"
