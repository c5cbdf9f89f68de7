"""
identity.py

Responsibility: The immutable `BuildIdentity` snapshot and how it is collected.

A `BuildIdentity` is produced exactly once, at build time, from the state of a
git working tree. Generated code embeds its values; nothing reads git at runtime.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from buildstamp.git_parser import GitError, GitParser

log = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 7
DETACHED_BRANCH = "HEAD"
NO_TAG = ""
UNKNOWN = "unknown"

CONSTANT_NAMES: tuple[str, ...] = (
    "GIT_HASH",
    "GIT_BRANCH",
    "GIT_TAG",
    "GIT_DESCRIBE",
    "GIT_SHORT_HASH",
    "GIT_IS_CLEAN",
    "GIT_IS_CLEAN_NO_UNTRACKED_FILES",
)


@dataclass(frozen=True)
class BuildIdentity:
    """State of a git working tree at build time."""

    commit_hash: str
    branch: str
    tag: str
    describe: str
    short_hash: str
    is_clean: bool
    is_clean_ignoring_untracked: bool

    @classmethod
    def unknown(cls) -> BuildIdentity:
        """
        Placeholder for builds that explicitly chose to ignore git errors.
        """
        return cls(
            commit_hash=UNKNOWN,
            branch=UNKNOWN,
            tag=UNKNOWN,
            describe=UNKNOWN,
            short_hash=UNKNOWN,
            is_clean=False,
            is_clean_ignoring_untracked=False,
        )

    def as_constants(self) -> dict[str, str | bool]:
        values: tuple[str | bool, ...] = (
            self.commit_hash,
            self.branch,
            self.tag,
            self.describe,
            self.short_hash,
            self.is_clean,
            self.is_clean_ignoring_untracked,
        )
        return dict(zip(CONSTANT_NAMES, values))


def collect_build_identity(repo_path: str | Path | None = None) -> BuildIdentity:
    """
    Query the working tree at repo_path (default: current directory) and
    return its BuildIdentity.

    Raises GitError if the tree cannot be inspected (not a repository, git
    missing, no commit yet). Absent tags and detached HEAD are not errors.
    """
    workdir = Path(repo_path) if repo_path else Path(os.getcwd())
    parser = GitParser(workdir)
    if not parser.is_repository():
        raise GitError(f"Not a git working tree: {workdir}")

    commit_hash = parser.hash()
    identity = BuildIdentity(
        commit_hash=commit_hash,
        branch=parser.branch(),
        tag=parser.tag(),
        describe=parser.describe(),
        short_hash=commit_hash[:SHORT_HASH_LENGTH],
        is_clean=parser.is_clean(),
        is_clean_ignoring_untracked=parser.is_clean_no_untracked_files(),
    )
    log.info("collected build identity %s (%s) from %s", identity.short_hash, identity.branch, workdir)
    return identity
