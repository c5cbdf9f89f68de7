"""
git_parser.py

Responsibility: Isolate all direct interaction with the `git` executable.

This module must be the only place that:
- Builds git command lines (always `git -C <working tree> ...`)
- Runs git subprocesses
- Interprets git output (trailing newlines, empty output, exit codes)

It only reads repository metadata; nothing here mutates the working tree.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


def _trim_newline(line: str) -> str:
    return line.rstrip("\r\n")


class GitParser:
    def __init__(self, working_directory: str | Path, git: str = "git") -> None:
        self.working_directory = Path(working_directory)
        self._git = git

    def _call(self, *args: str) -> str:
        """
        Run `git -C <working_directory> <args>` and return its stdout.

        Raises GitError if git is missing or exits non-zero.
        """
        cmd = [self._git, "-C", str(self.working_directory), *args]
        cmd_line = " ".join(cmd)
        log.debug("running %s", cmd_line)
        try:
            r = subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {self._git}") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"Command failed: {cmd_line}\n\n{(e.stderr or '').strip()}") from e
        return r.stdout

    def is_repository(self) -> bool:
        try:
            out = self._call("rev-parse", "--is-inside-work-tree")
        except GitError:
            return False
        return _trim_newline(out) == "true"

    def hash(self) -> str:
        return _trim_newline(self._call("rev-parse", "HEAD"))

    def branch(self) -> str:
        # git prints the literal "HEAD" for a detached checkout.
        return _trim_newline(self._call("rev-parse", "--abbrev-ref", "HEAD"))

    def has_tag(self) -> bool:
        """
        True if at least one tag is reachable from HEAD.
        """
        return len(_trim_newline(self._call("tag", "--merged", "HEAD"))) != 0

    def tag(self) -> str:
        if not self.has_tag():
            return ""
        return _trim_newline(self._call("describe", "--tags", "--abbrev=0"))

    def describe(self) -> str:
        if not self.has_tag():
            return ""
        return _trim_newline(self._call("describe", "--tags"))

    def is_clean(self) -> bool:
        return len(self._call("status", "--porcelain", "--untracked-files=normal")) == 0

    def is_clean_no_untracked_files(self) -> bool:
        return len(self._call("status", "--porcelain", "--untracked-files=no")) == 0
