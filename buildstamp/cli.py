"""
cli.py

Responsibility: CLI entrypoint for buildstamp.

Commands:
- `generate`: collect the build identity of a working tree, render a template
  with it, and write the result (stdout by default). Run this as a build step
  before compiling/packaging the program that consumes the constants.
- `show`: collect the identity now and print it the way the example consumer does.

This module should orchestrate behavior but keep concerns isolated:
- Git access: `git_parser.py` / `identity.py`
- Rendering and writing: `renderer.py`
- Configuration file: `config.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from buildstamp import __version__, consumer
from buildstamp.config import ConfigError, StampConfig, load_config
from buildstamp.git_parser import GitError
from buildstamp.identity import BuildIdentity, collect_build_identity
from buildstamp.renderer import BUILTIN_TEMPLATES, RenderError, render_identity, write_output

log = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _merge_config(args: argparse.Namespace, config: StampConfig) -> StampConfig:
    # CLI overrides
    return StampConfig(
        repo=args.git_repo or config.repo,
        template=args.template or config.template,
        output=args.out or config.output,
        force=config.force if args.force is None else bool(args.force),
        ignore_git_errors=config.ignore_git_errors if args.ignore_git_errors is None else bool(args.ignore_git_errors),
    )


def _collect(repo: str | None, *, ignore_git_errors: bool) -> BuildIdentity:
    try:
        return collect_build_identity(repo)
    except GitError as e:
        if not ignore_git_errors:
            raise
        log.warning("ignoring git error, using placeholder identity: %s", e)
        return BuildIdentity.unknown()


def generate_cmd(args: argparse.Namespace) -> int:
    settings = _merge_config(args, load_config(args.config))
    if settings.output and settings.output != "-" and Path(settings.output).is_dir():
        raise CLIError(f"Output path is a directory: {settings.output}")

    identity = _collect(settings.repo, ignore_git_errors=settings.ignore_git_errors)
    text = render_identity(settings.template, identity)

    if not settings.output or settings.output == "-":
        sys.stdout.write(text)
        return 0

    write_output(text, settings.output, force=settings.force)
    return 0


def show_cmd(args: argparse.Namespace) -> int:
    identity = collect_build_identity(args.git_repo)
    return consumer.main(identity)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildstamp", description="Bake git build identity into generated source code")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for git commands)")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Render a template with the build identity of a git working tree")
    g.add_argument(
        "template",
        nargs="?",
        default=None,
        help=f"Built-in template ({', '.join(sorted(BUILTIN_TEMPLATES))}) or template file path (default: python)",
    )
    g.add_argument("-g", "--git-repo", default=None, help="Git working tree path (default: current directory)")
    g.add_argument("-o", "--out", default=None, help="Output file path (default: stdout)")
    g.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=None,
        help="Rewrite the output file even if its content is unchanged",
    )
    g.add_argument(
        "--ignore-git-errors",
        action="store_true",
        default=None,
        help="Emit placeholder 'unknown' values instead of failing when git cannot be read",
    )
    g.add_argument("--config", default=None, help="YAML config file (default: ./buildstamp.yaml if present)")
    g.set_defaults(func=generate_cmd)

    s = sub.add_parser("show", help="Print the build identity of a git working tree")
    s.add_argument("-g", "--git-repo", default=None, help="Git working tree path (default: current directory)")
    s.set_defaults(func=show_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return int(args.func(args))
    except (GitError, RenderError, ConfigError, CLIError) as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
