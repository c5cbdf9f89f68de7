"""
buildstamp package

This package bakes the state of a git working tree into generated source code
at build time, so programs can read their build identity as plain constants.

Key responsibilities are split across modules:
- `git_parser.py`: isolated `git` subprocess calls (hash, branch, tag, describe, status)
- `identity.py`: the immutable `BuildIdentity` snapshot and its collection
- `renderer.py`: Jinja2 rendering of built-in or user templates, write-if-changed output
- `config.py`: optional YAML configuration (`buildstamp.yaml`)
- `consumer.py`: example consumer printing the seven constants
- `cli.py`: CLI entrypoint and orchestration (config -> collect -> render -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
