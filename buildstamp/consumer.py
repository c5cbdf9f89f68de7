"""
consumer.py

Responsibility: Example consumer of baked-in build identity values.

It never talks to git: the identity is handed in by the program's entry point,
usually the `BUILD_IDENTITY` of a module generated with the `python` template.
"""

from __future__ import annotations

import sys
from typing import TextIO

from buildstamp.identity import BuildIdentity


def _format_value(value: str | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def format_constants(identity: BuildIdentity) -> list[str]:
    return [f"{name} = {_format_value(value)}" for name, value in identity.as_constants().items()]


def main(identity: BuildIdentity, stream: TextIO | None = None) -> int:
    out = stream if stream is not None else sys.stdout
    for line in format_constants(identity):
        out.write(line + "\n")
    return 0
