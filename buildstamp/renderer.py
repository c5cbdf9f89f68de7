"""
renderer.py

Responsibility: Turn a `BuildIdentity` into generated source code.

Rules:
- Templates are Jinja2 text, either built in (`python`, `c`, `header`) or a user file.
- Undefined template variables are errors (StrictUndefined).
- Output is only rewritten when its content changes, unless forced, so build
  systems that track mtimes do not rebuild needlessly.

This module intentionally does NOT know about git or CLI parsing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from buildstamp import __version__
from buildstamp.identity import BuildIdentity

log = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
BUILTIN_TEMPLATES: dict[str, str] = {
    "python": "python.py.j2",
    "c": "c.c.j2",
    "header": "header.h.j2",
}


class RenderError(RuntimeError):
    pass


def _py_literal(value: Any) -> str:
    return repr(value)


def _c_string(value: Any) -> str:
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _c_bool(value: Any) -> str:
    return "true" if value else "false"


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["py_literal"] = _py_literal
    env.filters["c_string"] = _c_string
    env.filters["c_bool"] = _c_bool
    return env


def resolve_template(name_or_path: str | Path) -> Path:
    """
    Map a built-in template name or a file path to the template file to render.
    """
    builtin = BUILTIN_TEMPLATES.get(str(name_or_path))
    if builtin is not None:
        return BUILTIN_TEMPLATES_DIR / builtin

    path = Path(name_or_path)
    if not path.is_file():
        known = ", ".join(sorted(BUILTIN_TEMPLATES))
        raise RenderError(f"Template not found: {name_or_path} (built-in templates: {known})")
    return path


def _build_context(identity: BuildIdentity) -> dict[str, Any]:
    return {
        "identity": identity,
        "commit_hash": identity.commit_hash,
        "branch": identity.branch,
        "tag": identity.tag,
        "describe": identity.describe,
        "short_hash": identity.short_hash,
        "is_clean": identity.is_clean,
        "is_clean_ignoring_untracked": identity.is_clean_ignoring_untracked,
        "constants": identity.as_constants(),
        "generator_version": __version__,
    }


def render_identity(template: str | Path, identity: BuildIdentity) -> str:
    """
    Render the template (built-in name or file path) with the identity's values.
    """
    path = resolve_template(template)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError(f"Cannot read template file: {path}") from e

    try:
        return _environment().from_string(text).render(**_build_context(identity))
    except TemplateError as e:
        raise RenderError(f"Failed rendering template file: {path}: {e}") from e


def write_output(text: str, destination: str | Path, *, force: bool = False) -> bool:
    """
    Write text to destination, creating parent directories.

    Without force, an existing file with identical content is left untouched.
    Returns True if the file was written.
    """
    dst = Path(destination)
    if not force and dst.is_file():
        try:
            if dst.read_text(encoding="utf-8") == text:
                log.info("%s is up to date", dst)
                return False
        except (OSError, UnicodeDecodeError):
            pass

    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise RenderError(f"Cannot write output file: {dst}: {e}") from e
    log.info("wrote %s", dst)
    return True
