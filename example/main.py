"""
Example program consuming baked-in build identity.

Generate the constants first, as a build step:

    buildstamp generate python -o example/_build_identity.py

then run `python example/main.py`.
"""

from __future__ import annotations

from _build_identity import BUILD_IDENTITY

from buildstamp import consumer

if __name__ == "__main__":
    raise SystemExit(consumer.main(BUILD_IDENTITY))
