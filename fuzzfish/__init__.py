"""Public package surface for fuzzfish.

Exports ``main`` for programmatic CLI invocation. The package logger gets a
``NullHandler`` because the interactive UI owns the terminal; pass
``--log-file`` to capture logs.
"""

from __future__ import annotations

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
