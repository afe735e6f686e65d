"""Process-wide logging configuration for the CLI.

Core and infra modules log through ``logging.getLogger(__name__)`` and
never configure handlers themselves.  The CLI calls
:func:`configure_logging` once, routing records to stderr through
Rich's ``RichHandler`` when Rich is importable.  Stdout is never used.
"""

from __future__ import annotations

import logging
import os
import sys

from naclseal.utils.constants import LOG_LEVEL_ENV

_DEFAULT_LEVEL = logging.WARNING


def resolve_level(verbose: bool) -> int:
    """Pick the root level from ``-v`` and ``NACLSEAL_LOG_LEVEL``.

    ``-v`` always wins; an unknown level name in the environment falls
    back to ``WARNING``.
    """
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return _DEFAULT_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
        return handler

    from naclseal.cli.console import get_rich_console

    return RichHandler(
        console=get_rich_console(),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> None:
    """Attach a single stderr handler to the ``naclseal`` logger."""
    logger = logging.getLogger("naclseal")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(resolve_level(verbose))
    logger.propagate = False
