"""Shared logging helpers for cardrec."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Initialise the root logger for CLI use.

    Logs go to stderr unless ``stream`` is given, so JSON written to stdout
    stays parseable. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
        stream=stream,
    )
