"""Shared logging helpers."""

import logging

from shared.settings import LOG_LEVEL


def configure_logging(*, level=None, force: bool = False) -> None:
    """Initialise the root logger once.

    Defaults to the ``LOG_LEVEL`` setting. Pass ``force=True`` to reconfigure
    during tests.
    """
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
