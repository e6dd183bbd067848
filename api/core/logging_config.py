from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the API process.

    Unknown level names fall back to INFO.
    """
    resolved = getattr(logging, (level or "").upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)

    # asyncpg logs every server notice at INFO
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
