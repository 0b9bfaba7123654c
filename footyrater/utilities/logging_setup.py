"""Root logger configuration."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once. Later calls only adjust the level."""
    global _configured
    numeric = getattr(logging, level.upper(), logging.INFO)
    if not _configured:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        _configured = True
    logging.getLogger().setLevel(numeric)
