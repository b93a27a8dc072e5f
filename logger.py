import logging

logger = logging.getLogger("symbol_extractor")
logger.setLevel("INFO")

# Console handler with formatter
ch = logging.StreamHandler()
ch.setLevel(logging.INFO)
formatter = logging.Formatter("[%(levelname)s] %(message)s")
ch.setFormatter(formatter)

logger.addHandler(ch)


def set_log_level(level: int | str):
    """Switch both the logger and its console handler to `level`."""
    logger.setLevel(level)
    ch.setLevel(level)
