import logging


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level=None, verbose=False, name=None):
    """Configure the root logger once for the CLI or the web app.

    ``verbose`` forces DEBUG; otherwise ``level`` (name or number) is used,
    falling back to INFO.
    """
    if verbose:
        log_level = logging.DEBUG
    elif isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.INFO)
    elif isinstance(level, int):
        log_level = level
    else:
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=True)
    return logging.getLogger(name)
