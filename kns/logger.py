import logging
import sys

logger = logging.getLogger(__name__)


def setup_logger(verbose: bool = False, format: str = "%(message)s") -> None:
    """
    Sends log records to stderr, keeping stdout for command output.

    Calling it again replaces the previous handler, so the stream is looked up
    on every call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format))
    logger.addHandler(handler)


setup_logger()
