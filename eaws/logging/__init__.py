"""Logging setup for the eaws command line."""

import logging
import sys

from eaws.logging.formatters import StageFormatter

QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr.

    Parameters
    ----------
    verbose : bool
        Log at DEBUG level instead of WARNING
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StageFormatter("%(levelname)s %(name)s: %(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["StageFormatter", "configure_logging"]
