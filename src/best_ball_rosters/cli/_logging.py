import logging
import sys

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr so tables on stdout stay clean.

    Without ``verbose`` only warnings are shown, and HTTP client chatter is
    suppressed entirely.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)

    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
