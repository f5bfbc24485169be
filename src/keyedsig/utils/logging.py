import logging
import sys

from ..config import LOG_LEVEL


def get_logger(name: str = "keyedsig"):
    logger = logging.getLogger(name)
    root = logging.getLogger("keyedsig")
    if not root.handlers:
        h = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s %(message)s")
        h.setFormatter(fmt)
        root.addHandler(h)
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger
