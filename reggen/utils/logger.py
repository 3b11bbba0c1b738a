import logging
import sys


ROOT_LOGGER = 'reggen'

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(level: str = 'INFO', quiet: bool = False) -> None:
    """ Configures the reggen loggers only; handlers of the embedding application are left alone """
    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()

    lvl = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(lvl)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(lvl)
    fmt = LOG_FORMAT if not quiet else '%(message)s'
    ch.setFormatter(logging.Formatter(fmt, datefmt='%H:%M:%S'))
    root.addHandler(ch)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + '.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)
