import logging
import os
import sys


def setup_logging(level=logging.INFO, stream=sys.stdout, fmt=None):
    """Set up the root logger with a stream handler and basic formatting.

    Does nothing if handlers are already configured. The `LOG_LEVEL`
    environment variable, when set, overrides `level`.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        if fmt is None:
            if level == logging.DEBUG:
                fmt = '%(asctime)s | %(levelname)-5s | %(name)s | %(filename)s:%(lineno)d | %(message)s'
            else:
                fmt = '%(asctime)s | %(levelname)-5s | %(message)s'

        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))

        root_logger.setLevel(level)
        root_logger.addHandler(handler)

    env_level = os.environ.get('LOG_LEVEL')
    if env_level:
        root_logger.setLevel(env_level.upper())
