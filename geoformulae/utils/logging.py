"""Logging utility for geoformulae"""

__all__ = ['LOGGER', 'warn_once']

import logging

LOGGER = logging.getLogger('geoformulae')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def warn_once(warning: str, *args):
    """
    Logs a warning the first time a message is seen; repeats are dropped.

    Args:
        warning:
            The message, optionally with %-style placeholders

        *args:
            Values for the placeholders. Messages are de-duplicated after
            the values have been substituted.
    """
    message = warning % args if args else warning
    if message not in _WARNINGS:
        LOGGER.warning(message)
        _WARNINGS.add(message)
