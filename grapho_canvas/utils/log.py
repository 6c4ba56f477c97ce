"""
Logger setup for the Grapho Canvas package.
"""

import logging

from ..canvas_config import LOGGING_CONFIG

__all__ = ['setup_logger']


def setup_logger(name='grapho_canvas', config=None):
    """
    Configure a logger of the package.

    A console handler is attached only once, so calling this function
    repeatedly does not duplicate output.

    Parameters
    ----------
    name : str, optional
        Name of the logger to configure
    config : dict, optional
        Logging settings (defaults to LOGGING_CONFIG)

    Returns
    -------
    logging.Logger
        The configured logger
    """
    config = config or LOGGING_CONFIG
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.get('level', 'INFO')))

    if config.get('console', True) and not any(
            getattr(handler, '_grapho_canvas', False) for handler in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logger.level)
        formatter = logging.Formatter(config.get('format', LOGGING_CONFIG['format']))
        console_handler.setFormatter(formatter)
        console_handler._grapho_canvas = True
        logger.addHandler(console_handler)

    return logger
