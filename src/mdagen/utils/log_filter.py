"""Level-based log suppression for quiet generation runs.

The CLI ``--quiet`` flag wraps a run in :func:`quiet_logger` so that only
warnings and errors from the generator components reach the terminal.

Examples:
    Quiet every generator component::

        >>> with quiet_logger(GENERATOR_LOGGERS):
        ...     pipeline.run(model)

    Show only errors from the renderer::

        >>> with suppress_logger_level("renderer", logging.ERROR):
        ...     renderer.render(None, template, context)
"""

import logging
from contextlib import contextmanager

# Logger names used by the generator components
GENERATOR_LOGGERS = ["pipeline", "plugins", "renderer", "output", "model", "CONFIG"]


@contextmanager
def suppress_logger_level(logger_name: str | list[str], level: int):
    """Context manager to temporarily raise logger level to suppress messages.

    Args:
        logger_name: Name of logger(s) to modify. Can be a single string
            or list of strings for multiple loggers.
        level: The temporary log level to set. Messages below this level
            will be suppressed.

    Yields:
        Dictionary mapping logger names to their original levels
    """
    logger_names = [logger_name] if isinstance(logger_name, str) else logger_name

    loggers = [logging.getLogger(name) for name in logger_names]
    original_levels = {name: logger.level for name, logger in zip(logger_names, loggers)}

    for logger in loggers:
        logger.setLevel(level)

    try:
        yield original_levels
    finally:
        for name, logger in zip(logger_names, loggers):
            logger.setLevel(original_levels[name])


@contextmanager
def quiet_logger(logger_name: str | list[str]):
    """Suppress INFO and DEBUG messages from logger(s), keep WARNING and above.

    Args:
        logger_name: Name of logger(s) to quiet.

    Yields:
        Dictionary mapping logger names to their original levels
    """
    with suppress_logger_level(logger_name, logging.WARNING) as levels:
        yield levels


__all__ = [
    "GENERATOR_LOGGERS",
    "suppress_logger_level",
    "quiet_logger",
]
