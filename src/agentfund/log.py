import logging
import sys

LOGGER_NAME = "agentfund"


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """
    Configure the agentfund logger.

    Output goes to stderr: stdout carries the MCP protocol stream and any
    stray line there corrupts it.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG")

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    )
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a child logger of agentfund."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
