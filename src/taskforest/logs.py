import logging
import os
import sys
from pathlib import Path

def _log_dir(is_debug: bool):
    """Directory for the log file, or None when file logging is off."""
    override = os.getenv('TASKFOREST_LOG_DIR', '')
    if override:
        return Path(override)
    if is_debug:
        return Path.home() / ".local" / "share" / "taskforest" / "logs"
    return None

def setup_logging():
    """Set up logging configuration for taskforest package with environment-based levels."""
    # Determine log level from environment
    env_level = os.getenv('TASKFOREST_LOG_LEVEL', '').upper()
    is_debug = os.getenv('TASKFOREST_DEBUG', '').lower() in ('1', 'true', 'yes')

    # Default to WARNING so library users only see integrity faults
    if is_debug:
        level = logging.DEBUG
    elif env_level:
        level = getattr(logging, env_level, logging.WARNING)
    else:
        level = logging.WARNING

    # Standardized log format with more detail
    log_format = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    # Configure formatters
    detailed_formatter = logging.Formatter(log_format, date_format)
    console_formatter = logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if is_debug
        else '%(levelname)s: %(message)s'
    )

    # Console handler (respects environment level)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger('taskforest')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    logger.handlers.clear()
    logger.addHandler(console_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    # File handler (always detailed), only when asked for
    log_dir = _log_dir(is_debug)
    if log_dir is None:
        return logger

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "taskforest.log")
    except OSError as e:
        logger.warning(f"File logging disabled, cannot open {log_dir}: {e}")
    else:
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)  # File gets all messages
        logger.addHandler(file_handler)

    return logger

# Initialize logging when package is imported
setup_logging()

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'taskforest.{name}')
    return logging.getLogger('taskforest')
