"""Logging configuration for SaaS Atlas."""

import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Any, Optional


def setup_logging(config: Dict[str, Any], verbose: bool = False) -> logging.Logger:
    """Set up logging based on configuration.

    Args:
        config: Logging configuration section
        verbose: Force DEBUG level on the console

    Returns:
        Configured logger instance
    """
    # Get logging settings from config
    log_level = config.get('level', 'INFO')
    log_format = config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    log_file = config.get('file', 'logs/saas_atlas.log')
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper())

    logger = logging.getLogger('saas_atlas')
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    # Console output goes to stderr so it never mixes with command output
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File handler with rotation
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (defaults to 'saas_atlas')

    Returns:
        Logger instance
    """
    if name is None:
        name = 'saas_atlas'
    return logging.getLogger(name)
