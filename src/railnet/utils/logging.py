"""
Logging setup shared by the pipeline scripts.

Library modules only call `logging.getLogger(__name__)`; scripts attach the
console and file handlers through `get_script_logger`.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: Optional[str],
    log_file: Optional[Path] = None,
    level: int = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Configure a logger with console and/or file output.

    Args:
        name: Logger name; None configures the root logger so that
            `railnet.*` module loggers share the script's handlers
        log_file: Optional path to log file (under results/logs/)
        level: Logging level (default: INFO)
        console: Whether to also log to console (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_script_logger(
    script_name: str,
    results_dir: Path,
    level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """
    Get a logger for a script with automatic file path under results/logs/.

    Handlers go on the root logger, so messages from the library modules end
    up in the same console stream and log file.

    Args:
        script_name: Name of the script (e.g., "02_run_connectivity")
        results_dir: Path to results directory
        level: Logging level or level name

    Returns:
        Logger named after the script
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    log_file = results_dir / "logs" / f"{script_name}.log"
    setup_logger(name=None, log_file=log_file, level=level, console=True)
    return logging.getLogger(script_name)
