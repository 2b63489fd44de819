import logging
import os
import sys
from datetime import datetime
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))


def setup_logger(name: str) -> logging.Logger:
    """Setup a logger with consistent formatting"""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = (
        logging.DEBUG if os.getenv("DEBUG", "False").lower() == "true" else logging.INFO
    )
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if os.getenv("LOG_TO_FILE", "True").lower() == "true":
        LOG_DIR.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(
            LOG_DIR / f"rankbot_{datetime.now().strftime('%Y%m%d')}.log",
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
