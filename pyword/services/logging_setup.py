from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """
    Configure loguru sinks: stderr always, plus a rotating file under `log_dir`
    when one is configured.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / "pyword_{time}.log"),
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
        )

    logger.info("Logging initialized (level={})", level)
