from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from PyQt6.QtWidgets import QApplication

from pyword.di.container import Container
from pyword.services.logging_setup import setup_logging
from pyword.utils.constants import APP_NAME, APP_ORG


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, configures logging, composes the application via the DI
    container and launches the main window.
    """
    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default()
    setup_logging(container.config.log_level, container.config.log_dir)
    logger.info("{} {} starting", APP_NAME, container.config.get_version())
    logger.debug("Configuration source: {}", container.config.loaded_from or "built-in defaults")

    # Optional document path passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    return app.exec()
