"""Allow running PomoWidget as a module: python -m pomowidget."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomoWidgetApp
from .settings import load_config


def _level_for(name: str) -> int:
    level = getattr(logging, str(name).upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=_level_for(level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomowidget")


def main() -> None:
    # handler first so config warnings come out formatted
    logger = setup_logging()
    config = load_config()
    logging.getLogger().setLevel(_level_for(config.log_level))
    logger.info("PomoWidget ready (preset %s)", config.preset)

    app = QApplication(sys.argv)
    app.setApplicationName("PomoWidget")
    app.setOrganizationName("PomoWidget")

    window = PomoWidgetApp(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
