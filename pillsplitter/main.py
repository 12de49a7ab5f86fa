"""Application entry point."""

import logging
import sys

from pillsplitter.app.controller import CanvasController
from pillsplitter.infra.config import load_default_env_files, load_splitter_config
from pillsplitter.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Run the pill splitter window."""
    load_default_env_files()
    setup_logging()
    config = load_splitter_config()
    controller = CanvasController(config)

    from pillsplitter.qt.bootstrap import create_qt_frontend

    window, run_event_loop = create_qt_frontend(controller)
    window.show()
    logger.info("pill_splitter_started palette=%d", len(config.palette))
    try:
        return run_event_loop()
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
