"""Main entry point for direct module execution."""

import logging
import sys

from . import config
from .cli import cli
from .exceptions import GexError
from .ui_common import print_error

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Log to ~/.gex/gex.log and to stderr."""
    log_file = config.get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            stderr_handler,
        ]
    )


def main() -> None:
    """Main entry point."""
    try:
        configure_logging()
        logger.debug("Starting gex")
        cli()
    except GexError as e:
        print_error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error("Fatal error", exc_info=True)
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
