import logging
import sys

from aiohttp import web

from core.initialization import SettingsError, load_settings
from core.message_handler import create_app
from utils.logger import log_file_for, setup_logger


def main():
    """
    Entrypoint for the webhook relay.

    Settings are loaded first because the log directory comes from them; a
    settings failure aborts startup before any request is accepted.
    """
    try:
        settings = load_settings()
    except SettingsError as e:
        # file handlers need log_path from settings; the bare logger still reaches stderr
        logging.getLogger(__name__).critical("❌ Tradeproxy failed to start: %s", e)
        sys.exit(1)

    logger = setup_logger(None, log_file=log_file_for(settings.log_path))
    logger.info("Tradeproxy starting up! Logging to %s", settings.log_path)

    web.run_app(create_app(settings), host="0.0.0.0", port=settings.listen_port)


if __name__ == "__main__":
    main()
