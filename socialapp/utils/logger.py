import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(app) -> logging.Logger:
    """Attach handlers to the ``socialapp`` logger based on app config.

    Safe to call once per app instance; handlers are only added the first
    time so repeated ``create_app`` calls in tests don't duplicate output.
    """
    logger = logging.getLogger("socialapp")
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        log_file = app.config.get("LOG_FILE")
        if log_file:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=5 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
