import logging
import logging.config
import os

LOG_FILE_BYTES = 5 * 1024 * 1024


def setup_logging(log_dir: str = "logs", environment: str = "development"):
    """Console output plus a rotating file; the file also gets SQL warnings."""
    os.makedirs(log_dir, exist_ok=True)
    app_level = "DEBUG" if environment == "development" else "INFO"

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": "%(levelname)s - %(name)s - %(message)s"},
            "file": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "console",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": app_level,
                "formatter": "file",
                "filename": os.path.join(log_dir, "chore_calendar.log"),
                "maxBytes": LOG_FILE_BYTES,
                "backupCount": 3,
            },
        },
        "root": {"level": "INFO", "handlers": ["console", "file"]},
        "loggers": {
            "chore_calendar": {"level": app_level},
            "sqlalchemy.engine": {"level": "WARNING", "handlers": ["file"], "propagate": False},
        },
    })

    logging.getLogger(__name__).info(
        f"Logging to {os.path.abspath(log_dir)} at {app_level} ({environment})"
    )
