import logging.config

# lifecycle trail stays visible when LOG_LEVEL is raised
AUDIT_LOGGER = "org_registry.core.audit"


def configure_logging(level: str = "INFO") -> None:
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s %(name)s - %(message)s"
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                "org_registry": {"level": level},
                AUDIT_LOGGER: {"level": "INFO"},
                "sqlalchemy.engine": {"level": "WARNING"},
                "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn.access": {
                    "level": level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }
    )
