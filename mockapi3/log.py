import sys
import logging
import logging.config
import os

handlers = None

COMPONENTS = {
    "mockapi3.server": "HTTP SERVER",
    "mockapi3.validator": "VALIDATOR",
    "mockapi3.negotiator": "NEGOTIATOR",
    "mockapi3.store": "STORE",
    "mockapi3.loader": "LOADER",
    "mockapi3.OpenAPI": "DOCUMENT",
    "mockapi3.cli": "CLI",
}


class ComponentFormatter(logging.Formatter):
    """
    one line per record, labelled with the component of the logger

        [HTTP SERVER] ℹ  info      Request received
    """

    LEVELS = {
        logging.DEBUG: "…  debug  ",
        logging.INFO: "ℹ  info   ",
        logging.WARNING: "⚠  warning",
        logging.ERROR: "✖  error  ",
        logging.CRITICAL: "✖  fatal  ",
    }

    COLORS = {
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[31m",
    }

    def __init__(self, fmt=None, datefmt=None, style="%", color=None, **kwargs):
        super().__init__(fmt or "[%(component)s] %(symbol)s   %(message)s", datefmt, style, **kwargs)
        self.color = sys.stderr.isatty() if color is None else color

    def format(self, record: logging.LogRecord) -> str:
        record.component = COMPONENTS.get(record.name, record.name)
        symbol = self.LEVELS.get(record.levelno, record.levelname.lower())
        if self.color and (c := self.COLORS.get(record.levelno)):
            symbol = f"{c}{symbol}\033[0m"
        record.symbol = symbol
        return super().format(record)


def init(force=False, level="INFO"):
    """
    configure logging for the mockapi3 loggers

    export MOCKAPI3_LOGGING_HANDLERS=debug to get /tmp/mockapi3-debug.log

    :param force: always log to the console
    :param level: level of the mockapi3 loggers
    """
    global handlers

    if handlers is not None:
        return

    handlers = []

    if force:
        handlers.append("console")

    handlers.extend(
        filter(lambda x: len(x) and x not in handlers, os.environ.get("MOCKAPI3_LOGGING_HANDLERS", "").split(","))
    )

    if not handlers:
        return

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "component": {
                "()": ComponentFormatter,
            },
            "detailed": {
                "class": "logging.Formatter",
                "format": "%(asctime)s %(name)-9s %(levelname)-4s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "component",
            },
            "debug": {
                "class": "logging.handlers.WatchedFileHandler",
                "level": "DEBUG",
                "formatter": "detailed",
                "filename": "/tmp/mockapi3-debug.log",
            },
        },
        "loggers": {
            "mockapi3": {"level": level, "handlers": handlers, "propagate": False},
        },
    }

    # remove unused
    for i in frozenset(config["handlers"].keys()) - frozenset(handlers):
        del config["handlers"][i]

    for i in frozenset(config["formatters"]) - frozenset(map(lambda x: x["formatter"], config["handlers"].values())):
        del config["formatters"][i]

    logging.config.dictConfig(config)
