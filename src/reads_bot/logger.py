"""Console logging setup."""

import logging


class CustomFormatter(logging.Formatter):
    """Colour log lines by level."""

    grey = "\x1b[37;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    dark_grey = "\x1b[30;1m"
    reset = "\x1b[0m"
    fmt = "[%(levelname)s] %(asctime)s %(name)s - %(message)s"

    FORMATS = {
        logging.DEBUG: dark_grey + fmt + reset,
        logging.INFO: grey + fmt + reset,
        logging.WARNING: yellow + fmt + reset,
        logging.ERROR: red + fmt + reset,
        logging.CRITICAL: bold_red + fmt + reset,
    }

    def format(self, record: logging.LogRecord) -> str:
        formatter = logging.Formatter(self.FORMATS.get(record.levelno, self.fmt))
        return formatter.format(record)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a coloured console handler to the package logger."""
    log = logging.getLogger("reads_bot")
    log.setLevel(level)

    # Avoid stacking handlers when called twice
    if not any(getattr(h, "_reads_bot", False) for h in log.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter())
        handler._reads_bot = True
        log.addHandler(handler)

    for h in log.handlers:
        h.setLevel(level)

    return log
