import logging

from colorama import Fore, Style, init

# Initialize colorama for Windows compatibility
init(autoreset=True)

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA,
}

_debug_logger = logging.getLogger("ridealert.debug")


class ColorFormatter(logging.Formatter):
    """Prefix each record with its level name in the level's colour."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, "")
        message = super().format(record)
        return f"{color}[{record.levelname}]{Style.RESET_ALL} {message}"


def configure_logging(level: str = "INFO") -> None:
    """Install the coloured handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler.formatter, ColorFormatter):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(asctime)s %(name)s: %(message)s", "%H:%M:%S"))
    root.addHandler(handler)


def log_debug(message: str):
    """
    Logs a debug message through the shared debug logger.

    Args:
        message (str): The debug message to emit.
    """
    _debug_logger.debug(message)
