from __future__ import annotations
import logging
import os

COLORS = {
    "RESET": "\033[0m",
    "GRAY": "\033[90m",
    "RED": "\033[91m",
    "YELLOW": "\033[93m",
    "MAGENTA": "\033[95m",
    "CYAN": "\033[96m",
}

LEVEL_COLOR = {
    logging.DEBUG: "GRAY",
    logging.INFO: "CYAN",
    logging.WARNING: "YELLOW",
    logging.ERROR: "RED",
    logging.CRITICAL: "MAGENTA",
}

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class ColorFormatter(logging.Formatter):
    def __init__(self, fmt: str = LOG_FORMAT, *, use_color: bool = True) -> None:
        super().__init__(fmt)
        # NO_COLOR always wins over configuration
        self.use_color = use_color and os.getenv("NO_COLOR") is None

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if not self.use_color:
            return msg
        color = COLORS.get(LEVEL_COLOR.get(record.levelno, "RESET"), "")
        return f"{color}{msg}{COLORS['RESET']}"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def install_color_handler(logger: logging.Logger, level: str | int = logging.INFO, *, use_color: bool = True) -> None:
    logger.setLevel(resolve_level(level))
    if any(getattr(h, "_routecast", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(use_color=use_color))
    handler._routecast = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
