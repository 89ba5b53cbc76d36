from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from colorama import Fore, Style

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import EventDict, WrappedLogger

LEVEL_COLORS: dict[str, str] = {
    "error": Fore.RED,
    "critical": Fore.RED,
    "warning": Fore.YELLOW,
    "info": Fore.LIGHTBLUE_EX,
    "debug": Fore.WHITE,
}


class TaggedLineRenderer:
    """Render an event as ``[level] message key=value ...``.

    The level tag is wrapped in ANSI color codes unless ``use_color`` is False.
    """

    def __init__(self, *, use_color: bool = True) -> None:
        self.use_color = use_color

    def tag(self, level: str) -> str:
        if not self.use_color:
            return f"[{level}]"
        return f"[{LEVEL_COLORS.get(level, '')}{level}{Style.RESET_ALL}]"

    def __call__(self, _logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        level = str(event_dict.pop("level", method_name))
        event = str(event_dict.pop("event", ""))
        exc = event_dict.pop("exception", None)
        extra = " ".join(f"{key}={value}" for key, value in event_dict.items())
        line = f"{self.tag(level)} {event}"
        if extra:
            line = f"{line} {extra}"
        if exc:
            line = f"{line}\n{exc}"
        return line


def setup_logging(
    filename: str | Path | None = None,
    *,
    use_color: bool = True,
) -> structlog.BoundLogger:
    """Set up the log stream used for errors, warnings and counters.

    Safe to call more than once: every call replaces the handlers and the
    processor chain, so a later call can switch colors or the destination.

    Args:
        filename: Optional path to a log file. If None, logs are written to stderr.
        use_color: Whether the ``[level]`` tag is colored with ANSI codes.

    Returns:
        A structlog logger instance configured for the filecat package.
    """
    handlers: list[logging.Handler] = []
    if filename:
        handlers.append(logging.FileHandler(str(filename), encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=logging.INFO,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            TaggedLineRenderer(use_color=use_color),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return get_logger()


def get_logger(**initial_values: Any) -> structlog.BoundLogger:  # noqa: ANN401
    return structlog.get_logger("filecat", **initial_values)


logger = setup_logging()
