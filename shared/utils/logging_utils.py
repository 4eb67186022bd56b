"""
Logging utilities for the spoiler sync pipelines.

Implements the dual logging pattern used by every pipeline stage:
- Short status lines to an optional status callback (console/UI)
- Detailed technical logs to the configured logging handlers
"""

import logging
from typing import Callable, Optional

StatusFn = Optional[Callable[[str], None]]

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _notify(status_fn: StatusFn, ui_msg: str) -> None:
    if not status_fn:
        return
    try:
        status_fn(ui_msg)
    except Exception as e:
        logging.warning(f"Status update failed: {e}")


def log_and_status(
    status_fn: StatusFn,
    msg: str,
    level: str = "info",
    ui_msg: Optional[str] = None
):
    """
    Log to file/console and update the status callback.

    Args:
        status_fn: Status callback function (e.g. print), or None
        msg: Detailed technical message for logs
        level: Log level ("info", "warning", "error", "debug")
        ui_msg: Short status message (defaults to msg if not provided)
    """
    logging.log(_LEVELS.get(level, logging.INFO), msg)
    _notify(status_fn, msg if ui_msg is None else ui_msg)


def log_section_header(status_fn: StatusFn, title: str):
    """
    Log a section header.

    Args:
        status_fn: Status callback function
        title: Section title
    """
    banner = f"\n{'=' * 80}\n{title}\n{'=' * 80}"
    log_and_status(status_fn, banner)


def log_success(status_fn: StatusFn, msg: str, details: Optional[str] = None):
    """Log success message."""
    tech_msg = f"SUCCESS: {msg}"
    if details:
        tech_msg += f" | {details}"
    log_and_status(status_fn, tech_msg, ui_msg=f"✅ {msg}")


def log_warning(status_fn: StatusFn, msg: str, details: Optional[str] = None):
    """Log warning message."""
    tech_msg = f"WARNING: {msg}"
    if details:
        tech_msg += f" | {details}"
    log_and_status(status_fn, tech_msg, level="warning", ui_msg=f"⚠ {msg}")


def log_error(
    status_fn: StatusFn,
    msg: str,
    details: Optional[str] = None,
    exc: Optional[BaseException] = None
):
    """
    Log error message.

    Args:
        status_fn: Status callback function
        msg: Short error message
        details: Additional technical details for logs
        exc: Exception object for stack trace logging
    """
    tech_msg = f"ERROR: {msg}"
    if details:
        tech_msg += f" | {details}"
    if exc:
        tech_msg += f" | Exception: {type(exc).__name__}: {exc}"
        logging.error(tech_msg, exc_info=exc)
    else:
        logging.error(tech_msg)

    _notify(status_fn, f"❌ {msg}")


def log_summary(status_fn: StatusFn, title: str, stats: dict):
    """
    Log completion summary with statistics.

    Args:
        status_fn: Status callback function
        title: Summary title
        stats: Dictionary of statistics to display
    """
    lines = ["", "=" * 80, title, "=" * 80]
    lines.extend(f"{key}: {value}" for key, value in stats.items())
    lines.append("=" * 80)
    log_and_status(status_fn, "\n".join(lines))
