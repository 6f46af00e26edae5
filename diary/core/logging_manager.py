#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for storage engines and CLI commands.

Each DiaryLogger writes two rotating files in its log directory:

    <component>.log   every operation, DEBUG and up
    errors.log        errors with context and traceback

Warnings are also echoed to the console. Operation details are serialized
as JSON so log lines stay grep-friendly.

Code that may run without a logger calls `safe_logger(logger)`, which hands
back a no-op NullLogger in place of None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def format_error(error: Exception) -> str:
    """One-line `❌ ErrorType: message` form shown to CLI users."""
    return f"❌ {type(error).__name__}: {error}"


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str)}"


class DiaryLogger:
    """
    File logger for one component ('diary' for the CLI).

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix for logger names and the main log file
        main_logger: Operations logger
        error_logger: Errors-only logger
    """

    def __init__(self, log_dir: Path, component_name: str = "diary") -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._logger(
            "operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._logger("errors", "errors.log", logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _logger(self, suffix: str, filename: str, level: int) -> logging.Logger:
        """Named logger with a single rotating file handler."""
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Replace handlers left by an earlier instance with the same name
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Flush and detach every handler."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record the error, its context and the active traceback in errors.log."""
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {context_str}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details(f"DEBUG - {message}", details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(f"INFO - {message}", details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(_with_details(f"WARNING - {message}", details))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and return the message to print.

        Examples:
            >>> logger.log_cli_error(EntryNotFoundError(3))
            "❌ EntryNotFoundError: Entry with id: 3 doesn't exist"
        """
        self.log_error(error, context or {"source": "cli"})
        if show_traceback:
            return f"{format_error(error)}\n\n{traceback.format_exc()}"
        return format_error(error)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    Logs through the logger on the click context, prints one line to
    stderr (plus the traceback under --verbose) and calls sys.exit().
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """DiaryLogger stand-in whose methods do nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_error(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[DiaryLogger]) -> DiaryLogger:
    """Return `logger`, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
