"""Global exception handling for the runner."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fsm_engine.state_machine import StateMachineError

logger = logging.getLogger("app.exceptions")


def install_exception_hook() -> "_ExceptionHook":
    """Install handlers logging uncaught errors from the main and worker threads.

    Returns the hook so callers (tests) can restore the originals.
    """

    hook = _ExceptionHook()
    hook.install()
    return hook


@dataclass
class _ExceptionHook:
    _original_excepthook: Optional[Callable[..., Any]] = None
    _original_thread_excepthook: Optional[Callable[..., Any]] = None

    def install(self) -> None:
        self._original_excepthook = sys.excepthook
        sys.excepthook = self._handle_exception

        if hasattr(threading, "excepthook"):
            self._original_thread_excepthook = threading.excepthook
            threading.excepthook = self._handle_thread_exception  # type: ignore[assignment]

    def uninstall(self) -> None:
        if self._original_excepthook is not None:
            sys.excepthook = self._original_excepthook
        if self._original_thread_excepthook is not None:
            threading.excepthook = self._original_thread_excepthook  # type: ignore[assignment]

    def _handle_exception(self, exc_type, exc_value, exc_traceback) -> None:
        _log_unhandled("main thread", exc_type, exc_value, exc_traceback)
        if self._original_excepthook:
            self._original_excepthook(exc_type, exc_value, exc_traceback)

    def _handle_thread_exception(self, args: "threading.ExceptHookArgs") -> None:
        name = args.thread.name if args.thread is not None else "unknown thread"
        _log_unhandled(name, args.exc_type, args.exc_value, args.exc_traceback)
        if self._original_thread_excepthook:
            self._original_thread_excepthook(args)


def _log_unhandled(origin: str, exc_type, exc_value, exc_traceback) -> None:
    # Engine errors already carry the state and event; a traceback adds nothing.
    if isinstance(exc_value, StateMachineError):
        logger.error("Unhandled state machine error in %s: %s", origin, exc_value)
        return
    logger.critical(
        "Unhandled exception in %s: %s",
        origin,
        exc_value,
        exc_info=(exc_type, exc_value, exc_traceback),
    )
