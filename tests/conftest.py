"""Shared fixtures for fsm_engine tests."""
from __future__ import annotations

import logging
import threading

import pytest

from fsm_engine.machines import new_light_switch_machine
from fsm_engine.state_machine import NO_OP


class ScriptedAction:
    """Records every execution and returns a fixed event."""

    def __init__(self, name: str, produce: str = NO_OP, journal: list | None = None) -> None:
        self.name = name
        self.produce = produce
        self.journal = journal if journal is not None else []
        self.contexts: list = []

    def execute(self, context):
        self.journal.append(self.name)
        self.contexts.append(context)
        return self.produce


@pytest.fixture
def scripted_action():
    """Factory for ScriptedAction instances."""
    return ScriptedAction


@pytest.fixture
def light_switch():
    return new_light_switch_machine()


@pytest.fixture
def run_in_thread():
    """Run fn in a worker thread; returns True if it finished within the timeout."""

    def _run(fn, timeout: float = 2.0) -> bool:
        worker = threading.Thread(target=fn, daemon=True)
        worker.start()
        worker.join(timeout)
        return not worker.is_alive()

    return _run


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.captureWarnings(False)
