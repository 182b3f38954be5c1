"""Stress tests: concurrent send_event calls are totally ordered."""
import random
import threading
import time

import pytest

from fsm_engine.machines.light_switch import SWITCH_OFF, SWITCH_ON
from fsm_engine.state_machine import DEFAULT_STATE, NO_OP, EventRejected, StateDefinition, StateMachine, Transition

STATES = ("S0", "S1", "S2", "S3")
THREADS = 8
EVENTS_PER_THREAD = 150


class Counter:
    value = 0


class EnterAction:
    """Appends its state to the journal and bumps the counter without atomicity."""

    def __init__(self, name: str, journal: list) -> None:
        self.name = name
        self.journal = journal

    def execute(self, context: Counter):
        seen = context.value
        time.sleep(0)
        context.value = seen + 1
        self.journal.append(self.name)
        return NO_OP


def _go(state: str) -> str:
    return f"Go{state}"


def _full_mesh(journal: list) -> StateMachine:
    events = {_go(state): state for state in STATES}
    table = {DEFAULT_STATE: StateDefinition(events=events)}
    for state in STATES:
        table[state] = StateDefinition(action=EnterAction(state, journal), events=events)
    return StateMachine(table)


def _hammer(worker, threads: int = THREADS) -> None:
    barrier = threading.Barrier(threads)
    errors: list[BaseException] = []

    def _run(index: int) -> None:
        barrier.wait()
        try:
            worker(index)
        except BaseException as exc:  # surfaced below
            errors.append(exc)

    pool = [threading.Thread(target=_run, args=(i,)) for i in range(threads)]
    for thread in pool:
        thread.start()
    for thread in pool:
        thread.join(timeout=30)
    assert not any(thread.is_alive() for thread in pool)
    assert errors == []


class TestConcurrentCalls:
    """Many threads against one machine instance."""

    def test_final_state_matches_sequential_replay(self):
        """Replaying the lock-acquisition order on a fresh machine lands in the same state."""
        # Arrange
        journal: list[str] = []
        counter = Counter()
        machine = _full_mesh(journal)

        def worker(index: int) -> None:
            rng = random.Random(index)
            for _ in range(EVENTS_PER_THREAD):
                machine.send_event(_go(rng.choice(STATES)), counter)

        # Act
        _hammer(worker)

        # Assert
        total = THREADS * EVENTS_PER_THREAD
        assert counter.value == total
        assert len(journal) == total

        replay_journal: list[str] = []
        replay = _full_mesh(replay_journal)
        replay_counter = Counter()
        for state in journal:
            replay.send_event(_go(state), replay_counter)

        assert replay_journal == journal
        assert replay.snapshot() == machine.snapshot()
        assert machine.snapshot() == (journal[-2], journal[-1])

    def test_transitions_chain_without_interleaving(self):
        """With rejections mixed in, each accepted step starts where the previous one ended."""
        machine = StateMachine({
            DEFAULT_STATE: StateDefinition(events={SWITCH_OFF: "Off"}),
            "Off": StateDefinition(events={SWITCH_ON: "On"}),
            "On": StateDefinition(events={SWITCH_OFF: "Off"}),
        })
        steps: list[Transition] = []
        machine.add_listener(steps.append)
        rejected = []
        rejected_lock = threading.Lock()

        def worker(index: int) -> None:
            rng = random.Random(1000 + index)
            for _ in range(EVENTS_PER_THREAD):
                try:
                    machine.send_event(rng.choice((SWITCH_ON, SWITCH_OFF)))
                except EventRejected:
                    with rejected_lock:
                        rejected.append(index)

        _hammer(worker)

        assert len(steps) + len(rejected) == THREADS * EVENTS_PER_THREAD
        assert steps[0].previous_state == DEFAULT_STATE
        for earlier, later in zip(steps, steps[1:]):
            assert later.previous_state == earlier.next_state
        assert machine.current_state == steps[-1].next_state

    @pytest.mark.parametrize("threads", [2, 16])
    def test_chained_calls_are_atomic(self, threads):
        """No caller observes a state in the middle of another caller's chain."""
        machine = StateMachine({
            DEFAULT_STATE: StateDefinition(events={"start": "Busy"}),
            "Busy": StateDefinition(action=_Produce("finish"), events={"finish": "Idle"}),
            "Idle": StateDefinition(events={"start": "Busy"}),
        })
        observed: list[str] = []

        def worker(index: int) -> None:
            for _ in range(50):
                machine.send_event("start")
                observed.append(machine.snapshot()[1])

        _hammer(worker, threads=threads)

        assert set(observed) == {"Idle"}


class _Produce:
    def __init__(self, event: str) -> None:
        self.event = event

    def execute(self, context):
        time.sleep(0)
        return self.event
